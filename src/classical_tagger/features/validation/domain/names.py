"""
Summary: Person-name helpers for composer and performer credits.
Why: Surname, abbreviation and word-containment logic is shared by several title rules.
"""

from __future__ import annotations

import re
from typing import Final

from unidecode import unidecode

# Lowercase particles that belong to the surname ("van Beethoven", "de Falla").
NAME_PARTICLES: Final[frozenset[str]] = frozenset(
    {"van", "von", "de", "da", "della", "la", "le", "du", "del"}
)


def fold(text: str) -> str:
    """Lowercase and transliterate to ASCII so "Dvořák" compares equal to "dvorak"."""

    return unidecode(text).casefold()


def display_name(name: str) -> str:
    """Turn a reversed credit ("Bach, Johann Sebastian") into reading order."""

    name = " ".join(name.split())
    if "," not in name:
        return name
    surname, _, given = name.partition(",")
    given = given.strip()
    surname = surname.strip()
    return f"{given} {surname}" if given else surname


def last_name(name: str) -> str:
    """Return the surname including any lowercase particle.

    Args:
        name: Credited name, natural or reversed order.

    Returns:
        str: ``"van Beethoven"`` for ``"Ludwig van Beethoven"``; the part before
        the comma for ``"Bach, Johann Sebastian"``; empty for an empty name.
    """
    name = name.strip()
    if "," in name:
        return name.split(",", 1)[0].strip()

    tokens = name.split()
    if not tokens:
        return ""

    parts = [tokens[-1]]
    for token in reversed(tokens[:-1]):
        if token not in NAME_PARTICLES:
            break
        parts.insert(0, token)
    return " ".join(parts)


def base_surname(name: str) -> str:
    """Surname with leading particles removed ("Ludwig van Beethoven" gives "Beethoven")."""

    tokens = last_name(name).split()
    while len(tokens) > 1 and tokens[0] in NAME_PARTICLES:
        tokens.pop(0)
    return " ".join(tokens)


def is_acceptable_abbreviation(text: str, full_name: str) -> bool:
    """Check whether ``text`` names ``full_name`` with initials, e.g. ``J.S. Bach``.

    Both the compact (``J.S. Bach``) and spaced (``J. S. Bach``) forms are
    accepted; comparison is case-insensitive.
    """
    parts = display_name(full_name).split()
    if len(parts) < 2:
        return False

    initials = [part[0] + "." for part in parts[:-1]]
    surname = parts[-1]
    compact = "".join(initials) + " " + surname
    spaced = " ".join(initials) + " " + surname

    haystack = fold(text)
    return fold(compact) in haystack or fold(spaced) in haystack


def contains_word(text: str, word: str) -> bool:
    """Word-boundary containment after folding case and diacritics."""

    word = fold(word).strip()
    if not word:
        return False
    pattern = rf"(?<!\w){re.escape(word)}(?!\w)"
    return re.search(pattern, fold(text)) is not None


def contains_phrase(text: str, phrase: str) -> bool:
    """Plain substring containment after folding case and diacritics."""

    phrase = fold(phrase).strip()
    return bool(phrase) and phrase in fold(text)


def inclusion_key(name: str) -> str:
    """Letters and digits only, folded; used for lax name comparison."""

    return "".join(ch for ch in fold(name) if ch.isalnum())


def names_overlap(left: str, right: str) -> bool:
    """Lax inclusion: one normalized name contains the other."""

    a, b = inclusion_key(left), inclusion_key(right)
    if not a or not b:
        return False
    return a in b or b in a


__all__ = [
    "NAME_PARTICLES",
    "base_surname",
    "contains_phrase",
    "contains_word",
    "display_name",
    "fold",
    "inclusion_key",
    "is_acceptable_abbreviation",
    "last_name",
    "names_overlap",
]
