"""
Summary: Title normalization, fuzzy matching, catalogue tokens and encoding checks.
Why: Comparison and formatting rules must agree on one definition of "same title".
"""

from __future__ import annotations

import re
import unicodedata
from typing import Final

from rapidfuzz.distance import Levenshtein

TITLE_PUNCTUATION: Final[str] = ":,.'\"!?()[]"
_PUNCTUATION_TABLE: Final[dict[int, None]] = str.maketrans("", "", TITLE_PUNCTUATION)
_WHITESPACE: Final[re.Pattern[str]] = re.compile(r"\s+")
_DIGITS: Final[re.Pattern[str]] = re.compile(r"\d+")

MATCH_DISTANCE: Final[int] = 3
WARNING_DISTANCE: Final[int] = 10

# Op. 67, BWV 1007, K. 550, Hob. XVI:52, D 944, RV 269, Wq. 182, S. 178
CATALOGUE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\b(Op|BWV|K|Hob|D|RV|Wq|S)\.?\s*((?:[IVXLCDM]+:)?\s*\d+)",
    re.IGNORECASE,
)

MOJIBAKE_SEQUENCES: Final[tuple[str, ...]] = (
    "Ã©",
    "Ã¨",
    "Ã¶",
    "Ã¤",
    "Ã¼",
    "Ã±",
    "â€™",
    "â€œ",
    "â€",
    "Ã",
    "Â",
)
TITLE_SMALL_WORDS: Final[frozenset[str]] = frozenset(
    {
        "a", "an", "the", "and", "but", "or", "nor", "as", "at", "by", "for", "so", "yet",
        "in", "of", "on", "per", "to", "up", "via", "vs", "vs.",
        "von", "van", "und", "de", "di", "da", "del", "der",
        "la", "le", "les", "du", "des", "el", "y", "con", "non", "troppo",
    }
)
# Words after these may stay lowercase: "con brio", "per pianoforte"
LOWERCASE_FOLLOWERS: Final[frozenset[str]] = frozenset(
    {"con", "per", "da", "di", "del", "de", "der", "von", "van", "y"}
)
TITLE_ACRONYMS: Final[frozenset[str]] = frozenset(
    {"LSO", "BBC", "CD", "SACD", "LP", "EP", "DVD", "BD", "UHD", "WEB", "USA"}
)
CATALOGUE_WORDS: Final[frozenset[str]] = frozenset(
    {"Op.", "No.", "Hob.", "Wq.", "K.", "D.", "S.", "L.", "P.", "BWV", "KV", "RV", "HWV", "TWV"}
)
_ROMAN_NUMERAL: Final[re.Pattern[str]] = re.compile(r"[IVXLCDM]+")
_KEY_TOKEN: Final[re.Pattern[str]] = re.compile(r"[A-G][#b]?")
_SEGMENT_DELIMITERS: Final[re.Pattern[str]] = re.compile("[:\u2013\u2014-]")
_WORD_PUNCTUATION: Final[str] = ",;!?()[]'\""

REPLACEMENT_CHARACTER: Final[str] = "�"
_ALLOWED_CONTROLS: Final[frozenset[str]] = frozenset("\n\t\r")


def normalize_title(title: str) -> str:
    """Lowercase, strip title punctuation and collapse whitespace."""

    stripped = title.lower().translate(_PUNCTUATION_TABLE)
    return _WHITESPACE.sub(" ", stripped).strip()


def levenshtein(left: str, right: str) -> int:
    """Edit distance with unit cost for insertion, deletion and substitution."""

    return Levenshtein.distance(left, right)


def titles_equivalent(left: str, right: str) -> bool:
    """Exact or substring match (either direction) of already normalized titles."""

    if left == right:
        return True
    if not left or not right:
        return False
    return left in right or right in left


def titles_match(left: str, right: str, max_distance: int = MATCH_DISTANCE) -> bool:
    """Normalize both titles and accept equivalence or a small edit distance."""

    a, b = normalize_title(left), normalize_title(right)
    return titles_equivalent(a, b) or levenshtein(a, b) <= max_distance


def work_numbers(title: str) -> tuple[str, ...]:
    """Digit runs in order of appearance, leading zeros dropped."""

    return tuple(run.lstrip("0") or "0" for run in _DIGITS.findall(title))


def catalogue_token(title: str) -> str | None:
    """Return the first catalogue token in canonical ``PREFIX NUMBER`` form."""

    match = CATALOGUE_PATTERN.search(title)
    if match is None:
        return None
    prefix = match.group(1).upper()
    number = "".join(match.group(2).split()).upper()
    return f"{prefix} {number}"


def letters_case_kind(text: str) -> str | None:
    """Return ``"upper"`` or ``"lower"`` when every letter shares one case.

    Texts with fewer than two cased letters are not classified.
    """
    letters = [ch for ch in text if ch.isalpha() and (ch.isupper() or ch.islower())]
    if len(letters) < 2:
        return None
    if all(ch.isupper() for ch in letters):
        return "upper"
    if all(ch.islower() for ch in letters):
        return "lower"
    return None


def _has_letter(token: str) -> bool:
    return any(ch.isalpha() for ch in token)


def _is_lowercase_word(token: str) -> bool:
    return _has_letter(token) and not any(ch.isupper() for ch in token)


def _is_all_upper(token: str) -> bool:
    return _has_letter(token) and not any(ch.islower() for ch in token)


def _is_capitalized_word(token: str) -> bool:
    letters = [ch for ch in token if ch.isalpha()]
    if not letters:
        return True
    if not letters[0].isupper():
        return False
    return len(letters) == 1 or not all(ch.isupper() for ch in letters)


def _is_acronym(token: str) -> bool:
    if token in TITLE_ACRONYMS:
        return True
    if "&" in token and token.upper() == token:
        return True
    undotted = token.replace(".", "")
    return undotted != token and len(undotted) > 1 and undotted.upper() == undotted


def _is_exempt_token(token: str) -> bool:
    """Acronyms, roman numerals and catalogue words keep their own casing."""

    return (
        _is_acronym(token)
        or bool(_ROMAN_NUMERAL.fullmatch(token))
        or token in CATALOGUE_WORDS
    )


def is_casual_title_case(title: str) -> bool:
    """Every word starts with a capital; no shouting words."""

    for token in title.split():
        if _is_exempt_token(token):
            continue
        if token[0].isalpha() and not token[0].isupper():
            return False
        if len(token) >= 2 and _is_all_upper(token):
            return False
    return True


def is_title_case(title: str) -> bool:
    """Strict Title Case, allowing classical phrasing such as ``con brio`` or ``in D major``.

    Segments split on colons and dashes. Within a segment the first and last
    words are capitalized and small words in between are lowercase.
    """
    for segment in _SEGMENT_DELIMITERS.split(title):
        tokens = segment.split()
        for index, token in enumerate(tokens):
            if token.isdigit() or _KEY_TOKEN.fullmatch(token) or _is_exempt_token(token):
                continue
            word = token.strip(_WORD_PUNCTUATION).lower()
            if word in TITLE_SMALL_WORDS and 0 < index < len(tokens) - 1:
                if not _is_lowercase_word(token):
                    return False
                continue
            if index > 0 and _is_lowercase_word(token):
                previous = tokens[index - 1].strip(_WORD_PUNCTUATION).lower()
                if previous in LOWERCASE_FOLLOWERS or word in ("major", "minor"):
                    continue
            if not _is_capitalized_word(token):
                return False
    return True


def encoding_problem(text: str) -> str | None:
    """Describe the first encoding defect found in ``text``, or ``None``."""

    try:
        _ = text.encode("utf-8")
    except UnicodeEncodeError:
        return "invalid UTF-8"

    if "\x00" in text:
        return "NUL character"
    if REPLACEMENT_CHARACTER in text:
        return "replacement character U+FFFD"
    for sequence in MOJIBAKE_SEQUENCES:
        if sequence in text:
            return f"mojibake sequence '{sequence}'"
    for ch in text:
        if ch in _ALLOWED_CONTROLS:
            continue
        if unicodedata.category(ch) == "Cc":
            return f"control character U+{ord(ch):04X}"
    return None


def starts_with_whitespace(text: str | None) -> bool:
    return bool(text) and text[0].isspace()


__all__ = [
    "CATALOGUE_PATTERN",
    "CATALOGUE_WORDS",
    "MATCH_DISTANCE",
    "MOJIBAKE_SEQUENCES",
    "WARNING_DISTANCE",
    "catalogue_token",
    "encoding_problem",
    "is_casual_title_case",
    "is_title_case",
    "letters_case_kind",
    "levenshtein",
    "normalize_title",
    "starts_with_whitespace",
    "titles_equivalent",
    "titles_match",
    "work_numbers",
]
