"""
Summary: Installed rule library in registration order.
Why: Embedders construct a registry from one explicit, auditable list.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..rule import Rule
from . import accuracy, artists, composers, dates, formatting, numbering, structure
from .dates import YearClock, system_year


def default_rules(current_year: YearClock = system_year) -> list[Rule]:
    """Return every installed rule, in the order the dispatcher runs them.

    Args:
        current_year: Clock used by the year plausibility rule.

    Returns:
        list[Rule]: Album and track rules in registration order.
    """
    return [
        *structure.RULES,
        *numbering.RULES,
        *composers.RULES,
        *accuracy.RULES,
        *formatting.RULES,
        dates.recording_date_vs_edition,
        dates.year_field_usage(current_year),
        *artists.RULES,
        formatting.folder_name_format,
        formatting.no_request_markers,
        structure.path_length,
        numbering.track_numbers_in_filenames,
        composers.composer_tag,
        formatting.capitalization_improvement,
        structure.filename_sort_order,
        structure.artist_position_in_filename,
        accuracy.filename_capitalization,
    ]


def select_rules(rules: Iterable[Rule], disabled: Iterable[str] = ()) -> list[Rule]:
    """Drop rules whose id appears in ``disabled``; order is preserved."""

    excluded = set(disabled)
    return [rule for rule in rules if rule.meta.id not in excluded]


__all__ = ["YearClock", "default_rules", "select_rules", "system_year"]
