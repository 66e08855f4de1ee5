"""Year tag extraction and ordering for the roster filters."""
import re
from collections.abc import Iterable

from app.models import Attendee
from app.models.attendee import split_year_tags

ALL_YEARS = "all"

NUMERIC_TAG = re.compile(r"\d+(\.\d+)?")


def extract_years(attendees: Iterable[Attendee]) -> set[str]:
    """
    Collect the distinct year tags mentioned across all attendees.

    Each attendee's year field is split on commas and trimmed; empty
    tags and attendees without a year are skipped.
    """
    years: set[str] = set()
    for attendee in attendees:
        years.update(split_year_tags(attendee.year))
    return years


def _year_sort_key(tag: str) -> tuple:
    # Plain decimal tags order by value; anything else sorts after them as text
    if NUMERIC_TAG.fullmatch(tag):
        return (1, float(tag), "")
    return (0, 0.0, tag)


def sort_years(years: Iterable[str]) -> list[str]:
    """Order year tags newest first for the filter dropdowns."""
    return sorted(years, key=_year_sort_key, reverse=True)


def resolve_year_selection(selected: str | None, years: Iterable[str]) -> str:
    """
    Keep the current filter selection if it still exists after a reload.

    Falls back to "all" when the selected tag disappeared from the roster.
    """
    if selected and selected in set(years):
        return selected
    return ALL_YEARS
