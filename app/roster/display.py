"""Sorting and formatting of attendee groups for display.

The functions here produce plain data for the templates. Text stays
unescaped until render time, where Jinja2 autoescaping turns every
free-text field into literal text.
"""
import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass, field

from app.models import Attendee, Status

EMPTY_GROUP_TEXT = "No one yet!"


@dataclass(frozen=True)
class DisplayEntry:
    """One attendee card."""

    name: str
    year: str
    location: str


@dataclass(frozen=True)
class DisplayGroup:
    """A status section of the roster with its sorted entries."""

    status: Status
    entries: list[DisplayEntry] = field(default_factory=list)

    @property
    def title(self) -> str:
        return self.status.label

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def empty_text(self) -> str | None:
        return EMPTY_GROUP_TEXT if self.is_empty else None


def collation_key(name: str) -> tuple[str, str]:
    """
    Sort key approximating locale-aware name comparison.

    Accents are stripped and case is folded so "émile" sorts next to
    "Emile"; the raw name breaks ties so the order is total.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (base.casefold(), name)


def sort_by_name(attendees: Iterable[Attendee]) -> list[Attendee]:
    """Sort attendees by name, ascending. Stable for equal names."""
    return sorted(attendees, key=lambda a: collation_key(a.name))


def format_location(attendee: Attendee) -> str:
    """Build the location line: "City, ST" when known, else the free-text location."""
    if attendee.city or attendee.state:
        return ", ".join(part for part in (attendee.city, attendee.state) if part)
    return attendee.location


def format_entry(attendee: Attendee) -> DisplayEntry:
    return DisplayEntry(
        name=attendee.name,
        year=attendee.year,
        location=format_location(attendee),
    )


def build_group(status: Status, attendees: Iterable[Attendee]) -> DisplayGroup:
    """Sort a filtered group by name and format each record."""
    return DisplayGroup(
        status=status,
        entries=[format_entry(a) for a in sort_by_name(attendees)],
    )


def build_groups(groups: dict[Status, list[Attendee]]) -> list[DisplayGroup]:
    """Format every status group, keeping the partition order."""
    return [build_group(status, attendees) for status, attendees in groups.items()]
