"""Year and status filtering of the attendee collection."""
from collections.abc import Iterable, Sequence

from app.models import Attendee, Status
from app.roster.years import ALL_YEARS

# Statuses shown on the list view and on the map
LISTED_STATUSES = (Status.INTERESTED, Status.COMMITTED)
ALL_STATUSES = (Status.INTERESTED, Status.COMMITTED, Status.NOT_GOING)


def matches_year(attendee: Attendee, year: str | None) -> bool:
    """Check whether an attendee claims the given year tag (exact string match)."""
    if not year or year == ALL_YEARS:
        return True
    return year in attendee.year_tags


def filter_by_year(attendees: Iterable[Attendee], year: str | None) -> list[Attendee]:
    """
    Return the attendees whose year tags include the selected year.

    "all" (or no selection) returns everyone, including attendees with an
    empty year field. A specific year never matches an empty year field.
    """
    return [a for a in attendees if matches_year(a, year)]


def partition_by_status(
    attendees: Iterable[Attendee],
    statuses: Sequence[Status] = LISTED_STATUSES,
) -> dict[Status, list[Attendee]]:
    """
    Split attendees into disjoint groups by exact status.

    One group is returned per requested status, in the requested order.
    Attendees whose status was not requested are left out.
    """
    groups: dict[Status, list[Attendee]] = {status: [] for status in statuses}
    for attendee in attendees:
        if attendee.status in groups:
            groups[attendee.status].append(attendee)
    return groups


def filter_attendees(
    attendees: Iterable[Attendee],
    year: str | None,
    statuses: Sequence[Status] = LISTED_STATUSES,
) -> dict[Status, list[Attendee]]:
    """Apply the year filter, then partition the result by status."""
    return partition_by_status(filter_by_year(attendees, year), statuses)
