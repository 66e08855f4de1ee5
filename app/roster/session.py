"""Roster view-model holding the cached attendee list.

The session is the only place roster state lives: the attendee snapshot,
the year tags derived from it, and the notice shown after a failed load.
Every load replaces the whole snapshot; nothing is patched in place.
"""
import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime

from app.models import Attendee, Status
from app.roster.demo import demo_attendees
from app.roster.display import DisplayGroup, build_groups
from app.roster.filters import LISTED_STATUSES, filter_attendees
from app.roster.markers import MapMarker, build_markers
from app.roster.years import extract_years, sort_years
from app.sheets.client import SheetClient, SheetError

logger = logging.getLogger(__name__)

LOAD_ERROR_NOTICE = "Error loading attendees. Using demo data."


@dataclass(frozen=True)
class RosterSnapshot:
    """One loaded roster with its derived year set."""

    attendees: tuple[Attendee, ...] = ()
    years: frozenset[str] = frozenset()
    loaded_at: datetime | None = None
    is_demo: bool = False
    notice: str | None = None

    @classmethod
    def build(cls, attendees: Sequence[Attendee], is_demo: bool = False, notice: str | None = None):
        return cls(
            attendees=tuple(attendees),
            years=frozenset(extract_years(attendees)),
            loaded_at=datetime.now(UTC),
            is_demo=is_demo,
            notice=notice,
        )


@dataclass
class RosterSession:
    """Cached roster plus the operations the views need.

    Overlapping loads are not serialized. Each one swaps in a complete
    snapshot, so the last load to finish wins.
    """

    _snapshot: RosterSnapshot = field(default_factory=RosterSnapshot)

    @property
    def attendees(self) -> list[Attendee]:
        return list(self._snapshot.attendees)

    @property
    def years(self) -> set[str]:
        return set(self._snapshot.years)

    @property
    def sorted_years(self) -> list[str]:
        return sort_years(self._snapshot.years)

    @property
    def notice(self) -> str | None:
        return self._snapshot.notice

    @property
    def loaded_at(self) -> datetime | None:
        return self._snapshot.loaded_at

    @property
    def is_demo(self) -> bool:
        return self._snapshot.is_demo

    @property
    def is_loaded(self) -> bool:
        return self._snapshot.loaded_at is not None

    def load(self, client: SheetClient) -> RosterSnapshot:
        """
        Reload the roster from the spreadsheet endpoint.

        Any endpoint failure falls back to the demo roster and sets the
        load-error notice. Never raises SheetError.
        """
        try:
            attendees = client.read_attendees()
        except SheetError as e:
            logger.error(f"Error loading attendees: {e}")
            return self.load_demo(notice=LOAD_ERROR_NOTICE)

        self._snapshot = RosterSnapshot.build(attendees)
        logger.info(
            f"Roster loaded: {len(attendees)} attendees, years={self.sorted_years}"
        )
        return self._snapshot

    def load_demo(self, notice: str | None = None) -> RosterSnapshot:
        """Replace the roster with the fixed demo dataset."""
        self._snapshot = RosterSnapshot.build(demo_attendees(), is_demo=True, notice=notice)
        return self._snapshot

    def reset(self) -> None:
        """Drop the cached roster."""
        self._snapshot = RosterSnapshot()

    def groups(
        self,
        year: str | None,
        statuses: Sequence[Status] = LISTED_STATUSES,
    ) -> list[DisplayGroup]:
        """Filtered, sorted and formatted status groups for the list view."""
        return build_groups(filter_attendees(self._snapshot.attendees, year, statuses))

    def markers(self, year: str | None, rng: random.Random | None = None) -> list[MapMarker]:
        return build_markers(self._snapshot.attendees, year, rng)

    def snapshot(self) -> dict:
        """JSON-ready view of the cached roster."""
        snap = self._snapshot
        return {
            "attendees": [a.model_dump(mode="json") for a in snap.attendees],
            "years": sort_years(snap.years),
            "loaded_at": snap.loaded_at.isoformat() if snap.loaded_at else None,
            "is_demo": snap.is_demo,
            "notice": snap.notice,
        }


# Global instance shared by the routes and the refresh job
roster_session = RosterSession()
