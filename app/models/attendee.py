"""Attendee model for retreat registrations.

This module defines the Attendee record which represents one row of the
retreat spreadsheet. Attendees are read from the spreadsheet endpoint on
every roster load and are never stored locally.
"""

import logging
from datetime import UTC, datetime
from enum import Enum

from pydantic import field_validator
from sqlmodel import Field, SQLModel

logger = logging.getLogger(__name__)

# Display formats the spreadsheet uses when a cell is not ISO 8601
SHEET_TIMESTAMP_FORMATS = ("%m/%d/%Y %H:%M:%S", "%m/%d/%Y %H:%M", "%m/%d/%Y")


class Status(str, Enum):
    """Participation intent of an attendee."""

    INTERESTED = "interested"
    COMMITTED = "committed"
    NOT_GOING = "not-going"

    @property
    def label(self) -> str:
        return {
            Status.INTERESTED: "Interested",
            Status.COMMITTED: "Committed",
            Status.NOT_GOING: "Not Going",
        }[self]


def split_year_tags(year: str | None) -> list[str]:
    """Split a comma-separated year field into trimmed, non-empty tags."""
    if not year:
        return []
    return [tag.strip() for tag in year.split(",") if tag.strip()]


class Attendee(SQLModel):
    """A single retreat registration.

    Attendees are submitted through the registration form and stored by the
    spreadsheet endpoint. A later submission with the same email replaces
    the whole record.

    Attributes:
        email: Identifier used to look up an existing submission. The read
            endpoint may omit it.
        name: Display name.
        year: Comma-separated list of year tags, e.g. "2018, 2019". Tags are
            free-form strings, not necessarily numeric.
        city: Home city (city/state deployments).
        state: Two-letter US state or Canadian province code.
        location: Free-text location (deployments without a city/state split).
        status: One of "interested", "committed" or "not-going".
        timestamp: When the submission was created or last updated.
    """
    email: str = ""
    name: str = ""
    year: str = ""
    city: str = ""
    state: str = ""
    location: str = ""
    status: Status
    timestamp: datetime | None = Field(default=None)

    @field_validator("email", "name", "year", "city", "state", "location", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        # The sheet returns numbers for cells like "2019" and null for blanks
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("timestamp", mode="before")
    @classmethod
    def _parse_timestamp(cls, value):
        # A bad timestamp cell must not drop the registrant
        if value in ("", None) or isinstance(value, datetime):
            return value or None
        text = str(value).strip()
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            pass
        for fmt in SHEET_TIMESTAMP_FORMATS:
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                continue
        logger.debug(f"Ignoring unparseable timestamp {value!r}")
        return None

    @property
    def year_tags(self) -> list[str]:
        return split_year_tags(self.year)

    def to_payload(self) -> dict:
        """Build the JSON body posted to the spreadsheet endpoint."""
        timestamp = self.timestamp or datetime.now(UTC)
        return {
            "email": self.email,
            "name": self.name,
            "year": self.year,
            "state": self.state,
            "city": self.city,
            "location": self.location,
            "status": self.status.value,
            "timestamp": timestamp.isoformat(),
        }
