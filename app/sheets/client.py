"""Client for the spreadsheet-backed registration endpoint.

The endpoint is an Apps Script web app bound to the retreat spreadsheet.
It answers GET requests with JSON and accepts new or updated submissions
as a JSON POST body.
"""
import logging
from dataclasses import dataclass

import requests
from pydantic import ValidationError

from app.core.config import settings
from app.models import Attendee

logger = logging.getLogger(__name__)


class SheetError(Exception):
    """Base error for spreadsheet endpoint failures."""


class SheetNotConfiguredError(SheetError):
    """No endpoint URL is configured."""


class SheetReadError(SheetError):
    """Reading or looking up attendees failed."""


class SheetWriteError(SheetError):
    """Submitting an attendee failed."""


@dataclass(frozen=True)
class SubmitResult:
    """Acknowledgment of a submission from the endpoint."""

    ok: bool
    status_code: int
    message: str = ""


def has_sheet_url() -> bool:
    """Check if the spreadsheet endpoint is configured."""
    return bool(settings.sheet_url)


class SheetClient:
    """Read, look up and submit attendees through the spreadsheet endpoint."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = settings.sheet_url if base_url is None else base_url
        self.timeout = settings.sheet_timeout_seconds if timeout is None else timeout

    def _require_url(self) -> str:
        if not self.base_url:
            raise SheetNotConfiguredError(
                "No SHEET_URL configured. Set it in .env to the deployed web app URL."
            )
        return self.base_url

    def _get_json(self, params: dict) -> dict:
        url = self._require_url()
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            raise SheetReadError(f"Request {params.get('action')} failed: {e}") from e

        if not isinstance(data, dict):
            raise SheetReadError(f"Unexpected response for {params.get('action')}: {data!r}")
        return data

    def read_attendees(self) -> list[Attendee]:
        """
        Fetch every attendee row.

        Rows that fail validation (for example an unknown status) are
        skipped with a warning instead of failing the whole load.
        """
        data = self._get_json({"action": "read"})

        attendees = []
        for row in data.get("attendees") or []:
            try:
                attendees.append(Attendee.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping invalid attendee row {row!r}: {e}")

        logger.info(f"Read {len(attendees)} attendees from sheet")
        return attendees

    def lookup(self, email: str) -> Attendee | None:
        """Find an existing submission by email. Returns None if absent."""
        data = self._get_json({"action": "lookup", "email": email})

        row = data.get("attendee")
        if not row:
            return None
        try:
            return Attendee.model_validate(row)
        except ValidationError as e:
            raise SheetReadError(f"Invalid attendee returned for lookup: {e}") from e

    def submit(self, attendee: Attendee) -> SubmitResult:
        """
        Create or replace a submission.

        The endpoint replaces any existing row with the same email. Raises
        SheetWriteError when the request fails or the endpoint rejects it.
        """
        url = self._require_url()
        try:
            response = requests.post(url, json=attendee.to_payload(), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise SheetWriteError(f"Submission failed: {e}") from e

        if not response.ok:
            raise SheetWriteError(
                f"Submission rejected with status {response.status_code}: {response.text[:200]}"
            )

        logger.info(f"Submitted attendee {attendee.name!r} ({response.status_code})")
        return SubmitResult(ok=True, status_code=response.status_code, message=response.text[:200])


def get_sheet_client() -> SheetClient:
    """Dependency for getting the spreadsheet client."""
    return SheetClient()
