"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models import Attendee
from app.roster.session import RosterSession
from app.routes.roster import get_roster_session
from app.sheets.client import SheetReadError, SheetWriteError, SubmitResult, get_sheet_client


class FakeSheetClient:
    """In-memory stand-in for the spreadsheet endpoint."""

    def __init__(self, attendees=None):
        self.attendees = list(attendees or [])
        self.fail_read = False
        self.fail_lookup = False
        self.fail_submit = False
        self.submitted: list[Attendee] = []
        self.read_calls = 0

    def read_attendees(self) -> list[Attendee]:
        self.read_calls += 1
        if self.fail_read:
            raise SheetReadError("connection refused")
        return list(self.attendees)

    def lookup(self, email: str) -> Attendee | None:
        if self.fail_lookup:
            raise SheetReadError("connection refused")
        return next((a for a in self.attendees if a.email and a.email == email), None)

    def submit(self, attendee: Attendee) -> SubmitResult:
        if self.fail_submit:
            raise SheetWriteError("connection refused")
        self.submitted.append(attendee)
        # The endpoint replaces a row with the same email
        self.attendees = [
            a for a in self.attendees if not (attendee.email and a.email == attendee.email)
        ]
        self.attendees.append(attendee)
        return SubmitResult(ok=True, status_code=200, message="ok")


def make_attendee(name: str, year: str = "", status: str = "interested", **kwargs) -> Attendee:
    return Attendee(name=name, year=year, status=status, **kwargs)


@pytest.fixture(name="attendees")
def attendees_fixture() -> list[Attendee]:
    """A small roster covering every status and an empty year."""
    return [
        make_attendee("Bob", "2019", city="Austin", state="TX", email="bob@example.com"),
        make_attendee("Amy", "2019,2020", city="Denver", state="CO", email="amy@example.com"),
        make_attendee("Carl", "2020", "committed", city="Seattle", state="WA"),
        make_attendee("Dana", "2018, 2020", "not-going", city="Boston", state="MA"),
        make_attendee("Eve", "", "committed", location="Somewhere", state="zz"),
    ]


@pytest.fixture(name="sheet")
def sheet_fixture(attendees) -> FakeSheetClient:
    return FakeSheetClient(attendees)


@pytest.fixture(name="roster")
def roster_fixture() -> RosterSession:
    return RosterSession()


@pytest.fixture(name="client")
def client_fixture(sheet: FakeSheetClient, roster: RosterSession):
    """Create a test client wired to the fake spreadsheet and a fresh roster."""
    app.dependency_overrides[get_sheet_client] = lambda: sheet
    app.dependency_overrides[get_roster_session] = lambda: roster
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
