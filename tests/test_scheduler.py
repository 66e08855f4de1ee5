"""Tests for the background roster refresh."""

from unittest.mock import patch

import pytest

from app.core import scheduler
from app.core.config import settings
from app.roster.session import roster_session
from conftest import FakeSheetClient


@pytest.fixture(autouse=True)
def reset_shared_roster():
    roster_session.reset()
    yield
    roster_session.reset()


def test_refresh_job_loads_shared_roster(sheet: FakeSheetClient):
    with patch("app.core.scheduler.SheetClient", return_value=sheet):
        scheduler.refresh_job()
    assert len(roster_session.attendees) == 5
    assert roster_session.is_demo is False


def test_refresh_job_falls_back_on_failure(sheet: FakeSheetClient):
    sheet.fail_read = True
    with patch("app.core.scheduler.SheetClient", return_value=sheet):
        scheduler.refresh_job()
    assert roster_session.is_demo is True


def test_refresh_job_swallows_unexpected_errors():
    with patch("app.core.scheduler.SheetClient", side_effect=RuntimeError("boom")):
        scheduler.refresh_job()
    assert roster_session.is_loaded is False


def test_disabled_refresh_does_not_start(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings, "refresh_interval_minutes", 0)
    scheduler.start_scheduler()
    assert scheduler.scheduler.running is False
    assert scheduler.scheduler.get_job("roster_refresh") is None
