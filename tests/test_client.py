"""Tests for the spreadsheet endpoint client."""

from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
import requests

from app.models import Status
from app.sheets.client import (
    SheetClient,
    SheetNotConfiguredError,
    SheetReadError,
    SheetWriteError,
)
from conftest import make_attendee

URL = "https://script.example.com/exec"


def fake_response(status_code=200, json_data=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.text = text
    response.json.return_value = json_data
    if response.ok:
        response.raise_for_status.return_value = None
    else:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code}")
    return response


class TestReadAttendees:
    def test_reads_rows(self):
        rows = [
            {"name": "Amy", "year": "2019", "state": "CO", "status": "committed"},
            {"name": "Bob", "year": 2020, "status": "interested"},
        ]
        with patch("app.sheets.client.requests.get") as mock_get:
            mock_get.return_value = fake_response(json_data={"attendees": rows})
            attendees = SheetClient(URL).read_attendees()

        mock_get.assert_called_once()
        assert mock_get.call_args.kwargs["params"] == {"action": "read"}
        assert [a.name for a in attendees] == ["Amy", "Bob"]
        assert attendees[1].year == "2020"

    def test_missing_list_is_empty(self):
        with patch("app.sheets.client.requests.get") as mock_get:
            mock_get.return_value = fake_response(json_data={})
            assert SheetClient(URL).read_attendees() == []

    def test_invalid_rows_skipped(self):
        rows = [
            {"name": "Amy", "status": "committed"},
            {"name": "Ghost", "status": "maybe"},
        ]
        with patch("app.sheets.client.requests.get") as mock_get:
            mock_get.return_value = fake_response(json_data={"attendees": rows})
            attendees = SheetClient(URL).read_attendees()
        assert [a.name for a in attendees] == ["Amy"]

    def test_display_formatted_timestamp_keeps_row(self):
        rows = [
            {"name": "Amy", "status": "committed", "timestamp": "10/18/2026 13:00:00"},
            {"name": "Bob", "status": "interested", "timestamp": "2026-10-18T13:00:00Z"},
            {"name": "Cy", "status": "interested", "timestamp": "last Tuesday"},
        ]
        with patch("app.sheets.client.requests.get") as mock_get:
            mock_get.return_value = fake_response(json_data={"attendees": rows})
            attendees = SheetClient(URL).read_attendees()

        assert [a.name for a in attendees] == ["Amy", "Bob", "Cy"]
        assert attendees[0].timestamp == datetime(2026, 10, 18, 13, 0, 0)
        assert attendees[2].timestamp is None

    def test_network_error(self):
        with patch("app.sheets.client.requests.get") as mock_get:
            mock_get.side_effect = requests.exceptions.ConnectionError("refused")
            with pytest.raises(SheetReadError):
                SheetClient(URL).read_attendees()

    def test_http_error(self):
        with patch("app.sheets.client.requests.get") as mock_get:
            mock_get.return_value = fake_response(status_code=500)
            with pytest.raises(SheetReadError):
                SheetClient(URL).read_attendees()

    def test_bad_json(self):
        response = fake_response()
        response.json.side_effect = ValueError("not json")
        with patch("app.sheets.client.requests.get", return_value=response):
            with pytest.raises(SheetReadError):
                SheetClient(URL).read_attendees()

    def test_unexpected_payload(self):
        with patch("app.sheets.client.requests.get") as mock_get:
            mock_get.return_value = fake_response(json_data=["not", "a", "dict"])
            with pytest.raises(SheetReadError):
                SheetClient(URL).read_attendees()

    def test_not_configured(self):
        with patch("app.sheets.client.requests.get") as mock_get:
            with pytest.raises(SheetNotConfiguredError):
                SheetClient("").read_attendees()
        mock_get.assert_not_called()


class TestLookup:
    def test_found(self):
        row = {"email": "amy@example.com", "name": "Amy", "status": "committed"}
        with patch("app.sheets.client.requests.get") as mock_get:
            mock_get.return_value = fake_response(json_data={"attendee": row})
            attendee = SheetClient(URL).lookup("amy@example.com")

        assert mock_get.call_args.kwargs["params"] == {
            "action": "lookup",
            "email": "amy@example.com",
        }
        assert attendee.status is Status.COMMITTED

    def test_absent(self):
        with patch("app.sheets.client.requests.get") as mock_get:
            mock_get.return_value = fake_response(json_data={})
            assert SheetClient(URL).lookup("nobody@example.com") is None


class TestSubmit:
    def test_posts_payload(self):
        attendee = make_attendee("Amy", "2019", "committed", email="amy@example.com", state="CO")
        with patch("app.sheets.client.requests.post") as mock_post:
            mock_post.return_value = fake_response(text="ok")
            result = SheetClient(URL, timeout=5).submit(attendee)

        assert result.ok is True
        assert result.status_code == 200
        body = mock_post.call_args.kwargs["json"]
        assert body["email"] == "amy@example.com"
        assert body["status"] == "committed"
        assert mock_post.call_args.kwargs["timeout"] == 5

    def test_rejected(self):
        with patch("app.sheets.client.requests.post") as mock_post:
            mock_post.return_value = fake_response(status_code=403, text="denied")
            with pytest.raises(SheetWriteError):
                SheetClient(URL).submit(make_attendee("Amy"))

    def test_network_error(self):
        with patch("app.sheets.client.requests.post") as mock_post:
            mock_post.side_effect = requests.exceptions.Timeout("slow")
            with pytest.raises(SheetWriteError):
                SheetClient(URL).submit(make_attendee("Amy"))
