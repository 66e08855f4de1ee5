#!/usr/bin/env python3
"""
Print the retreat roster grouped by status.

Reads the roster from the spreadsheet endpoint configured in .env (or the
demo roster) and prints one section per status, sorted by name.

Usage:
    python scripts/export_roster.py [--year YEAR] [--json] [--demo] [--not-going]

Options:
    --year YEAR     Only include attendees who list this year (default: all)
    --json          Print JSON instead of plain text
    --demo          Use the built-in demo roster instead of the spreadsheet
    --not-going     Include the not-going group
"""
import argparse
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.roster.display import DisplayGroup
from app.roster.filters import ALL_STATUSES, LISTED_STATUSES
from app.roster.session import RosterSession
from app.roster.years import ALL_YEARS, resolve_year_selection
from app.sheets.client import SheetClient, has_sheet_url


def format_text(groups: list[DisplayGroup], year: str) -> str:
    """Render groups as plain text, one attendee per line."""
    lines = [f"Roster for {'all years' if year == ALL_YEARS else year}", ""]
    for group in groups:
        lines.append(f"{group.title} ({len(group.entries)})")
        if group.is_empty:
            lines.append(f"  {group.empty_text}")
        for entry in group.entries:
            details = ", ".join(part for part in (entry.year, entry.location) if part)
            lines.append(f"  - {entry.name}" + (f" [{details}]" if details else ""))
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def format_json(groups: list[DisplayGroup], year: str) -> str:
    return json.dumps(
        {
            "year": year,
            "groups": {
                group.status.value: [
                    {"name": e.name, "year": e.year, "location": e.location}
                    for e in group.entries
                ]
                for group in groups
            },
        },
        indent=2,
    ) + "\n"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print the retreat roster")
    parser.add_argument("--year", default=ALL_YEARS, help="Year tag to filter by")
    parser.add_argument("--json", action="store_true", help="Print JSON output")
    parser.add_argument("--demo", action="store_true", help="Use the demo roster")
    parser.add_argument("--not-going", action="store_true", help="Include the not-going group")
    args = parser.parse_args(argv)

    session = RosterSession()
    if args.demo:
        session.load_demo()
    else:
        if not has_sheet_url():
            print("Warning: SHEET_URL not set, the demo roster will be shown.", file=sys.stderr)
        session.load(SheetClient())

    if session.notice:
        print(f"Warning: {session.notice}", file=sys.stderr)

    year = resolve_year_selection(args.year, session.years)
    if year != args.year:
        print(f"Warning: no attendees list year {args.year!r}, showing all years.", file=sys.stderr)

    statuses = ALL_STATUSES if args.not_going else LISTED_STATUSES
    groups = session.groups(year, statuses)

    print(format_json(groups, year) if args.json else format_text(groups, year), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
