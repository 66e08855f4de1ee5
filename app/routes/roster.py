"""Roster routes for the attendee lists, the map and their JSON feeds."""
from pathlib import Path
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from app.core.config import settings
from app.roster.filters import ALL_STATUSES, LISTED_STATUSES
from app.roster.markers import MAP_OPTIONS
from app.roster.session import RosterSession, roster_session
from app.roster.years import ALL_YEARS, resolve_year_selection
from app.sheets.client import SheetClient, get_sheet_client, has_sheet_url

router = APIRouter(prefix="/roster", tags=["roster"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def get_roster_session() -> RosterSession:
    """Dependency for getting the shared roster session."""
    return roster_session


def app_path(request: Request, path: str) -> str:
    """Prefix a route path with the mount point the app is served under."""
    return f"{request.scope.get('root_path', '')}{path}"


def ensure_loaded(session: RosterSession, client: SheetClient) -> None:
    """Load the roster on first use; later reloads are explicit or scheduled."""
    if not session.is_loaded:
        session.load(client)


def listed_statuses():
    return ALL_STATUSES if settings.show_not_going else LISTED_STATUSES


@router.get("", response_class=HTMLResponse)
def roster_page(
    request: Request,
    year: str = ALL_YEARS,
    map_year: str = ALL_YEARS,
    session: RosterSession = Depends(get_roster_session),
    client: SheetClient = Depends(get_sheet_client),
):
    """
    Display the roster.

    Shows one list per status (interested and committed, plus not-going
    when enabled), filtered by year and sorted by name, and a map of
    approximate home regions with its own year filter. Unknown year
    selections fall back to all years.
    """
    ensure_loaded(session, client)

    years = session.sorted_years
    year = resolve_year_selection(year, years)
    map_year = resolve_year_selection(map_year, years)

    markers = []
    if settings.show_map:
        markers = [marker.to_dict() for marker in session.markers(map_year)]

    return templates.TemplateResponse(
        request,
        "roster.html",
        {
            "groups": session.groups(year, listed_statuses()),
            "years": years,
            "selected_year": year,
            "selected_map_year": map_year,
            "show_map": settings.show_map,
            "markers": markers,
            "map_options": MAP_OPTIONS,
            "notice": session.notice,
            "is_demo": session.is_demo,
            "root_path": app_path(request, ""),
            "app_name": settings.app_name,
        },
    )


@router.post("/refresh")
def refresh_roster(
    request: Request,
    year: str = Form(ALL_YEARS),
    map_year: str = Form(ALL_YEARS),
    session: RosterSession = Depends(get_roster_session),
    client: SheetClient = Depends(get_sheet_client),
):
    """
    Reload the roster from the spreadsheet.

    Falls back to the demo roster if the spreadsheet can't be read, then
    redirects back to the roster page keeping the current filters.
    """
    session.load(client)
    query = urlencode({"year": year, "map_year": map_year})
    return RedirectResponse(app_path(request, f"/roster?{query}"), status_code=303)


@router.get("/attendees")
def roster_attendees(
    session: RosterSession = Depends(get_roster_session),
    client: SheetClient = Depends(get_sheet_client),
):
    """Return the cached roster as JSON, with its year tags and load notice."""
    ensure_loaded(session, client)
    return session.snapshot()


@router.get("/markers")
def roster_markers(
    year: str = ALL_YEARS,
    session: RosterSession = Depends(get_roster_session),
    client: SheetClient = Depends(get_sheet_client),
):
    """Return map markers for the selected year as JSON."""
    ensure_loaded(session, client)
    year = resolve_year_selection(year, session.years)
    return {
        "year": year,
        "markers": [marker.to_dict() for marker in session.markers(year)],
    }


@router.get("/status")
def roster_status(session: RosterSession = Depends(get_roster_session)):
    """
    Get current roster load status.

    Returns JSON with whether the spreadsheet endpoint is configured, when
    the roster was last loaded, and whether demo data is being shown.
    """
    return {
        "configured": has_sheet_url(),
        "loaded": session.is_loaded,
        "loaded_at": session.loaded_at.isoformat() if session.loaded_at else None,
        "attendee_count": len(session.attendees),
        "is_demo": session.is_demo,
        "notice": session.notice,
        "refresh_interval_minutes": settings.refresh_interval_minutes,
    }
