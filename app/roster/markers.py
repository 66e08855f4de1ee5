"""Map markers for the roster map view."""
import random
from collections.abc import Iterable
from dataclasses import asdict, dataclass

from markupsafe import Markup

from app.models import Attendee, Status
from app.roster.display import format_location
from app.roster.filters import LISTED_STATUSES, filter_by_year
from app.roster.geocode import geocode_region

STATUS_COLORS = {
    Status.COMMITTED: "#006F44",
    Status.INTERESTED: "#004A87",
}

# Leaflet view options: centred on North America, panning limited to the US and Canada
MAP_OPTIONS = {
    "center": [45, -100],
    "zoom": 4,
    "min_zoom": 3,
    "max_zoom": 20,
    "bounds": [[15, -170], [75, -50]],
    "tile_url": "https://{s}.basemaps.cartocdn.com/dark_all/{z}/{x}/{y}{r}.png",
    "attribution": (
        '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> '
        'contributors &copy; <a href="https://carto.com/attributions">CARTO</a>'
    ),
    "subdomains": "abcd",
}


@dataclass(frozen=True)
class MapMarker:
    """A circle marker with pre-escaped tooltip and popup markup."""

    lat: float
    lng: float
    color: str
    status: str
    tooltip: str
    popup: str

    def to_dict(self) -> dict:
        return asdict(self)


def _tooltip(attendee: Attendee) -> str:
    return str(
        Markup("<strong>{}</strong><br>Year(s): {}").format(attendee.name, attendee.year)
    )


def _popup(attendee: Attendee) -> str:
    return str(
        Markup("<strong>{}</strong><br>{}<br>Year(s): {}<br>Status: {}").format(
            attendee.name,
            format_location(attendee),
            attendee.year,
            attendee.status.label,
        )
    )


def build_markers(
    attendees: Iterable[Attendee],
    year: str | None,
    rng: random.Random | None = None,
) -> list[MapMarker]:
    """
    Build map markers for attendees matching the year filter.

    Only interested and committed attendees are plotted. Attendees whose
    region code has no known coordinates are skipped.
    """
    markers = []
    for attendee in filter_by_year(attendees, year):
        if attendee.status not in LISTED_STATUSES:
            continue
        coords = geocode_region(attendee.state, rng)
        if coords is None:
            continue
        markers.append(
            MapMarker(
                lat=coords.lat,
                lng=coords.lng,
                color=STATUS_COLORS[attendee.status],
                status=attendee.status.value,
                tooltip=_tooltip(attendee),
                popup=_popup(attendee),
            )
        )
    return markers
