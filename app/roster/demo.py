"""Fixed roster shown when the spreadsheet endpoint can't be read."""
from app.models import Attendee

DEMO_RECORDS = [
    {"name": "John Doe", "year": "2018, 2019", "city": "Denver", "state": "CO", "status": "interested"},
    {"name": "Jane Smith", "year": "2019", "city": "Austin", "state": "TX", "status": "committed"},
    {"name": "Mike Johnson", "year": "2018, 2020", "city": "Seattle", "state": "WA", "status": "committed"},
    {"name": "Sarah Williams", "year": "2020", "city": "Portland", "state": "OR", "status": "not-going"},
    {"name": "Tom Brown", "year": "2019, 2021", "city": "Boston", "state": "MA", "status": "interested"},
]


def demo_attendees() -> list[Attendee]:
    """Build a fresh copy of the demo roster."""
    return [Attendee.model_validate(record) for record in DEMO_RECORDS]
