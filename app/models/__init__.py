from app.models.attendee import Attendee, Status

__all__ = ["Attendee", "Status"]
