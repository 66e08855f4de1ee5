"""Registration form state: first-time registration versus updating a submission."""
from dataclasses import dataclass
from enum import Enum

from app.models import Attendee

# Cookie holding the remembered submitter email
REMEMBERED_EMAIL_COOKIE = "staffRetreatEmail"


class FormMode(str, Enum):
    REGISTER = "register"
    UPDATE = "update"


@dataclass
class FormState:
    """Mode of the registration form for one visitor.

    The form starts in register mode. It moves to update mode once an
    existing submission is found for the remembered email or a submission
    succeeds, and goes back only when the visitor clears their identity.
    """

    mode: FormMode = FormMode.REGISTER
    email: str = ""
    prefill: Attendee | None = None

    @property
    def is_update(self) -> bool:
        return self.mode is FormMode.UPDATE

    @property
    def title(self) -> str:
        return "Update Your Information" if self.is_update else "Register Your Interest"

    @property
    def submit_label(self) -> str:
        return "Update Info" if self.is_update else "Submit"

    @property
    def pending_message(self) -> str:
        return "Updating..." if self.is_update else "Submitting..."

    @property
    def success_message(self) -> str:
        if self.is_update:
            return "Successfully updated! Refreshing list..."
        return "Successfully submitted! Refreshing list..."

    def enter_update(self, attendee: Attendee) -> None:
        """A lookup found an existing submission for the remembered email."""
        self.mode = FormMode.UPDATE
        self.email = attendee.email or self.email
        self.prefill = attendee

    def record_submission(self, attendee: Attendee) -> None:
        """A submission was acknowledged by the endpoint."""
        self.mode = FormMode.UPDATE
        self.email = attendee.email
        self.prefill = attendee

    def clear(self) -> None:
        """Forget the remembered identity and start a fresh registration."""
        self.mode = FormMode.REGISTER
        self.email = ""
        self.prefill = None
