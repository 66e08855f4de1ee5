"""Registration routes for submitting and updating retreat interest."""
import logging
from datetime import UTC, datetime
from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from app.core.config import settings
from app.models import Attendee, Status
from app.roster.form import REMEMBERED_EMAIL_COOKIE, FormMode, FormState
from app.roster.geocode import REGION_CENTROIDS
from app.roster.session import RosterSession
from app.routes.roster import app_path, get_roster_session
from app.sheets.client import SheetClient, SheetError, get_sheet_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/register", tags=["register"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

SUBMIT_ERROR_MESSAGE = "Error submitting form. Please try again."

# One year, roughly
COOKIE_MAX_AGE = 60 * 60 * 24 * 365


def form_state_for(email: str, client: SheetClient) -> FormState:
    """
    Build the form state for a remembered email.

    Looks up an existing submission; lookup failures are logged and the
    form stays in register mode.
    """
    form = FormState(email=email)
    if not email:
        return form

    try:
        existing = client.lookup(email)
    except SheetError as e:
        logger.warning(f"Lookup failed for {email}: {e}")
        return form

    if existing:
        form.enter_update(existing)
    return form


def remember_identity(response: RedirectResponse, form: FormState) -> None:
    # Cleared forms drop the cookie; a submission without an email leaves it alone
    if form.email:
        response.set_cookie(
            REMEMBERED_EMAIL_COOKIE, form.email, max_age=COOKIE_MAX_AGE, samesite="lax"
        )
    elif not form.is_update:
        response.delete_cookie(REMEMBERED_EMAIL_COOKIE)


def render_form(
    request: Request,
    form: FormState,
    *,
    show_form: bool,
    message: str | None = None,
    error: str | None = None,
    values: dict | None = None,
    status_code: int = 200,
):
    prefill = values
    if prefill is None:
        prefill = form.prefill.model_dump(mode="json") if form.prefill else {"email": form.email}

    return templates.TemplateResponse(
        request,
        "register.html",
        {
            "form": form,
            "show_form": show_form,
            "values": prefill,
            "message": message,
            "error": error,
            "statuses": list(Status),
            "regions": sorted(REGION_CENTROIDS),
            "location_mode": settings.location_mode,
            "root_path": app_path(request, ""),
            "app_name": settings.app_name,
        },
        status_code=status_code,
    )


@router.get("", response_class=HTMLResponse)
def register_page(
    request: Request,
    edit: bool = False,
    done: str | None = None,
    client: SheetClient = Depends(get_sheet_client),
):
    """
    Display the registration form.

    A visitor with a remembered email sees their submission notice and an
    edit button; the form opens with their current details when editing.
    Everyone else gets an empty registration form.
    """
    email = request.cookies.get(REMEMBERED_EMAIL_COOKIE, "")
    form = form_state_for(email, client)

    message = None
    if done in (FormMode.REGISTER.value, FormMode.UPDATE.value):
        # Message reflects the mode the submission was made in
        message = FormState(mode=FormMode(done)).success_message

    return render_form(request, form, show_form=edit or not email, message=message)


@router.post("")
def submit_registration(
    request: Request,
    email: str = Form(""),
    name: str = Form(""),
    year: str = Form(""),
    state: str = Form(""),
    city: str = Form(""),
    location: str = Form(""),
    status: str = Form(""),
    mode: str = Form(FormMode.REGISTER.value),
    session: RosterSession = Depends(get_roster_session),
    client: SheetClient = Depends(get_sheet_client),
):
    """
    Submit or update a registration.

    The submission replaces any earlier one with the same email. On
    success the email is remembered in a cookie, the roster is reloaded,
    and the visitor is redirected to the submitted notice. Invalid input
    re-renders the form with 422; endpoint failures re-render it with 502
    so the visitor can resubmit.
    """
    values = {
        "email": email.strip(),
        "name": name.strip(),
        "year": year.strip(),
        "state": state.strip(),
        "city": city.strip(),
        "location": location.strip(),
        "status": status,
    }
    form = FormState(
        mode=FormMode.UPDATE if mode == FormMode.UPDATE.value else FormMode.REGISTER,
        email=values["email"],
    )

    if not values["name"]:
        return render_form(
            request, form, show_form=True, error="Please enter your name.",
            values=values, status_code=422,
        )
    try:
        attendee = Attendee.model_validate({**values, "timestamp": datetime.now(UTC)})
    except ValidationError:
        return render_form(
            request, form, show_form=True, error="Please choose a valid status.",
            values=values, status_code=422,
        )

    logger.info(f"{form.pending_message} {attendee.name!r}")
    try:
        client.submit(attendee)
    except SheetError as e:
        logger.error(f"Error submitting form: {e}")
        return render_form(
            request, form, show_form=True, error=SUBMIT_ERROR_MESSAGE,
            values=values, status_code=502,
        )

    done = form.mode.value
    form.record_submission(attendee)
    session.load(client)

    response = RedirectResponse(app_path(request, f"/register?done={done}"), status_code=303)
    remember_identity(response, form)
    return response


@router.post("/forget")
def forget_identity(request: Request):
    """
    Submit as someone else.

    Clears the remembered email so the form returns to a fresh
    registration.
    """
    form = FormState(email=request.cookies.get(REMEMBERED_EMAIL_COOKIE, ""))
    form.clear()

    response = RedirectResponse(app_path(request, "/register"), status_code=303)
    remember_identity(response, form)
    return response
