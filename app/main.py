"""Staff Retreat Roster Web Application."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from app.core.config import settings
from app.core.scheduler import shutdown_scheduler, start_scheduler
from app.routes import register, roster
from app.routes.roster import app_path
from app.sheets.client import has_sheet_url


def configure_logging(log_dir: Path, debug: bool) -> Path:
    """Send application logs to <log_dir>/latest.log."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "latest.log"
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        filename=str(log_file),
    )
    return log_file


def cors_origins(allowed: str) -> list[str]:
    if allowed.strip() == "*":
        return ["*"]
    return [o.strip() for o in allowed.split(",") if o.strip()]


configure_logging(Path(settings.log_dir), settings.debug)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the roster refresh job with the app and stop it on shutdown."""
    logger.info("Starting Staff Retreat Roster application")
    if not has_sheet_url():
        logger.warning("SHEET_URL is not set; the roster will show demo data")
    start_scheduler()
    yield
    shutdown_scheduler()
    logger.info("Staff Retreat Roster application shut down")


app = FastAPI(
    title=settings.app_name,
    description="Register interest in the staff retreat and browse who else is going",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(settings.allowed_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount(
    "/static",
    StaticFiles(directory=str(Path(__file__).resolve().parent / "static")),
    name="static",
)

app.include_router(register.router)
app.include_router(roster.router)


@app.get("/")
async def root(request: Request):
    """Send visitors to the roster."""
    return RedirectResponse(app_path(request, "/roster"))


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "sheet_configured": has_sheet_url(),
    }
