"""Background job scheduler for roster refreshes."""
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from app.core.config import settings
from app.roster.session import roster_session
from app.sheets.client import SheetClient

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


def refresh_job():
    """Background roster refresh."""
    try:
        snapshot = roster_session.load(SheetClient())
        logger.info(
            f"Background refresh completed: {len(snapshot.attendees)} attendees"
            f"{' (demo data)' if snapshot.is_demo else ''}"
        )
    except Exception as e:
        logger.error(f"Background refresh failed: {e}")


def start_scheduler():
    """Start the background scheduler."""
    if settings.refresh_interval_minutes <= 0:
        logger.info("Background refresh disabled")
        return

    scheduler.add_job(
        refresh_job,
        trigger=IntervalTrigger(minutes=settings.refresh_interval_minutes),
        id="roster_refresh",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        f"Scheduler started, refreshing every {settings.refresh_interval_minutes} minutes"
    )


def shutdown_scheduler():
    """Graceful shutdown."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler shut down")
