"""
Background scheduler.
Handles:
- Nightly reset of mission completions left over from previous days (opt-in)
"""

import logging
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from campus_life.constants import AUTO_MISSION_RESET_ENABLED, MISSION_RESET_TIME
from campus_life.database import SessionLocal
from campus_life.exceptions import DatabaseException
from campus_life.services.date_service import DateService
from campus_life.services.mission_service import MissionService

logger = logging.getLogger("campus_life.scheduler")

scheduler = AsyncIOScheduler()


async def run_mission_reset():
    """Job: clear mission completions from earlier days"""
    db = SessionLocal()
    try:
        today = DateService.get_today()
        count = MissionService(db).reset_stale_completions(today)
        logger.info(f"Mission reset for {today}: {count} mission(s) cleared")
    except DatabaseException as e:
        logger.error(f"Scheduler Error (Mission reset): {e.details}")
    finally:
        db.close()


def build_reset_trigger(reset_time: str = MISSION_RESET_TIME) -> CronTrigger:
    """Daily cron trigger for the given HH:MM"""
    hour, minute = DateService.parse_time(reset_time)
    return CronTrigger(hour=hour, minute=minute)


def start_scheduler():
    """Start the scheduler if any job is enabled"""
    if not AUTO_MISSION_RESET_ENABLED:
        logger.info("Automatic mission reset disabled, scheduler not started")
        return

    if not scheduler.running:
        scheduler.add_job(
            run_mission_reset,
            build_reset_trigger(),
            id='mission_reset',
            replace_existing=True
        )

        scheduler.start()
        logger.info(f"Scheduler started. Jobs: {[job.id for job in scheduler.get_jobs()]}")


def stop_scheduler():
    """Stop the scheduler"""
    if scheduler.running:
        scheduler.shutdown()
