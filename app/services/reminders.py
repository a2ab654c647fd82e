"""
Daily membership expiration reminders.

The loop started by the application lifespan sleeps until the configured
time of day, then scans for active memberships ending exactly
`days_before_expiration` days from today and emails each student once.
"""
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, Optional
import asyncio
import logging

from sqlalchemy.orm import Session

from app.models.student import Student, StudentStatus
from app.services.membership.status import reminder_target_date
from app.services.settings_store import (
    BREVO_TEMPLATE_ID, DAYS_BEFORE_EXPIRATION, get_settings, parse_positive_int
)

logger = logging.getLogger(__name__)

ERROR_RETRY_SECONDS = 60


def run_expiration_reminders(db: Session, notifier: Any, today: Optional[date] = None) -> Dict[str, Any]:
    """
    Send reminders for memberships ending on today + N days.

    A failure for one student is logged and the remaining students are still
    processed. Nothing is retried and no delivery state is stored.

    Returns:
        Summary with the target date and sent/failed/skipped counts, or a
        `skipped_reason` when the settings are incomplete.
    """
    logger.info("Running expiration reminder job...")
    settings = get_settings(db)

    days_before = parse_positive_int(settings.get(DAYS_BEFORE_EXPIRATION))
    if days_before is None:
        logger.info("Days before expiration not set or invalid")
        return {"skipped_reason": "days_before_expiration"}

    template_id = parse_positive_int(settings.get(BREVO_TEMPLATE_ID))
    if template_id is None:
        logger.info("Brevo template ID not set or invalid")
        return {"skipped_reason": "brevo_template_id"}

    target = reminder_target_date(days_before, today)
    students = (
        db.query(Student)
        .filter(Student.membership_end == target, Student.status == StudentStatus.ACTIVE.value)
        .order_by(Student.id)
        .all()
    )
    summary = {"target_date": target.isoformat(), "sent": 0, "failed": 0, "skipped": 0}
    if not students:
        logger.info(f"No students with memberships expiring on {target}")
        return summary

    for student in students:
        if not student.email:
            logger.info(f"Student {student.id} has no email, skipping reminder")
            summary["skipped"] += 1
            continue
        try:
            notifier.send_expiration_reminder(student, template_id)
            summary["sent"] += 1
        except Exception as e:
            logger.error(f"Failed to send reminder to student {student.id}: {e}")
            summary["failed"] += 1

    logger.info(
        f"Reminders for {target}: {summary['sent']} sent, "
        f"{summary['failed']} failed, {summary['skipped']} skipped"
    )
    return summary


def seconds_until_next_run(now: datetime, hour: int, minute: int) -> float:
    """Seconds from `now` to the next occurrence of hour:minute (tomorrow if already past)."""
    next_run = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if next_run <= now:
        next_run += timedelta(days=1)
    return (next_run - now).total_seconds()


def _run_once(session_factory: Callable[[], Session], notifier_factory: Callable[[], Any]) -> None:
    db = session_factory()
    try:
        run_expiration_reminders(db, notifier_factory())
    finally:
        db.close()


async def reminder_loop(
    session_factory: Callable[[], Session],
    notifier_factory: Callable[[], Any],
    hour: int = 0,
    minute: int = 0,
) -> None:
    """Fire the reminder job once a day until cancelled."""
    while True:
        try:
            delay = seconds_until_next_run(datetime.now(), hour, minute)
            logger.info(f"Next expiration reminder run in {delay:.0f}s")
            await asyncio.sleep(delay)
            await asyncio.to_thread(_run_once, session_factory, notifier_factory)
        except asyncio.CancelledError:
            break
        except Exception as e:
            logger.error(f"Error in expiration reminder job: {e}")
            try:
                await asyncio.sleep(ERROR_RETRY_SECONDS)
            except asyncio.CancelledError:
                break
