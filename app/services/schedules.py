"""
Shift (schedule) management.
"""
from typing import List, Tuple
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.exceptions import NotFound, ValidationFailed
from app.models.schedule import Schedule
from app.models.student import Student
from app.schemas.schedule import ScheduleCreate, ScheduleUpdate

logger = logging.getLogger(__name__)


def _get_or_404(db: Session, schedule_id: int) -> Schedule:
    schedule = db.query(Schedule).filter(Schedule.id == schedule_id).first()
    if not schedule:
        raise NotFound("Schedule not found")
    return schedule


def list_schedules(db: Session) -> List[Schedule]:
    return db.query(Schedule).order_by(Schedule.event_date, Schedule.time, Schedule.id).all()


def list_schedules_with_counts(db: Session) -> List[Tuple[Schedule, int]]:
    """Every schedule paired with the number of students enrolled in it."""
    return (
        db.query(Schedule, func.count(Student.id))
        .outerjoin(Student, Student.shift_id == Schedule.id)
        .group_by(Schedule.id)
        .order_by(Schedule.event_date, Schedule.time, Schedule.id)
        .all()
    )


def get_schedule(db: Session, schedule_id: int) -> Schedule:
    return _get_or_404(db, schedule_id)


def create_schedule(db: Session, data: ScheduleCreate) -> Schedule:
    if not (data.title and data.title.strip()):
        raise ValidationFailed("Title is required")

    schedule = Schedule(**data.model_dump())
    db.add(schedule)
    db.commit()
    db.refresh(schedule)

    logger.info(f"Created schedule {schedule.id} ({schedule.title})")
    return schedule


def update_schedule(db: Session, schedule_id: int, data: ScheduleUpdate) -> Schedule:
    schedule = _get_or_404(db, schedule_id)
    if data.title is not None and not data.title.strip():
        raise ValidationFailed("Title cannot be empty")

    for field, value in data.model_dump(exclude_none=True).items():
        setattr(schedule, field, value)
    db.commit()
    db.refresh(schedule)

    logger.info(f"Updated schedule {schedule.id}")
    return schedule


def delete_schedule(db: Session, schedule_id: int) -> None:
    """Delete a shift. Its students lose both shift and seat, since a seat needs a shift."""
    schedule = _get_or_404(db, schedule_id)

    released = db.query(Student).filter(Student.shift_id == schedule_id).update(
        {Student.shift_id: None, Student.seat_id: None}, synchronize_session=False
    )
    db.delete(schedule)
    db.commit()
    logger.info(f"Deleted schedule {schedule_id}, released {released} students")
