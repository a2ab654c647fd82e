"""
Student membership operations: creation, updates, renewal and listings.

Seat-per-shift uniqueness is enforced by the `unique_seat_per_shift`
constraint; this module only pre-checks what the database cannot express
(seat requires shift, referenced rows exist, email ownership on update).
"""
from datetime import date, datetime, time, timedelta
from typing import List, Optional
import logging

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import ConstraintViolation, NotFound, ValidationFailed
from app.db.integrity import commit_or_raise
from app.models.schedule import Schedule
from app.models.seat import Seat
from app.models.student import Student, StudentStatus
from app.schemas.student import (
    DashboardStats, RenewRequest, Student as StudentSchema, StudentCreate, StudentUpdate
)
from app.services.membership.status import expiring_soon_cutoff

logger = logging.getLogger(__name__)


def _students(db: Session):
    return db.query(Student).options(joinedload(Student.seat), joinedload(Student.shift))


def _get_or_404(db: Session, student_id: int) -> Student:
    student = _students(db).filter(Student.id == student_id).first()
    if not student:
        raise NotFound("Student not found")
    return student


def _validate_phone(phone: Optional[str]) -> None:
    if phone is not None and phone.strip() == "":
        raise ValidationFailed("Phone number must be a non-empty string if provided")


def _check_email_available(db: Session, email: Optional[str], exclude_id: Optional[int] = None) -> None:
    if not email:
        return
    query = db.query(Student.id).filter(Student.email == email)
    if exclude_id is not None:
        query = query.filter(Student.id != exclude_id)
    if query.first() is not None:
        message = "Email already in use" if exclude_id is None else "Email already in use by another student"
        raise ConstraintViolation(message, "unique_student_email")


def _validate_assignment(db: Session, shift_id: Optional[int], seat_id: Optional[int]) -> None:
    if seat_id is not None and shift_id is None:
        raise ValidationFailed("Shift must be selected when assigning a seat")
    if shift_id is not None and db.query(Schedule.id).filter(Schedule.id == shift_id).first() is None:
        raise ValidationFailed("Invalid shift ID")
    if seat_id is not None and db.query(Seat.id).filter(Seat.id == seat_id).first() is None:
        raise ValidationFailed("Invalid seat ID")


def create_student(db: Session, data: StudentCreate) -> Student:
    """
    Create a student with status `active`.

    Raises:
        ValidationFailed: missing required fields, blank phone, seat without
            shift, or unknown shift/seat ids.
        ConstraintViolation: email taken, or seat already used in the shift.
    """
    if not (data.name and data.name.strip()) or data.membership_start is None or data.membership_end is None:
        raise ValidationFailed("Name, membership start, and membership end dates are required")
    _validate_phone(data.phone)
    _check_email_available(db, data.email)
    _validate_assignment(db, data.shift_id, data.seat_id)

    student = Student(**data.model_dump(), status=StudentStatus.ACTIVE.value)
    db.add(student)
    commit_or_raise(db)
    db.refresh(student)

    logger.info(f"Created student {student.id} ({student.name})")
    return student


def update_student(db: Session, student_id: int, data: StudentUpdate) -> Student:
    """
    Partially update a student.

    Fields that are missing or null keep their stored value, except shift_id
    and seat_id which always take the supplied value (missing clears them).
    """
    if data.seat_id is not None and data.shift_id is None:
        raise ValidationFailed("Shift must be selected when assigning a seat")
    student = _get_or_404(db, student_id)

    if data.name is not None and not data.name.strip():
        raise ValidationFailed("Name cannot be empty")
    _validate_phone(data.phone)
    _check_email_available(db, data.email, exclude_id=student.id)
    _validate_assignment(db, data.shift_id, data.seat_id)

    changes = data.model_dump(exclude_none=True, exclude={"shift_id", "seat_id", "status"})
    for field, value in changes.items():
        setattr(student, field, value)
    student.shift_id = data.shift_id
    student.seat_id = data.seat_id
    if data.status is not None:
        student.status = data.status.value

    commit_or_raise(db)
    db.refresh(student)

    logger.info(f"Updated student {student.id}")
    return student


def renew_membership(db: Session, student_id: int, data: RenewRequest) -> Student:
    """Set new membership dates and mark the student active, whatever the dates are."""
    if data.membership_start is None or data.membership_end is None:
        raise ValidationFailed("Membership start and end dates are required")
    student = _get_or_404(db, student_id)

    student.membership_start = data.membership_start
    student.membership_end = data.membership_end
    student.status = StudentStatus.ACTIVE.value
    commit_or_raise(db)
    db.refresh(student)

    logger.info(f"Renewed membership for student {student.id} until {student.membership_end}")
    return student


def delete_student(db: Session, student_id: int) -> StudentSchema:
    """Delete a student and return a snapshot of the removed record."""
    student = _get_or_404(db, student_id)
    snapshot = StudentSchema.model_validate(student)
    db.delete(student)
    db.commit()

    logger.info(f"Deleted student {student_id}")
    return snapshot


def get_student(db: Session, student_id: int) -> Student:
    return _get_or_404(db, student_id)


def list_students(
    db: Session,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
) -> List[Student]:
    """All students by name, optionally restricted to a creation-date range (inclusive)."""
    query = _students(db)
    if from_date:
        query = query.filter(Student.created_at >= datetime.combine(from_date, time.min))
    if to_date:
        query = query.filter(Student.created_at < datetime.combine(to_date + timedelta(days=1), time.min))
    return query.order_by(Student.name).all()


def list_by_status(db: Session, status: StudentStatus) -> List[Student]:
    return _students(db).filter(Student.status == status.value).order_by(Student.name).all()


def list_expiring_soon(db: Session, within_days: int, today: Optional[date] = None) -> List[Student]:
    """Active students whose membership ends within `within_days` (past end dates included)."""
    cutoff = expiring_soon_cutoff(within_days, today)
    return (
        _students(db)
        .filter(Student.status == StudentStatus.ACTIVE.value, Student.membership_end <= cutoff)
        .order_by(Student.membership_end)
        .all()
    )


def list_by_shift(
    db: Session,
    shift_id: int,
    search: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Student]:
    """Students of one shift, filtered by name/phone substring and stored status."""
    query = _students(db).filter(Student.shift_id == shift_id)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(Student.name.ilike(pattern), Student.phone.ilike(pattern)))
    if status and status != "all":
        query = query.filter(Student.status == status)
    return query.order_by(Student.name).all()


def dashboard_stats(db: Session) -> DashboardStats:
    """Counts by stored status. Totals need not add up if other statuses exist."""
    def count(*criteria) -> int:
        return db.query(func.count(Student.id)).filter(*criteria).scalar() or 0

    return DashboardStats(
        total_students=count(),
        active_students=count(Student.status == StudentStatus.ACTIVE.value),
        expired_memberships=count(Student.status == StudentStatus.EXPIRED.value),
    )
