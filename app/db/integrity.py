"""
Translation of database uniqueness violations into domain errors.
"""
from typing import Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConstraintViolation
from app.models.student import SEAT_PER_SHIFT_CONSTRAINT

logger = logging.getLogger(__name__)

CONSTRAINT_MESSAGES = {
    SEAT_PER_SHIFT_CONSTRAINT: "Selected seat is already assigned to another student in the same shift",
    "unique_student_email": "Email already in use",
    "unique_seat_number": "Seat numbers already exist",
    "unique_username": "Username already exists",
}

# SQLite reports the offending columns instead of the constraint name
_SQLITE_MARKERS = {
    "students.seat_id, students.shift_id": SEAT_PER_SHIFT_CONSTRAINT,
    "students.email": "unique_student_email",
    "seats.seat_number": "unique_seat_number",
    "users.username": "unique_username",
}


def violated_constraint(exc: IntegrityError) -> Optional[str]:
    """Name of the unique constraint behind `exc`, if it is one we know."""
    diag = getattr(exc.orig, "diag", None)
    name = getattr(diag, "constraint_name", None)
    if name in CONSTRAINT_MESSAGES:
        return name

    message = str(exc.orig)
    for marker, constraint in _SQLITE_MARKERS.items():
        if marker in message:
            return constraint
    if name is None:
        for constraint in CONSTRAINT_MESSAGES:
            if constraint in message:
                return constraint
    return None


def commit_or_raise(db: Session) -> None:
    """Commit, turning known uniqueness violations into ConstraintViolation."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        constraint = violated_constraint(e)
        if constraint is None:
            raise
        logger.info(f"Constraint {constraint} violated")
        raise ConstraintViolation(CONSTRAINT_MESSAGES[constraint], constraint) from e
