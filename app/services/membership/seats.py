"""
Seat inventory: listing with derived assignment, batch creation, deletion.
"""
from typing import List, Optional
import logging

from sqlalchemy import exists
from sqlalchemy.orm import Session

from app.core.exceptions import ConstraintViolation, NotFound, ValidationFailed
from app.db.integrity import commit_or_raise
from app.models.seat import Seat
from app.models.student import Student
from app.schemas.seat import Seat as SeatSchema

logger = logging.getLogger(__name__)


def list_seats(db: Session, shift_id: Optional[int] = None) -> List[SeatSchema]:
    """
    List seats with `is_assigned` computed at read time.

    A seat is assigned when some student references it; with `shift_id` only
    students of that shift count.
    """
    assigned = exists().where(Student.seat_id == Seat.id)
    if shift_id is not None:
        assigned = assigned.where(Student.shift_id == shift_id)

    rows = (
        db.query(Seat.id, Seat.seat_number, assigned.label("is_assigned"))
        .order_by(Seat.seat_number)
        .all()
    )
    return [
        SeatSchema(id=row.id, seat_number=row.seat_number, is_assigned=bool(row.is_assigned))
        for row in rows
    ]


def parse_seat_numbers(raw: Optional[str]) -> List[str]:
    """
    Split a comma-separated seat list.

    Raises:
        ValidationFailed: input missing, empty after trimming, or containing
            the same number twice.
    """
    if raw is None or not isinstance(raw, str):
        raise ValidationFailed("seat_numbers must be a comma-separated string")
    numbers = [part.strip() for part in raw.split(",") if part.strip()]
    if not numbers:
        raise ValidationFailed("No seat numbers provided")
    if len(set(numbers)) < len(numbers):
        raise ValidationFailed("Duplicate seat numbers in input")
    return numbers


def add_seats(db: Session, raw: Optional[str]) -> List[Seat]:
    """Create every requested seat or none of them."""
    numbers = parse_seat_numbers(raw)

    existing = [
        row.seat_number
        for row in db.query(Seat.seat_number).filter(Seat.seat_number.in_(numbers)).all()
    ]
    if existing:
        raise ConstraintViolation(
            f"Seat numbers already exist: {', '.join(sorted(existing))}", "unique_seat_number"
        )

    seats = [Seat(seat_number=number) for number in numbers]
    db.add_all(seats)
    commit_or_raise(db)

    logger.info(f"Added {len(seats)} seats: {', '.join(numbers)}")
    return seats


def delete_seat(db: Session, seat_id: int) -> None:
    """Delete a seat, releasing it from any student holding it."""
    seat = db.query(Seat).filter(Seat.id == seat_id).first()
    if not seat:
        raise NotFound("Seat not found")

    db.query(Student).filter(Student.seat_id == seat_id).update(
        {Student.seat_id: None}, synchronize_session=False
    )
    seat_number = seat.seat_number
    db.delete(seat)
    db.commit()
    logger.info(f"Deleted seat {seat_number}")
