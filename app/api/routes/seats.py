"""
API routes for seats.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.core.dependencies import get_db, require_admin_or_staff, require_permission
from app.core.security import MANAGE_SEATS
from app.schemas.auth import Message
from app.schemas.seat import SeatCreate, SeatList
from app.services.membership import seats as service

router = APIRouter()


@router.get("", response_model=SeatList, dependencies=[Depends(require_admin_or_staff)])
def list_seats(
    shift_id: Optional[int] = Query(None, description="Only count assignments within this shift"),
    db: Session = Depends(get_db)
):
    return SeatList(seats=service.list_seats(db, shift_id))


@router.post("", response_model=Message, status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_permission(MANAGE_SEATS))])
def add_seats(data: SeatCreate, db: Session = Depends(get_db)):
    """Add a comma-separated batch of seats; all are created or none."""
    service.add_seats(db, data.seat_numbers)
    return Message(message="Seats added successfully")


@router.delete("/{seat_id}", response_model=Message, dependencies=[Depends(require_permission(MANAGE_SEATS))])
def delete_seat(seat_id: int, db: Session = Depends(get_db)):
    service.delete_seat(db, seat_id)
    return Message(message="Seat deleted successfully")
