"""
Seat database model.
"""
from sqlalchemy import Column, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base


class Seat(Base):
    """Physical seat. Whether it is assigned is computed from students at read time."""
    __tablename__ = "seats"
    __table_args__ = (UniqueConstraint("seat_number", name="unique_seat_number"),)

    id = Column(Integer, primary_key=True, index=True)
    seat_number = Column(String(20), nullable=False)

    students = relationship("Student", back_populates="seat")

    def __repr__(self) -> str:
        return f"<Seat(seat_number={self.seat_number})>"
