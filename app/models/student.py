"""
Student database model for library memberships.
"""
from sqlalchemy import (
    Column, Integer, String, Date, DateTime, Numeric, Text, ForeignKey, UniqueConstraint
)
from sqlalchemy.orm import relationship
import enum
from datetime import datetime

from app.db.base import Base
from app.services.membership.status import is_expired as membership_expired

SEAT_PER_SHIFT_CONSTRAINT = "unique_seat_per_shift"


class StudentStatus(str, enum.Enum):
    """Stored membership status. Only written by create, renew and explicit updates."""
    ACTIVE = "active"
    EXPIRED = "expired"


class Student(Base):
    """
    Student model representing a library membership.

    Attributes:
        name: Student name
        admission_no: Optional admission number
        email: Optional contact email, unique when present
        membership_start: First day of the membership
        membership_end: Last day of the membership
        shift_id: Enrolled shift
        seat_id: Assigned seat, only valid together with a shift
        status: Stored status flag ("active" or "expired")
        fee: Membership fee
        profile_image_url: Hosted profile picture
    """
    __tablename__ = "students"
    __table_args__ = (
        UniqueConstraint("seat_id", "shift_id", name=SEAT_PER_SHIFT_CONSTRAINT),
        UniqueConstraint("email", name="unique_student_email"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    admission_no = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(30), nullable=True)
    address = Column(Text, nullable=True)
    membership_start = Column(Date, nullable=False)
    membership_end = Column(Date, nullable=False, index=True)
    shift_id = Column(Integer, ForeignKey("schedules.id", ondelete="SET NULL"), nullable=True)
    seat_id = Column(Integer, ForeignKey("seats.id", ondelete="SET NULL"), nullable=True)
    status = Column(String(20), nullable=False, default=StudentStatus.ACTIVE.value)
    fee = Column(Numeric(10, 2), nullable=True)
    profile_image_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    shift = relationship("Schedule", back_populates="students")
    seat = relationship("Seat", back_populates="students")

    @property
    def seat_number(self):
        return self.seat.seat_number if self.seat else None

    @property
    def shift_title(self):
        return self.shift.title if self.shift else None

    @property
    def shift_description(self):
        return self.shift.description if self.shift else None

    @property
    def is_expired(self) -> bool:
        """Derived from membership_end; never written back to status."""
        return membership_expired(self.membership_end)

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, name={self.name}, status={self.status})>"
