"""
Schedule (shift) database model.
"""
from sqlalchemy import Column, Integer, String, Date, Time, Text
from sqlalchemy.orm import relationship

from app.db.base import Base


class Schedule(Base):
    """
    A shift students can be enrolled in.

    Attributes:
        title: Shift name shown to staff
        description: Free-form description
        time: Start time of the shift
        event_date: Date the shift applies to
    """
    __tablename__ = "schedules"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(120), nullable=False)
    description = Column(Text, nullable=True)
    time = Column(Time, nullable=True)
    event_date = Column(Date, nullable=True)

    students = relationship("Student", back_populates="shift")

    def __repr__(self) -> str:
        return f"<Schedule(id={self.id}, title={self.title})>"
