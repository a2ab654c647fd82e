"""
Pydantic schemas for schedule (shift) API operations.
"""
from pydantic import BaseModel, Field, ConfigDict, field_validator
from datetime import date, time as time_of_day
from typing import List, Optional


class ScheduleBase(BaseModel):
    """Base schedule schema."""
    title: Optional[str] = Field(None, description="Shift title")
    description: Optional[str] = Field(None, description="Shift description")
    time: Optional[time_of_day] = Field(None, description="Start time, HH:MM[:SS]")
    event_date: Optional[date] = Field(None, description="Date of the shift")

    @field_validator('time', 'event_date', mode='before')
    @classmethod
    def blank_as_missing(cls, v):
        return None if v == "" else v


class ScheduleCreate(ScheduleBase):
    """Schema for creating schedules. Title is required by the service."""
    pass


class ScheduleUpdate(ScheduleBase):
    """Schema for updating schedules. Missing fields are left unchanged."""
    pass


class Schedule(ScheduleBase):
    """Complete schedule schema for responses."""
    id: int
    title: str

    model_config = ConfigDict(from_attributes=True)


class ScheduleWithStudents(Schedule):
    student_count: int = 0


class ScheduleList(BaseModel):
    schedules: List[Schedule]


class ScheduleWithStudentsList(BaseModel):
    schedules: List[ScheduleWithStudents]
