"""
Pydantic schemas for student-related API operations.
"""
from __future__ import annotations
from pydantic import BaseModel, Field, ConfigDict, field_validator
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from app.models.student import StudentStatus


def _blank_to_none(v):
    if isinstance(v, str) and v == "":
        return None
    return v


class StudentFields(BaseModel):
    """Fields shared by create and update. All optional at the schema level; the
    service layer decides which ones are required."""
    name: Optional[str] = Field(None, description="Student name")
    admission_no: Optional[str] = Field(None, description="Admission number")
    email: Optional[str] = Field(None, description="Contact email, unique among students")
    phone: Optional[str] = Field(None, description="Phone number")
    address: Optional[str] = Field(None, description="Postal address")
    membership_start: Optional[date] = Field(None, description="First day of membership")
    membership_end: Optional[date] = Field(None, description="Last day of membership")
    shift_id: Optional[int] = Field(None, description="Shift (schedule) id")
    seat_id: Optional[int] = Field(None, description="Seat id, requires shift_id")
    fee: Optional[Decimal] = Field(None, ge=0, description="Membership fee")
    profile_image_url: Optional[str] = Field(None, description="Hosted profile image")

    @field_validator(
        'admission_no', 'email', 'address', 'membership_start', 'membership_end',
        'shift_id', 'seat_id', 'fee', 'profile_image_url', mode='before'
    )
    @classmethod
    def blank_as_missing(cls, v):
        return _blank_to_none(v)

    @field_validator('phone', mode='before')
    @classmethod
    def empty_phone_as_missing(cls, v):
        # Whitespace-only phones are kept so the service can reject them
        return _blank_to_none(v)


class StudentCreate(StudentFields):
    """Schema for creating students."""
    pass


class StudentUpdate(StudentFields):
    """Schema for updating students. Missing fields are left unchanged except
    shift_id and seat_id, which are always overwritten."""
    status: Optional[StudentStatus] = None


class RenewRequest(BaseModel):
    """Schema for renewing a membership."""
    membership_start: Optional[date] = None
    membership_end: Optional[date] = None

    @field_validator('membership_start', 'membership_end', mode='before')
    @classmethod
    def blank_as_missing(cls, v):
        return _blank_to_none(v)


class Student(BaseModel):
    """Complete student schema for responses."""
    id: int
    name: str
    admission_no: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    membership_start: date
    membership_end: date
    shift_id: Optional[int] = None
    seat_id: Optional[int] = None
    status: str
    fee: Optional[float] = None
    profile_image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    seat_number: Optional[str] = None
    shift_title: Optional[str] = None
    shift_description: Optional[str] = None
    is_expired: bool = Field(..., description="membership_end is before today")

    model_config = ConfigDict(from_attributes=True)

    @field_validator('fee', mode='before')
    @classmethod
    def decimal_to_float(cls, v):
        if isinstance(v, Decimal):
            return float(v)
        return v


class StudentList(BaseModel):
    students: List[Student]


class StudentMessage(BaseModel):
    message: str
    student: Student


class DashboardStats(BaseModel):
    """Counts by stored status."""
    total_students: int = Field(..., serialization_alias="totalStudents")
    active_students: int = Field(..., serialization_alias="activeStudents")
    expired_memberships: int = Field(..., serialization_alias="expiredMemberships")
