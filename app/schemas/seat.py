"""
Pydantic schemas for seat-related API operations.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional


class Seat(BaseModel):
    id: int
    seat_number: str
    is_assigned: bool = Field(..., description="Some student (in the filtered shift) holds this seat")

    model_config = ConfigDict(from_attributes=True)


class SeatList(BaseModel):
    seats: List[Seat]


class SeatCreate(BaseModel):
    seat_numbers: Optional[str] = Field(None, description="Comma-separated seat numbers, e.g. '1,2,3'")
