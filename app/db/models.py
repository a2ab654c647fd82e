"""
Model imports for database initialization.
This file imports all models to ensure they are registered with the Base metadata.
"""
from app.db.base import Base

# Import order matters for foreign key constraints
from app.models.user import User
from app.models.schedule import Schedule
from app.models.seat import Seat
from app.models.student import Student, StudentStatus
from app.models.setting import Setting

__all__ = ["Base", "User", "Schedule", "Seat", "Student", "StudentStatus", "Setting"]
