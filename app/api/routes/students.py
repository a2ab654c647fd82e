"""
API routes for student memberships.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date
import logging

from app.core.config import settings
from app.core.dependencies import get_db, require_admin, require_permission
from app.core.security import MANAGE_STUDENTS, VIEW_DASHBOARD
from app.models.student import StudentStatus
from app.schemas.student import (
    DashboardStats, RenewRequest, Student, StudentCreate, StudentList, StudentMessage, StudentUpdate
)
from app.services.membership import students as service

router = APIRouter()
logger = logging.getLogger(__name__)

manage_students = require_permission(MANAGE_STUDENTS)


@router.get("", response_model=StudentList, dependencies=[Depends(manage_students)])
def list_students(
    from_date: Optional[date] = Query(None, description="Created on or after (YYYY-MM-DD)"),
    to_date: Optional[date] = Query(None, description="Created on or before (YYYY-MM-DD)"),
    db: Session = Depends(get_db)
):
    """List all students ordered by name."""
    return StudentList(students=service.list_students(db, from_date, to_date))


@router.get("/active", response_model=StudentList, dependencies=[Depends(manage_students)])
def list_active_students(db: Session = Depends(get_db)):
    return StudentList(students=service.list_by_status(db, StudentStatus.ACTIVE))


@router.get("/expired", response_model=StudentList, dependencies=[Depends(manage_students)])
def list_expired_students(db: Session = Depends(get_db)):
    return StudentList(students=service.list_by_status(db, StudentStatus.EXPIRED))


@router.get("/expiring-soon", response_model=StudentList, dependencies=[Depends(manage_students)])
def list_expiring_soon(db: Session = Depends(get_db)):
    """Active memberships ending within the configured window."""
    return StudentList(students=service.list_expiring_soon(db, settings.expiring_soon_days))


@router.get("/stats/dashboard", response_model=DashboardStats, dependencies=[Depends(require_permission(VIEW_DASHBOARD))])
def dashboard_stats(db: Session = Depends(get_db)):
    """Student counts by stored status."""
    return service.dashboard_stats(db)


@router.get("/shift/{shift_id}", response_model=StudentList, dependencies=[Depends(manage_students)])
def list_students_by_shift(
    shift_id: int,
    search: Optional[str] = Query(None, description="Substring of name or phone"),
    status: Optional[str] = Query(None, description="'active', 'expired' or 'all'"),
    db: Session = Depends(get_db)
):
    return StudentList(students=service.list_by_shift(db, shift_id, search, status))


@router.get("/{student_id}", response_model=Student, dependencies=[Depends(manage_students)])
def get_student(student_id: int, db: Session = Depends(get_db)):
    return service.get_student(db, student_id)


@router.post("", response_model=Student, status_code=status.HTTP_201_CREATED, dependencies=[Depends(manage_students)])
def create_student(data: StudentCreate, db: Session = Depends(get_db)):
    """
    Create a student membership.

    Args:
        data: Student fields; name and membership dates are required
        db: Database session

    Returns:
        The created student
    """
    return service.create_student(db, data)


@router.put("/{student_id}", response_model=Student, dependencies=[Depends(manage_students)])
def update_student(student_id: int, data: StudentUpdate, db: Session = Depends(get_db)):
    return service.update_student(db, student_id, data)


@router.delete("/{student_id}", response_model=StudentMessage, dependencies=[Depends(manage_students)])
def delete_student(student_id: int, db: Session = Depends(get_db)):
    student = service.delete_student(db, student_id)
    return StudentMessage(message="Student deleted successfully", student=student)


@router.post("/{student_id}/renew", response_model=StudentMessage, dependencies=[Depends(require_admin)])
def renew_membership(student_id: int, data: RenewRequest, db: Session = Depends(get_db)):
    """Renew a membership; the student becomes active regardless of the dates."""
    student = service.renew_membership(db, student_id, data)
    return StudentMessage(message="Membership renewed successfully", student=student)
