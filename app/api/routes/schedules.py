"""
API routes for shifts (schedules).
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.dependencies import get_db, require_admin_or_staff, require_permission
from app.core.security import MANAGE_SCHEDULES
from app.schemas.auth import Message
from app.schemas.schedule import (
    Schedule, ScheduleCreate, ScheduleList, ScheduleUpdate, ScheduleWithStudents, ScheduleWithStudentsList
)
from app.services import schedules as service

router = APIRouter()

manage_schedules = require_permission(MANAGE_SCHEDULES)


@router.get("", response_model=ScheduleList, dependencies=[Depends(require_admin_or_staff)])
def list_schedules(db: Session = Depends(get_db)):
    return ScheduleList(schedules=service.list_schedules(db))


@router.get("/with-students", response_model=ScheduleWithStudentsList, dependencies=[Depends(require_admin_or_staff)])
def list_schedules_with_students(db: Session = Depends(get_db)):
    """Schedules with the number of enrolled students."""
    rows = service.list_schedules_with_counts(db)
    return ScheduleWithStudentsList(schedules=[
        ScheduleWithStudents.model_validate(schedule).model_copy(update={"student_count": count})
        for schedule, count in rows
    ])


@router.get("/{schedule_id}", response_model=Schedule, dependencies=[Depends(require_admin_or_staff)])
def get_schedule(schedule_id: int, db: Session = Depends(get_db)):
    return service.get_schedule(db, schedule_id)


@router.post("", response_model=Schedule, status_code=status.HTTP_201_CREATED, dependencies=[Depends(manage_schedules)])
def create_schedule(data: ScheduleCreate, db: Session = Depends(get_db)):
    return service.create_schedule(db, data)


@router.put("/{schedule_id}", response_model=Schedule, dependencies=[Depends(manage_schedules)])
def update_schedule(schedule_id: int, data: ScheduleUpdate, db: Session = Depends(get_db)):
    return service.update_schedule(db, schedule_id, data)


@router.delete("/{schedule_id}", response_model=Message, dependencies=[Depends(manage_schedules)])
def delete_schedule(schedule_id: int, db: Session = Depends(get_db)):
    service.delete_schedule(db, schedule_id)
    return Message(message="Schedule deleted successfully")
