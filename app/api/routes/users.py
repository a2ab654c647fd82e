"""
API routes for user profiles and account administration.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.dependencies import get_db, require_admin, require_admin_or_staff
from app.core.security import Principal
from app.schemas.auth import Message
from app.schemas.user import (
    PasswordChange, ProfileResponse, ProfileUpdate, UserCreate, UserList, UserMessage
)
from app.services import accounts

router = APIRouter()


@router.get("/profile", response_model=ProfileResponse)
def get_profile(principal: Principal = Depends(require_admin_or_staff), db: Session = Depends(get_db)):
    return ProfileResponse(user=accounts.get_profile(db, principal))


@router.put("/profile", response_model=UserMessage)
def update_profile(
    data: ProfileUpdate,
    principal: Principal = Depends(require_admin_or_staff),
    db: Session = Depends(get_db)
):
    user = accounts.update_profile(db, principal, data)
    return UserMessage(message="Profile updated successfully", user=user)


@router.put("/change-password", response_model=Message)
def change_password(
    data: PasswordChange,
    principal: Principal = Depends(require_admin_or_staff),
    db: Session = Depends(get_db)
):
    accounts.change_password(db, principal, data)
    return Message(message="Password changed successfully")


@router.get("", response_model=UserList, dependencies=[Depends(require_admin)])
def list_users(db: Session = Depends(get_db)):
    return UserList(users=accounts.list_users(db))


@router.post("", response_model=UserMessage, status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_user(data: UserCreate, db: Session = Depends(get_db)):
    """Create an admin or staff account."""
    user = accounts.create_user(db, data)
    return UserMessage(message="User created successfully", user=user)


@router.delete("/{user_id}", response_model=Message)
def delete_user(user_id: int, principal: Principal = Depends(require_admin), db: Session = Depends(get_db)):
    accounts.delete_user(db, principal, user_id)
    return Message(message="User deleted successfully")
