"""
Pydantic schemas for user accounts.
"""
from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import List, Optional


class User(BaseModel):
    """User schema for responses. Never carries the password hash."""
    id: int
    username: str
    role: str
    permissions: List[str] = Field(default_factory=list)
    full_name: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = Field(None, description="'admin' or 'staff'")
    permissions: Optional[List[str]] = Field(None, description="Staff permissions; defaults apply when omitted")
    full_name: Optional[str] = None
    email: Optional[str] = None


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    email: Optional[str] = None


class PasswordChange(BaseModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class UserList(BaseModel):
    users: List[User]


class ProfileResponse(BaseModel):
    user: User


class UserMessage(BaseModel):
    message: str
    user: Optional[User] = None
