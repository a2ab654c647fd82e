"""
Pydantic schemas for login and session status.
"""
from pydantic import BaseModel, Field
from typing import List, Optional


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class SessionUser(BaseModel):
    id: int
    username: str
    role: str
    permissions: List[str] = Field(default_factory=list)


class LoginResponse(BaseModel):
    message: str
    user: SessionUser


class AuthStatus(BaseModel):
    is_authenticated: bool
    user: Optional[SessionUser] = None


class Message(BaseModel):
    message: str
