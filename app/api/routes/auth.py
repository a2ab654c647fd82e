"""
API routes for login, logout and session status.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
import logging

from app.core.dependencies import get_db
from app.core.exceptions import AuthenticationRequired, PermissionDenied
from app.core.security import Principal
from app.schemas.auth import AuthStatus, LoginRequest, LoginResponse, Message, SessionUser
from app.services import accounts

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, request: Request, db: Session = Depends(get_db)):
    """
    Authenticate and store the principal in the session cookie.

    Returns:
        Confirmation message and the session user
    """
    user = accounts.authenticate(db, credentials.username, credentials.password)
    if user is None:
        raise AuthenticationRequired("Invalid credentials")

    try:
        principal = accounts.principal_for(user)
    except ValueError:
        logger.warning(f"User {user.username} has unrecognised role {user.role!r}")
        raise PermissionDenied("Forbidden: Admin or Staff access required")
    request.session["user"] = principal.to_session()
    logger.info(f"User {user.username} logged in")
    return LoginResponse(message="Login successful", user=SessionUser(**principal.to_session()))


@router.get("/logout", response_model=Message)
def logout(request: Request):
    """Clear the session."""
    user = request.session.get("user") or {}
    request.session.clear()
    if user:
        logger.info(f"User {user.get('username')} logged out")
    return Message(message="Logout successful")


@router.get("/status", response_model=AuthStatus)
def auth_status(request: Request):
    """Report whether the session carries a valid user."""
    data = request.session.get("user")
    if not data:
        return AuthStatus(is_authenticated=False)
    try:
        principal = Principal.from_session(data)
    except (KeyError, TypeError, ValueError):
        return AuthStatus(is_authenticated=False)
    return AuthStatus(is_authenticated=True, user=SessionUser(**principal.to_session()))
