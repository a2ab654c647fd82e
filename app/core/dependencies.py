"""
FastAPI dependency injection utilities.
"""
from typing import Callable, Generator
import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import AuthenticationRequired, PermissionDenied
from app.core.security import Principal
from app.db.session import SessionLocal
from app.services.integrations.brevo import BrevoNotifier
from app.services.integrations.cloudinary import CloudinaryImageHost

logger = logging.getLogger(__name__)


def get_db() -> Generator[Session, None, None]:
    """
    Create database session dependency for FastAPI routes.

    Yields:
        Database session that automatically closes after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_principal(request: Request) -> Principal:
    """Build the request principal from the session cookie."""
    data = request.session.get("user")
    if not data:
        raise AuthenticationRequired("Unauthorized")
    try:
        return Principal.from_session(data)
    except (KeyError, TypeError):
        raise AuthenticationRequired("Unauthorized")
    except ValueError:
        logger.warning(f"Session carries an unrecognised role: {data.get('role')!r}")
        raise PermissionDenied("Forbidden: Admin or Staff access required")


def require_admin_or_staff(principal: Principal = Depends(get_principal)) -> Principal:
    """Any authenticated admin or staff user; permissions are not consulted."""
    return principal


def require_admin(principal: Principal = Depends(get_principal)) -> Principal:
    if not principal.is_admin:
        raise PermissionDenied("Forbidden: Admin access required")
    return principal


def require_permission(permission: str) -> Callable[..., Principal]:
    """Dependency factory: admins pass, staff need `permission`."""

    def checker(principal: Principal = Depends(get_principal)) -> Principal:
        if not principal.can(permission):
            logger.info(f"User {principal.username} denied: missing permission {permission}")
            raise PermissionDenied("Forbidden")
        return principal

    return checker


def get_notifier() -> BrevoNotifier:
    return BrevoNotifier.from_settings(settings)


def get_image_host() -> CloudinaryImageHost:
    return CloudinaryImageHost.from_settings(settings)
