"""
User accounts: authentication, profile management and administration.
"""
from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import NotFound, ValidationFailed
from app.core.security import (
    ADMIN_ROLE, DEFAULT_STAFF_PERMISSIONS, KNOWN_PERMISSIONS, STAFF_ROLE,
    Principal, get_password_hash, parse_role, verify_password,
)
from app.db.integrity import commit_or_raise
from app.models.user import User
from app.schemas.user import PasswordChange, ProfileUpdate, UserCreate

logger = logging.getLogger(__name__)


def principal_for(user: User) -> Principal:
    return Principal(
        id=user.id,
        username=user.username,
        role=parse_role(user.role, user.permissions),
    )


def authenticate(db: Session, username: Optional[str], password: Optional[str]) -> Optional[User]:
    """
    Look up a user by credentials.

    Raises:
        ValidationFailed: username or password missing.

    Returns:
        The user, or None when the credentials do not match.
    """
    if not username or not password:
        raise ValidationFailed("Username and password are required")

    user = db.query(User).filter(User.username == username).first()
    if not user or not verify_password(password, user.password):
        logger.info(f"Failed login for {username}")
        return None
    return user


def _get_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound("User not found")
    return user


def get_profile(db: Session, principal: Principal) -> User:
    return _get_or_404(db, principal.id)


def update_profile(db: Session, principal: Principal, data: ProfileUpdate) -> User:
    user = _get_or_404(db, principal.id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(user, field, value or None)
    db.commit()
    db.refresh(user)

    logger.info(f"Updated profile for {user.username}")
    return user


def change_password(db: Session, principal: Principal, data: PasswordChange) -> None:
    if not data.current_password or not data.new_password:
        raise ValidationFailed("Current and new passwords are required")

    user = _get_or_404(db, principal.id)
    if not verify_password(data.current_password, user.password):
        raise ValidationFailed("Current password is incorrect")

    user.password = get_password_hash(data.new_password)
    db.commit()
    logger.info(f"Password changed for {user.username}")


def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.username).all()


def create_user(db: Session, data: UserCreate) -> User:
    """
    Create an admin or staff account.

    Staff without explicit permissions get the default set; admins carry none.
    """
    if not data.username or not data.password or not data.role:
        raise ValidationFailed("Username, password, and role are required")
    if data.role not in (ADMIN_ROLE, STAFF_ROLE):
        raise ValidationFailed("Role must be 'admin' or 'staff'")

    if data.role == STAFF_ROLE:
        permissions = list(DEFAULT_STAFF_PERMISSIONS) if data.permissions is None else data.permissions
        unknown = sorted(set(permissions) - KNOWN_PERMISSIONS)
        if unknown:
            raise ValidationFailed(f"Unknown permissions: {', '.join(unknown)}")
    else:
        permissions = []

    user = User(
        username=data.username,
        password=get_password_hash(data.password),
        role=data.role,
        permissions=sorted(set(permissions)),
        full_name=data.full_name or None,
        email=data.email or None,
    )
    db.add(user)
    commit_or_raise(db)
    db.refresh(user)

    logger.info(f"Created {user.role} user {user.username}")
    return user


def delete_user(db: Session, principal: Principal, user_id: int) -> None:
    if user_id == principal.id:
        raise ValidationFailed("You cannot delete your own account")
    user = _get_or_404(db, user_id)
    username = user.username
    db.delete(user)
    db.commit()
    logger.info(f"Deleted user {username}")


def ensure_default_admin(db: Session, username: str, password: str) -> bool:
    """Create the bootstrap admin when no users exist. Returns True if one was created."""
    if db.query(User.id).first() is not None:
        logger.info("Admin user already exists, skipping default admin creation")
        return False

    db.add(User(username=username, password=get_password_hash(password), role=ADMIN_ROLE, permissions=[]))
    db.commit()
    logger.info(f"Default admin user created with username: {username}")
    return True
