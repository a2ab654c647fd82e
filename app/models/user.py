"""
User database model for staff and administrator accounts.
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON, UniqueConstraint
from datetime import datetime

from app.db.base import Base


class User(Base):
    """
    Back-office account.

    Attributes:
        username: Unique login name
        password: bcrypt hash of the password
        role: "admin" or "staff"
        permissions: Permission strings granted to staff users
        full_name: Display name
        email: Contact email
    """
    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("username", name="unique_username"),)

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(80), nullable=False)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="staff")
    permissions = Column(JSON, nullable=False, default=list)
    full_name = Column(String(120), nullable=True)
    email = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<User(username={self.username}, role={self.role})>"
