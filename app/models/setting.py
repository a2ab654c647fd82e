"""
Key/value application settings, used for the reminder configuration.
"""
from sqlalchemy import Column, String, Text
from app.db.base import Base


class Setting(Base):
    """
    One configuration entry.

    Known keys are `days_before_expiration` and `brevo_template_id`, both
    positive integers stored as text.
    """
    __tablename__ = "settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Setting(key={self.key}, value={self.value})>"
