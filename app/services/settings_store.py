"""
Key/value application settings stored in the `settings` table.
"""
from typing import Dict, Optional
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import ValidationFailed
from app.models.setting import Setting
from app.schemas.setting import SettingsPayload

logger = logging.getLogger(__name__)

BREVO_TEMPLATE_ID = "brevo_template_id"
DAYS_BEFORE_EXPIRATION = "days_before_expiration"


def get_settings(db: Session) -> Dict[str, Optional[str]]:
    return {row.key: row.value for row in db.query(Setting).all()}


def parse_positive_int(value: Optional[str]) -> Optional[int]:
    """Return the value as a positive int, or None when missing or invalid."""
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def update_settings(db: Session, values: SettingsPayload) -> Dict[str, Optional[str]]:
    """Upsert the supplied keys. Keys not supplied keep their value."""
    if DAYS_BEFORE_EXPIRATION in values and values[DAYS_BEFORE_EXPIRATION] is not None:
        if parse_positive_int(values[DAYS_BEFORE_EXPIRATION]) is None:
            raise ValidationFailed("days_before_expiration must be a positive integer")
    if BREVO_TEMPLATE_ID in values and values[BREVO_TEMPLATE_ID] is not None:
        if parse_positive_int(values[BREVO_TEMPLATE_ID]) is None:
            raise ValidationFailed("brevo_template_id must be a positive integer")

    for key, value in values.items():
        stored = None if value is None else str(value).strip()
        setting = db.query(Setting).filter(Setting.key == key).first()
        if setting:
            setting.value = stored
        else:
            db.add(Setting(key=key, value=stored))
    db.commit()

    logger.info(f"Updated settings: {', '.join(sorted(values))}")
    return get_settings(db)
