"""
API routes for application settings (reminder configuration).
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Dict, Optional
from dataclasses import dataclass
from datetime import date
import logging

from app.core.dependencies import get_db, get_notifier, require_admin
from app.core.exceptions import ValidationFailed
from app.schemas.auth import Message
from app.schemas.setting import EmailTestRequest, SettingsPayload
from app.services import settings_store
from app.services.integrations.brevo import BrevoNotifier

router = APIRouter(dependencies=[Depends(require_admin)])
logger = logging.getLogger(__name__)


@dataclass
class SampleRecipient:
    email: str
    name: str
    membership_end: date


@router.get("", response_model=Dict[str, Optional[str]])
def get_settings(db: Session = Depends(get_db)):
    """All settings as a key/value object."""
    return settings_store.get_settings(db)


@router.put("", response_model=Dict[str, Optional[str]])
def update_settings(values: SettingsPayload, db: Session = Depends(get_db)):
    """Upsert the supplied settings and return the full set."""
    return settings_store.update_settings(db, values)


@router.post("/test-email", response_model=Message)
def send_test_email(
    data: EmailTestRequest,
    db: Session = Depends(get_db),
    notifier: BrevoNotifier = Depends(get_notifier)
):
    """Send one expiration reminder with the configured template."""
    template_id = settings_store.parse_positive_int(
        settings_store.get_settings(db).get(settings_store.BREVO_TEMPLATE_ID)
    )
    if template_id is None:
        raise ValidationFailed("Brevo template ID not set")

    sample = SampleRecipient(email=data.email, name=data.name or "Test Student", membership_end=date.today())
    notifier.send_expiration_reminder(sample, template_id)
    logger.info(f"Test email sent to {data.email}")
    return Message(message="Test email sent successfully")
