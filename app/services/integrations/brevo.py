"""
Brevo transactional email client used for membership expiration reminders.
"""
from typing import Any, Dict, Optional
import logging

import requests

from app.core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class BrevoNotifier:
    """Sends templated emails through the Brevo HTTP API."""

    def __init__(
        self,
        api_key: Optional[str],
        api_url: str,
        sender_email: str,
        sender_name: str,
        timeout: int = 10,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.sender = {"email": sender_email, "name": sender_name}
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings) -> "BrevoNotifier":
        return cls(
            api_key=settings.brevo_api_key,
            api_url=settings.brevo_api_url,
            sender_email=settings.brevo_sender_email,
            sender_name=settings.brevo_sender_name,
            timeout=settings.http_timeout_seconds,
        )

    def build_payload(self, student: Any, template_id: int) -> Dict[str, Any]:
        return {
            "sender": self.sender,
            "to": [{"email": student.email, "name": student.name}],
            "templateId": int(template_id),
            "params": {
                "name": student.name,
                "membership_end": str(student.membership_end),
            },
        }

    def send_expiration_reminder(self, student: Any, template_id: Any) -> None:
        """
        Send one reminder email.

        Raises:
            ExternalServiceError: if the API key is missing, the template id is
                not a number, or the request fails.
        """
        if not self.api_key:
            raise ExternalServiceError("Brevo API key is not configured")

        try:
            payload = self.build_payload(student, template_id)
        except (TypeError, ValueError) as e:
            raise ExternalServiceError(f"Invalid Brevo template ID: {template_id!r}") from e
        try:
            response = self.session.post(
                self.api_url,
                json=payload,
                headers={"api-key": self.api_key, "accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"Brevo request failed for {student.email}: {e}")
            raise ExternalServiceError("Failed to send email") from e

        logger.info(f"Expiration reminder sent to {student.email}")
