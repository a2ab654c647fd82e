"""
Cloudinary upload client for student profile images.
"""
from typing import Optional
import hashlib
import logging
import time

import requests

from app.core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"


class CloudinaryImageHost:
    """Uploads images with Cloudinary's signed upload API."""

    def __init__(
        self,
        cloud_name: Optional[str],
        api_key: Optional[str],
        api_secret: Optional[str],
        timeout: int = 10,
        session: Optional[requests.Session] = None,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings) -> "CloudinaryImageHost":
        return cls(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            timeout=settings.http_timeout_seconds,
        )

    def sign(self, timestamp: int) -> str:
        # Cloudinary signs the sorted parameters followed by the API secret
        to_sign = f"timestamp={timestamp}{self.api_secret}"
        return hashlib.sha1(to_sign.encode("utf-8")).hexdigest()

    def upload(self, filename: str, content: bytes, content_type: Optional[str] = None) -> str:
        """
        Upload an image and return its HTTPS URL.

        Raises:
            ExternalServiceError: if credentials are missing or the upload fails.
        """
        if not (self.cloud_name and self.api_key and self.api_secret):
            raise ExternalServiceError("Image hosting is not configured")

        timestamp = int(time.time())
        try:
            response = self.session.post(
                UPLOAD_URL.format(cloud_name=self.cloud_name),
                data={
                    "api_key": self.api_key,
                    "timestamp": timestamp,
                    "signature": self.sign(timestamp),
                },
                files={"file": (filename, content, content_type or "application/octet-stream")},
                timeout=self.timeout,
            )
            response.raise_for_status()
            url = response.json()["secure_url"]
        except (requests.exceptions.RequestException, KeyError, ValueError) as e:
            logger.error(f"Image upload failed: {e}")
            raise ExternalServiceError("Image upload failed") from e

        logger.info(f"Uploaded image {filename}")
        return url
