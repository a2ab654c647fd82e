"""
API route for profile image uploads.
"""
from fastapi import APIRouter, Depends, File, UploadFile
import logging

from app.core.dependencies import get_image_host, require_admin_or_staff
from app.core.exceptions import ValidationFailed
from app.services.integrations.cloudinary import CloudinaryImageHost

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/upload-image", dependencies=[Depends(require_admin_or_staff)])
def upload_image(
    image: UploadFile = File(None),
    image_host: CloudinaryImageHost = Depends(get_image_host)
):
    """
    Upload an image to the image host.

    Returns:
        The hosted image URL as `imageUrl`
    """
    if image is None or not image.filename:
        raise ValidationFailed("No file uploaded")

    content = image.file.read()
    if not content:
        raise ValidationFailed("No file uploaded")

    url = image_host.upload(image.filename, content, image.content_type)
    return {"imageUrl": url}
