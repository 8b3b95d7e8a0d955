"""
Image Upload - proxy to Cloudinary.

The browser sends the image as a data URI (or bare base64); we forward it
to Cloudinary and hand back the secure URL.
"""

import cloudinary
import cloudinary.api
import cloudinary.uploader

from udyog_saathi.core.config import get_settings
from udyog_saathi.core.exceptions import PayloadTooLarge, UpstreamServiceError
from udyog_saathi.core.logging import get_logger

logger = get_logger(__name__)

MAX_UPLOAD_SIZE_MB = 35
MAX_UPLOAD_SIZE_CHARS = MAX_UPLOAD_SIZE_MB * 1024 * 1024


def configure_cloudinary() -> None:
    settings = get_settings()
    cloudinary.config(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        secure=True
    )


def normalize_payload(data: str) -> str:
    """Cloudinary accepts data URIs; bare base64 gets a generic image prefix."""
    data = data.strip()
    if data.startswith("data:") or data.startswith("http://") or data.startswith("https://"):
        return data
    return f"data:image/png;base64,{data}"


def upload_image(data: str) -> str:
    """
    Upload an image and return its secure URL.

    Raises:
        PayloadTooLarge: payload over MAX_UPLOAD_SIZE_MB
        UpstreamServiceError: Cloudinary failed
    """
    if len(data) > MAX_UPLOAD_SIZE_CHARS:
        raise PayloadTooLarge(f"Image too large. Maximum size: {MAX_UPLOAD_SIZE_MB}MB")

    configure_cloudinary()
    try:
        response = cloudinary.uploader.upload(
            normalize_payload(data),
            folder=get_settings().cloudinary_folder
        )
    except Exception as e:
        logger.exception("Cloudinary upload failed")
        raise UpstreamServiceError("Cloudinary Upload Failed") from e

    url = response.get("secure_url")
    if not url:
        raise UpstreamServiceError("Cloudinary Upload Failed")
    logger.info("Uploaded image to %s", url)
    return url


def test_cloudinary_connection() -> bool:
    configure_cloudinary()
    try:
        cloudinary.api.ping()
        return True
    except Exception as e:
        logger.error("Cloudinary connection failed: %s", e)
        return False
