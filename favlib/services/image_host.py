"""
Image Host Service

Uploads book covers to Cloudinary and returns the hosted URL.

The payload is either a data URI ("data:image/png;base64,...") or a
remote URL; the Cloudinary SDK accepts both as the upload source.
Credentials are passed per call, so nothing touches the SDK's global
configuration.

Only `secure_url` is kept from the response; the raw payload is never
stored.
"""

import logging
from typing import Protocol

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from favlib.config import get_settings
from favlib.exceptions import UploadError

logger = logging.getLogger(__name__)
settings = get_settings()


class ImageHost(Protocol):
    """Anything that can turn an image payload into a hosted URL."""

    def upload(self, payload: str) -> str:
        ...


class CloudinaryImageHost:
    """
    Cloudinary upload client.

    Args:
        cloud_name, api_key, api_secret: Account credentials
        folder: Folder every upload lands in
        timeout: Seconds before an unreachable host fails the upload
    """

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str,
        timeout: float = 30.0,
    ) -> None:
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder
        self.timeout = timeout

    def upload(self, payload: str) -> str:
        """
        Upload an image and return its hosted https URL.

        Raises:
            UploadError: If the host is not configured, unreachable,
                rejects the upload, or answers without a URL
        """
        if not (self.cloud_name and self.api_key and self.api_secret):
            logger.error("Image host credentials are not configured")
            raise UploadError("Image hosting is not configured.")

        try:
            result = cloudinary.uploader.upload(
                payload,
                folder=self.folder,
                cloud_name=self.cloud_name,
                api_key=self.api_key,
                api_secret=self.api_secret,
                timeout=self.timeout,
            )
        except CloudinaryError as e:
            logger.warning(f"Image host rejected upload: {e}")
            raise UploadError(f"Image upload failed: {e}") from e
        except OSError as e:
            logger.warning(f"Image upload failed: {e!r}")
            raise UploadError("Image upload failed: image host unreachable.") from e

        if not isinstance(result, dict):
            logger.warning(f"Unexpected image host response: {result!r}")
            raise UploadError("Image upload failed: invalid response from image host.")

        secure_url = result.get("secure_url")
        if not secure_url:
            logger.warning("Image host response carried no secure_url")
            raise UploadError("Image upload failed: no image URL returned.")

        logger.info(f"Uploaded image to {secure_url}")
        return secure_url


def get_image_host() -> ImageHost:
    """FastAPI dependency returning the configured image host."""
    return CloudinaryImageHost(
        cloud_name=settings.cloud_name,
        api_key=settings.cloud_api_key,
        api_secret=settings.cloud_api_secret,
        folder=settings.image_folder,
        timeout=settings.image_upload_timeout,
    )
