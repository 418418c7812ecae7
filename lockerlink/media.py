"""Image and video uploads to Cloudinary using an unsigned upload preset."""

import logging
import os
from dataclasses import dataclass

import requests

from lockerlink.config import CLOUDINARY_UPLOAD_URL, HTTP_TIMEOUT_SECONDS, CloudinaryConfig

logger = logging.getLogger(__name__)

RESOURCE_TYPES = ("image", "video")


class UploadError(RuntimeError):
    """Cloudinary rejected the upload or could not be reached."""


@dataclass
class UploadResult:
    secure_url: str
    public_id: str
    resource_type: str


def _error_message(response) -> str:
    try:
        body = response.json()
    except ValueError:
        return "Upload failed"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return "Upload failed"


def upload_file(file, config: CloudinaryConfig, resource_type: str = "image", session=None) -> UploadResult:
    """Upload a file path or open binary file.

    Raises UploadError with Cloudinary's message when the upload fails.
    """
    if resource_type not in RESOURCE_TYPES:
        raise ValueError(f"resource_type must be one of: {', '.join(RESOURCE_TYPES)}")

    http = session or requests
    url = CLOUDINARY_UPLOAD_URL.format(cloud_name=config.cloud_name, resource_type=resource_type)
    data = {"upload_preset": config.upload_preset}

    try:
        if isinstance(file, (str, os.PathLike)):
            with open(file, "rb") as fh:
                response = http.post(url, data=data, files={"file": fh}, timeout=HTTP_TIMEOUT_SECONDS)
        else:
            response = http.post(url, data=data, files={"file": file}, timeout=HTTP_TIMEOUT_SECONDS)
    except requests.RequestException as e:
        logger.error("Cloudinary upload error: %s", e)
        raise UploadError(str(e) or "Failed to upload file") from e

    if not response.ok:
        message = _error_message(response)
        logger.error("Cloudinary upload error: %s (status %s)", message, response.status_code)
        raise UploadError(message)

    try:
        body = response.json()
    except ValueError as e:
        logger.error("Cloudinary returned an unreadable response (status %s)", response.status_code)
        raise UploadError("Upload failed: unreadable response from Cloudinary") from e
    if not isinstance(body, dict) or not body.get("secure_url"):
        raise UploadError("Upload failed: Cloudinary did not return a URL")
    logger.info("Uploaded %s %s", resource_type, body.get("public_id"))
    return UploadResult(
        secure_url=body["secure_url"],
        public_id=body.get("public_id", ""),
        resource_type=resource_type,
    )


def upload_to_cloudinary(file, config: CloudinaryConfig, session=None) -> str:
    """Upload an image and return only its URL."""
    return upload_file(file, config, "image", session).secure_url


def upload_image(file, config: CloudinaryConfig, session=None) -> UploadResult:
    return upload_file(file, config, "image", session)


def upload_video(file, config: CloudinaryConfig, session=None) -> UploadResult:
    return upload_file(file, config, "video", session)
