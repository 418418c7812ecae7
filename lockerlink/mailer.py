"""Transactional email through the EmailJS REST API."""

import logging
from dataclasses import dataclass

import requests

from lockerlink.config import EMAILJS_SEND_URL, HTTP_TIMEOUT_SECONDS, EmailJSConfig

logger = logging.getLogger(__name__)


@dataclass
class EmailResult:
    success: bool
    status: str = ""
    message: str = ""


def send_welcome_email(email: str, config: EmailJSConfig, session=None) -> EmailResult:
    """Send the LockerLink welcome email.

    Delivery problems are logged and reported in the result rather than
    raised, so sign-up never fails because of email.
    """
    http = session or requests
    payload = {
        "service_id": config.service_id,
        "template_id": config.template_id,
        "user_id": config.public_key,
        "template_params": {"email": email},
    }

    logger.info("Sending welcome email to %s with template %s", email, config.template_id)
    try:
        response = http.post(EMAILJS_SEND_URL, json=payload, timeout=HTTP_TIMEOUT_SECONDS)
    except requests.RequestException as e:
        logger.error("Failed to send welcome email to %s: %s", email, e)
        return EmailResult(success=False, status="N/A", message=str(e) or "Unknown error")

    if not response.ok:
        message = response.text or response.reason or "Unknown error"
        logger.error(
            "Failed to send welcome email to %s: status %s, %s",
            email, response.status_code, message,
        )
        return EmailResult(success=False, status=str(response.status_code), message=message)

    logger.info("Welcome email sent to %s", email)
    return EmailResult(success=True, status=str(response.status_code), message=response.text)
