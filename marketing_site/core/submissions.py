"""
Contact form processing: validate, sanitize, record and acknowledge.

Nothing is persisted. An accepted submission is written to the log and
handed to the configured notifier; the notifier runs in the background.
"""

import asyncio
import json
import logging
import secrets
import string
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from marketing_site.core.notifier import NullNotifier, SubmissionNotifier, dispatch_notification
from marketing_site.core.validation import sanitize_input, validate_contact_form, DEFAULT_MAX_LENGTH
from marketing_site.models.contact import ContactResponse, ContactSubmission, SubmissionReceipt

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Thank you for your message! We'll get back to you within 24 hours."
ESTIMATED_RESPONSE_TIME = "2-24 hours"

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_submission_id() -> str:
    """Build an id like ``sub_1718000000000_k3j9x0a1q``. Ids are not checked for duplicates."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"sub_{int(time.time() * 1000)}_{suffix}"


def sanitize_submission(data: Dict[str, Any], ip: Optional[str], user_agent: str,
                        max_length: int = DEFAULT_MAX_LENGTH) -> ContactSubmission:
    return ContactSubmission(
        name=sanitize_input(data.get("name"), max_length),
        email=sanitize_input(data.get("email"), max_length).lower(),
        company=sanitize_input(data.get("company"), max_length),
        service=sanitize_input(data.get("service"), max_length),
        message=sanitize_input(data.get("message"), max_length),
        timestamp=datetime.now(timezone.utc).isoformat(),
        ip=ip,
        userAgent=sanitize_input(user_agent, max_length),
    )


def log_contact_submission(submission: ContactSubmission):
    record = submission.model_dump()
    if not record["company"]:
        record["company"] = "Not provided"
    logger.info(f"📨 NEW CONTACT FORM SUBMISSION {json.dumps(record, ensure_ascii=False)}")


class ContactService:
    def __init__(self, strict_validation: bool = True, processing_delay: float = 0.0,
                 max_field_length: int = DEFAULT_MAX_LENGTH, notifier: Optional[SubmissionNotifier] = None,
                 notify_timeout: float = 10.0):
        self.strict_validation = strict_validation
        self.processing_delay = processing_delay
        self.max_field_length = max_field_length
        self.notifier = notifier or NullNotifier()
        self.notify_timeout = notify_timeout

    async def submit(self, data: Dict[str, Any], ip: Optional[str] = None,
                     user_agent: str = "") -> Tuple[ContactResponse, ContactSubmission]:
        """
        Process one contact form payload.

        Raises ContactValidationError when the payload is rejected. Anything
        else that goes wrong propagates to the caller unchanged.

        Returns:
            tuple: the response to send and the sanitized submission, which the
            caller passes on to the notifier once the response is out
        """
        validate_contact_form(data, strict=self.strict_validation)

        submission = sanitize_submission(data, ip, user_agent, self.max_field_length)
        log_contact_submission(submission)

        if self.processing_delay > 0:
            await asyncio.sleep(self.processing_delay)

        receipt = SubmissionReceipt(
            submissionId=generate_submission_id(),
            estimatedResponseTime=ESTIMATED_RESPONSE_TIME,
        )
        logger.info(f"✅ Contact submission {receipt.submissionId} accepted from {submission.email}")
        return ContactResponse(success=True, message=SUCCESS_MESSAGE, data=receipt), submission

    async def notify(self, submission: ContactSubmission) -> bool:
        return await dispatch_notification(self.notifier, submission, self.notify_timeout)
