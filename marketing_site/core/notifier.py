"""
Delivery of accepted contact submissions to external systems (CRM webhooks).

Notifiers run after the HTTP response has been sent. A slow or failing
notifier is logged and otherwise ignored: it never changes what the visitor
sees.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from marketing_site.models.contact import ContactSubmission

logger = logging.getLogger(__name__)


class SubmissionNotifier(ABC):
    """Base class for post-submission hooks."""

    @abstractmethod
    async def notify(self, submission: ContactSubmission) -> None:
        ...


class NullNotifier(SubmissionNotifier):
    """Default notifier: submissions are only logged."""

    async def notify(self, submission: ContactSubmission) -> None:
        return None


def build_crm_payload(submission: ContactSubmission) -> Dict[str, Any]:
    """Shape a submission the way GoHighLevel style inbound webhooks expect it"""
    return {
        "name": submission.name,
        "email": submission.email,
        "source": "MNL-AI Website",
        "tags": [tag for tag in (submission.service, "website-lead") if tag],
        "customFields": {
            "company": submission.company,
            "message": submission.message,
            "serviceInterest": submission.service,
        },
        "submittedAt": submission.timestamp,
    }


class WebhookNotifier(SubmissionNotifier):
    def __init__(self, url: str, timeout: float = 10.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def notify(self, submission: ContactSubmission) -> None:
        payload = build_crm_payload(submission)
        logger.info(f"CRM webhook sending for {submission.email}")

        async with httpx.AsyncClient(transport=self._transport, follow_redirects=True) as client:
            response = await client.post(self.url, json=payload, timeout=self.timeout)

        if response.is_success:
            logger.info(f"✅ CRM webhook success for {submission.email}")
        else:
            logger.error(f"❌ CRM webhook failed ({response.status_code}) for {submission.email}")


async def dispatch_notification(notifier: SubmissionNotifier, submission: ContactSubmission, timeout: float) -> bool:
    """
    Run ``notifier`` for one submission, bounded by ``timeout`` seconds.

    Returns:
        bool: True if the notifier finished without error, False otherwise
    """
    try:
        await asyncio.wait_for(notifier.notify(submission), timeout=timeout)
        return True
    except asyncio.TimeoutError:
        logger.warning(f"⚠️ Notifier {type(notifier).__name__} timed out after {timeout}s for {submission.email}")
    except Exception as e:
        logger.error(f"❌ Notifier {type(notifier).__name__} failed for {submission.email}: {str(e)}")
    return False
