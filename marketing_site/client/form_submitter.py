"""
Contact form submission as the landing page performs it.

The submitter mirrors the browser flow: lock the submit control, check that
the required fields are filled in, POST the form as JSON, then show a
transient notification. The control is always released afterwards, whatever
happened in between.

Only one notification is displayed at a time; showing a new one replaces
the previous one.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

SENDING_LABEL = "Sending..."
REQUIRED_FIELDS = ("name", "email", "message")
REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields."
SUCCESS_MESSAGE = "Thank you! We'll get back to you within 24 hours."
GENERIC_ERROR_MESSAGE = "Sorry, there was an error. Please try again."
NOTIFICATION_LIFETIME = 5.0


class ClientValidationError(Exception):
    """A required field is empty; nothing was sent."""


class TransportError(Exception):
    """The request never produced a usable response."""


class ServerRejectedError(Exception):
    """The server answered with an error status or ``success: false``."""

    def __init__(self, error: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(error or "Submission rejected")
        self.error = error
        self.status_code = status_code


@dataclass
class SubmitControl:
    label: str = "Send Message"
    disabled: bool = False


@dataclass
class Notification:
    message: str
    kind: str  # success | error | info
    shown_at: float
    lifetime: float = NOTIFICATION_LIFETIME
    dismissed: bool = False

    def is_visible(self, now: float) -> bool:
        return not self.dismissed and now - self.shown_at < self.lifetime


class NotificationCenter:
    def __init__(self, lifetime: float = NOTIFICATION_LIFETIME, clock: Callable[[], float] = time.monotonic):
        self.lifetime = lifetime
        self._clock = clock
        self._current: Optional[Notification] = None

    def show(self, message: str, kind: str = "info") -> Notification:
        notification = Notification(message=message, kind=kind, shown_at=self._clock(), lifetime=self.lifetime)
        self._current = notification
        return notification

    def dismiss(self):
        if self._current is not None:
            self._current.dismissed = True
            self._current = None

    @property
    def current(self) -> Optional[Notification]:
        """The visible notification, or None once it was dismissed or expired."""
        if self._current is not None and not self._current.is_visible(self._clock()):
            self._current = None
        return self._current


@dataclass
class ContactForm:
    fields: Dict[str, str] = field(default_factory=lambda: {
        "name": "", "email": "", "company": "", "service": "", "message": "",
    })

    def data(self) -> Dict[str, str]:
        return dict(self.fields)

    def reset(self):
        for name in self.fields:
            self.fields[name] = ""


def check_required_fields(data: Dict[str, Any]):
    if any(not data.get(name) for name in REQUIRED_FIELDS):
        raise ClientValidationError(REQUIRED_FIELDS_MESSAGE)


class ContactFormSubmitter:
    def __init__(self, client: httpx.AsyncClient, form: ContactForm,
                 control: Optional[SubmitControl] = None,
                 notifications: Optional[NotificationCenter] = None,
                 endpoint: str = "/contact"):
        self.client = client
        self.form = form
        self.control = control or SubmitControl()
        self.notifications = notifications or NotificationCenter()
        self.endpoint = endpoint

    async def _post(self, data: Dict[str, str]) -> Dict[str, Any]:
        try:
            response = await self.client.post(self.endpoint, json=data)
        except httpx.HTTPError as e:
            raise TransportError(str(e)) from e

        try:
            result = response.json()
        except ValueError:
            if response.is_success:
                raise TransportError(f"Unreadable response ({response.status_code})")
            raise ServerRejectedError(status_code=response.status_code)

        if not isinstance(result, dict):
            raise TransportError("Unexpected response body")
        if not response.is_success or not result.get("success"):
            raise ServerRejectedError(result.get("error"), status_code=response.status_code)
        return result

    async def submit(self) -> bool:
        """
        Submit the form once.

        Returns:
            bool: True when the server accepted the submission
        """
        original_label = self.control.label
        self.control.label = SENDING_LABEL
        self.control.disabled = True

        try:
            data = self.form.data()
            check_required_fields(data)
            await self._post(data)

            self.notifications.show(SUCCESS_MESSAGE, "success")
            self.form.reset()
            return True
        except ClientValidationError as e:
            self.notifications.show(str(e), "error")
        except ServerRejectedError as e:
            logger.error(f"Form submission rejected ({e.status_code}): {e.error}")
            self.notifications.show(e.error or GENERIC_ERROR_MESSAGE, "error")
        except TransportError as e:
            logger.error(f"Form submission error: {str(e)}")
            self.notifications.show(GENERIC_ERROR_MESSAGE, "error")
        except Exception as e:
            logger.error(f"Unexpected form submission error: {str(e)}", exc_info=True)
            self.notifications.show(GENERIC_ERROR_MESSAGE, "error")
        finally:
            self.control.label = original_label
            self.control.disabled = False

        return False
