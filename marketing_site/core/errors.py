"""
Error types raised by the site's request handlers.

Every error renders itself into the JSON envelope the frontend expects:
``{"success": false, "error": ..., "code": ...}``. The exception handlers
registered in ``main.py`` turn them into responses.
"""

from typing import Any, Dict, List, Optional


class SiteError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    code: Optional[str] = None

    def __init__(self, error: str, code: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        super().__init__(error)
        self.error = error
        if code is not None:
            self.code = code
        self.headers = headers

    def to_dict(self, expose_details: bool = False) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, "error": self.error}
        if self.code:
            body["code"] = self.code
        return body


class ContactValidationError(SiteError):
    """Submission rejected because one or more fields are invalid."""

    status_code = 400

    def __init__(self, error: str, details: Optional[List[Dict[str, str]]] = None, code: Optional[str] = None):
        super().__init__(error, code=code)
        self.details = details

    def to_dict(self, expose_details: bool = False) -> Dict[str, Any]:
        body = super().to_dict(expose_details)
        if self.details:
            body["details"] = self.details
        return body


class RateLimitExceeded(SiteError):
    status_code = 429


class PayloadTooLarge(SiteError):
    status_code = 413
    code = "PAYLOAD_TOO_LARGE"


class InternalError(SiteError):
    """
    Unexpected failure while handling a request.

    The client only ever sees the generic ``error`` text; the underlying
    cause is attached as ``detail`` when the app is not running in production.
    """

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, error: str, cause: Optional[BaseException] = None):
        super().__init__(error)
        self.cause = cause

    def to_dict(self, expose_details: bool = False) -> Dict[str, Any]:
        body = super().to_dict(expose_details)
        if expose_details and self.cause is not None:
            body["detail"] = str(self.cause)
        return body
