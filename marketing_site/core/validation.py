"""
Contact form validation and input sanitization.

Two validation modes are supported:

- strict: every rule is checked and all violations are reported together
  as ``[{"field": ..., "message": ...}]``.
- simplified: only checks that name, email and message are present and that
  the email looks like an address, stopping at the first problem.
"""

import re
from typing import Any, Dict, List

from marketing_site.core.errors import ContactValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

SCRIPT_TAG_PATTERN = re.compile(
    r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>",
    re.IGNORECASE,
)
ANGLE_BRACKETS_PATTERN = re.compile(r"[<>]")

VALID_SERVICES = ("website", "chatbot", "marketing", "automation", "consultation")

REQUIRED_FIELDS = ("name", "email", "message")

MIN_NAME_LENGTH = 2
MIN_MESSAGE_LENGTH = 10
DEFAULT_MAX_LENGTH = 1000


def sanitize_input(value: Any, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """
    Make a user supplied value safe to log and forward.

    Script blocks are removed first, then any stray angle brackets, then the
    result is trimmed and cut to ``max_length``. Whitespace exposed by the cut
    is trimmed as well so that sanitizing twice never changes the result.
    Non-string values become an empty string.
    """
    if not isinstance(value, str):
        return ""

    cleaned = SCRIPT_TAG_PATTERN.sub("", value)
    cleaned = ANGLE_BRACKETS_PATTERN.sub("", cleaned)
    return cleaned.strip()[:max_length].rstrip()


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and bool(EMAIL_PATTERN.match(value))


def _trimmed_length(value: Any) -> int:
    return len(value.strip()) if isinstance(value, str) else 0


def collect_validation_errors(data: Dict[str, Any]) -> List[Dict[str, str]]:
    """Check every strict rule and return the list of violations."""
    errors = []

    if _trimmed_length(data.get("name")) < MIN_NAME_LENGTH:
        errors.append({"field": "name", "message": "Name must be at least 2 characters long"})

    if not is_valid_email(data.get("email")):
        errors.append({"field": "email", "message": "Please provide a valid email address"})

    if data.get("service") not in VALID_SERVICES:
        errors.append({"field": "service", "message": "Please select a valid service"})

    if _trimmed_length(data.get("message")) < MIN_MESSAGE_LENGTH:
        errors.append({"field": "message", "message": "Message must be at least 10 characters long"})

    return errors


def validate_contact_form(data: Dict[str, Any], strict: bool = True) -> None:
    """
    Raise ContactValidationError if the submission is not acceptable.

    Args:
        data: Raw JSON object received from the client
        strict: Report every violated rule instead of the first missing field
    """
    if strict:
        errors = collect_validation_errors(data)
        if errors:
            raise ContactValidationError("Validation failed", details=errors, code="VALIDATION_ERROR")
        return

    for field in REQUIRED_FIELDS:
        value = data.get(field)
        if not isinstance(value, str) or not value.strip():
            raise ContactValidationError("Please fill in all required fields: name, email and message.")

    if not is_valid_email(data["email"]):
        raise ContactValidationError("Please provide a valid email address.")
