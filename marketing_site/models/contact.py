from pydantic import BaseModel
from typing import Optional, List


class ContactSubmission(BaseModel):
    """A sanitized contact form submission, as logged and forwarded."""
    name: str
    email: str
    company: str = ""
    service: str = ""
    message: str
    timestamp: str
    ip: Optional[str] = None
    userAgent: str = ""


class FieldError(BaseModel):
    field: str
    message: str


class SubmissionReceipt(BaseModel):
    submissionId: str
    estimatedResponseTime: str


class ContactResponse(BaseModel):
    success: bool = True
    message: str
    data: Optional[SubmissionReceipt] = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    code: Optional[str] = None
    details: Optional[List[FieldError]] = None
