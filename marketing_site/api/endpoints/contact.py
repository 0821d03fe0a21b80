"""
Contact form endpoint.

The handler validates and sanitizes the submission, logs it, answers the
visitor and only then hands the submission to the configured notifier.
"""

from fastapi import APIRouter, BackgroundTasks, Body, Depends, Request
from typing import Any, Dict
import logging

from marketing_site.api.deps import (
    client_address,
    enforce_contact_rate_limit,
    get_contact_service,
    get_settings_dep,
)
from marketing_site.core.config import Settings
from marketing_site.core.errors import ContactValidationError, InternalError
from marketing_site.core.submissions import ContactService
from marketing_site.models.contact import ContactResponse, ErrorResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/contact",
    response_model=ContactResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(enforce_contact_rate_limit)],
    responses={400: {"model": ErrorResponse}, 429: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_contact_form(
    request: Request,
    background_tasks: BackgroundTasks,
    payload: Dict[str, Any] = Body(...),
    service: ContactService = Depends(get_contact_service),
    settings: Settings = Depends(get_settings_dep),
):
    """
    Accept a contact form submission.

    Returns:
        dict: ``{success, message, data: {submissionId, estimatedResponseTime}}``
    """
    try:
        response, submission = await service.submit(
            payload,
            ip=client_address(request),
            user_agent=request.headers.get("user-agent", ""),
        )
    except ContactValidationError as e:
        logger.info(f"Contact submission rejected from {client_address(request)}: {e.error}")
        raise
    except Exception as e:
        logger.error(f"Contact form error: {str(e)}", exc_info=not settings.is_production)
        raise InternalError("An unexpected error occurred. Please try again later.", cause=e)

    background_tasks.add_task(service.notify, submission)
    return response
