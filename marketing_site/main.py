#run it with uvicorn marketing_site.main:app --reload
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
from dotenv import load_dotenv
import logging
import os
import resource
import sys
import time
import traceback

from marketing_site.api.api_router import api_router
from marketing_site.api.deps import client_address
from marketing_site.core.catalog import ServiceCatalog
from marketing_site.core.config import Settings, get_settings
from marketing_site.core.body_limit import BodySizeLimitMiddleware
from marketing_site.core.errors import SiteError
from marketing_site.core.notifier import NullNotifier, SubmissionNotifier, WebhookNotifier
from marketing_site.core.rate_limit import GENERAL_SCOPE, RequestRateLimiter
from marketing_site.core.submissions import ContactService

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stdout,
    )


def build_notifier(settings: Settings) -> SubmissionNotifier:
    if settings.crm_webhook_url:
        logger.info("CRM webhook configured, submissions will be forwarded")
        return WebhookNotifier(settings.crm_webhook_url, timeout=settings.crm_webhook_timeout_seconds)
    return NullNotifier()


def register_exception_handlers(app: FastAPI, settings: Settings):
    @app.exception_handler(SiteError)
    async def site_error_handler(request: Request, exc: SiteError):
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(expose_details=not settings.is_production),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Malformed JSON or a body that is not a JSON object
        logger.info(f"Invalid request body for {request.method} {request.url.path}")
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Invalid request body", "code": "INVALID_REQUEST"},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            content = {
                "success": False,
                "error": "Page not found",
                "message": "The requested resource does not exist",
                "code": "NOT_FOUND",
            }
        else:
            content = {"success": False, "error": str(exc.detail)}
        return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error: {str(exc)}", exc_info=not settings.is_production)
        content = {
            "success": False,
            "error": "Internal server error",
            "message": "Something went wrong on our end" if settings.is_production else str(exc),
            "code": "INTERNAL_ERROR",
        }
        if not settings.is_production:
            content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return JSONResponse(status_code=500, content=content)


def register_middleware(app: FastAPI, settings: Settings):
    @app.middleware("http")
    async def general_rate_limit(request: Request, call_next):
        limiter = request.app.state.rate_limiter
        if limiter is not None:
            result = limiter.hit(GENERAL_SCOPE, client_address(request))
            if not result.allowed:
                return JSONResponse(
                    status_code=429,
                    content={
                        "success": False,
                        "error": "Too many requests from this IP, please try again later.",
                        "code": "RATE_LIMIT_EXCEEDED",
                    },
                    headers={"Retry-After": str(result.retry_after)},
                )
        return await call_next(request)

    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"{request.method} {request.url.path} - {client_address(request)}")
        return await call_next(request)

    # CORS setup; added last so it wraps the handlers above
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def make_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 MNL-AI Website Server Running")
        logger.info(f"🌍 Environment: {settings.environment}")
        logger.info(f"📧 Contact validation: {'strict' if settings.strict_validation else 'simplified'}")
        logger.info(f"⚡ Rate limiting: {'active' if app.state.rate_limiter is not None else 'disabled'}")
        yield
        # Clean up resources on application shutdown
        if app.state.rate_limiter is not None:
            app.state.rate_limiter.reset()
        logger.info("Server shutting down gracefully...")

    return lifespan


def create_app(settings: Optional[Settings] = None,
               notifier: Optional[SubmissionNotifier] = None,
               rate_limiter: Optional[RequestRateLimiter] = None) -> FastAPI:
    """
    Build the application and every process-wide component it uses.

    Args:
        settings: Configuration, defaults to ``get_settings()``
        notifier: Post-submission hook, defaults to the CRM webhook when
            ``crm_webhook_url`` is set and to a no-op otherwise
        rate_limiter: Limiter to use when ``settings.rate_limiting`` is on
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="MNL-AI Website Backend",
        version=settings.app_version,
        lifespan=make_lifespan(settings),
    )

    app.state.settings = settings
    app.state.started_at = time.monotonic()
    app.state.service_catalog = ServiceCatalog()
    app.state.contact_service = ContactService(
        strict_validation=settings.strict_validation,
        processing_delay=settings.processing_delay_seconds,
        max_field_length=settings.max_field_length,
        notifier=notifier or build_notifier(settings),
        notify_timeout=settings.crm_webhook_timeout_seconds,
    )
    if settings.rate_limiting:
        app.state.rate_limiter = rate_limiter or RequestRateLimiter(
            settings.general_rate_limit, settings.contact_rate_limit
        )
    else:
        app.state.rate_limiter = None

    register_middleware(app, settings)
    register_exception_handlers(app, settings)
    app.include_router(api_router)

    @app.get("/health")
    def health_check(request: Request):
        """Health check endpoint."""
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - request.app.state.started_at, 3),
            "environment": settings.environment,
            "version": settings.app_version,
            "pid": os.getpid(),
            "memory": {"maxRss": resource.getrusage(resource.RUSAGE_SELF).ru_maxrss},
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", 3000)))
