"""
FastAPI application entry point.
"""

from __future__ import annotations

import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from formrelay.config import Settings, load_settings
from formrelay.mail.config import MailgunConfig, load_mail_config
from formrelay.mail.factory import build_mail_provider
from formrelay.mail.interface import MailProvider
from formrelay.relay.responses import http_status_for
from formrelay.relay.router import router as relay_router
from formrelay.relay.schemas import RelayStatus
from formrelay.relay.service import RelayService
from formrelay.shared.exceptions import ConfigurationError
from formrelay.shared.logging import get_logger, mask_secret, setup_logging
from formrelay.shared.middleware import CorrelationIdMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Application starting", extra={"response_mode": app.state.settings.response_mode})

    yield

    logger.info("Shutting down application")
    await app.state.relay_service.provider.aclose()
    logger.info("Application shutdown complete")


def create_app(
    settings: Settings,
    mail_config: MailgunConfig,
    provider: MailProvider | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings.response_mode == "redirect" and not mail_config.redirect_url:
        raise ConfigurationError(
            'Environment variable "MAILGUN_REDIRECT_URL" must be present',
            variable="MAILGUN_REDIRECT_URL",
        )

    app = FastAPI(
        title="formrelay",
        description="Contact form to Mailgun relay",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.settings = settings
    app.state.mail_config = mail_config
    app.state.relay_service = RelayService(
        provider=provider or build_mail_provider(mail_config),
        to_address=mail_config.to_address,
    )

    # Request validation (FastAPI/Pydantic) -> client error, no outbound call
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = []
        for error in exc.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            errors.append(
                {
                    "field": field,
                    "message": error["msg"],
                    "type": error["type"],
                }
            )
        logger.warning(
            "Rejected invalid form submission",
            extra={"path": request.url.path, "errors": errors},
        )
        return JSONResponse(
            status_code=http_status_for(RelayStatus.INVALID_REQUEST),
            content={
                "status": RelayStatus.INVALID_REQUEST.value,
                "message": "Request validation failed",
                "errors": errors,
            },
        )

    if settings.cors_origins_list:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins_list,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(relay_router)

    return app


def log_startup_summary(settings: Settings, mail_config: MailgunConfig) -> None:
    """Log the configured domain, recipient and API key prefix."""
    logger.info(
        "Will be sending mail via domain %s, to address %s, with API key starting with %s",
        mail_config.domain,
        mail_config.to_address,
        mail_config.api_key[:6],
        extra={
            "domain": mail_config.domain,
            "to_address": mail_config.to_address,
            "api_key": mask_secret(mail_config.api_key),
            "response_mode": settings.response_mode,
            "redirect_url": mail_config.redirect_url,
        },
    )


def run() -> None:
    """Load configuration, then serve until terminated.

    Exits with status 1 before binding when configuration is missing or invalid.
    """
    try:
        settings = load_settings()
        setup_logging(settings.log_level)
        mail_config = load_mail_config(require_redirect=settings.response_mode == "redirect")
    except ConfigurationError as exc:
        setup_logging()
        logger.error("Invalid configuration", extra={"error": str(exc), "variable": exc.variable})
        sys.exit(1)

    log_startup_summary(settings, mail_config)
    app = create_app(settings, mail_config)

    logger.info(
        "Binding to %s:%s",
        settings.bind_address,
        settings.port,
        extra={"bind_address": settings.bind_address, "port": settings.port},
    )
    uvicorn.run(app, host=settings.bind_address, port=settings.port, log_config=None)
