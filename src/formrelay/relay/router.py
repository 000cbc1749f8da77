"""
FastAPI router for the contact form endpoint.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from formrelay.config import Settings
from formrelay.mail.config import MailgunConfig
from formrelay.relay.responses import render_outcome
from formrelay.relay.schemas import FormSubmission
from formrelay.relay.service import RelayService
from formrelay.shared.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["relay"])


def get_relay_service(request: Request) -> RelayService:
    return request.app.state.relay_service


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_mail_config(request: Request) -> MailgunConfig:
    return request.app.state.mail_config


async def get_form_submission(request: Request) -> FormSubmission:
    """Read the form body verbatim.

    Only presence is checked; a field sent with an empty value is accepted.
    """
    form = await request.form()
    try:
        return FormSubmission.model_validate(dict(form))
    except ValidationError as exc:
        errors = [
            {**error, "loc": ("body", *error["loc"])}
            for error in exc.errors(include_url=False)
        ]
        raise RequestValidationError(errors) from exc


@router.post("/")
async def send_form(
    submission: Annotated[FormSubmission, Depends(get_form_submission)],
    service: Annotated[RelayService, Depends(get_relay_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    mail_config: Annotated[MailgunConfig, Depends(get_mail_config)],
) -> Response:
    """Relay a contact form submission to the configured recipient."""
    logger.info(
        "Form submission received",
        extra={"from_name": submission.from_name, "from_email": submission.from_email},
    )

    outcome = await service.relay(submission)

    return render_outcome(
        outcome,
        mode=settings.response_mode,
        redirect_url=mail_config.redirect_url,
    )
