"""
Pydantic schemas and outcome types for the form relay.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field


class RelayStatus(str, Enum):
    """Outcome of one relay attempt."""

    SUCCESS = "success"
    MAIL_AGENT_ERROR = "mail_agent_error"
    DATA_FORMAT_ERROR = "data_format_error"
    INTERNAL_ERROR = "internal_error"
    INVALID_REQUEST = "invalid_request"


class FormSubmission(BaseModel):
    """Contact form fields, taken verbatim from the POST body."""

    from_name: str = Field(..., description="Sender display name")
    from_email: str = Field(..., description="Sender email address (not validated)")
    title: str = Field(..., description="Subject line")
    body: str = Field(..., description="Message text")


class RelayResponse(BaseModel):
    """JSON response body."""

    status: RelayStatus
    message: str | None = None


@dataclass(frozen=True)
class RelayOutcome:
    """Result of one relay attempt; ``message`` is set on failure."""

    status: RelayStatus
    message: str | None = None

    @property
    def is_success(self) -> bool:
        return self.status == RelayStatus.SUCCESS
