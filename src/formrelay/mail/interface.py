"""
Mail provider interface definition.

A provider takes one composed message and makes a single delivery attempt.
Failures are reported as ``MailProviderError`` subclasses, one per way the
attempt can go wrong.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel


@dataclass(frozen=True)
class OutboundMessage:
    """Message handed to the mail provider."""

    from_address: str
    to: str
    subject: str
    text: str

    def as_form(self) -> dict[str, str]:
        """Form fields as expected by the messages endpoint."""
        return {
            "from": self.from_address,
            "to": self.to,
            "subject": self.subject,
            "text": self.text,
        }


@dataclass(frozen=True)
class SendResult:
    """Response from a successful send."""

    status_code: int
    message_id: str | None = None
    provider_message: str | None = None
    raw_response: dict[str, Any] = field(default_factory=dict)


class ProviderErrorBody(BaseModel):
    """Error payload returned by the provider on failure."""

    message: str


class MailProviderError(Exception):
    """Base exception for mail provider errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        status_code: int | None = None,
        provider_response: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.provider_response = provider_response or {}


class MailAgentError(MailProviderError):
    """The provider answered and rejected the message."""


class ResponseFormatError(MailProviderError):
    """The provider's error response could not be parsed."""


class MailTransportError(MailProviderError):
    """The request never got a response (DNS, connect, TLS, timeout)."""


class MailProvider(ABC):
    """Abstract interface for mail providers."""

    @abstractmethod
    async def send(self, message: OutboundMessage) -> SendResult:
        """Send one message. Exactly one attempt is made."""
        ...

    async def aclose(self) -> None:
        """Release any held resources."""
        return None
