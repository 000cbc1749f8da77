"""
Mock mail provider for tests and local dry runs.

Nothing leaves the process; sent messages are recorded in memory.
"""

from formrelay.mail.interface import (
    MailAgentError,
    MailProvider,
    MailProviderError,
    OutboundMessage,
    SendResult,
)
from formrelay.shared.logging import get_logger

logger = get_logger(__name__)


class MockMailProvider(MailProvider):
    """Mock mail provider."""

    def __init__(self) -> None:
        self._messages: list[OutboundMessage] = []
        self._next_message_id: int = 1
        self._failure: MailProviderError | None = None

    def reset(self) -> None:
        self._messages.clear()
        self._next_message_id = 1
        self._failure = None

    def configure_failure(
        self,
        error: MailProviderError | None = None,
        error_message: str = "Mock failure",
    ) -> None:
        """Make every following send raise ``error`` (a MailAgentError by default)."""
        self._failure = error or MailAgentError(message=error_message, error_code="MOCK_ERROR")

    @property
    def messages(self) -> list[OutboundMessage]:
        return self._messages.copy()

    def get_last_message(self) -> OutboundMessage | None:
        return self._messages[-1] if self._messages else None

    async def send(self, message: OutboundMessage) -> SendResult:
        logger.info(
            "Mock: Sending mail",
            extra={"from_address": message.from_address, "to": message.to},
        )

        if self._failure is not None:
            raise self._failure

        self._messages.append(message)

        message_id = f"<MOCK_{self._next_message_id:06d}@formrelay.local>"
        self._next_message_id += 1

        return SendResult(
            status_code=200,
            message_id=message_id,
            provider_message="Queued. Thank you.",
            raw_response={"mock": True, "id": message_id},
        )
