"""
Form relay service.

Receive a submission, compose the outbound message, make one send attempt
and classify the result. Every failure is logged and turned into a
``RelayOutcome``; nothing propagates to the caller.
"""

from formrelay.mail.interface import (
    MailAgentError,
    MailProvider,
    MailProviderError,
    MailTransportError,
    OutboundMessage,
    ResponseFormatError,
)
from formrelay.relay.schemas import FormSubmission, RelayOutcome, RelayStatus
from formrelay.shared.logging import get_logger

logger = get_logger(__name__)

ERROR_STATUS_MAP: dict[type[MailProviderError], RelayStatus] = {
    MailAgentError: RelayStatus.MAIL_AGENT_ERROR,
    ResponseFormatError: RelayStatus.DATA_FORMAT_ERROR,
    MailTransportError: RelayStatus.INTERNAL_ERROR,
}


def classify_error(exc: MailProviderError) -> RelayStatus:
    """Map a provider exception to a relay status (most specific class wins)."""
    for cls in type(exc).__mro__:
        status = ERROR_STATUS_MAP.get(cls)
        if status is not None:
            return status
    return RelayStatus.INTERNAL_ERROR


def compose_message(submission: FormSubmission, to_address: str) -> OutboundMessage:
    """Build the outbound message. The sender is not escaped or validated."""
    return OutboundMessage(
        from_address=f"{submission.from_name} <{submission.from_email}>",
        to=to_address,
        subject=submission.title,
        text=submission.body,
    )


class RelayService:
    """Relays form submissions to the configured recipient."""

    def __init__(self, provider: MailProvider, to_address: str) -> None:
        self._provider = provider
        self._to_address = to_address

    @property
    def provider(self) -> MailProvider:
        return self._provider

    async def relay(self, submission: FormSubmission) -> RelayOutcome:
        message = compose_message(submission, self._to_address)

        try:
            result = await self._provider.send(message)
        except MailProviderError as exc:
            status = classify_error(exc)
            logger.error(
                "Relay failed",
                extra={
                    "relay_status": status.value,
                    "error_code": exc.error_code,
                    "upstream_status": exc.status_code,
                    "error": exc.message,
                },
            )
            return RelayOutcome(status=status, message=exc.message)

        logger.info(
            "Relay succeeded",
            extra={"message_id": result.message_id, "upstream_status": result.status_code},
        )
        return RelayOutcome(status=RelayStatus.SUCCESS)
