"""
Mailgun mail provider adapter.

Posts form-encoded messages to ``https://{api_host}/v3/{domain}/messages``
with Basic auth (``api`` / API key).
"""

from typing import Any

import httpx
from pydantic import ValidationError

from formrelay.mail.config import MailgunConfig
from formrelay.mail.interface import (
    MailAgentError,
    MailProvider,
    MailTransportError,
    OutboundMessage,
    ProviderErrorBody,
    ResponseFormatError,
    SendResult,
)
from formrelay.shared.logging import get_logger

logger = get_logger(__name__)

DATA_FORMAT_MESSAGE = "Mail agent returned a response in an unexpected format"
UNAUTHORIZED_FALLBACK_MESSAGE = "Mail agent rejected the credentials"


class MailgunAdapter(MailProvider):
    """Mailgun provider adapter.

    Uses a shared httpx.AsyncClient; pass ``http_client`` to inject one
    (tests use ``httpx.MockTransport``). An injected client is not closed
    by ``aclose``.
    """

    def __init__(
        self,
        config: MailgunConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._messages_url = config.messages_url
        self._auth = httpx.BasicAuth(*config.basic_auth)
        self._http_client = http_client
        self._owns_client = http_client is None

    @property
    def messages_url(self) -> str:
        return self._messages_url

    def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._config.timeout_seconds)
            )
        return self._http_client

    async def aclose(self) -> None:
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def send(self, message: OutboundMessage) -> SendResult:
        client = self._get_client()

        logger.info(
            "Sending mail",
            extra={"from_address": message.from_address, "to": message.to},
        )

        try:
            response = await client.post(
                self._messages_url,
                data=message.as_form(),
                auth=self._auth,
            )
        except httpx.HTTPError as e:
            logger.error(
                "HTTP error sending mail",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            raise MailTransportError(
                message=f"HTTP error: {e!s}",
                error_code="HTTP_ERROR",
            ) from e

        logger.info(
            "Received mail agent response",
            extra={"status_code": response.status_code},
        )

        if response.is_success:
            return self._success_result(response)

        # Mailgun does not return JSON on a 401
        if response.status_code == httpx.codes.UNAUTHORIZED:
            text = response.text.strip()
            logger.error(
                "Mail agent rejected credentials",
                extra={"status_code": response.status_code, "resp_text": text},
            )
            raise MailAgentError(
                message=text or UNAUTHORIZED_FALLBACK_MESSAGE,
                error_code="UNAUTHORIZED",
                status_code=response.status_code,
            )

        try:
            error_body = ProviderErrorBody.model_validate_json(response.content)
        except ValidationError as e:
            logger.error(
                "Mail agent error response could not be parsed",
                extra={
                    "status_code": response.status_code,
                    "resp_text": response.text,
                    "error": str(e),
                },
            )
            raise ResponseFormatError(
                message=DATA_FORMAT_MESSAGE,
                error_code="DATA_FORMAT",
                status_code=response.status_code,
            ) from e

        logger.error(
            "Mail agent returned an error",
            extra={"status_code": response.status_code, "error": error_body.message},
        )
        raise MailAgentError(
            message=error_body.message,
            error_code=str(response.status_code),
            status_code=response.status_code,
            provider_response=error_body.model_dump(),
        )

    @staticmethod
    def _success_result(response: httpx.Response) -> SendResult:
        data: dict[str, Any] = {}
        try:
            body = response.json()
            if isinstance(body, dict):
                data = body
        except ValueError:
            logger.warning(
                "Mail agent success response was not JSON",
                extra={"status_code": response.status_code},
            )

        result = SendResult(
            status_code=response.status_code,
            message_id=data.get("id"),
            provider_message=data.get("message"),
            raw_response=data,
        )
        logger.info(
            "Mail accepted",
            extra={"status_code": result.status_code, "message_id": result.message_id},
        )
        return result
