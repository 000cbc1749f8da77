"""
Mail provider factory.
"""

from formrelay.mail.config import MailgunConfig, ProviderType
from formrelay.mail.interface import MailProvider
from formrelay.mail.mailgun_adapter import MailgunAdapter
from formrelay.mail.mock_adapter import MockMailProvider
from formrelay.shared.logging import get_logger, mask_secret

logger = get_logger(__name__)


def build_mail_provider(config: MailgunConfig) -> MailProvider:
    """Create the mail provider selected by ``config.provider_type``."""
    logger.info(
        "Mail provider config resolved",
        extra={
            "provider_type": config.provider_type.value,
            "api_key": mask_secret(config.api_key),
            "messages_url": config.messages_url,
            "timeout_seconds": config.timeout_seconds,
        },
    )

    if config.provider_type == ProviderType.MAILGUN:
        return MailgunAdapter(config)

    if config.provider_type == ProviderType.MOCK:
        return MockMailProvider()

    raise ValueError(f"Unsupported mail provider_type: {config.provider_type}")
