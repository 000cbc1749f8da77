"""
Mail provider configuration.

Credentials, sending domain and the fixed recipient come from ``MAILGUN_*``
environment variables (or ``.env``).
"""

from enum import Enum

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from formrelay.config import configuration_error
from formrelay.shared.exceptions import ConfigurationError

ENV_PREFIX = "MAILGUN_"
AUTH_USERNAME = "api"


class ProviderType(str, Enum):
    """Supported mail provider types."""

    MAILGUN = "mailgun"
    MOCK = "mock"


class MailgunConfig(BaseSettings):
    """Mailgun configuration from environment."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Required
    api_key: str = Field(min_length=1)
    domain: str = Field(min_length=1)
    to_address: str = Field(min_length=1)

    # Only required for redirect-style responses
    redirect_url: str | None = Field(default=None)

    # EU domains are served from api.eu.mailgun.net
    api_host: str = Field(default="api.mailgun.net", min_length=1)

    provider_type: ProviderType = Field(default=ProviderType.MAILGUN)
    timeout_seconds: float = Field(default=30.0, gt=0, le=300)

    @property
    def messages_url(self) -> str:
        host = self.api_host.rstrip("/")
        return f"https://{host}/v3/{self.domain}/messages"

    @property
    def basic_auth(self) -> tuple[str, str]:
        return (AUTH_USERNAME, self.api_key)


def load_mail_config(require_redirect: bool = False, **overrides) -> MailgunConfig:
    """Load and validate Mailgun configuration.

    Raises:
        ConfigurationError: a required variable is missing or empty, or a
            value does not validate. The message names the variable.
    """
    try:
        config = MailgunConfig(**overrides)
    except ValidationError as exc:
        raise configuration_error(exc, ENV_PREFIX) from exc

    if require_redirect and not config.redirect_url:
        variable = f"{ENV_PREFIX}REDIRECT_URL"
        raise ConfigurationError(
            f'Environment variable "{variable}" must be present',
            variable=variable,
        )
    return config
