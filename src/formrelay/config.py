"""
Application configuration with environment-driven settings.

Loaded once at startup and passed to ``create_app``; request handling never
reads the environment.
"""

from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from formrelay.shared.exceptions import ConfigurationError

ResponseMode = Literal["json", "redirect"]

DEFAULT_BIND_ADDRESS = "0.0.0.0"
DEFAULT_PORT = 8088


class Settings(BaseSettings):
    """Process settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Application
    app_name: str = "formrelay"
    log_level: str = "INFO"

    # Listener
    bind_address: str = Field(default=DEFAULT_BIND_ADDRESS)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)

    response_mode: ResponseMode = Field(
        default="json",
        description="json: JSON body with status code. redirect: 303 to MAILGUN_REDIRECT_URL.",
    )

    # CORS
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins; empty disables CORS.",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def configuration_error(exc: ValidationError, env_prefix: str = "") -> ConfigurationError:
    """Turn a settings ValidationError into a ConfigurationError naming the variable."""
    error = exc.errors()[0]
    field = str(error["loc"][0]) if error.get("loc") else ""
    variable = f"{env_prefix}{field}".upper()

    if error["type"] in ("missing", "string_too_short"):
        message = f'Environment variable "{variable}" must be present'
    else:
        message = f'Environment variable "{variable}" is invalid: {error["msg"]}'
    return ConfigurationError(message, variable=variable)


def load_settings(**overrides) -> Settings:
    """Load process settings, raising ConfigurationError on invalid values."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        raise configuration_error(exc) from exc
