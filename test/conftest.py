"""
Pytest configuration and fixtures.
"""

from __future__ import annotations

from collections.abc import Callable
from urllib.parse import parse_qs

import httpx
import pytest

from formrelay.config import Settings
from formrelay.mail.config import MailgunConfig
from formrelay.mail.mailgun_adapter import MailgunAdapter

ENV_VARS = (
    "MAILGUN_API_KEY",
    "MAILGUN_DOMAIN",
    "MAILGUN_TO_ADDRESS",
    "MAILGUN_REDIRECT_URL",
    "MAILGUN_API_HOST",
    "MAILGUN_PROVIDER_TYPE",
    "MAILGUN_TIMEOUT_SECONDS",
    "BIND_ADDRESS",
    "PORT",
    "RESPONSE_MODE",
    "CORS_ORIGINS",
    "LOG_LEVEL",
)

TEST_API_KEY = "key-0123456789abcdef"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep the user's environment and any .env file out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def mail_config() -> MailgunConfig:
    return MailgunConfig(
        api_key=TEST_API_KEY,
        domain="mg.example.com",
        to_address="owner@example.com",
        redirect_url="https://example.com/contact",
        _env_file=None,
    )


@pytest.fixture
def form_data() -> dict[str, str]:
    return {
        "from_name": "Jane Doe",
        "from_email": "jane@example.com",
        "title": "Hello",
        "body": "I would like to get in touch.",
    }


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request):
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    def forms(self) -> list[dict[str, str]]:
        return [form_fields(request) for request in self.requests]


def form_fields(request: httpx.Request) -> dict[str, str]:
    parsed = parse_qs(request.content.decode("utf-8"), keep_blank_values=True)
    return {key: values[0] for key, values in parsed.items()}


@pytest.fixture
def make_adapter(mail_config: MailgunConfig):
    """Build a MailgunAdapter whose HTTP traffic goes to ``handler``."""

    def _make(
        handler: Callable[[httpx.Request], httpx.Response],
    ) -> tuple[MailgunAdapter, RecordingTransport]:
        transport = RecordingTransport(handler)
        client = httpx.AsyncClient(transport=transport)
        return MailgunAdapter(config=mail_config, http_client=client), transport

    return _make
