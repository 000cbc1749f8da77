"""
Tests for outcome rendering.
"""

import importlib
import json
import warnings

import pytest

from formrelay.relay import responses
from formrelay.relay.responses import (
    HTTP_STATUS_MAP,
    http_status_for,
    redirect_location,
    render_outcome,
)
from formrelay.relay.schemas import RelayOutcome, RelayStatus


class TestStatusTable:
    def test_every_status_is_mapped(self) -> None:
        assert set(HTTP_STATUS_MAP) == set(RelayStatus)

    @pytest.mark.parametrize(
        ("relay_status", "code"),
        [
            (RelayStatus.SUCCESS, 200),
            (RelayStatus.MAIL_AGENT_ERROR, 502),
            (RelayStatus.DATA_FORMAT_ERROR, 500),
            (RelayStatus.INTERNAL_ERROR, 500),
            (RelayStatus.INVALID_REQUEST, 422),
        ],
    )
    def test_codes(self, relay_status: RelayStatus, code: int) -> None:
        assert http_status_for(relay_status) == code

    def test_import_emits_no_deprecation_warning(self) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            reloaded = importlib.reload(responses)

        assert reloaded.HTTP_STATUS_MAP[RelayStatus.INVALID_REQUEST] == 422


class TestRedirectLocation:
    def test_success(self) -> None:
        outcome = RelayOutcome(status=RelayStatus.SUCCESS)
        assert redirect_location("https://example.com/contact", outcome) == (
            "https://example.com/contact?status=success"
        )

    def test_error_message_is_percent_encoded(self) -> None:
        outcome = RelayOutcome(status=RelayStatus.MAIL_AGENT_ERROR, message="domain not found & more")

        location = redirect_location("https://example.com/contact", outcome)

        assert location == (
            "https://example.com/contact?status=error&message=domain%20not%20found%20%26%20more"
        )

    def test_appends_to_existing_query(self) -> None:
        outcome = RelayOutcome(status=RelayStatus.SUCCESS)
        assert redirect_location("https://example.com/contact?lang=en", outcome) == (
            "https://example.com/contact?lang=en&status=success"
        )

    def test_error_without_message_uses_status(self) -> None:
        outcome = RelayOutcome(status=RelayStatus.INTERNAL_ERROR)
        location = redirect_location("https://example.com/", outcome)
        assert location.endswith("status=error&message=internal_error")


class TestRenderOutcome:
    def test_json_success(self) -> None:
        response = render_outcome(RelayOutcome(status=RelayStatus.SUCCESS), mode="json")

        assert response.status_code == 200
        assert json.loads(response.body) == {"status": "success", "message": None}

    def test_json_error(self) -> None:
        response = render_outcome(
            RelayOutcome(status=RelayStatus.MAIL_AGENT_ERROR, message="unauthorized"),
            mode="json",
        )

        assert response.status_code == 502
        assert json.loads(response.body) == {"status": "mail_agent_error", "message": "unauthorized"}

    def test_redirect(self) -> None:
        response = render_outcome(
            RelayOutcome(status=RelayStatus.SUCCESS),
            mode="redirect",
            redirect_url="https://example.com/contact",
        )

        assert response.status_code == 303
        assert response.headers["location"] == "https://example.com/contact?status=success"

    def test_redirect_requires_url(self) -> None:
        with pytest.raises(ValueError):
            render_outcome(RelayOutcome(status=RelayStatus.SUCCESS), mode="redirect")
