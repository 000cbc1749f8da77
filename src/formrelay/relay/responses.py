"""
Outcome to HTTP response mapping.

One table maps each relay status to its HTTP status code. Provider-originated
failures are 502; local, transport and parse failures are 500.
"""

from urllib.parse import quote, urlencode

from fastapi import status
from fastapi.responses import JSONResponse, RedirectResponse, Response

from formrelay.config import ResponseMode
from formrelay.relay.schemas import RelayOutcome, RelayResponse, RelayStatus

HTTP_STATUS_MAP: dict[RelayStatus, int] = {
    RelayStatus.SUCCESS: status.HTTP_200_OK,
    RelayStatus.MAIL_AGENT_ERROR: status.HTTP_502_BAD_GATEWAY,
    RelayStatus.DATA_FORMAT_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    RelayStatus.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    # Literal: the 422 constant name differs across starlette releases
    RelayStatus.INVALID_REQUEST: 422,
}


def http_status_for(relay_status: RelayStatus) -> int:
    return HTTP_STATUS_MAP[relay_status]


def redirect_location(redirect_url: str, outcome: RelayOutcome) -> str:
    """Build ``redirect_url?status=success`` or ``?status=error&message=...``."""
    if outcome.is_success:
        params = {"status": "success"}
    else:
        params = {"status": "error", "message": outcome.message or outcome.status.value}

    separator = "&" if "?" in redirect_url else "?"
    return f"{redirect_url}{separator}{urlencode(params, quote_via=quote)}"


def json_response(outcome: RelayOutcome) -> JSONResponse:
    body = RelayResponse(status=outcome.status, message=outcome.message)
    return JSONResponse(
        status_code=http_status_for(outcome.status),
        content=body.model_dump(mode="json"),
    )


def render_outcome(
    outcome: RelayOutcome,
    mode: ResponseMode,
    redirect_url: str | None = None,
) -> Response:
    """Render an outcome as a JSON body or a 303 redirect."""
    if mode == "redirect":
        if not redirect_url:
            raise ValueError("redirect_url is required for redirect responses")
        return RedirectResponse(
            url=redirect_location(redirect_url, outcome),
            status_code=status.HTTP_303_SEE_OTHER,
        )
    return json_response(outcome)
