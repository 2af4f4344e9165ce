"""
middleware.py – Cross-cutting hooks applied around every transport call.

The facade installs one explicit, ordered pipeline on its transport:

    [AuthInjector, ResponseNormalizer]

Requests flow through the middleware in order, responses and errors flow
back through it in reverse.  Middleware objects hold only read-only
configuration, so concurrent calls never interfere with each other.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Optional
from urllib.parse import quote

from .encoding import join_query
from .errors import NETWORK_ERROR_MESSAGE, ApiError, TransportError
from .transport import Middleware, TransportRequest, TransportResponse
from .types import SUCCESS_CODE

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Outbound: authentication
# ---------------------------------------------------------------------------

class AuthInjector(Middleware):
    """Append ``key=<api_key>`` to every outgoing request URL."""

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key

    def process_request(self, request: TransportRequest) -> TransportRequest:
        if not request.url:
            return request
        url = join_query(request.url, f"key={quote(self._api_key, safe='')}")
        return replace(request, url=url)


# ---------------------------------------------------------------------------
# Inbound: envelope / error normalisation
# ---------------------------------------------------------------------------

def _response_message(data: Any) -> Any:
    if isinstance(data, Mapping):
        return data.get("ResponseMessage")
    return None


def _response_code(data: Any) -> Optional[int]:
    """ResponseCode as an int; numeric strings are accepted, anything else is None."""
    code = data.get("ResponseCode") if isinstance(data, Mapping) else None
    if isinstance(code, bool):
        return None
    if isinstance(code, int):
        return code
    if isinstance(code, str):
        try:
            return int(code.strip())
        except ValueError:
            return None
    return None


class ResponseNormalizer(Middleware):
    """
    Unwrap successful envelopes and map every failure onto ApiError.

    A response only succeeds when its envelope carries ResponseCode == 100,
    whatever the HTTP status was.
    """

    def process_response(self, response: Any) -> Any:
        envelope = response.data if isinstance(response, TransportResponse) else response
        code     = _response_code(envelope)

        if code != SUCCESS_CODE:
            message = _response_message(envelope)
            if message is None:
                raw     = envelope.get("ResponseCode") if isinstance(envelope, Mapping) else None
                message = f"Unexpected response code {raw!r}"
            logger.debug("Application error %r: %s", code, message)
            raise ApiError(str(message), status_code=code, data=envelope)

        return envelope

    def process_error(self, error: Exception) -> Exception:
        if not isinstance(error, TransportError):
            return error

        if error.response is not None:
            message = _response_message(error.response.data)
            logger.debug("HTTP error %d: %s", error.response.status, message or error.message)
            return ApiError(
                str(message) if message is not None else error.message,
                status_code=error.response.status,
                data=error.response.data,
            )

        if error.request is not None:
            logger.debug("Network error: %s", error.message)
            return ApiError(NETWORK_ERROR_MESSAGE, data=error.request)

        return ApiError(error.message)


def default_middleware(api_key: str) -> list[Middleware]:
    """The pipeline every facade installs: auth first, normalisation last."""
    return [AuthInjector(api_key), ResponseNormalizer()]
