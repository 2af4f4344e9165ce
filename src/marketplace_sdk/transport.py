"""
transport.py – Shared HTTP handles (async and sync) for the marketplace API.

A transport performs exactly one GET per call and runs every exchange
through an explicit MiddlewarePipeline:

    request  → mw[0].process_request → … → mw[n].process_request → network
    response → mw[n].process_response → … → mw[0].process_response → caller
    failure  → mw[n].process_error    → … → mw[0].process_error    → raised

Failures below the envelope level are reported to the pipeline as
TransportError values:

  response set : the server answered with a non-2xx status
  request only : the request went out and nothing usable came back
  neither      : the request could not be issued

No retries, no back-off and no timeout unless one is configured.

Usage – async
-------------
    transport = AsyncTransport("https://api.example.com", middleware=[...])
    envelope  = await transport.get("/v1/medal/get_medals")
    await transport.close()

Usage – sync
------------
    transport = SyncTransport("https://api.example.com", middleware=[...])
    envelope  = transport.get("/v1/medal/get_medals")
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, NoReturn, Optional, Union

import aiohttp
import requests
from yarl import URL

from .errors import TransportError

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"([?&]key=)[^&]*")


def _redact(url: str) -> str:
    return _KEY_PATTERN.sub(r"\1***", url)


def _decode_body(body: Union[str, bytes]) -> Any:
    """
    JSON-decode a response body, keeping the raw text when it isn't JSON.

    Raw bytes are decoded as UTF-8 with undecodable bytes replaced, so a
    malformed body still reaches the pipeline as data.
    """
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


# ---------------------------------------------------------------------------
# Request / response values
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TransportRequest:
    """
    A resolved outgoing request.

    url      : path + query relative to base_url (or an absolute URL)
    base_url : scheme + host (+ optional path) root
    timeout  : total timeout in seconds, None for no limit
    """
    method:   str
    url:      str
    base_url: str = ""
    timeout:  Optional[float] = None

    @property
    def full_url(self) -> str:
        if "://" in self.url or not self.base_url:
            return self.url
        if self.url.startswith("/"):
            return self.base_url + self.url
        return f"{self.base_url}/{self.url}"


@dataclass(frozen=True)
class TransportResponse:
    status:  int
    data:    Any
    request: Optional[TransportRequest] = None


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

class Middleware:
    """No-op hook; subclasses override the stages they care about."""

    def process_request(self, request: TransportRequest) -> TransportRequest:
        return request

    def process_response(self, response: Any) -> Any:
        return response

    def process_error(self, error: Exception) -> Exception:
        """Return the exception that should continue down the chain."""
        return error


class MiddlewarePipeline:
    """Ordered, immutable chain of Middleware."""

    def __init__(self, middleware: Sequence[Middleware] = ()) -> None:
        self._middleware: tuple[Middleware, ...] = tuple(middleware)

    def __iter__(self):
        return iter(self._middleware)

    def __len__(self) -> int:
        return len(self._middleware)

    def prepare(self, request: TransportRequest) -> TransportRequest:
        for mw in self._middleware:
            request = mw.process_request(request)
        return request

    def resolve(self, response: TransportResponse) -> Any:
        result: Any = response
        for mw in reversed(self._middleware):
            result = mw.process_response(result)
        return result

    def reject(self, error: Exception) -> Exception:
        for mw in reversed(self._middleware):
            error = mw.process_error(error)
        return error


# ---------------------------------------------------------------------------
# Shared behaviour
# ---------------------------------------------------------------------------

class _BaseTransport:

    def __init__(
        self,
        base_url:   str,
        *,
        middleware: Sequence[Middleware] = (),
        timeout:    Optional[float] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._pipeline = MiddlewarePipeline(middleware)
        self._timeout  = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def middleware(self) -> MiddlewarePipeline:
        return self._pipeline

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    def _fail(self, error: TransportError, cause: Optional[BaseException] = None) -> NoReturn:
        final = self._pipeline.reject(error)
        if final is error:
            raise error from cause
        raise final from (cause or error)

    def _build(self, url: str) -> TransportRequest:
        request = TransportRequest(
            method="GET",
            url=url,
            base_url=self._base_url,
            timeout=self._timeout,
        )
        try:
            return self._pipeline.prepare(request)
        except (TypeError, ValueError) as exc:
            self._fail(TransportError(str(exc)), exc)

    def _finish(self, request: TransportRequest, status: int, data: Any) -> Any:
        response = TransportResponse(status=status, data=data, request=request)
        logger.debug("GET %s → %d", _redact(request.full_url), status)

        if not 200 <= status < 300:
            self._fail(TransportError(
                f"Request failed with status code {status}",
                request=request,
                response=response,
            ))

        return self._pipeline.resolve(response)


# ---------------------------------------------------------------------------
# Async transport (aiohttp)
# ---------------------------------------------------------------------------

class AsyncTransport(_BaseTransport):
    """
    aiohttp-backed transport.

    The ClientSession is created lazily on first use so the transport can
    be constructed outside a running event loop.  A caller-supplied
    session is used as-is and left open by close().
    """

    def __init__(
        self,
        base_url:   str,
        *,
        middleware: Sequence[Middleware] = (),
        timeout:    Optional[float] = None,
        session:    Optional[aiohttp.ClientSession] = None,
    ) -> None:
        super().__init__(base_url, middleware=middleware, timeout=timeout)
        self._session      = session
        self._owns_session = session is None

    async def __aenter__(self) -> "AsyncTransport":
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        if self._owns_session:
            self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session      = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def get(self, url: str) -> Any:
        request = self._build(url)
        session = self._get_session()
        logger.debug("GET %s", _redact(request.full_url))

        try:
            target = URL(request.full_url, encoded=True)
        except ValueError as exc:
            self._fail(TransportError(f"Invalid URL: {exc}"), exc)

        try:
            async with session.get(
                target,
                timeout=aiohttp.ClientTimeout(total=request.timeout),
            ) as resp:
                status = resp.status
                body   = await resp.read()
        except aiohttp.InvalidURL as exc:
            self._fail(TransportError(f"Invalid URL: {exc}"), exc)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            message = str(exc) or type(exc).__name__
            self._fail(TransportError(message, request=request), exc)

        return self._finish(request, status, _decode_body(body))


# ---------------------------------------------------------------------------
# Sync transport (requests)
# ---------------------------------------------------------------------------

class SyncTransport(_BaseTransport):
    """requests-backed transport with the same semantics as AsyncTransport."""

    def __init__(
        self,
        base_url:   str,
        *,
        middleware: Sequence[Middleware] = (),
        timeout:    Optional[float] = None,
        session:    Optional[requests.Session] = None,
    ) -> None:
        super().__init__(base_url, middleware=middleware, timeout=timeout)
        self._owns_session = session is None
        self._session      = session if session is not None else requests.Session()

    def __enter__(self) -> "SyncTransport":
        return self

    def __exit__(self, *_: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def get(self, url: str) -> Any:
        request = self._build(url)
        logger.debug("GET %s", _redact(request.full_url))

        try:
            resp = self._session.get(request.full_url, timeout=request.timeout)
        except (
            requests.exceptions.InvalidURL,
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
        ) as exc:
            self._fail(TransportError(f"Invalid URL: {exc}"), exc)
        except requests.RequestException as exc:
            self._fail(TransportError(str(exc) or type(exc).__name__, request=request), exc)

        return self._finish(request, resp.status_code, _decode_body(resp.text))
