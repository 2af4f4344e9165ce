"""
executor.py – Per-resource request executor.

A RequestExecutor binds one fixed URL prefix (e.g. "/v1/marketdata") to the
facade's shared transport.  Resource clients own one each; they never own a
transport of their own.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Union

from .encoding import encode_params
from .transport import AsyncTransport, SyncTransport

Transport = Union[AsyncTransport, SyncTransport]


class RequestExecutor:
    """
    Compose prefix + endpoint + encoded parameters and issue one GET.

    execute() returns whatever the transport's get() returns: an awaitable
    for AsyncTransport, the envelope itself for SyncTransport.
    """

    def __init__(self, transport: Transport, prefix: str) -> None:
        self._transport = transport
        self._prefix    = prefix.rstrip("/")

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def transport(self) -> Transport:
        return self._transport

    def build_url(self, suffix: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Path + query for one endpoint call, before authentication."""
        return encode_params(f"{self._prefix}/{suffix}", params)

    def execute(self, suffix: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self._transport.get(self.build_url(suffix, params))
