"""
client.py – ApiClient / SyncApiClient façades.

Each façade owns exactly one transport and one API key for its lifetime and
wires one instance of every resource client to that shared transport.  The
transport runs the fixed middleware pipeline

    [AuthInjector(api_key), ResponseNormalizer()]

so every call gets ``key=...`` appended last and either returns the
envelope dict (ResponseCode == 100) or raises ApiError.

Usage – async
-------------
    import asyncio
    from marketplace_sdk import ApiClient, ApiError

    async def main() -> None:
        async with ApiClient("https://api.example.com", api_key="...") as client:
            envelope = await client.market_data.get_highest_converting_locations()
            try:
                await client.listing.get_listing(listing_id="nope")
            except ApiError as exc:
                print(exc.status_code, exc.message)

    asyncio.run(main())

Usage – sync
------------
    with SyncApiClient.from_env() as client:
        envelope = client.medal.get_medals(page=1)
"""

from __future__ import annotations

from typing import Any, Optional

import aiohttp
import requests

from .config import ClientConfig
from .middleware import default_middleware
from .resources import (
    AccountClient,
    BidClient,
    CommunityClient,
    ListingClient,
    LocationClient,
    MarketDataClient,
    MedalClient,
    NotificationClient,
    PortfolioClient,
    ToolsClient,
    UserClient,
)
from .transport import AsyncTransport, SyncTransport


class _ResourceMixin:
    """Attaches one of each resource client to a shared transport."""

    def _attach_resources(self, transport: Any) -> None:
        self.market_data  = MarketDataClient(transport)
        self.account      = AccountClient(transport)
        self.location     = LocationClient(transport)
        self.listing      = ListingClient(transport)
        self.portfolio    = PortfolioClient(transport)
        self.bid          = BidClient(transport)
        self.medal        = MedalClient(transport)
        self.user         = UserClient(transport)
        self.notification = NotificationClient(transport)
        self.tools        = ToolsClient(transport)
        self.community    = CommunityClient(transport)


class ApiClient(_ResourceMixin):
    """
    Async façade for the marketplace API (aiohttp-based).

    Parameters
    ----------
    base_url : scheme + host (+ optional path) root, e.g. "https://api.example.com"
    api_key  : key appended to every request as ``key=...``
    timeout  : optional total timeout in seconds; None means no limit
    session  : optional caller-owned aiohttp.ClientSession
    """

    def __init__(
        self,
        base_url: str,
        api_key:  str,
        *,
        timeout:  Optional[float] = None,
        session:  Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self._config    = ClientConfig(base_url=base_url, api_key=api_key, timeout=timeout)
        self._transport = AsyncTransport(
            self._config.base_url,
            middleware=default_middleware(self._config.api_key),
            timeout=self._config.timeout,
            session=session,
        )
        self._attach_resources(self._transport)

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any) -> "ApiClient":
        return cls(config.base_url, config.api_key, timeout=config.timeout, **kwargs)

    @classmethod
    def from_env(cls, **kwargs: Any) -> "ApiClient":
        """Construct from MARKETPLACE_BASE_URL / MARKETPLACE_API_KEY / MARKETPLACE_TIMEOUT."""
        return cls.from_config(ClientConfig.from_env(), **kwargs)

    # ------------------------------------------------------------------
    # Async context manager
    # ------------------------------------------------------------------

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session (safe to call more than once)."""
        await self._transport.close()

    # ------------------------------------------------------------------
    # Read-only configuration
    # ------------------------------------------------------------------

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def api_key(self) -> str:
        return self._config.api_key

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def transport(self) -> AsyncTransport:
        return self._transport

    def __repr__(self) -> str:
        return f"ApiClient(base_url={self.base_url!r})"


class SyncApiClient(_ResourceMixin):
    """Blocking counterpart of ApiClient (requests-based); same parameters."""

    def __init__(
        self,
        base_url: str,
        api_key:  str,
        *,
        timeout:  Optional[float] = None,
        session:  Optional[requests.Session] = None,
    ) -> None:
        self._config    = ClientConfig(base_url=base_url, api_key=api_key, timeout=timeout)
        self._transport = SyncTransport(
            self._config.base_url,
            middleware=default_middleware(self._config.api_key),
            timeout=self._config.timeout,
            session=session,
        )
        self._attach_resources(self._transport)

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any) -> "SyncApiClient":
        return cls(config.base_url, config.api_key, timeout=config.timeout, **kwargs)

    @classmethod
    def from_env(cls, **kwargs: Any) -> "SyncApiClient":
        return cls.from_config(ClientConfig.from_env(), **kwargs)

    def __enter__(self) -> "SyncApiClient":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def close(self) -> None:
        self._transport.close()

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def api_key(self) -> str:
        return self._config.api_key

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def transport(self) -> SyncTransport:
        return self._transport

    def __repr__(self) -> str:
        return f"SyncApiClient(base_url={self.base_url!r})"
