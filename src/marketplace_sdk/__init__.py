"""
Marketplace SDK – typed Python client for the marketplace REST API.

Provides:
  - Async façade                       (client.py     → ApiClient)
  - Sync façade                        (client.py     → SyncApiClient)
  - Resource sub-clients               (resources.py  → MarketDataClient, ListingClient, …)
  - Per-endpoint parameter models      (params.py)
  - Envelope models                    (types.py      → ApiResponse, parse_envelope)
  - Query-string encoding              (encoding.py   → encode_params)
  - Auth / normalisation middleware    (middleware.py → AuthInjector, ResponseNormalizer)
  - Error taxonomy                     (errors.py     → ApiError)

Quickstart
----------
    import asyncio
    from marketplace_sdk import ApiClient

    async def main() -> None:
        async with ApiClient("https://api.example.com", api_key="...") as client:
            envelope = await client.market_data.get_highest_converting_locations()
            print(envelope["ResponseMessage"])

    asyncio.run(main())
"""

from .errors import ApiError, TransportError, NETWORK_ERROR_MESSAGE
from .encoding import encode_params
from .types import ApiResponse, Payload, KeyValue, parse_envelope, SUCCESS_CODE
from .params import (
    EndpointParams,
    WriteParams,
    PageParams,
    DateRangeParams,
    HighestConvertingLocationsParams,
    ListingParams,
    ListingsParams,
    SetListingParams,
    SetBidParams,
)
from .config import ClientConfig
from .transport import (
    AsyncTransport,
    SyncTransport,
    TransportRequest,
    TransportResponse,
    Middleware,
    MiddlewarePipeline,
)
from .middleware import AuthInjector, ResponseNormalizer, default_middleware
from .executor import RequestExecutor
from .resources import (
    ResourceClient,
    MarketDataClient,
    AccountClient,
    LocationClient,
    ListingClient,
    PortfolioClient,
    BidClient,
    MedalClient,
    UserClient,
    NotificationClient,
    ToolsClient,
    CommunityClient,
)
from .client import ApiClient, SyncApiClient

__all__ = [
    # Errors
    "ApiError",
    "TransportError",
    "NETWORK_ERROR_MESSAGE",
    # Encoding
    "encode_params",
    # Envelope
    "ApiResponse",
    "Payload",
    "KeyValue",
    "parse_envelope",
    "SUCCESS_CODE",
    # Parameters
    "EndpointParams",
    "WriteParams",
    "PageParams",
    "DateRangeParams",
    "HighestConvertingLocationsParams",
    "ListingParams",
    "ListingsParams",
    "SetListingParams",
    "SetBidParams",
    # Config
    "ClientConfig",
    # Transport
    "AsyncTransport",
    "SyncTransport",
    "TransportRequest",
    "TransportResponse",
    "Middleware",
    "MiddlewarePipeline",
    "AuthInjector",
    "ResponseNormalizer",
    "default_middleware",
    "RequestExecutor",
    # Resources
    "ResourceClient",
    "MarketDataClient",
    "AccountClient",
    "LocationClient",
    "ListingClient",
    "PortfolioClient",
    "BidClient",
    "MedalClient",
    "UserClient",
    "NotificationClient",
    "ToolsClient",
    "CommunityClient",
    # Façades
    "ApiClient",
    "SyncApiClient",
]

__version__ = "0.1.0"
