"""
resources.py – Resource-scoped sub-clients.

Each client groups the endpoints that share one URL prefix and owns a
RequestExecutor bound to the facade's shared transport.  Methods are named
exactly after their wire endpoint and are thin pass-throughs:

    validate params → encode → GET {prefix}/{endpoint}

Every method accepts either a parameter model instance, a mapping, or
keyword arguments (snake_case or camelCase):

    await client.listing.get_listings(page=2, sort_by="price")
    await client.listing.set_listing(SetListingParams(location_id="L1", price="12.50"))
    await client.listing.get_listings({"explain": True})

The return value is whatever the transport produces: an awaitable envelope
for ApiClient, the envelope itself for SyncApiClient.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, Optional, TypeVar, Union

from .executor import RequestExecutor, Transport
from .params import (
    BidParams,
    BidsParams,
    CategoryStatisticsParams,
    CommentsParams,
    ConvertCurrencyParams,
    EndpointParams,
    EstimateFeesParams,
    ExchangeRatesParams,
    HighestConvertingLocationsParams,
    HoldingsParams,
    LeaderboardParams,
    ListingParams,
    ListingsParams,
    LocationOwnersParams,
    LocationParams,
    LocationStatisticsParams,
    LocationValuationParams,
    LocationsParams,
    MedalLeaderboardParams,
    MedalParams,
    MedalsParams,
    MyBidsParams,
    MyListingsParams,
    NearbyLocationsParams,
    NotificationsParams,
    PortfolioHistoryParams,
    PortfolioValueParams,
    PostParams,
    PostsParams,
    PriceHistoryParams,
    RecentSalesParams,
    SearchUsersParams,
    SetBidActionParams,
    SetBidParams,
    SetCancelListingParams,
    SetCommentParams,
    SetDisplayNameParams,
    SetLikeParams,
    SetListingParams,
    SetListingPriceParams,
    SetMarkReadParams,
    SetNotificationPreferencesParams,
    SetPostParams,
    SetSettingsParams,
    TransactionsParams,
    TrendingListingsParams,
    UserByNameParams,
    UserListingsParams,
    UserMedalsParams,
    UserParams,
    WriteParams,
)

P = TypeVar("P", bound=EndpointParams)

ParamsInput = Union[EndpointParams, Mapping[str, Any], None]


def coerce_params(model: type[P], params: ParamsInput = None, fields: Optional[Mapping[str, Any]] = None) -> P:
    """
    Validate caller input into the endpoint's parameter model.

    Keyword fields override entries of params.  Raises
    pydantic.ValidationError for missing / invalid fields and TypeError for
    a model instance that belongs to another endpoint.

    A truthy ``explain`` short-circuits to a bare EndpointParams: the other
    parameters never reach the wire, so the endpoint's required fields are
    not demanded and its other fields are not checked.
    """
    fields = dict(fields or {})

    if isinstance(params, EndpointParams):
        if type(params) is not model:
            raise TypeError(f"expected {model.__name__}, got {type(params).__name__}")
        if not fields:
            return params
        merged = {**params.model_dump(exclude_none=True), **fields}
    else:
        merged = {**dict(params or {}), **fields}

    if merged.get("explain") is not None:
        explained = EndpointParams.model_validate({"explain": merged["explain"]})
        if explained.explain:
            return explained  # type: ignore[return-value]

    return model.model_validate(merged)


# ---------------------------------------------------------------------------
# Shared plumbing
# ---------------------------------------------------------------------------

class ResourceClient:
    """Holds one RequestExecutor; subclasses set ``prefix`` and add endpoints."""

    prefix: ClassVar[str] = ""

    def __init__(self, transport: Transport) -> None:
        self._executor = RequestExecutor(transport, self.prefix)

    @property
    def executor(self) -> RequestExecutor:
        return self._executor

    def _call(
        self,
        endpoint: str,
        model:    type[EndpointParams],
        params:   ParamsInput,
        fields:   Mapping[str, Any],
    ) -> Any:
        bag = coerce_params(model, params, fields).to_query()
        return self._executor.execute(endpoint, bag)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(prefix={self.prefix!r})"


# ---------------------------------------------------------------------------
# Market data
# ---------------------------------------------------------------------------

class MarketDataClient(ResourceClient):
    """Aggregated, read-only market statistics."""

    prefix = "/v1/marketdata"

    def get_highest_converting_locations(self, params: ParamsInput = None, **fields: Any) -> Any:
        """Locations ranked by how often their listings end in a sale."""
        return self._call("get_highest_converting_locations", HighestConvertingLocationsParams, params, fields)

    def get_trending_listings(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_trending_listings", TrendingListingsParams, params, fields)

    def get_price_history(self, params: ParamsInput = None, **fields: Any) -> Any:
        """Sale price history for one location; requires location_id."""
        return self._call("get_price_history", PriceHistoryParams, params, fields)

    def get_market_summary(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_market_summary", EndpointParams, params, fields)

    def get_location_statistics(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_location_statistics", LocationStatisticsParams, params, fields)

    def get_category_statistics(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_category_statistics", CategoryStatisticsParams, params, fields)

    def get_recent_sales(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_recent_sales", RecentSalesParams, params, fields)


# ---------------------------------------------------------------------------
# Account
# ---------------------------------------------------------------------------

class AccountClient(ResourceClient):
    """The authenticated account (the owner of the API key)."""

    prefix = "/v1/account"

    def get_account(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_account", EndpointParams, params, fields)

    def get_balance(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_balance", EndpointParams, params, fields)

    def get_transactions(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_transactions", TransactionsParams, params, fields)

    def get_settings(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_settings", EndpointParams, params, fields)

    def set_settings(self, params: ParamsInput = None, **fields: Any) -> Any:
        """Update account settings; ``settings`` is sent as one JSON value."""
        return self._call("set_settings", SetSettingsParams, params, fields)

    def set_display_name(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("set_display_name", SetDisplayNameParams, params, fields)


# ---------------------------------------------------------------------------
# Location
# ---------------------------------------------------------------------------

class LocationClient(ResourceClient):
    prefix = "/v1/location"

    def get_location(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_location", LocationParams, params, fields)

    def get_locations(self, params: ParamsInput = None, **fields: Any) -> Any:
        """Search / browse locations.  ``filters`` is sent as one JSON value."""
        return self._call("get_locations", LocationsParams, params, fields)

    def get_nearby_locations(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_nearby_locations", NearbyLocationsParams, params, fields)

    def get_location_owners(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_location_owners", LocationOwnersParams, params, fields)


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------

class ListingClient(ResourceClient):
    """Listings for sale and the write operations that manage them."""

    prefix = "/v1/listing"

    def get_listing(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_listing", ListingParams, params, fields)

    def get_listings(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_listings", ListingsParams, params, fields)

    def get_my_listings(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_my_listings", MyListingsParams, params, fields)

    def set_listing(self, params: ParamsInput = None, **fields: Any) -> Any:
        """Put a location up for sale at ``price``."""
        return self._call("set_listing", SetListingParams, params, fields)

    def set_listing_price(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("set_listing_price", SetListingPriceParams, params, fields)

    def set_cancel_listing(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("set_cancel_listing", SetCancelListingParams, params, fields)


# ---------------------------------------------------------------------------
# Portfolio
# ---------------------------------------------------------------------------

class PortfolioClient(ResourceClient):
    prefix = "/v1/portfolio"

    def get_portfolio(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_portfolio", EndpointParams, params, fields)

    def get_portfolio_value(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_portfolio_value", PortfolioValueParams, params, fields)

    def get_portfolio_history(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_portfolio_history", PortfolioHistoryParams, params, fields)

    def get_holdings(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_holdings", HoldingsParams, params, fields)


# ---------------------------------------------------------------------------
# Bid
# ---------------------------------------------------------------------------

class BidClient(ResourceClient):
    """Bids placed on listings, both sent and received."""

    prefix = "/v1/bid"

    def get_bid(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_bid", BidParams, params, fields)

    def get_bids(self, params: ParamsInput = None, **fields: Any) -> Any:
        """All bids on one listing; requires listing_id."""
        return self._call("get_bids", BidsParams, params, fields)

    def get_my_bids(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_my_bids", MyBidsParams, params, fields)

    def get_received_bids(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_received_bids", MyBidsParams, params, fields)

    def set_bid(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("set_bid", SetBidParams, params, fields)

    def set_accept_bid(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("set_accept_bid", SetBidActionParams, params, fields)

    def set_reject_bid(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("set_reject_bid", SetBidActionParams, params, fields)

    def set_cancel_bid(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("set_cancel_bid", SetBidActionParams, params, fields)


# ---------------------------------------------------------------------------
# Medal
# ---------------------------------------------------------------------------

class MedalClient(ResourceClient):
    prefix = "/v1/medal"

    def get_medals(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_medals", MedalsParams, params, fields)

    def get_medal(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_medal", MedalParams, params, fields)

    def get_user_medals(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_user_medals", UserMedalsParams, params, fields)

    def get_medal_leaderboard(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_medal_leaderboard", MedalLeaderboardParams, params, fields)


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------

class UserClient(ResourceClient):
    """Public profiles of other users."""

    prefix = "/v1/user"

    def get_user(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_user", UserParams, params, fields)

    def get_user_by_name(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_user_by_name", UserByNameParams, params, fields)

    def get_user_listings(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_user_listings", UserListingsParams, params, fields)

    def get_user_statistics(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_user_statistics", UserParams, params, fields)

    def get_search_users(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_search_users", SearchUsersParams, params, fields)


# ---------------------------------------------------------------------------
# Notification
# ---------------------------------------------------------------------------

class NotificationClient(ResourceClient):
    prefix = "/v1/notification"

    def get_notifications(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_notifications", NotificationsParams, params, fields)

    def get_unread_count(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_unread_count", EndpointParams, params, fields)

    def set_mark_read(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("set_mark_read", SetMarkReadParams, params, fields)

    def set_mark_all_read(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("set_mark_all_read", WriteParams, params, fields)

    def set_notification_preferences(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("set_notification_preferences", SetNotificationPreferencesParams, params, fields)


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------

class ToolsClient(ResourceClient):
    """Stateless helpers: valuations, currency conversion, fee estimates."""

    prefix = "/v1/tools"

    def get_location_valuation(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_location_valuation", LocationValuationParams, params, fields)

    def get_convert_currency(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_convert_currency", ConvertCurrencyParams, params, fields)

    def get_exchange_rates(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_exchange_rates", ExchangeRatesParams, params, fields)

    def get_server_time(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_server_time", EndpointParams, params, fields)

    def get_estimate_fees(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_estimate_fees", EstimateFeesParams, params, fields)


# ---------------------------------------------------------------------------
# Community
# ---------------------------------------------------------------------------

class CommunityClient(ResourceClient):
    prefix = "/v1/community"

    def get_leaderboard(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_leaderboard", LeaderboardParams, params, fields)

    def get_posts(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_posts", PostsParams, params, fields)

    def get_post(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_post", PostParams, params, fields)

    def get_comments(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("get_comments", CommentsParams, params, fields)

    def set_post(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("set_post", SetPostParams, params, fields)

    def set_comment(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("set_comment", SetCommentParams, params, fields)

    def set_like(self, params: ParamsInput = None, **fields: Any) -> Any:
        return self._call("set_like", SetLikeParams, params, fields)

