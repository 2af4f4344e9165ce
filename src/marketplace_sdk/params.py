"""
params.py – Per-endpoint parameter models.

Every endpoint declares its query parameters as a Pydantic v2 model so bad
input fails with a ValidationError before anything is encoded or sent.

Conventions
-----------
* Field names are snake_case in Python and camelCase on the wire
  (``location_id`` → ``locationId``); either spelling is accepted on input.
* Unknown fields are rejected.
* Every model carries the reserved ``explain`` flag.  When it is truthy the
  server is asked to describe the endpoint instead and every other
  parameter is dropped from the query.
* Write endpoints (``set_*``) carry an optional ``is_writing_request`` flag.
  It is passed through untouched; the request is still a GET.
* Monetary amounts are Decimals and go over the wire as decimal strings.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Base models
# ---------------------------------------------------------------------------

class EndpointParams(BaseModel):
    """
    Parameters shared by every endpoint.

    Constructing an endpoint model directly always enforces its required
    fields, even with ``explain=True``.  Pass ``explain=True`` as a keyword
    (or in a mapping) to a resource method instead: the call then skips the
    endpoint's own validation, because only ``explain`` goes on the wire.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    explain: Optional[bool] = None

    def to_query(self) -> dict[str, Any]:
        """Wire-named parameter bag, absent fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class WriteParams(EndpointParams):
    """Base for ``set_*`` endpoints."""
    is_writing_request: Optional[bool] = None


class PageParams(EndpointParams):
    page:      Optional[int] = Field(default=None, ge=1)
    page_size: Optional[int] = Field(default=None, ge=1, le=500)


class DateRangeParams(EndpointParams):
    start_date: Optional[date] = None
    end_date:   Optional[date] = None

    @field_validator("end_date")
    @classmethod
    def validate_range(cls, v: Optional[date], info: ValidationInfo) -> Optional[date]:
        start = info.data.get("start_date")
        if v is not None and start is not None and v < start:
            raise ValueError("end_date must not be before start_date")
        return v


def _validate_non_empty(v: str, field: str = "value") -> str:
    if not v or not v.strip():
        raise ValueError(f"{field} must be a non-empty string")
    return v


# ---------------------------------------------------------------------------
# Market data
# ---------------------------------------------------------------------------

class HighestConvertingLocationsParams(EndpointParams):
    limit:    Optional[int] = Field(default=None, ge=1)
    category: Optional[str] = None


class TrendingListingsParams(EndpointParams):
    limit:    Optional[int] = Field(default=None, ge=1)
    category: Optional[str] = None
    period:   Optional[str] = None     # e.g. "24h", "7d"


class PriceHistoryParams(DateRangeParams):
    location_id: str
    interval:    Optional[str] = None  # e.g. "day", "week"


class LocationStatisticsParams(EndpointParams):
    location_id: str


class CategoryStatisticsParams(EndpointParams):
    category: str


class RecentSalesParams(EndpointParams):
    limit:       Optional[int] = Field(default=None, ge=1)
    location_id: Optional[str] = None


# ---------------------------------------------------------------------------
# Account
# ---------------------------------------------------------------------------

class TransactionsParams(PageParams, DateRangeParams):
    transaction_type: Optional[str] = None


class SetSettingsParams(WriteParams):
    settings: dict[str, Any]


class SetDisplayNameParams(WriteParams):
    display_name: str

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, v: str) -> str:
        return _validate_non_empty(v, "display_name")


# ---------------------------------------------------------------------------
# Location
# ---------------------------------------------------------------------------

class LocationParams(EndpointParams):
    location_id: str


class LocationsParams(PageParams):
    search:  Optional[str]            = None
    filters: Optional[dict[str, Any]] = None
    sort_by: Optional[str]            = None


class NearbyLocationsParams(EndpointParams):
    latitude:  float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    radius:    Optional[float] = Field(default=None, gt=0)   # kilometres


class LocationOwnersParams(PageParams):
    location_id: str


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------

class ListingParams(EndpointParams):
    listing_id: str


class ListingsParams(PageParams):
    location_id: Optional[str]            = None
    min_price:   Optional[Decimal]        = Field(default=None, ge=0)
    max_price:   Optional[Decimal]        = Field(default=None, ge=0)
    filters:     Optional[dict[str, Any]] = None
    sort_by:     Optional[str]            = None


class MyListingsParams(PageParams):
    status: Optional[str] = None


class SetListingParams(WriteParams):
    location_id: str
    price:       Decimal = Field(gt=0)
    currency:    Optional[str] = None
    description: Optional[str] = None


class SetListingPriceParams(WriteParams):
    listing_id: str
    price:      Decimal = Field(gt=0)


class SetCancelListingParams(WriteParams):
    listing_id: str


# ---------------------------------------------------------------------------
# Portfolio
# ---------------------------------------------------------------------------

class PortfolioValueParams(EndpointParams):
    currency: Optional[str] = None


class PortfolioHistoryParams(DateRangeParams):
    interval: Optional[str] = None


class HoldingsParams(PageParams):
    sort_by: Optional[str] = None


# ---------------------------------------------------------------------------
# Bid
# ---------------------------------------------------------------------------

class BidParams(EndpointParams):
    bid_id: str


class BidsParams(PageParams):
    listing_id: str
    status:     Optional[str] = None


class MyBidsParams(PageParams):
    status: Optional[str] = None


class SetBidParams(WriteParams):
    listing_id: str
    amount:     Decimal = Field(gt=0)
    message:    Optional[str] = None


class SetBidActionParams(WriteParams):
    """Shared by set_accept_bid / set_reject_bid / set_cancel_bid."""
    bid_id: str


# ---------------------------------------------------------------------------
# Medal
# ---------------------------------------------------------------------------

class MedalsParams(PageParams):
    category: Optional[str] = None


class MedalParams(EndpointParams):
    medal_id: str


class UserMedalsParams(EndpointParams):
    user_id: str


class MedalLeaderboardParams(EndpointParams):
    medal_id: str
    limit:    Optional[int] = Field(default=None, ge=1)


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------

class UserParams(EndpointParams):
    user_id: str


class UserByNameParams(EndpointParams):
    username: str

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return _validate_non_empty(v, "username")


class UserListingsParams(PageParams):
    user_id: str


class SearchUsersParams(PageParams):
    query: str

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        return _validate_non_empty(v, "query")


# ---------------------------------------------------------------------------
# Notification
# ---------------------------------------------------------------------------

class NotificationsParams(PageParams):
    unread_only: Optional[bool] = None


class SetMarkReadParams(WriteParams):
    notification_id: str


class SetNotificationPreferencesParams(WriteParams):
    preferences: dict[str, Any]


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------

class LocationValuationParams(EndpointParams):
    location_id: str


class ConvertCurrencyParams(EndpointParams):
    amount:        Decimal = Field(ge=0)
    from_currency: str
    to_currency:   str


class ExchangeRatesParams(EndpointParams):
    base_currency: Optional[str] = None


class EstimateFeesParams(EndpointParams):
    price:    Decimal = Field(gt=0)
    currency: Optional[str] = None


# ---------------------------------------------------------------------------
# Community
# ---------------------------------------------------------------------------

class LeaderboardParams(EndpointParams):
    category: Optional[str] = None
    limit:    Optional[int] = Field(default=None, ge=1)


class PostsParams(PageParams):
    tag: Optional[str] = None


class PostParams(EndpointParams):
    post_id: str


class CommentsParams(PageParams):
    post_id: str


class SetPostParams(WriteParams):
    title: str
    body:  str
    tags:  Optional[list[str]] = None

    @field_validator("title", "body")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _validate_non_empty(v)


class SetCommentParams(WriteParams):
    post_id: str
    body:    str

    @field_validator("body")
    @classmethod
    def validate_body(cls, v: str) -> str:
        return _validate_non_empty(v, "body")


class SetLikeParams(WriteParams):
    post_id: str
