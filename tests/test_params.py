"""
tests/test_params.py – Endpoint parameter model validation.

All tests run offline.  They verify that:
  1. Valid input constructs cleanly under either field spelling.
  2. Invalid input raises ValidationError with a meaningful message.
  3. to_query() produces wire names and omits absent fields.
  4. coerce_params merges mappings, keywords and model instances.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from marketplace_sdk.params import (
    EndpointParams,
    ListingsParams,
    NearbyLocationsParams,
    PriceHistoryParams,
    SearchUsersParams,
    SetBidParams,
    SetListingParams,
    SetSettingsParams,
    TransactionsParams,
    WriteParams,
)
from marketplace_sdk.resources import coerce_params


class TestEndpointParams:
    def test_explain_only(self) -> None:
        assert EndpointParams(explain=True).to_query() == {"explain": True}

    def test_empty_query(self) -> None:
        assert EndpointParams().to_query() == {}

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            EndpointParams.model_validate({"surprise": 1})

    def test_frozen(self) -> None:
        params = EndpointParams(explain=True)
        with pytest.raises(ValidationError):
            params.explain = False  # type: ignore[misc]

    def test_write_flag_wire_name(self) -> None:
        assert WriteParams(is_writing_request=True).to_query() == {"isWritingRequest": True}


class TestSetListingParams:
    def test_valid(self) -> None:
        params = SetListingParams(location_id="L1", price="12.50")
        assert params.price == Decimal("12.50")
        assert params.to_query() == {"locationId": "L1", "price": "12.50"}

    def test_camel_case_input(self) -> None:
        params = SetListingParams.model_validate({"locationId": "L1", "price": 3})
        assert params.location_id == "L1"

    def test_missing_location_rejected(self) -> None:
        with pytest.raises(ValidationError, match="location_id|locationId"):
            SetListingParams(price="1")  # type: ignore[call-arg]

    def test_zero_price_rejected(self) -> None:
        with pytest.raises(ValidationError, match="greater than 0"):
            SetListingParams(location_id="L1", price="0")

    def test_garbage_price_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SetListingParams(location_id="L1", price="twelve")


class TestOtherModels:
    def test_bid_amount_positive(self) -> None:
        with pytest.raises(ValidationError):
            SetBidParams(listing_id="X", amount="-1")

    def test_latitude_range(self) -> None:
        with pytest.raises(ValidationError):
            NearbyLocationsParams(latitude=91, longitude=0)

    def test_page_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ListingsParams(page=0)

    def test_blank_search_rejected(self) -> None:
        with pytest.raises(ValidationError, match="non-empty"):
            SearchUsersParams(query="   ")

    def test_date_range_order(self) -> None:
        with pytest.raises(ValidationError, match="end_date"):
            TransactionsParams(start_date=date(2024, 2, 1), end_date=date(2024, 1, 1))

    def test_dates_serialised_iso(self) -> None:
        params = TransactionsParams(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31), page=1)
        query  = params.to_query()
        assert query["startDate"] == "2024-01-01"
        assert query["endDate"] == "2024-01-31"
        assert query["page"] == 1

    def test_nested_settings_kept_as_dict(self) -> None:
        params = SetSettingsParams(settings={"theme": "dark", "alerts": {"email": True}})
        assert params.to_query() == {"settings": {"theme": "dark", "alerts": {"email": True}}}


class TestCoerceParams:
    def test_none_validates_empty(self) -> None:
        assert coerce_params(ListingsParams).to_query() == {}

    def test_keywords(self) -> None:
        params = coerce_params(ListingsParams, None, {"page": 2})
        assert params.page == 2

    def test_keywords_override_mapping(self) -> None:
        params = coerce_params(ListingsParams, {"page": 1, "sort_by": "price"}, {"page": 5})
        assert params.page == 5
        assert params.sort_by == "price"

    def test_instance_returned_as_is(self) -> None:
        original = ListingsParams(page=1)
        assert coerce_params(ListingsParams, original) is original

    def test_instance_with_overrides(self) -> None:
        params = coerce_params(ListingsParams, ListingsParams(page=1, sort_by="price"), {"page": 9})
        assert params.page == 9
        assert params.sort_by == "price"

    def test_instance_of_other_model_rejected(self) -> None:
        with pytest.raises(TypeError, match="expected ListingsParams"):
            coerce_params(ListingsParams, EndpointParams())

    def test_explain_skips_required_fields(self) -> None:
        params = coerce_params(PriceHistoryParams, None, {"explain": True})
        assert params.to_query() == {"explain": True}

    def test_explain_ignores_other_field_checks(self) -> None:
        params = coerce_params(SetListingParams, {"price": "-1", "explain": "true"})
        assert params.to_query() == {"explain": True}

    def test_false_explain_still_validates(self) -> None:
        with pytest.raises(ValidationError, match="location_id|locationId"):
            coerce_params(PriceHistoryParams, None, {"explain": False})

    def test_invalid_explain_rejected(self) -> None:
        with pytest.raises(ValidationError):
            coerce_params(PriceHistoryParams, None, {"explain": "maybe"})

    def test_explain_override_on_instance(self) -> None:
        original = SetListingParams(location_id="L1", price="12.50")
        params   = coerce_params(SetListingParams, original, {"explain": True})
        assert params.to_query() == {"explain": True}

    def test_mapping_not_mutated(self) -> None:
        bag = {"page": 1}
        coerce_params(ListingsParams, bag, {"page": 2})
        assert bag == {"page": 1}
