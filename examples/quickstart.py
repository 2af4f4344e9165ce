"""
examples/quickstart.py – End-to-end demo of the marketplace SDK.

Walks through:
  1. Building a client from environment variables
  2. Reading market data (async)
  3. Asking an endpoint to explain itself
  4. Placing a listing (sync) and handling ApiError

HOW TO RUN
----------
    export MARKETPLACE_BASE_URL="https://api.example.com"
    export MARKETPLACE_API_KEY="your_api_key"
    export MARKETPLACE_LOCATION_ID="L-123"     # optional, for the listing demo
    python examples/quickstart.py
"""

from __future__ import annotations

import asyncio
import logging
import os

from marketplace_sdk import (
    ApiClient,
    ApiError,
    SetListingParams,
    SyncApiClient,
    parse_envelope,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s – %(message)s",
)
logger = logging.getLogger("quickstart")

LOCATION_ID = os.environ.get("MARKETPLACE_LOCATION_ID", "")


# ---------------------------------------------------------------------------
# Part 1 – async: market data
# ---------------------------------------------------------------------------

async def market_data_demo() -> None:
    logger.info("=== Market data demo ===")

    async with ApiClient.from_env() as client:
        raw      = await client.market_data.get_highest_converting_locations(limit=5)
        envelope = parse_envelope(raw)
        logger.info("%s → %s", envelope.request_path, envelope.response_message)

        if envelope.payload and not isinstance(envelope.payload, bool):
            for key, value in envelope.payload.as_dict().items():
                logger.info("  %-24s %s", key, value)

        # explain=True drops every other parameter and describes the endpoint
        described = await client.market_data.get_price_history(explain=True)
        logger.info("get_price_history explain: %s", described.get("Payload"))

        # Concurrent calls share one session
        summary, rates = await asyncio.gather(
            client.market_data.get_market_summary(),
            client.tools.get_exchange_rates(),
        )
        logger.info("Market summary: %s", summary["ResponseMessage"])
        logger.info("Exchange rates: %s", rates["ResponseMessage"])


# ---------------------------------------------------------------------------
# Part 2 – sync: write endpoint + error handling
# ---------------------------------------------------------------------------

def listing_demo() -> None:
    logger.info("=== Listing demo ===")
    if not LOCATION_ID:
        logger.info("MARKETPLACE_LOCATION_ID not set – skipping")
        return

    with SyncApiClient.from_env() as client:
        params = SetListingParams(
            location_id=LOCATION_ID,
            price="1000000",
            description="quickstart demo listing",
            is_writing_request=True,
        )
        try:
            envelope = client.listing.set_listing(params)
            logger.info("Listing placed: %s", envelope["ResponseMessage"])
        except ApiError as exc:
            logger.warning("Listing rejected [%s]: %s", exc.status_code, exc.message)


if __name__ == "__main__":
    asyncio.run(market_data_demo())
    listing_demo()
