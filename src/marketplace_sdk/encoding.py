"""
encoding.py – Query-string construction for endpoint parameter bags.

Rules
-----
* No bag (or a bag that encodes to nothing) leaves the URL untouched.
* A truthy ``explain`` replaces the whole bag: the query becomes exactly
  ``explain=true`` and every sibling parameter is dropped.
* dict / list / tuple values are JSON-encoded (compact form) and then
  percent-encoded as a single value.
* Booleans encode as ``true`` / ``false``; None means "absent" and is skipped.
* ``&`` joins onto a URL that already has a query, ``?`` otherwise.

    >>> encode_params("/v1/listing/get_listings", {"page": 2, "explain": False})
    '/v1/listing/get_listings?page=2'
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Optional
from urllib.parse import urlencode

EXPLAIN_KEY = "explain"


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def flatten_params(params: Mapping[str, Any]) -> dict[str, str]:
    """Reduce a parameter bag to the flat str → str mapping that goes on the wire."""
    explain = params.get(EXPLAIN_KEY)
    if explain:
        return {EXPLAIN_KEY: _stringify(explain)}

    return {
        key: _stringify(value)
        for key, value in params.items()
        if key != EXPLAIN_KEY and value is not None
    }


def join_query(base_url: str, query: str) -> str:
    """Append an already-encoded query fragment to base_url."""
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}{query}"


def encode_params(base_url: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Return base_url with params encoded onto it as a query string."""
    if params is None:
        return base_url

    query = urlencode(flatten_params(params))
    if not query:
        return base_url
    return join_query(base_url, query)
