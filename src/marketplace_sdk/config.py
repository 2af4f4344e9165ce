"""
config.py – Client configuration.

    config = ClientConfig(base_url="https://api.example.com", api_key="...")
    config = ClientConfig.from_env()      # MARKETPLACE_* environment variables

Environment variables
---------------------
    MARKETPLACE_BASE_URL   scheme + host (+ optional path) root
    MARKETPLACE_API_KEY    API key appended to every request
    MARKETPLACE_TIMEOUT    optional total timeout in seconds
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_BASE_URL = "MARKETPLACE_BASE_URL"
ENV_API_KEY  = "MARKETPLACE_API_KEY"
ENV_TIMEOUT  = "MARKETPLACE_TIMEOUT"


class ClientConfig(BaseModel):
    """Immutable connection settings shared by ApiClient and SyncApiClient."""
    model_config = ConfigDict(frozen=True)

    base_url: str
    api_key:  str = Field(repr=False)
    timeout:  Optional[float] = Field(default=None, gt=0)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("base_url must be a non-empty URL")
        return v.rstrip("/")

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("api_key must be a non-empty string")
        return v

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """Build a config from MARKETPLACE_* variables (os.environ by default)."""
        env     = os.environ if environ is None else environ
        timeout = env.get(ENV_TIMEOUT) or None
        return cls(
            base_url=env.get(ENV_BASE_URL, ""),
            api_key=env.get(ENV_API_KEY, ""),
            timeout=timeout,
        )
