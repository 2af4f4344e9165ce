"""
types.py – Pydantic v2 models for the marketplace API response envelope.

Every endpoint answers with the same JSON wrapper:

    {
      "RequestPath":     "v1/marketdata/get_highest_converting_locations",
      "RequestStatus":   "Succeeded",
      "ResponseCode":    100,
      "ResponseMessage": "Success",
      "Payload":         {...} | true | false
    }

ResponseCode 100 is the only success code.  The clients themselves return
the raw dict; use parse_envelope() when typed access is wanted:

    envelope = parse_envelope(await client.medal.get_medals())
    for kv in envelope.payload.key_value_list:
        ...
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

SUCCESS_CODE = 100


class KeyValue(BaseModel):
    """One entry of a payload's KeyValueList."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    key:   str = Field(alias="Key")
    value: Any = Field(default=None, alias="Value")


class Payload(BaseModel):
    """Structured payload: a named result with metadata and a key/value list."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name:             Optional[str]            = Field(default=None, alias="Name")
    meta_information: Optional[dict[str, Any]] = Field(default=None, alias="MetaInformation")
    key_value_list:   list[KeyValue]           = Field(default_factory=list, alias="KeyValueList")

    def as_dict(self) -> dict[str, Any]:
        """Collapse KeyValueList into a plain dict (later keys win)."""
        return {kv.key: kv.value for kv in self.key_value_list}


class ApiResponse(BaseModel):
    """The uniform response envelope."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    request_path:     str = Field(default="", alias="RequestPath")
    request_status:   str = Field(default="", alias="RequestStatus")
    response_code:    int = Field(alias="ResponseCode")
    response_message: str = Field(default="", alias="ResponseMessage")
    payload:          Optional[Union[bool, Payload]] = Field(default=None, alias="Payload")

    @property
    def succeeded(self) -> bool:
        return self.response_code == SUCCESS_CODE


def parse_envelope(raw: dict[str, Any]) -> ApiResponse:
    """Validate a raw envelope dict into an ApiResponse."""
    return ApiResponse.model_validate(raw)
