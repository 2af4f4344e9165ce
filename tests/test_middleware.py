"""
tests/test_middleware.py – AuthInjector, ResponseNormalizer and pipeline order.

All tests are offline.  They verify:
  1. The API key is appended exactly once, last, with the right separator.
  2. ResponseCode 100 is the only success; the envelope is unwrapped.
  3. HTTP, network and local transport failures map onto ApiError fields.
  4. The pipeline runs requests forward and responses / errors in reverse.
"""

from __future__ import annotations

import pytest

from marketplace_sdk.encoding import encode_params
from marketplace_sdk.errors import NETWORK_ERROR_MESSAGE, ApiError, TransportError
from marketplace_sdk.middleware import AuthInjector, ResponseNormalizer, default_middleware
from marketplace_sdk.transport import (
    Middleware,
    MiddlewarePipeline,
    TransportRequest,
    TransportResponse,
)


def _request(url: str) -> TransportRequest:
    return TransportRequest(method="GET", url=url, base_url="https://api.example.com")


def _envelope(code: int, message: str = "Success") -> dict:
    return {
        "RequestPath":     "v1/medal/get_medals",
        "RequestStatus":   "Succeeded" if code == 100 else "Failed",
        "ResponseCode":    code,
        "ResponseMessage": message,
    }


# ---------------------------------------------------------------------------
# AuthInjector
# ---------------------------------------------------------------------------

class TestAuthInjector:
    def test_question_mark_when_no_query(self) -> None:
        req = AuthInjector("K").process_request(_request("/v1/medal/get_medals"))
        assert req.url == "/v1/medal/get_medals?key=K"

    def test_ampersand_when_query_present(self) -> None:
        req = AuthInjector("K").process_request(_request("/v1/medal/get_medals?page=2"))
        assert req.url == "/v1/medal/get_medals?page=2&key=K"

    def test_key_survives_explain_override(self) -> None:
        url = encode_params("/v1/listing/get_listings", {"page": 1, "explain": True})
        req = AuthInjector("K").process_request(_request(url))
        assert req.url == "/v1/listing/get_listings?explain=true&key=K"

    @pytest.mark.parametrize("params", [None, {}, {"page": 1, "sortBy": "price"}, {"explain": True, "page": 1}])
    def test_key_present_exactly_once_and_last(self, params) -> None:
        url = encode_params("/v1/listing/get_listings", params)
        req = AuthInjector("K").process_request(_request(url))
        assert req.url.count("key=K") == 1
        assert req.url.endswith("key=K")

    def test_empty_url_left_alone(self) -> None:
        req = _request("")
        assert AuthInjector("K").process_request(req) is req

    def test_key_is_percent_encoded(self) -> None:
        req = AuthInjector("a&b c").process_request(_request("/x"))
        assert req.url == "/x?key=a%26b%20c"

    def test_original_request_not_mutated(self) -> None:
        req = _request("/x")
        AuthInjector("K").process_request(req)
        assert req.url == "/x"


# ---------------------------------------------------------------------------
# ResponseNormalizer – responses
# ---------------------------------------------------------------------------

class TestNormalizerResponses:
    def test_success_returns_envelope(self) -> None:
        env  = _envelope(100)
        resp = TransportResponse(status=200, data=env)
        assert ResponseNormalizer().process_response(resp) is env

    @pytest.mark.parametrize("code", [101, 0, -1, 200, 500])
    def test_non_100_code_raises(self, code: int) -> None:
        env  = _envelope(code, "Listing not found")
        resp = TransportResponse(status=200, data=env)
        with pytest.raises(ApiError) as exc_info:
            ResponseNormalizer().process_response(resp)
        assert exc_info.value.status_code == code
        assert exc_info.value.message == "Listing not found"
        assert exc_info.value.data is env

    def test_message_is_stringified(self) -> None:
        resp = TransportResponse(status=200, data=_envelope(7, 42))   # type: ignore[arg-type]
        with pytest.raises(ApiError) as exc_info:
            ResponseNormalizer().process_response(resp)
        assert exc_info.value.message == "42"

    def test_numeric_string_code_succeeds(self) -> None:
        env  = {**_envelope(100), "ResponseCode": "100"}
        resp = TransportResponse(status=200, data=env)
        assert ResponseNormalizer().process_response(resp) is env

    def test_numeric_string_failure_code_coerced(self) -> None:
        resp = TransportResponse(status=200, data={**_envelope(101, "Listing not found"), "ResponseCode": " 101 "})
        with pytest.raises(ApiError) as exc_info:
            ResponseNormalizer().process_response(resp)
        assert exc_info.value.status_code == 101

    @pytest.mark.parametrize("code", ["abc", True, 100.5, None])
    def test_non_integer_code_is_failure_without_status(self, code) -> None:
        resp = TransportResponse(status=200, data={"ResponseCode": code})
        with pytest.raises(ApiError) as exc_info:
            ResponseNormalizer().process_response(resp)
        assert exc_info.value.status_code is None
        assert exc_info.value.message == f"Unexpected response code {code!r}"

    def test_missing_code_is_failure(self) -> None:
        resp = TransportResponse(status=200, data={"hello": "world"})
        with pytest.raises(ApiError) as exc_info:
            ResponseNormalizer().process_response(resp)
        assert exc_info.value.status_code is None

    def test_non_json_body_is_failure(self) -> None:
        resp = TransportResponse(status=200, data="<html>oops</html>")
        with pytest.raises(ApiError) as exc_info:
            ResponseNormalizer().process_response(resp)
        assert exc_info.value.data == "<html>oops</html>"


# ---------------------------------------------------------------------------
# ResponseNormalizer – transport errors
# ---------------------------------------------------------------------------

class TestNormalizerErrors:
    def test_http_error_with_envelope_message(self) -> None:
        req  = _request("/x")
        body = _envelope(500, "Internal failure")
        err  = TransportError(
            "Request failed with status code 500",
            request=req,
            response=TransportResponse(status=500, data=body, request=req),
        )
        result = ResponseNormalizer().process_error(err)
        assert isinstance(result, ApiError)
        assert result.status_code == 500
        assert result.message == "Internal failure"
        assert result.data is body

    def test_http_error_without_body_uses_transport_message(self) -> None:
        req = _request("/x")
        err = TransportError(
            "Request failed with status code 503",
            request=req,
            response=TransportResponse(status=503, data=None, request=req),
        )
        result = ResponseNormalizer().process_error(err)
        assert result.status_code == 503
        assert result.message == "Request failed with status code 503"

    def test_network_error(self) -> None:
        req    = _request("/x")
        result = ResponseNormalizer().process_error(TransportError("Connection refused", request=req))
        assert isinstance(result, ApiError)
        assert result.message == NETWORK_ERROR_MESSAGE
        assert result.status_code is None
        assert result.data is req

    def test_local_error(self) -> None:
        result = ResponseNormalizer().process_error(TransportError("Invalid URL: nope"))
        assert isinstance(result, ApiError)
        assert result.message == "Invalid URL: nope"
        assert result.status_code is None
        assert result.data is None

    def test_foreign_exception_passes_through(self) -> None:
        exc = RuntimeError("x")
        assert ResponseNormalizer().process_error(exc) is exc


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

class _Recorder(Middleware):
    def __init__(self, name: str, log: list[str]) -> None:
        self.name = name
        self.log  = log

    def process_request(self, request: TransportRequest) -> TransportRequest:
        self.log.append(f"req:{self.name}")
        return request

    def process_response(self, response):
        self.log.append(f"resp:{self.name}")
        return response

    def process_error(self, error: Exception) -> Exception:
        self.log.append(f"err:{self.name}")
        return error


class TestPipeline:
    def test_request_forward_response_reverse(self) -> None:
        log: list[str] = []
        pipeline = MiddlewarePipeline([_Recorder("a", log), _Recorder("b", log)])
        pipeline.prepare(_request("/x"))
        pipeline.resolve(TransportResponse(status=200, data={}))
        assert log == ["req:a", "req:b", "resp:b", "resp:a"]

    def test_errors_reverse(self) -> None:
        log: list[str] = []
        pipeline = MiddlewarePipeline([_Recorder("a", log), _Recorder("b", log)])
        pipeline.reject(TransportError("x"))
        assert log == ["err:b", "err:a"]

    def test_default_middleware_order(self) -> None:
        mws = default_middleware("K")
        assert [type(m) for m in mws] == [AuthInjector, ResponseNormalizer]

    def test_default_pipeline_end_to_end(self) -> None:
        pipeline = MiddlewarePipeline(default_middleware("K"))
        req      = pipeline.prepare(_request("/v1/medal/get_medals"))
        assert req.url == "/v1/medal/get_medals?key=K"
        env = _envelope(100)
        assert pipeline.resolve(TransportResponse(status=200, data=env, request=req)) is env
