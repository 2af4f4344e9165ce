"""
errors.py – Error taxonomy for the marketplace SDK.

Every failed call surfaces as a single ApiError.  The kind of failure is
told apart by its fields, not by subclass:

  Application error : envelope received, ResponseCode != 100
                      status_code = ResponseCode, message = ResponseMessage
  HTTP error        : server answered with a non-2xx status
                      status_code = HTTP status
  Network error     : request sent, nothing came back (incl. timeouts)
                      message = "Network Error", status_code = None
  Local error       : request could not be issued at all
                      message = diagnostic text, no status_code / data

TransportError is internal plumbing: the transports raise it and the
ResponseNormalizer middleware turns it into an ApiError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .transport import TransportRequest, TransportResponse


NETWORK_ERROR_MESSAGE = "Network Error"


class ApiError(Exception):
    """Raised for every failed marketplace API call.  Its fields are read-only."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        data: Any = None,
    ) -> None:
        self._message     = message
        self._status_code = status_code
        self._data        = data
        super().__init__(message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def status_code(self) -> Optional[int]:
        return self._status_code

    @property
    def data(self) -> Any:
        return self._data

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"[{self.status_code}] {self.message}"

    def __repr__(self) -> str:
        return f"ApiError(message={self.message!r}, status_code={self.status_code!r})"


class TransportError(Exception):
    """
    Raised by a transport when an exchange fails below the envelope level.

    response : set when the server answered with an error status
    request  : set when the request was sent (or at least built)
    """

    def __init__(
        self,
        message: str,
        *,
        request:  Optional["TransportRequest"]  = None,
        response: Optional["TransportResponse"] = None,
    ) -> None:
        self.message  = message
        self.request  = request
        self.response = response
        super().__init__(message)
