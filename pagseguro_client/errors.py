"""Error taxonomy for the PagSeguro client.

Every error raised by the library derives from PagSeguroError so callers can
catch the whole family in one place, while still branching on the concrete
kind:

- EncodingError: a caller passed an invalid value into a RequestMap.
- TransportError: the request never produced a response (network, I/O).
- DecodeFault: the service answered with a well-formed <errors> document.
- MalformedResponse: the body is not the structure that was asked for.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pagseguro_client.models import ServiceError


class PagSeguroError(Exception):
    """Base class for all library errors."""


class EncodingError(PagSeguroError, ValueError):
    """Raised when a value cannot be stored in or encoded from a RequestMap."""


class TransportError(PagSeguroError):
    """Raised when an HTTP exchange fails (connection, timeout, read/write).

    The underlying httpx error is chained as ``__cause__``.
    """


class DecodeFault(PagSeguroError):
    """Raised when the service rejects a request with an <errors> document.

    This is a business-level rejection, not a transport failure: the request
    reached the service and the answer is readable.
    """

    def __init__(self, errors: list[ServiceError], status_code: int) -> None:
        self.errors = errors
        self.status_code = status_code
        summary = "; ".join(f"[{e.code}] {e.message}" for e in errors)
        super().__init__(f"Service rejected request (HTTP {status_code}): {summary}")

    @property
    def codes(self) -> list[str]:
        return [e.code for e in self.errors]


class MalformedResponse(PagSeguroError):
    """Raised when a response body cannot be decoded into the expected shape."""

    def __init__(self, message: str, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"{message} (HTTP {status_code})")
