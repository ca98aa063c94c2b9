"""RequestMap - ordered key/value parameters of one outbound request.

Converters flatten domain objects into a RequestMap; the map is then encoded
either as a URL query string (GET) or as a form-encoded RequestBody (POST).

Keys keep their first insertion position. Writing an existing key replaces
its value in place, so a key never appears twice in the encoded output.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any
from urllib.parse import urlencode

from pagseguro_client.errors import EncodingError
from pagseguro_client.models import RequestBody

_TWO_PLACES = Decimal("0.01")


class CharSet:
    """Charsets the service accepts."""

    UTF_8 = "UTF-8"
    ISO_8859_1 = "ISO-8859-1"


def format_currency(value: Any) -> str:
    """Format a monetary value with two decimals and '.' as separator.

    Rounds ROUND_HALF_UP. Floats go through str() first so that 10.005 is
    treated as the literal the caller wrote, not its binary approximation.
    Zero is never signed. Output never depends on the process locale.

    Raises:
        EncodingError: If *value* is not a finite number.
    """
    if isinstance(value, bool):
        raise EncodingError(f"Currency value must be numeric, got bool {value!r}")
    try:
        if isinstance(value, Decimal):
            amount = value
        elif isinstance(value, float):
            amount = Decimal(str(value))
        elif isinstance(value, (int, str)):
            amount = Decimal(value)
        else:
            raise EncodingError(
                f"Currency value must be numeric, got {type(value).__name__}"
            )
    except InvalidOperation as e:
        raise EncodingError(f"Invalid currency value: {value!r}") from e

    if not amount.is_finite():
        raise EncodingError(f"Currency value must be finite, got {value!r}")
    try:
        rounded = amount.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise EncodingError(f"Currency value out of range: {value!r}") from e
    if rounded.is_zero():
        rounded = rounded.copy_abs()
    return f"{rounded:f}"


def _camel_join(prefix: str, key: str) -> str:
    """``shippingAddress`` + ``street`` → ``shippingAddressStreet``."""
    if not key:
        return prefix
    return prefix + key[0].upper() + key[1:]


class RequestMap(Mapping[str, str]):
    """Ordered string-to-string request parameters.

    Usage:
        request_map = RequestMap()
        request_map.put_string("transactionCode", code)
        request_map.put_currency("refundValue", Decimal("10.5"))
        body = request_map.to_http_request_body(CharSet.ISO_8859_1)
    """

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}

    # --- Mapping protocol (read-only view) ---

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"RequestMap({self._entries!r})"

    # --- Typed setters ---

    def _put(self, key: str, value: str) -> None:
        if not isinstance(key, str) or not key:
            raise EncodingError(f"Parameter key must be a non-empty string, got {key!r}")
        self._entries[key] = value

    def put_string(self, key: str, value: str | None, *, optional: bool = False) -> None:
        """Store a string value.

        Args:
            key: Parameter name.
            value: Parameter value.
            optional: When True, a None value is skipped instead of rejected.

        Raises:
            EncodingError: If *value* is None (and not optional) or not a str.
        """
        if value is None:
            if optional:
                return
            raise EncodingError(f"Value for '{key}' must not be None")
        if not isinstance(value, str):
            raise EncodingError(
                f"Value for '{key}' must be a string, got {type(value).__name__}"
            )
        self._put(key, value)

    def put_integer(self, key: str, value: int | None, *, optional: bool = False) -> None:
        if value is None:
            if optional:
                return
            raise EncodingError(f"Value for '{key}' must not be None")
        if isinstance(value, bool) or not isinstance(value, int):
            raise EncodingError(
                f"Value for '{key}' must be an integer, got {type(value).__name__}"
            )
        self._put(key, str(value))

    def put_currency(self, key: str, value: Any, *, optional: bool = False) -> None:
        """Store a monetary value formatted by format_currency()."""
        if value is None:
            if optional:
                return
            raise EncodingError(f"Value for '{key}' must not be None")
        try:
            self._put(key, format_currency(value))
        except EncodingError as e:
            raise EncodingError(f"Value for '{key}': {e}") from e

    def put_date(self, key: str, value: date | None, *, optional: bool = False) -> None:
        """Store a date in the service's dd/MM/yyyy format."""
        if value is None:
            if optional:
                return
            raise EncodingError(f"Value for '{key}' must not be None")
        if not isinstance(value, date):
            raise EncodingError(
                f"Value for '{key}' must be a date, got {type(value).__name__}"
            )
        self._put(key, value.strftime("%d/%m/%Y"))

    def put_map(
        self,
        other: Mapping[str, str],
        prefix: str | None = None,
        separator: str | None = None,
    ) -> RequestMap:
        """Merge every entry of *other* into this map, in *other*'s order.

        Args:
            other: Entries to merge (typically another converter's output).
            prefix: Optional parent key prepended to each merged key.
            separator: Placed between prefix and key. None camel-case joins
                them, which is how the service names nested parameters
                (``creditCardHolder`` + ``name`` → ``creditCardHolderName``).

        Returns:
            This map, so merges can be chained.
        """
        # Snapshot: other may be this map.
        for key, value in list(other.items()):
            if prefix is None:
                merged_key = key
            elif separator is None:
                merged_key = _camel_join(prefix, key)
            else:
                merged_key = f"{prefix}{separator}{key}"
            self.put_string(merged_key, value)
        return self

    def merged_with(self, other: Mapping[str, str]) -> RequestMap:
        """Return a new map with this map's entries followed by *other*'s."""
        merged = RequestMap()
        merged.put_map(self)
        merged.put_map(other)
        return merged

    # --- Encoders ---

    def to_url_encode(self, charset: str) -> str:
        """Encode as ``key=value&...`` with form percent-encoding in *charset*.

        Raises:
            EncodingError: If a key or value is not representable in *charset*.
        """
        try:
            return urlencode(list(self._entries.items()), encoding=charset)
        except UnicodeEncodeError as e:
            raise EncodingError(
                f"Parameter contains {e.object[e.start:e.end]!r}, "
                f"which cannot be encoded as {charset}"
            ) from e
        except LookupError as e:
            raise EncodingError(f"Unknown charset: {charset}") from e

    def to_http_request_body(self, charset: str) -> RequestBody:
        """Encode as a form body carrying *charset* in its content type."""
        return RequestBody(content=self.to_url_encode(charset), charset=charset)
