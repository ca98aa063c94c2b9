"""HTTP Transport - executes one request and normalizes the response.

The transport does not interpret status codes: whatever the service sends
back, success or error body, is decoded to text with the response charset
and handed to the caller as an HttpResponse. Deciding what the body means is
the decoder's job.
"""

from __future__ import annotations

import logging
import platform
import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

import httpx

from pagseguro_client.errors import TransportError
from pagseguro_client.models import HttpMethod, HttpResponse, RequestBody

logger = logging.getLogger(__name__)

LIB_VERSION = "0.1.0"
DEFAULT_RESPONSE_CHARSET = "ISO-8859-1"

# Sent with every request; callers cannot override them.
IDENTIFICATION_HEADERS: Mapping[str, str] = MappingProxyType({
    "lib-description": f"python:{LIB_VERSION}",
    "language-engine-description": f"python:{platform.python_version()}",
})

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_TOKEN_PARAM = re.compile(r"(?i)(token=)[^&]*")


def resolve_charset(content_type: str | None) -> str:
    """Return the ``charset=`` parameter of a Content-Type header value.

    The parameter name is matched case-insensitively and its value trimmed
    (and unquoted). Falls back to DEFAULT_RESPONSE_CHARSET when the header or
    the parameter is missing.
    """
    if not content_type:
        return DEFAULT_RESPONSE_CHARSET
    for part in content_type.split(";"):
        part = part.strip()
        if part.lower().startswith("charset="):
            charset = part[len("charset="):].strip().strip('"').strip()
            if charset:
                return charset
    return DEFAULT_RESPONSE_CHARSET


def join_lines(text: str, separator: str) -> str:
    """Split *text* on \\r\\n, \\r or \\n and join the lines with *separator*.

    A trailing line terminator does not produce an empty last line.
    """
    lines = _LINE_BREAK.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return separator.join(lines)


def _redact(url: str) -> str:
    return _TOKEN_PARAM.sub(r"\1***", url)


class HttpTransport:
    """Blocking HTTP executor for the service.

    Usage:
        with HttpTransport(timeout=30.0) as transport:
            response = transport.execute(HttpMethod.POST, url, body=body)

    The underlying httpx.Client is thread-safe; concurrent execute() calls
    share nothing but the immutable identification headers.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        line_separator: str = "",
        identification_headers: Mapping[str, str] = IDENTIFICATION_HEADERS,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout: Timeout in seconds for connect, read and write.
            line_separator: Joins the lines of response bodies. The empty
                default drops line terminators; "\\n" keeps lines apart.
            identification_headers: Headers that win over caller headers.
            client: Pre-built httpx.Client (e.g. with a MockTransport). The
                transport only closes clients it created itself.
        """
        self._timeout = timeout
        self._line_separator = line_separator
        self._identification_headers = identification_headers
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def build_headers(
        self,
        headers: Mapping[str, str] | None,
        body: RequestBody | None,
    ) -> httpx.Headers:
        """Merge caller headers, the body content type and the fixed headers.

        Precedence, lowest first: caller headers, then Content-Type from the
        body (only when the caller set none), then the identification
        headers, which always win.
        """
        merged = httpx.Headers(dict(headers) if headers else None)
        if body is not None and "content-type" not in merged:
            merged["Content-Type"] = body.content_type_with_charset
        for name, value in self._identification_headers.items():
            merged[name] = value
        return merged

    def execute(
        self,
        method: HttpMethod | str,
        url: str,
        headers: Mapping[str, str] | None = None,
        body: RequestBody | None = None,
    ) -> HttpResponse:
        """Send one request and return the normalized response.

        Args:
            method: HTTP method.
            url: Absolute URL, query string included.
            headers: Extra request headers.
            body: Payload to write in its own charset. None sends no body.

        Returns:
            HttpResponse with the raw status code and the decoded body.

        Raises:
            TransportError: On connection, timeout, read/write or charset
                failures. The response is closed before it propagates.
        """
        method = HttpMethod(method)
        safe_url = _redact(url)
        logger.info("Executing [%s] on [%s]", method.value, safe_url)

        try:
            request_headers = self.build_headers(headers, body)
            content = body.content.encode(body.charset) if body is not None else None

            logger.debug("Opening connection")
            with self._client.stream(
                method.value,
                url,
                headers=request_headers,
                content=content,
                timeout=self._timeout,
            ) as http_response:
                # 4xx/5xx bodies carry the service's error document;
                # they are read exactly like a 2xx body.
                raw = http_response.read()
                status_code = http_response.status_code
                charset = resolve_charset(http_response.headers.get("content-type"))

        except httpx.TimeoutException as e:
            logger.error("Timeout executing [%s] on [%s]", method.value, safe_url)
            raise TransportError(f"Request timeout: {e}") from e
        except httpx.ConnectError as e:
            logger.error("Connection error executing [%s] on [%s]", method.value, safe_url)
            raise TransportError(f"Connection error: {e}") from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.error("Request error executing [%s] on [%s]", method.value, safe_url)
            raise TransportError(f"Request error: {e}") from e
        except (UnicodeEncodeError, LookupError) as e:
            logger.error("Encoding error executing [%s] on [%s]", method.value, safe_url)
            raise TransportError(f"Request encoding error: {e}") from e
        finally:
            logger.debug("Connection closed")

        try:
            text = raw.decode(charset, errors="replace")
        except LookupError as e:
            raise TransportError(f"Unsupported response charset '{charset}'") from e

        response = HttpResponse(
            status_code=status_code,
            body=join_lines(text, self._line_separator),
        )
        logger.debug("Response: HTTP %d, %d chars", response.status_code, len(response.body))
        return response
