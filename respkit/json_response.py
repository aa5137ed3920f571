"""JSON responses."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from respkit.headers import HttpHeadersResponse
from respkit.httpio import MatchingContext, ResponseWriter
from respkit.response import HttpCookies, HttpHeaders, ResponseError

JSON_CONTENT_TYPE = "application/json"
EMPTY_JSON = b"{}"

_HTML_SAFE = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _marshal(payload: Any) -> bytes:
    text = json.dumps(
        payload,
        separators=(",", ":"),
        sort_keys=True,
        ensure_ascii=False,
        allow_nan=False,
        default=_default,
    )
    for char, escaped in _HTML_SAFE.items():
        text = text.replace(char, escaped)
    return text.encode("utf-8")


@dataclass
class HttpJsonResponse(HttpHeadersResponse):
    """Serialises ``payload`` to JSON as the response body."""

    payload: Any = None

    def write(self, writer: ResponseWriter, mc: MatchingContext) -> None:
        super().write(writer, mc)

        if self.payload is None:
            body = EMPTY_JSON
        else:
            try:
                body = _marshal(self.payload)
            except (TypeError, ValueError) as exc:
                raise ResponseError(f"failed to marshal JSON response, err: {exc}") from exc

        try:
            writer.write(body)
        except Exception as exc:
            raise ResponseError(f"failed to write the JSON response, err: {exc}") from exc


def json_http_response_ok(payload: Any) -> HttpJsonResponse:
    """Create a 200 JSON response."""
    return json_http_response_with_headers_and_cookies(HTTPStatus.OK.value, payload, None, None)


def json_http_response(status_code: int, payload: Any) -> HttpJsonResponse:
    """Create a JSON response with the given status code."""
    return json_http_response_with_headers_and_cookies(status_code, payload, None, None)


def json_http_response_with_cookies(
    status_code: int, payload: Any, cookies: HttpCookies | None
) -> HttpJsonResponse:
    """Create a JSON response with custom cookies."""
    return json_http_response_with_headers_and_cookies(status_code, payload, None, cookies)


def json_http_response_with_headers(
    status_code: int, payload: Any, headers: HttpHeaders | None
) -> HttpJsonResponse:
    """Create a JSON response with custom headers."""
    return json_http_response_with_headers_and_cookies(status_code, payload, headers, None)


def json_http_response_with_headers_and_cookies(
    status_code: int,
    payload: Any,
    headers: HttpHeaders | None,
    cookies: HttpCookies | None,
) -> HttpJsonResponse:
    """Create a JSON response with custom headers and cookies."""
    return HttpJsonResponse(
        http_status_code=status_code,
        content_type=JSON_CONTENT_TYPE,
        http_headers=headers,
        http_cookies=cookies,
        payload=payload,
    )


def _error_to_string(err: BaseException | None) -> str:
    if err is None:
        return ""
    message = str(err)
    if not message:
        return ""
    return message[0].upper() + message[1:]


def json_error_http_response(status_code: int, err: BaseException | None) -> HttpJsonResponse:
    """Create a JSON error response of the form ``{"error": message}``."""
    return json_error_http_response_with_headers_and_cookies(status_code, err, None, None)


def json_error_http_response_with_cookies(
    status_code: int, err: BaseException | None, cookies: HttpCookies | None
) -> HttpJsonResponse:
    """Create a JSON error response with custom cookies."""
    return json_error_http_response_with_headers_and_cookies(status_code, err, None, cookies)


def json_error_http_response_with_headers(
    status_code: int, err: BaseException | None, headers: HttpHeaders | None
) -> HttpJsonResponse:
    """Create a JSON error response with custom headers."""
    return json_error_http_response_with_headers_and_cookies(status_code, err, headers, None)


def json_error_http_response_with_headers_and_cookies(
    status_code: int,
    err: BaseException | None,
    headers: HttpHeaders | None,
    cookies: HttpCookies | None,
) -> HttpJsonResponse:
    """Create a JSON error response with custom headers and cookies.

    The error message gets its first letter capitalised.
    """
    return HttpJsonResponse(
        http_status_code=status_code,
        content_type=JSON_CONTENT_TYPE,
        http_headers=headers,
        http_cookies=cookies,
        payload={"error": _error_to_string(err)},
    )