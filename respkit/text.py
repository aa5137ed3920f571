"""Plain text and HTML responses."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus

from respkit.headers import HttpHeadersResponse
from respkit.httpio import MatchingContext, ResponseWriter
from respkit.response import HttpCookies, HttpHeaders, write_text_response

PLAIN_TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"
HTML_CONTENT_TYPE = "text/html; charset=utf-8"

_OK = HTTPStatus.OK.value


@dataclass
class HttpTextResponse(HttpHeadersResponse):
    """Writes a string as the response body."""

    payload: str = ""

    def write(self, writer: ResponseWriter, mc: MatchingContext) -> None:
        super().write(writer, mc)
        write_text_response(writer, self.payload)


def _text(
    content_type: str,
    status_code: int,
    payload: str,
    headers: HttpHeaders | None = None,
    cookies: HttpCookies | None = None,
) -> HttpTextResponse:
    # Headers and cookies given here are released for reuse once written.
    return HttpTextResponse(
        http_status_code=status_code,
        content_type=content_type,
        http_headers=headers,
        http_cookies=cookies,
        payload=payload,
    )


def plain_text_http_response_ok(payload: str) -> HttpTextResponse:
    """Create a 200 plain text response."""
    return _text(PLAIN_TEXT_CONTENT_TYPE, _OK, payload)


def plain_text_http_response(status_code: int, payload: str) -> HttpTextResponse:
    """Create a plain text response with the given status code."""
    return _text(PLAIN_TEXT_CONTENT_TYPE, status_code, payload)


def plain_text_http_response_with_headers(status_code: int, payload: str, headers: HttpHeaders | None) -> HttpTextResponse:
    """Create a plain text response with custom headers."""
    return _text(PLAIN_TEXT_CONTENT_TYPE, status_code, payload, headers)


def plain_text_response_with_headers_and_cookies(status_code, payload, headers, cookies) -> HttpTextResponse:
    """Create a plain text response with custom headers and cookies."""
    return _text(PLAIN_TEXT_CONTENT_TYPE, status_code, payload, headers, cookies)


def html_http_response_ok(payload: str) -> HttpTextResponse:
    """Create a 200 HTML response."""
    return _text(HTML_CONTENT_TYPE, _OK, payload)


def html_http_response(status_code: int, payload: str) -> HttpTextResponse:
    """Create an HTML response with the given status code."""
    return _text(HTML_CONTENT_TYPE, status_code, payload)


def html_http_response_with_headers(status_code: int, payload: str, headers: HttpHeaders | None) -> HttpTextResponse:
    """Create an HTML response with custom headers."""
    return _text(HTML_CONTENT_TYPE, status_code, payload, headers)


def html_response_with_headers_and_cookies(status_code, payload, headers, cookies) -> HttpTextResponse:
    """Create an HTML response with custom headers and cookies."""
    return _text(HTML_CONTENT_TYPE, status_code, payload, headers, cookies)