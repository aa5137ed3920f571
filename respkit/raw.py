"""Responses whose body is written by a user-supplied function."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Callable

from respkit.headers import HttpHeadersResponse
from respkit.httpio import MatchingContext, ResponseWriter
from respkit.response import HttpCookies, HttpHeaders, ResponseError

RawWriterFunc = Callable[[ResponseWriter], None]


@dataclass
class HttpRawResponse(HttpHeadersResponse):
    """Hands the response writer to ``write_func`` after writing the headers."""

    write_func: RawWriterFunc | None = None

    def write(self, writer: ResponseWriter, mc: MatchingContext) -> None:
        super().write(writer, mc)
        if self.write_func is not None:
            try:
                self.write_func(writer)
            except Exception as exc:
                raise ResponseError(f"failed to write raw data, err: {exc}") from exc


def raw_writer_http_response(content_type: str, write_func: RawWriterFunc | None) -> HttpRawResponse:
    """Create a 200 response written by ``write_func``."""
    return HttpRawResponse(HTTPStatus.OK.value, content_type, write_func=write_func)


def raw_writer_http_response_with_headers(status_code, content_type, headers, write_func) -> HttpRawResponse:
    """Create a raw response with custom headers."""
    return HttpRawResponse(status_code, content_type, http_headers=headers, write_func=write_func)


def raw_writer_http_response_with_cookies(status_code, content_type, cookies, write_func) -> HttpRawResponse:
    """Create a raw response with custom cookies."""
    return HttpRawResponse(status_code, content_type, http_cookies=cookies, write_func=write_func)


def raw_writer_http_response_with_headers_and_cookies(
    status_code: int,
    content_type: str,
    headers: HttpHeaders | None,
    cookies: HttpCookies | None,
    write_func: RawWriterFunc | None,
) -> HttpRawResponse:
    """Create a raw response with custom headers and cookies."""
    return HttpRawResponse(status_code, content_type, headers, cookies, write_func)