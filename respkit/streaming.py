"""Responses that copy a binary stream to the client."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from http import HTTPStatus
from typing import BinaryIO

from respkit.headers import HttpHeadersResponse
from respkit.httpio import MatchingContext, ResponseWriter
from respkit.response import HttpCookies, HttpHeaders, ResponseError


@dataclass
class HttpStreamResponse(HttpHeadersResponse):
    """Copies everything readable from ``reader`` into the response body."""

    reader: BinaryIO | None = None

    def write(self, writer: ResponseWriter, mc: MatchingContext) -> None:
        super().write(writer, mc)
        if self.reader is not None:
            try:
                shutil.copyfileobj(self.reader, writer)
            except Exception as exc:
                raise ResponseError(f"failed to transfer the input stream, err: {exc}") from exc


def stream_http_response(content_type: str, reader: BinaryIO | None) -> HttpStreamResponse:
    """Create a 200 streaming response."""
    return HttpStreamResponse(http_status_code=HTTPStatus.OK.value, content_type=content_type, reader=reader)


def stream_http_response_with_headers(status_code, content_type, headers, reader) -> HttpStreamResponse:
    """Create a streaming response with custom headers."""
    return stream_http_response_with_headers_and_cookies(status_code, content_type, headers, None, reader)


def stream_http_response_with_cookies(status_code, content_type, cookies, reader) -> HttpStreamResponse:
    """Create a streaming response with custom cookies."""
    return stream_http_response_with_headers_and_cookies(status_code, content_type, None, cookies, reader)


def stream_http_response_with_headers_and_cookies(
    status_code: int,
    content_type: str,
    headers: HttpHeaders | None,
    cookies: HttpCookies | None,
    reader: BinaryIO | None,
) -> HttpStreamResponse:
    """Create a streaming response with custom headers and cookies."""
    return HttpStreamResponse(
        http_status_code=status_code,
        content_type=content_type,
        http_headers=headers,
        http_cookies=cookies,
        reader=reader,
    )