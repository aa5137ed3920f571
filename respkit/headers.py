"""A response that writes status, headers and cookies only."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus

from respkit.httpio import MatchingContext, ResponseWriter, set_cookie
from respkit.response import (
    HEADER_CONTENT_TYPE,
    HEADER_CONTENT_TYPE_OPTIONS,
    HttpCookies,
    HttpHeaders,
    HttpResponse,
    ResponseError,
    new_empty_http_cookie,
    new_http_headers,
)


@dataclass
class HttpHeadersResponse(HttpResponse):
    """Writes the status code, custom headers and cookies of a response."""

    http_status_code: int = 0
    content_type: str = ""
    http_headers: HttpHeaders | None = None
    http_cookies: HttpCookies | None = None

    def status_code(self) -> int:
        if self.http_status_code == 0:
            return HTTPStatus.OK.value
        return self.http_status_code

    def headers(self) -> HttpHeaders:
        if self.http_headers is None:
            self.http_headers = new_http_headers()
        return self.http_headers

    def cookies(self) -> HttpCookies:
        if self.http_cookies is None:
            self.http_cookies = new_empty_http_cookie()
        return self.http_cookies

    def write(self, writer: ResponseWriter, mc: MatchingContext) -> None:
        """Write the header part; the header and cookie maps are released afterwards."""
        try:
            status_code = self.status_code()
            if status_code < 100 or status_code > 999:
                raise ResponseError("http status code should be between 100 and 999")

            for cookie in (self.http_cookies or {}).values():
                set_cookie(writer, cookie)

            header = writer.header()
            for key, value in (self.http_headers or {}).items():
                header.set(key, value)

            if not header.get(HEADER_CONTENT_TYPE) and self.content_type:
                header.set(HEADER_CONTENT_TYPE, self.content_type)
            if not header.get(HEADER_CONTENT_TYPE_OPTIONS):
                header.set(HEADER_CONTENT_TYPE_OPTIONS, "nosniff")

            writer.write_header(status_code)
        finally:
            if self.http_headers is not None:
                self.http_headers.release()
            if self.http_cookies is not None:
                self.http_cookies.release()


def internal_server_error_http_response() -> HttpHeadersResponse:
    """Return a response carrying status 500."""
    return HttpHeadersResponse(http_status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value)