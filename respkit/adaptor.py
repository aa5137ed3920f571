"""Adapters turning plain request handlers into responses."""

from __future__ import annotations

from typing import Any, Callable

from respkit.httpio import MatchingContext, Request, ResponseWriter, set_cookie
from respkit.response import HttpCookies, HttpHeaders, HttpResponse

HandlerFunc = Callable[[ResponseWriter, "Request | None"], Any]


class HttpHandlerAdaptorResponse(HttpResponse):
    """Writes custom headers and cookies, then hands the writer to a handler."""

    def __init__(self, handler: HandlerFunc) -> None:
        self._handler = handler
        self._headers: HttpHeaders | None = None
        self._cookies: HttpCookies | None = None

    def status_code(self) -> int:
        return 0

    def headers(self) -> HttpHeaders:
        if self._headers is None:
            self._headers = HttpHeaders()
        return self._headers

    def cookies(self) -> HttpCookies:
        if self._cookies is None:
            self._cookies = HttpCookies()
        return self._cookies

    def write(self, writer: ResponseWriter, mc: MatchingContext) -> None:
        for cookie in (self._cookies or {}).values():
            set_cookie(writer, cookie)
        header = writer.header()
        for key, value in (self._headers or {}).items():
            header.set(key, value)
        self._handler(writer, mc.request)


def handler_func_adaptor(handler_func: HandlerFunc) -> HttpHandlerAdaptorResponse:
    """Adapt a ``handler(writer, request)`` callable to a response."""
    return HttpHandlerAdaptorResponse(handler_func)


def handler_adaptor(handler: Any) -> HttpHandlerAdaptorResponse:
    """Adapt an object with a ``serve_http(writer, request)`` method to a response."""
    serve = getattr(handler, "serve_http", None)
    if serve is None:
        if not callable(handler):
            raise TypeError("handler must define serve_http or be callable")
        serve = handler
    return HttpHandlerAdaptorResponse(serve)