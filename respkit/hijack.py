"""A response that hands the underlying connection over to the application."""

from __future__ import annotations

from typing import Any, Callable

from respkit.httpio import MatchingContext, ResponseWriter
from respkit.response import HttpCookies, HttpHeaders, HttpResponse, ResponseError

HijackCallback = Callable[[Any, Any, "BaseException | None"], None]


class HttpHijackConnectionResponse(HttpResponse):
    """Hijacks the connection and passes it, or the failure, to a callback.

    A writer supports hijacking if it has a ``hijack()`` method returning
    ``(connection, read_writer)``.
    """

    def __init__(self, hijack_callback: HijackCallback) -> None:
        self._callback = hijack_callback

    def status_code(self) -> int:
        return 0

    def headers(self) -> HttpHeaders | None:
        return None

    def cookies(self) -> HttpCookies | None:
        return None

    def write(self, writer: ResponseWriter, mc: MatchingContext) -> None:
        hijack = getattr(writer, "hijack", None)
        conn = read_writer = None
        error: BaseException | None = None
        if callable(hijack):
            try:
                conn, read_writer = hijack()
            except Exception as exc:
                error = exc
        else:
            error = ResponseError("the current response writer doesn't support hijack functionality")
        self._callback(conn, read_writer, error)


def new_http_hijack_connection_response(hijack_callback: HijackCallback) -> HttpHijackConnectionResponse:
    """Create a response that hijacks the current connection."""
    return HttpHijackConnectionResponse(hijack_callback)