"""Server-sent events responses."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Callable, Iterable

from respkit.headers import HttpHeadersResponse
from respkit.httpio import MatchingContext, Request, ResponseWriter
from respkit.response import HttpCookies, HttpHeaders, ResponseError, write_text_response

HEADER_LAST_EVENT_ID = "Last-Event-Id"
EVENT_STREAM_CONTENT_TYPE = "text/event-stream"


class NotHttp2RequestError(ResponseError):
    """Raised when server-sent events are requested over a protocol other than HTTP/2."""

    def __init__(self, message: str = "rejected, not a HTTP/2 request") -> None:
        super().__init__(message)


@dataclass
class ServerSentEvent:
    """One server-sent event: name, id, data lines and reconnection time in ms."""

    name: str = ""
    id: str = ""
    data: list[str] = field(default_factory=list)
    retry: int = 0

    def __str__(self) -> str:
        parts: list[str] = []
        started = False
        if self.name:
            parts.append(f"event: {self.name}")
            started = True
        for line in self.data:
            parts.append(f"\ndata: {line}" if started else f"data: {line}")
            started = True
        if self.id:
            parts.append(f"\nid: {self.id}")
        if self.retry > 0:
            parts.append(f"\nretry: {self.retry}")
        text = "".join(parts)
        return text + "\n\n" if text else ""


# Called with the request's cancellation event and the client's last event id.
EventGenerator = Callable[[threading.Event, str], "Iterable[ServerSentEvent] | None"]


def _flush(writer: ResponseWriter) -> None:
    flush = getattr(writer, "flush", None)
    if callable(flush):
        flush()


@dataclass
class HttpSSEResponse(HttpHeadersResponse):
    """Streams events from ``event_generator`` to the client until it ends or the request is done."""

    event_generator: EventGenerator | None = None

    def write(self, writer: ResponseWriter, mc: MatchingContext) -> None:
        request = mc.request or Request()
        if request.proto_major != 2:
            writer.write_header(HTTPStatus.INTERNAL_SERVER_ERROR.value)
            raise NotHttp2RequestError()

        super().write(writer, mc)

        header = writer.header()
        header.set("Cache-Control", "no-cache")
        header.set("Connection", "keep-alive")

        last_event_id = request.headers.get(HEADER_LAST_EVENT_ID)
        done = request.done
        events = None
        try:
            if self.event_generator is not None:
                events = self.event_generator(done, last_event_id)
            for event in events or ():
                if done.is_set():
                    return
                try:
                    write_text_response(writer, str(event))
                except ResponseError:
                    return
                _flush(writer)
        finally:
            close = getattr(events, "close", None)
            if callable(close):
                close()
            _flush(writer)


def sse_http_response(event_generator: EventGenerator) -> HttpSSEResponse:
    """Create a server-sent events response."""
    return sse_http_response_with_headers_and_cookies(event_generator, None, None)


def sse_http_response_with_headers(
    event_generator: EventGenerator, headers: HttpHeaders | None
) -> HttpSSEResponse:
    """Create a server-sent events response with custom headers."""
    return sse_http_response_with_headers_and_cookies(event_generator, headers, None)


def sse_http_response_with_headers_and_cookies(
    event_generator: EventGenerator,
    headers: HttpHeaders | None,
    cookies: HttpCookies | None,
) -> HttpSSEResponse:
    """Create a server-sent events response with custom headers and cookies."""
    return HttpSSEResponse(
        http_status_code=HTTPStatus.OK.value,
        content_type=EVENT_STREAM_CONTENT_TYPE,
        http_headers=headers,
        http_cookies=cookies,
        event_generator=event_generator,
    )