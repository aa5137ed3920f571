import pytest

from respkit.httpio import Cookie, Header, MatchingContext, Request, ResponseRecorder
from respkit.response import HttpHeaders, new_http_cookie
from respkit.sse import (
    EVENT_STREAM_CONTENT_TYPE,
    HttpSSEResponse,
    NotHttp2RequestError,
    ServerSentEvent,
    sse_http_response,
    sse_http_response_with_headers,
    sse_http_response_with_headers_and_cookies,
)

EVENTS = [
    ServerSentEvent(name="message", id="1", data=["msg1"]),
    ServerSentEvent(name="message", id="2", data=["msg2"]),
    ServerSentEvent(name="message", id="3", data=["msg3"]),
]

EXPECTED_HEADERS = {
    "X-Content-Type-Options": ["nosniff"],
    "Cache-Control": ["no-cache"],
    "Connection": ["keep-alive"],
    "Content-Type": [EVENT_STREAM_CONTENT_TYPE],
}


def nil_event_gen(done, last_event_id):
    return None


def make_generator(on_last=None):
    def generate(done, last_event_id):
        start = int(last_event_id) if last_event_id.isdigit() else 0
        remaining = EVENTS[start:]
        for index, event in enumerate(remaining):
            if on_last is not None and index == len(remaining) - 1:
                on_last()
            yield event

    return generate


@pytest.mark.parametrize(
    "event, expected",
    [
        (ServerSentEvent(), ""),
        (ServerSentEvent(name="name"), "event: name\n\n"),
        (
            ServerSentEvent(name="name", id="id", data=["val1", "val2"], retry=5),
            "event: name\ndata: val1\ndata: val2\nid: id\nretry: 5\n\n",
        ),
        (ServerSentEvent(data=["only"]), "data: only\n\n"),
    ],
)
def test_server_sent_event_str(event, expected):
    assert str(event) == expected


def test_sse_http_response():
    got = sse_http_response(nil_event_gen)
    assert got.http_status_code == 200
    assert got.content_type == "text/event-stream"
    assert got.http_headers is None
    assert got.event_generator is nil_event_gen


def test_sse_http_response_with_headers():
    got = sse_http_response_with_headers(nil_event_gen, HttpHeaders({"h1": "v1"}))
    assert got == HttpSSEResponse(
        http_status_code=200,
        content_type="text/event-stream",
        http_headers=HttpHeaders({"h1": "v1"}),
        event_generator=nil_event_gen,
    )


def test_sse_http_response_with_headers_and_cookies():
    cookies = new_http_cookie(Cookie(name="cookie3", value="val3"))
    got = sse_http_response_with_headers_and_cookies(nil_event_gen, HttpHeaders({"h1": "v1"}), cookies)
    assert got == HttpSSEResponse(
        http_status_code=200,
        content_type="text/event-stream",
        http_headers=HttpHeaders({"h1": "v1"}),
        http_cookies=cookies,
        event_generator=nil_event_gen,
    )


def _response():
    return HttpSSEResponse(
        http_status_code=200,
        content_type=EVENT_STREAM_CONTENT_TYPE,
        event_generator=make_generator(),
    )


def test_write_rejects_http1():
    rec = ResponseRecorder()
    with pytest.raises(NotHttp2RequestError):
        _response().write(rec, MatchingContext(Request(proto_major=1)))
    assert rec.code == 500


def test_write_request_cancels():
    request = Request(proto_major=2)
    resp = HttpSSEResponse(
        http_status_code=200,
        content_type=EVENT_STREAM_CONTENT_TYPE,
        event_generator=make_generator(on_last=request.done.set),
    )
    rec = ResponseRecorder()
    resp.write(rec, MatchingContext(request))
    assert rec.code == 200
    assert rec.header().as_dict() == EXPECTED_HEADERS
    assert rec.body.decode() == (
        "event: message\ndata: msg1\nid: 1\n\nevent: message\ndata: msg2\nid: 2\n\n"
    )


def test_write_data_stream_ends():
    rec = ResponseRecorder()
    _response().write(rec, MatchingContext(Request(proto_major=2)))
    assert rec.code == 200
    assert rec.header().as_dict() == EXPECTED_HEADERS
    assert rec.body.decode() == (
        "event: message\ndata: msg1\nid: 1\n\n"
        "event: message\ndata: msg2\nid: 2\n\n"
        "event: message\ndata: msg3\nid: 3\n\n"
    )
    assert rec.flushed is True


def test_write_starts_from_last_event_id():
    request = Request(proto_major=2, headers=Header({"Last-Event-Id": "1"}))
    rec = ResponseRecorder()
    _response().write(rec, MatchingContext(request))
    assert rec.header().as_dict() == EXPECTED_HEADERS
    assert rec.body.decode() == (
        "event: message\ndata: msg2\nid: 2\n\nevent: message\ndata: msg3\nid: 3\n\n"
    )


def test_write_with_no_events():
    resp = sse_http_response(nil_event_gen)
    rec = ResponseRecorder()
    resp.write(rec, MatchingContext(Request(proto_major=2)))
    assert rec.code == 200
    assert rec.body == b""