import pytest

from respkit.headers import HttpHeadersResponse, internal_server_error_http_response
from respkit.httpio import Cookie, MatchingContext, Request, ResponseRecorder
from respkit.response import HttpHeaders, ResponseError, new_http_cookie

PLAIN = "text/plain; charset=utf-8"


def _written(resp):
    recorder = ResponseRecorder()
    resp.write(recorder, MatchingContext(Request()))
    return recorder


@pytest.mark.parametrize(
    "status, headers, cookies, extra_headers",
    [
        (200, {"Content-Type": PLAIN}, None, {"Content-Type": [PLAIN]}),
        (
            200,
            {"Content-Type": PLAIN},
            [("cookie1", "val1")],
            {"Content-Type": [PLAIN], "Set-Cookie": ["cookie1=val1"]},
        ),
        (0, None, None, {}),
    ],
    ids=["without cookies", "with cookies", "with status code 0"],
)
def test_http_headers_response_write(status, headers, cookies, extra_headers):
    resp = HttpHeadersResponse(
        http_status_code=status,
        http_headers=None if headers is None else HttpHeaders(headers),
        http_cookies=None if cookies is None else new_http_cookie(*(Cookie(name=n, value=v) for n, v in cookies)),
    )
    recorder = _written(resp)
    assert recorder.code == 200
    assert recorder.header().as_dict() == {"X-Content-Type-Options": ["nosniff"], **extra_headers}


def test_http_headers_response_invalid_status():
    with pytest.raises(ResponseError):
        _written(HttpHeadersResponse(http_status_code=1))


def test_content_type_used_when_not_in_headers():
    recorder = _written(HttpHeadersResponse(http_status_code=201, content_type="application/json"))
    assert recorder.header().get("Content-Type") == "application/json"
    assert recorder.code == 201


def test_write_releases_maps():
    headers = HttpHeaders({"h1": "v1"})
    cookies = new_http_cookie(Cookie(name="c", value="v"))
    _written(HttpHeadersResponse(http_headers=headers, http_cookies=cookies))
    assert (headers, cookies) == ({}, {})


def test_status_code_default():
    assert HttpHeadersResponse().status_code() == 200


def test_lazy_headers_and_cookies():
    resp = HttpHeadersResponse()
    resp.headers().set("h1", "v1")
    resp.cookies().add(Cookie(name="lazy", value="v"))
    assert resp.http_headers == {"h1": "v1"}
    assert list(resp.http_cookies) == ["lazy::"]


def test_internal_server_error_http_response():
    assert internal_server_error_http_response() == HttpHeadersResponse(http_status_code=500)