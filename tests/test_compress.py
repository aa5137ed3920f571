import gzip
import zlib

import pytest

from respkit.compress import (
    DEFAULT_COMPRESSION,
    HttpCompressResponse,
    compression_algorithm_from_header,
    new_http_compress_response,
)
from respkit.httpio import Header, MatchingContext, Request, ResponseRecorder
from respkit.text import plain_text_http_response_ok

BIG_TEXT = "\n".join(
    [
        "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Morbi fermentum massa vitae "
        "metus fringilla efficitur. Vestibulum viverra fringilla mollis.",
        "Suspendisse viverra sollicitudin mattis. In finibus non ex et auctor. Aenean mattis "
        "neque urna, eget ullamcorper erat sollicitudin sed.",
        "Nullam a augue non libero viverra efficitur in et mi. Nam id ex id elit lacinia "
        "vestibulum eu bibendum justo.",
    ]
    * 40
)


def decompress(kind, data):
    if kind == "gzip":
        return gzip.decompress(data).decode()
    if kind == "deflate":
        return zlib.decompress(data, -zlib.MAX_WBITS).decode()
    return data.decode()


@pytest.mark.parametrize(
    "headers, expected",
    [
        ({"Accept-Encoding": "gzip"}, "gzip"),
        ({"Accept-Encoding": "compress"}, "gzip"),
        ({"Accept-Encoding": "deflate"}, "deflate"),
        ({}, ""),
        ({"Accept-Encoding": "lz4"}, ""),
    ],
)
def test_write(headers, expected):
    resp = HttpCompressResponse(plain_text_http_response_ok(BIG_TEXT), DEFAULT_COMPRESSION)
    rec = ResponseRecorder()
    resp.write(rec, MatchingContext(Request(headers=Header(headers))))
    assert decompress(expected, rec.body) == BIG_TEXT
    assert rec.header().get("Content-Encoding") == expected


def test_compressed_body_is_smaller():
    resp = HttpCompressResponse(plain_text_http_response_ok(BIG_TEXT), 9)
    rec = ResponseRecorder()
    resp.write(rec, MatchingContext(Request(headers=Header({"Accept-Encoding": "gzip"}))))
    assert len(rec.body) < len(BIG_TEXT.encode())
    assert rec.code == 200


def test_new_http_compress_response():
    default_response = plain_text_http_response_ok("ok")
    got = new_http_compress_response(default_response, 0)
    assert got == HttpCompressResponse(default_response, 0)
    assert got.headers() is default_response.headers()
    assert got.status_code() == default_response.status_code() == 200
    assert got.cookies() is default_response.cookies()


@pytest.mark.parametrize("level", [-2, 10])
def test_new_http_compress_response_rejects_level(level):
    with pytest.raises(ValueError, match="compression level not supported"):
        new_http_compress_response(plain_text_http_response_ok("ok"), level)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("gzip, deflate", "gzip"),
        ("deflate, gzip", "gzip"),
        ("deflate, br", "deflate"),
        ("GZIP", "gzip"),
        (" Deflate ", "deflate"),
        ("", ""),
        ("br, lz4", ""),
    ],
)
def test_compression_algorithm_from_header(value, expected):
    assert compression_algorithm_from_header(value) == expected