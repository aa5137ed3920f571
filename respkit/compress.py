"""A response wrapper that compresses the body with gzip or deflate."""

from __future__ import annotations

import zlib

from respkit.httpio import Header, MatchingContext, ResponseWriter
from respkit.response import HttpCookies, HttpHeaders, HttpResponse

ACCEPT_ENCODING_HEADER = "Accept-Encoding"
CONTENT_ENCODING_HEADER = "Content-Encoding"

DEFAULT_COMPRESSION = -1
NO_COMPRESSION = 0
BEST_SPEED = 1
BEST_COMPRESSION = 9

_WBITS = {"gzip": 16 + zlib.MAX_WBITS, "deflate": -zlib.MAX_WBITS}


def compression_algorithm_from_header(accept_encoding: str) -> str:
    """Choose "gzip", "deflate" or "" from an Accept-Encoding value; gzip wins."""
    encodings = [enc.strip() for enc in accept_encoding.lower().split(",")]
    if any(enc in ("gzip", "compress") for enc in encodings):
        return "gzip"
    if "deflate" in encodings:
        return "deflate"
    return ""


class _CompressResponseWriter(ResponseWriter):
    """Compresses body bytes before passing them to the wrapped writer."""

    def __init__(self, target: ResponseWriter, compressor: "zlib._Compress") -> None:
        self._target = target
        self._compressor = compressor

    def header(self) -> Header:
        return self._target.header()

    def write(self, data: bytes) -> int:
        chunk = self._compressor.compress(bytes(data))
        if chunk:
            self._target.write(chunk)
        return len(data)

    def write_header(self, status_code: int) -> None:
        self._target.write_header(status_code)

    def flush(self) -> None:
        chunk = self._compressor.flush(zlib.Z_SYNC_FLUSH)
        if chunk:
            self._target.write(chunk)
        flush = getattr(self._target, "flush", None)
        if callable(flush):
            flush()

    def close(self) -> None:
        chunk = self._compressor.flush(zlib.Z_FINISH)
        if chunk:
            self._target.write(chunk)


class HttpCompressResponse(HttpResponse):
    """Compresses another response's body when the client accepts gzip or deflate."""

    def __init__(self, http_response: HttpResponse, compression_level: int) -> None:
        self.http_response = http_response
        self.compression_level = compression_level

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HttpCompressResponse):
            return NotImplemented
        return (
            self.http_response == other.http_response
            and self.compression_level == other.compression_level
        )

    def __repr__(self) -> str:
        return (
            f"HttpCompressResponse(http_response={self.http_response!r}, "
            f"compression_level={self.compression_level!r})"
        )

    def status_code(self) -> int:
        return self.http_response.status_code()

    def headers(self) -> HttpHeaders | None:
        return self.http_response.headers()

    def cookies(self) -> HttpCookies | None:
        return self.http_response.cookies()

    def write(self, writer: ResponseWriter, mc: MatchingContext) -> None:
        accept = mc.request.headers.get(ACCEPT_ENCODING_HEADER) if mc.request else ""
        algorithm = compression_algorithm_from_header(accept)
        if not algorithm:
            self.http_response.write(writer, mc)
            return

        compressor = zlib.compressobj(self.compression_level, zlib.DEFLATED, _WBITS[algorithm])
        headers = self.headers()
        if headers is not None:
            headers.pop(ACCEPT_ENCODING_HEADER, None)
        writer.header().set(CONTENT_ENCODING_HEADER, algorithm)
        compressed = _CompressResponseWriter(writer, compressor)
        try:
            self.http_response.write(compressed, mc)
        finally:
            compressed.close()


def new_http_compress_response(http_response: HttpResponse, compression_level: int) -> HttpCompressResponse:
    """Wrap ``http_response`` with compression at a level from -1 (default) to 9."""
    if compression_level < DEFAULT_COMPRESSION or compression_level > BEST_COMPRESSION:
        raise ValueError("compression level not supported")
    return HttpCompressResponse(http_response, compression_level)