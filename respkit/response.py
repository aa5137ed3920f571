"""Shared response types: header and cookie maps and the response interface."""

from __future__ import annotations

import abc
import threading
from typing import Callable, Generic, TypeVar

from respkit.httpio import Cookie, MatchingContext, ResponseWriter

HEADER_CONTENT_TYPE = "Content-Type"
HEADER_CONTENT_TYPE_OPTIONS = "X-Content-Type-Options"

_POOL_LIMIT = 64

T = TypeVar("T")


class ResponseError(Exception):
    """Raised when a response cannot be written."""


class _Pool(Generic[T]):
    """A small thread-safe free list of reusable objects."""

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._items: list[T] = []
        self._lock = threading.Lock()

    def get(self) -> T:
        with self._lock:
            if self._items:
                return self._items.pop()
        return self._factory()

    def put(self, item: T) -> None:
        with self._lock:
            if len(self._items) < _POOL_LIMIT and not any(x is item for x in self._items):
                self._items.append(item)


class HttpHeaders(dict):
    """Custom response headers, name to value."""

    def set(self, key: str, value: str) -> None:
        self[key] = value

    def release(self) -> None:
        """Clear the map and return it to the pool for reuse."""
        self.clear()
        _headers_pool.put(self)


class HttpCookies(dict):
    """Custom response cookies keyed by name, path and domain."""

    def add(self, *args: Cookie | None) -> None:
        for cookie in args:
            if cookie is not None:
                self[f"{cookie.name}:{cookie.path}:{cookie.domain}"] = cookie

    def release(self) -> None:
        """Clear the map and return it to the pool for reuse."""
        self.clear()
        _cookies_pool.put(self)


_headers_pool: _Pool[HttpHeaders] = _Pool(HttpHeaders)
_cookies_pool: _Pool[HttpCookies] = _Pool(HttpCookies)


def new_http_headers() -> HttpHeaders:
    """Return an empty HttpHeaders, reusing a released one if available."""
    return _headers_pool.get()


def new_empty_http_cookie() -> HttpCookies:
    """Return an empty HttpCookies, reusing a released one if available."""
    return _cookies_pool.get()


def new_http_cookie(*args: Cookie | None) -> HttpCookies:
    """Return an HttpCookies holding the given cookies."""
    cookies = new_empty_http_cookie()
    cookies.add(*args)
    return cookies


class HttpResponse(abc.ABC):
    """A response that knows how to write itself to a ResponseWriter."""

    @abc.abstractmethod
    def status_code(self) -> int:
        """Return the response status code."""

    @abc.abstractmethod
    def headers(self) -> HttpHeaders | None:
        """Return the response headers."""

    @abc.abstractmethod
    def cookies(self) -> HttpCookies | None:
        """Return the response cookies."""

    @abc.abstractmethod
    def write(self, writer: ResponseWriter, mc: MatchingContext) -> None:
        """Write the response to the client, raising ResponseError on failure."""


def write_text_response(writer: ResponseWriter, payload: str) -> None:
    """Write ``payload`` as UTF-8; nothing is written for an empty payload."""
    if not payload:
        return
    try:
        writer.write(payload.encode("utf-8"))
    except Exception as exc:
        raise ResponseError(f"failed to write the text response, err: {exc}") from exc