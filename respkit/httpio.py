"""HTTP primitives used by the responses: headers, cookies, requests and writers."""

from __future__ import annotations

import abc
import email.utils
import io
import posixpath
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Iterator, Mapping
from urllib.parse import urlsplit

_TOKEN_CHARS = frozenset(
    "!#$%&'*+-.^_`|~0123456789"
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
)

_HTML_ESCAPES = str.maketrans(
    {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&#34;", "'": "&#39;"}
)


def _is_token(text: str) -> bool:
    return bool(text) and all(ch in _TOKEN_CHARS for ch in text)


def canonical_header_key(key: str) -> str:
    """Return the canonical MIME form of a header name ("content-type" -> "Content-Type").

    Keys holding characters that are not valid in a header name are returned unchanged.
    """
    if not _is_token(key):
        return key
    return "-".join(part[:1].upper() + part[1:].lower() for part in key.split("-"))


class Header:
    """A case-insensitive, multi-valued collection of HTTP header fields."""

    def __init__(self, initial: Mapping[str, list[str] | str] | None = None) -> None:
        self._values: dict[str, list[str]] = {}
        for key, value in (initial or {}).items():
            if isinstance(value, str):
                self.add(key, value)
            else:
                for item in value:
                    self.add(key, item)

    def get(self, key: str) -> str:
        """Return the first value for ``key``, or an empty string if there is none."""
        values = self._values.get(canonical_header_key(key))
        return values[0] if values else ""

    def set(self, key: str, value: str) -> None:
        self._values[canonical_header_key(key)] = [value]

    def add(self, key: str, value: str) -> None:
        self._values.setdefault(canonical_header_key(key), []).append(value)

    def values(self, key: str) -> list[str]:
        return list(self._values.get(canonical_header_key(key), []))

    def delete(self, key: str) -> None:
        self._values.pop(canonical_header_key(key), None)

    def as_dict(self) -> dict[str, list[str]]:
        return {key: list(values) for key, values in self._values.items()}

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and canonical_header_key(key) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Header):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self.as_dict() == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Header({self._values!r})"


def _sanitize_cookie_value(value: str) -> str:
    cleaned = "".join(ch for ch in value if 0x20 <= ord(ch) < 0x7F and ch not in '";\\')
    if cleaned and any(ch in cleaned for ch in " ,"):
        return f'"{cleaned}"'
    return cleaned


def _sanitize_cookie_path(path: str) -> str:
    return "".join(ch for ch in path if 0x20 <= ord(ch) < 0x7F and ch != ";")


@dataclass
class Cookie:
    """An HTTP cookie as sent in a Set-Cookie header."""

    name: str
    value: str = ""
    path: str = ""
    domain: str = ""
    expires: datetime | None = None
    max_age: int = 0
    secure: bool = False
    http_only: bool = False
    same_site: str = ""

    def serialize(self) -> str:
        """Return the Set-Cookie header value, or "" if the cookie name is invalid."""
        if not _is_token(self.name):
            return ""
        parts = [f"{self.name}={_sanitize_cookie_value(self.value)}"]
        if self.path:
            parts.append(f"Path={_sanitize_cookie_path(self.path)}")
        if self.domain:
            domain = self.domain[1:] if self.domain.startswith(".") else self.domain
            parts.append(f"Domain={domain}")
        if self.expires is not None and self.expires.year >= 1601:
            expires = self.expires
            if expires.tzinfo is None:
                expires = expires.replace(tzinfo=timezone.utc)
            parts.append(f"Expires={email.utils.formatdate(expires.timestamp(), usegmt=True)}")
        if self.max_age > 0:
            parts.append(f"Max-Age={self.max_age}")
        elif self.max_age < 0:
            parts.append("Max-Age=0")
        if self.http_only:
            parts.append("HttpOnly")
        if self.secure:
            parts.append("Secure")
        if self.same_site:
            parts.append(f"SameSite={self.same_site}")
        return "; ".join(parts)


@dataclass
class Request:
    """The parts of an incoming request that responses look at."""

    method: str = ""
    path: str = ""
    headers: Header = field(default_factory=Header)
    proto_major: int = 1
    done: threading.Event = field(default_factory=threading.Event, compare=False)


@dataclass
class MatchingContext:
    """The context a route was matched in, carrying the request."""

    request: Request | None = None


class ResponseWriter(abc.ABC):
    """Destination of an HTTP response."""

    @abc.abstractmethod
    def header(self) -> Header:
        """Return the header map that will be sent with the response."""

    @abc.abstractmethod
    def write(self, data: bytes) -> int:
        """Write body bytes, sending the headers first if needed."""

    @abc.abstractmethod
    def write_header(self, status_code: int) -> None:
        """Send the response headers with the given status code."""


class ResponseRecorder(ResponseWriter):
    """A response writer that records everything written to it in memory."""

    def __init__(self) -> None:
        self.code = HTTPStatus.OK.value
        self.wrote_header = False
        self.flushed = False
        self._header = Header()
        self._body = io.BytesIO()

    @property
    def body(self) -> bytes:
        return self._body.getvalue()

    def header(self) -> Header:
        return self._header

    def write(self, data: bytes) -> int:
        if not self.wrote_header:
            self.write_header(HTTPStatus.OK.value)
        return self._body.write(bytes(data))

    def write_header(self, status_code: int) -> None:
        if self.wrote_header:
            return
        if status_code < 100 or status_code > 999:
            raise ValueError(f"invalid status code {status_code}")
        self.code = status_code
        self.wrote_header = True

    def flush(self) -> None:
        if not self.wrote_header:
            self.write_header(HTTPStatus.OK.value)
        self.flushed = True


def set_cookie(writer: ResponseWriter, cookie: Cookie) -> None:
    """Add a Set-Cookie header for ``cookie``; invalid cookies are dropped."""
    value = cookie.serialize()
    if value:
        writer.header().add("Set-Cookie", value)


def _clean_path(path: str) -> str:
    cleaned = posixpath.normpath(path) if path else "."
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def _hex_escape_non_ascii(text: str) -> str:
    return "".join(
        chr(byte) if byte < 0x80 else f"%{byte:x}" for byte in text.encode("utf-8")
    )


def _status_text(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


def redirect(writer: ResponseWriter, request: Request | None, url: str, status_code: int) -> None:
    """Reply with a redirect to ``url``, resolving it against the request path if relative."""
    request = request or Request()
    try:
        parts = urlsplit(url)
    except ValueError:
        parts = None
    if parts is not None and not parts.scheme and not parts.netloc:
        old_path = request.path or "/"
        if not url.startswith("/"):
            url = old_path[: old_path.rfind("/") + 1] + url
        url, sep, query = url.partition("?")
        trailing = url.endswith("/")
        url = _clean_path(url)
        if trailing and not url.endswith("/"):
            url += "/"
        url += sep + query

    header = writer.header()
    had_content_type = "Content-Type" in header
    header.set("Location", _hex_escape_non_ascii(url))
    if not had_content_type and request.method in ("GET", "HEAD"):
        header.set("Content-Type", "text/html; charset=utf-8")
    writer.write_header(status_code)
    if not had_content_type and request.method == "GET":
        body = f'<a href="{url.translate(_HTML_ESCAPES)}">{_status_text(status_code)}</a>.\n\n'
        writer.write(body.encode("utf-8"))