"""Redirect responses."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus

from respkit.headers import HttpHeadersResponse
from respkit.httpio import MatchingContext, ResponseWriter, redirect


@dataclass
class HttpRedirectResponse(HttpHeadersResponse):
    """Redirects the client to ``url``."""

    url: str = ""

    def write(self, writer: ResponseWriter, mc: MatchingContext) -> None:
        redirect(writer, mc.request, self.url, self.http_status_code)


def redirect_http_response_moved_permanently(url: str) -> HttpRedirectResponse:
    """Create a redirect with status 301."""
    return HttpRedirectResponse(http_status_code=HTTPStatus.MOVED_PERMANENTLY.value, url=url)


def redirect_http_response(url: str) -> HttpRedirectResponse:
    """Create a redirect with status 302."""
    return HttpRedirectResponse(http_status_code=HTTPStatus.FOUND.value, url=url)


def redirect_http_response_see_other(url: str) -> HttpRedirectResponse:
    """Create a redirect with status 303."""
    return HttpRedirectResponse(http_status_code=HTTPStatus.SEE_OTHER.value, url=url)