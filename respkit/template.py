"""Responses rendered from templates."""

from __future__ import annotations

import abc
import html
import string
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Mapping

from respkit.headers import HttpHeadersResponse
from respkit.httpio import MatchingContext, ResponseWriter
from respkit.response import HEADER_CONTENT_TYPE, HttpCookies, HttpHeaders, ResponseError

HTML_CONTENT_TYPE = "text/html; charset=utf-8"
PLAIN_TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


class ExecutableTemplate(abc.ABC):
    """A template that renders data into a writer."""

    @abc.abstractmethod
    def execute(self, writer: ResponseWriter, data: Any) -> None:
        """Render the template's default entry into ``writer``."""

    @abc.abstractmethod
    def execute_template(self, writer: ResponseWriter, name: str, data: Any) -> None:
        """Render the template called ``name`` into ``writer``."""


class NilTemplate(ExecutableTemplate):
    """A template that renders nothing, for static resources."""

    def execute(self, writer: ResponseWriter, data: Any) -> None:
        return None

    def execute_template(self, writer: ResponseWriter, name: str, data: Any) -> None:
        return None


class HtmlTemplate(ExecutableTemplate):
    """A set of named HTML templates using ``$name`` placeholders.

    Substituted values are HTML-escaped. A mapping supplies the placeholders
    by key; any other value is available as ``$data``.
    """

    def __init__(self, name: str = "", templates: Mapping[str, str] | None = None) -> None:
        self.name = name
        self.templates = dict(templates or {})

    def execute(self, writer: ResponseWriter, data: Any) -> None:
        self.execute_template(writer, self.name, data)

    def execute_template(self, writer: ResponseWriter, name: str, data: Any) -> None:
        try:
            source = self.templates[name]
        except KeyError:
            raise ValueError(f"no such template {name!r}") from None
        values = data if isinstance(data, Mapping) else {"data": data}
        escaped = {str(key): html.escape(str(value)) for key, value in values.items()}
        writer.write(string.Template(source).substitute(escaped).encode("utf-8"))


@dataclass
class HttpTemplateResponse(HttpHeadersResponse):
    """Renders the named template with ``data`` as the response body."""

    template: ExecutableTemplate | None = None
    name: str = ""
    data: Any = None

    def write(self, writer: ResponseWriter, mc: MatchingContext) -> None:
        super().write(writer, mc)
        if self.template is None:
            raise ResponseError(f"failed rendering the template: {self.name}, err: no template")
        try:
            self.template.execute_template(writer, self.name, self.data)
        except Exception as exc:
            raise ResponseError(f"failed rendering the template: {self.name}, err: {exc}") from exc


def template_http_response_ok(
    template: ExecutableTemplate, template_name: str, template_data: Any
) -> HttpTemplateResponse:
    """Create a 200 template response."""
    return template_http_response_with_headers_and_cookies(
        template, HTTPStatus.OK.value, template_name, template_data, None, None
    )


def template_http_response_not_found(
    template: ExecutableTemplate, template_name: str, template_data: Any
) -> HttpTemplateResponse:
    """Create a 404 template response."""
    return template_http_response_with_headers_and_cookies(
        template, HTTPStatus.NOT_FOUND.value, template_name, template_data, None, None
    )


def template_http_response_with_headers(
    template: ExecutableTemplate,
    status_code: int,
    template_name: str,
    template_data: Any,
    headers: HttpHeaders | None,
) -> HttpTemplateResponse:
    """Create a template response with custom headers."""
    return template_http_response_with_headers_and_cookies(
        template, status_code, template_name, template_data, headers, None
    )


def template_http_response_with_cookies(
    template: ExecutableTemplate,
    status_code: int,
    template_name: str,
    template_data: Any,
    cookies: HttpCookies | None,
) -> HttpTemplateResponse:
    """Create a template response with custom cookies."""
    return template_http_response_with_headers_and_cookies(
        template, status_code, template_name, template_data, None, cookies
    )


def template_http_response_with_headers_and_cookies(
    template: ExecutableTemplate,
    status_code: int,
    template_name: str,
    template_data: Any,
    headers: HttpHeaders | None,
    cookies: HttpCookies | None,
) -> HttpTemplateResponse:
    """Create a template response with custom headers and cookies.

    The content type comes from the headers if set there, otherwise it is HTML
    for an HtmlTemplate and plain text for anything else.
    """
    if headers and headers.get(HEADER_CONTENT_TYPE):
        content_type = headers[HEADER_CONTENT_TYPE]
    elif isinstance(template, HtmlTemplate):
        content_type = HTML_CONTENT_TYPE
    else:
        content_type = PLAIN_TEXT_CONTENT_TYPE
    return HttpTemplateResponse(
        http_status_code=status_code,
        content_type=content_type,
        http_headers=headers,
        http_cookies=cookies,
        template=template,
        name=template_name,
        data=template_data,
    )