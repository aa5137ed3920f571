# respkit

Response objects for HTTP handlers. Each response knows its status code,
headers and cookies, and writes itself, body included, to a response
writer.

The package has no dependencies beyond the standard library.

## Installation

```
pip install respkit
```

To run the tests as well:

```
pip install "respkit[test]"
pytest
```

## Building blocks

`respkit.httpio` holds the HTTP primitives the responses work with:

- `Header`: a case-insensitive, multi-valued header map (`get`, `set`,
  `add`, `values`, `delete`, `as_dict`), with names put in canonical form
  by `canonical_header_key`.
- `Cookie`: a dataclass whose `serialize()` gives the `Set-Cookie` value.
- `Request` (method, path, headers, `proto_major`, and a `done`
  `threading.Event` that marks the request as finished) and
  `MatchingContext`, which carries the request to a response.
- `ResponseWriter`: the abstract destination of a response, with
  `header()`, `write(data)` and `write_header(status_code)`.
- `ResponseRecorder`: a `ResponseWriter` that keeps everything in memory
  (`code`, `header()`, `body`, `flushed`).
- `set_cookie(writer, cookie)` and `redirect(writer, request, url, status_code)`.

`respkit.response` holds `HttpResponse` (the abstract response with
`status_code()`, `headers()`, `cookies()` and `write(writer, mc)`),
the `HttpHeaders` and `HttpCookies` maps with their builders
`new_http_headers`, `new_empty_http_cookie` and `new_http_cookie`,
`write_text_response`, and `ResponseError`.

## Response kinds

| Module | Builders |
| --- | --- |
| `respkit.headers` | `HttpHeadersResponse`, `internal_server_error_http_response` |
| `respkit.text` | `plain_text_http_response_ok`, `plain_text_http_response`, `html_http_response_ok`, `html_http_response`, and the `..._with_headers` / `..._with_headers_and_cookies` variants |
| `respkit.json_response` | `json_http_response_ok`, `json_http_response`, `json_error_http_response` and their header and cookie variants |
| `respkit.raw` | `raw_writer_http_response`: a function you supply writes the body |
| `respkit.streaming` | `stream_http_response`: the body is copied from a readable binary stream |
| `respkit.template` | `template_http_response_ok`, `template_http_response_not_found` and variants, built on `ExecutableTemplate`, `HtmlTemplate` or `NilTemplate` |
| `respkit.redirect` | `redirect_http_response` (302), `redirect_http_response_moved_permanently` (301), `redirect_http_response_see_other` (303) |
| `respkit.sse` | `sse_http_response`: server-sent events from a generator, for HTTP/2 requests only |
| `respkit.compress` | `new_http_compress_response`: wraps any response in gzip or deflate, chosen from `Accept-Encoding` |
| `respkit.hijack` | `new_http_hijack_connection_response`: hands the connection to a callback |
| `respkit.adaptor` | `handler_adaptor`, `handler_func_adaptor`: wrap an existing handler as a response |

## Example

```python
from respkit.httpio import Cookie, MatchingContext, Request, ResponseRecorder
from respkit.json_response import json_http_response_with_cookies
from respkit.response import new_http_cookie

cookies = new_http_cookie(Cookie(name="session", value="token"))
resp = json_http_response_with_cookies(201, {"status": "ok"}, cookies)

recorder = ResponseRecorder()
resp.write(recorder, MatchingContext(Request()))

print(recorder.code)                        # 201
print(recorder.header().get("Set-Cookie"))  # session=token
print(recorder.body)                        # b'{"status":"ok"}'
```

## Behaviour worth knowing

- A status code of `0` means 200. Codes outside 100–999 make `write` raise
  `respkit.response.ResponseError`.
- `X-Content-Type-Options: nosniff` is added unless it is already set.
- The content type given to a builder is used only when the custom headers
  do not already hold a `Content-Type`.
- The `HttpHeaders` and `HttpCookies` maps given to a response are cleared
  and returned to a pool for reuse once the response has been written.
- Cookies are keyed by name, path and domain, so adding the same cookie
  twice keeps one copy.
- JSON is written compactly with sorted keys, and `<`, `>` and `&` are
  escaped as `\u003c`, `\u003e` and `\u0026`. A `None` payload writes
  `{}`. Error responses have the body `{"error": "<message>"}`, with the
  first letter of the message upper-cased.
- `HtmlTemplate` renders named templates with `$name` placeholders and
  HTML-escapes the values; a non-mapping value is available as `$data`.
- An SSE event generator is called with the request's `done` event and the
  `Last-Event-Id` header value. Writing stops when the generator ends or
  `done` is set. A request that is not HTTP/2 gets status 500 and `write`
  raises `respkit.sse.NotHttp2RequestError`.
- Compression levels run from -1 (default) to 9; anything else makes
  `new_http_compress_response` raise `ValueError`. `gzip` or `compress` in
  `Accept-Encoding` selects gzip, otherwise `deflate` selects deflate,
  otherwise the body is written uncompressed.
- A writer supports hijacking if it has a `hijack()` method returning
  `(connection, read_writer)`; otherwise the callback receives an error.

## What it does not do

This is a library of response objects only. It contains no HTTP server,
no router and no network code: the responses write to a `ResponseWriter`,
and `ResponseRecorder` is the only writer provided.