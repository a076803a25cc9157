"""
Fluent request builder for fetch_request.

Example:
    out = Slot()
    (
        get("https://api.example.com")
        .path("/items/{id}", id=42)
        .header("Accept", "application/json")
        .into(out)
        .do(timeout=10.0)
    )
"""
import io
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

import httpx
from rich.console import Console

from ..body.providers import BodyProvider, ReplayableBody
from ..config import get_default_client, is_trace_enabled_by_env
from ..reply.handlers import (
    ResponseHandler,
    as_handler,
    discard,
    to_buffer,
    to_json,
    to_reader,
    to_string,
    to_writer,
)
from ..tracing import mask_headers, trace_request, trace_response
from ..types import HTTP_METHODS, HttpMethod, PathParam, Slot
from .params import path_param
from .url_resolver import resolve_url

logger = logging.getLogger("fetch_request.request")

TimeoutTypes = Union[float, httpx.Timeout, None]


def derive_client(client: httpx.Client, transport: httpx.BaseTransport) -> httpx.Client:
    """
    Build a client sharing `client`'s settings but using `transport`.

    `client` itself is never modified. The derived client does not own the
    transport and must not be closed on its behalf.
    """
    return httpx.Client(
        auth=client.auth,
        params=client.params,
        headers=client.headers,
        cookies=client.cookies,
        timeout=client.timeout,
        follow_redirects=client.follow_redirects,
        max_redirects=client.max_redirects,
        event_hooks=client.event_hooks,
        base_url=client.base_url,
        trust_env=client.trust_env,
        transport=transport,
    )


class Request:
    """Accumulates request settings and executes them once with do()."""

    def __init__(self, verb: HttpMethod, base_url: str):
        method = verb.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Invalid HTTP method: {verb}. Must be one of: {list(HTTP_METHODS)}")
        self._verb = method
        self._base_url = base_url
        self._path = ""
        self._path_params: Dict[str, str] = {}
        self._headers = httpx.Headers()
        self._body: Optional[BodyProvider] = None
        self._handler: Optional[ResponseHandler] = None
        self._client: Optional[httpx.Client] = None
        self._transport: Optional[httpx.BaseTransport] = None
        self._trace = is_trace_enabled_by_env()
        self._console: Optional[Console] = None

    def __repr__(self) -> str:
        return f"<Request {self._verb} {self._base_url!r} path={self._path!r}>"

    @property
    def method(self) -> str:
        return self._verb

    def path(self, template: str, *params: PathParam, **kwparams: Any) -> "Request":
        """Set the URI template path and merge in path parameters.

        Parameters accumulate across calls; a repeated name keeps the last
        value. Keyword parameters are converted with path_param().
        """
        self._path = template
        for param in params:
            self._path_params[param.name] = param.value
        for name, value in kwparams.items():
            param = path_param(name, value)
            self._path_params[param.name] = param.value
        return self

    def header(self, key: str, value: str) -> "Request":
        """Set a header, replacing any existing value for the same name."""
        self._headers[key] = value
        return self

    def headers(self, headers: Mapping[str, str]) -> "Request":
        """Set several headers at once."""
        for key, value in headers.items():
            self._headers[key] = value
        return self

    def client(self, client: Optional[httpx.Client]) -> "Request":
        """Use `client` instead of the shared default client."""
        self._client = client
        return self

    def transport(self, transport: Optional[httpx.BaseTransport]) -> "Request":
        """Send through `transport` on a copy of the effective client."""
        self._transport = transport
        return self

    def body(self, provider: Optional[BodyProvider]) -> "Request":
        """Attach the request body provider. The verb is left unchanged."""
        self._body = provider
        return self

    def into(self, target: Any) -> "Request":
        """Decode the response body as JSON into a Slot, dict or list."""
        self._handler = to_json(target)
        return self

    def into_string(self, slot: Slot) -> "Request":
        """Store the response body text into `slot`."""
        self._handler = to_string(slot)
        return self

    def into_buffer(self, buffer: bytearray) -> "Request":
        """Append the response body to `buffer`."""
        self._handler = to_buffer(buffer)
        return self

    def into_writer(self, writer: Any) -> "Request":
        """Copy the response body to `writer`."""
        self._handler = to_writer(writer)
        return self

    def into_reader(self, func: Callable[[io.BufferedReader], Any]) -> "Request":
        """Call `func` with a buffered reader over the response body."""
        self._handler = to_reader(func)
        return self

    def reply_handler(self, handler: Any) -> "Request":
        """Set the response handler (a ResponseHandler or plain callable)."""
        self._handler = as_handler(handler)
        return self

    def trace(self, enabled: bool = True, console: Optional[Console] = None) -> "Request":
        """Print request and response summaries to a Rich console."""
        self._trace = enabled
        self._console = console
        return self

    def url(self) -> httpx.URL:
        """Resolve the request URL without sending anything."""
        return resolve_url(self._base_url, self._path, self._path_params)

    def effective_client(self) -> httpx.Client:
        """The client do() sends with, after applying any transport override."""
        client = self._client if self._client is not None else get_default_client()
        if self._transport is not None:
            client = derive_client(client, self._transport)
        logger.debug(
            f"Request.effective_client: explicit={self._client is not None}, "
            f"transport_override={self._transport is not None}"
        )
        return client

    def _prepare(
        self,
        client: Optional[httpx.Client],
        timeout: TimeoutTypes,
    ) -> Tuple[httpx.Request, Optional[ReplayableBody]]:
        url = self.url()
        client = client if client is not None else self.effective_client()

        content: Optional[ReplayableBody] = None
        if self._body is not None:
            logger.debug(f"Request.build: acquiring body from {type(self._body).__name__}")
            content = ReplayableBody(self._body(), self._body)

        kwargs: Dict[str, Any] = {}
        if timeout is not None:
            kwargs["timeout"] = timeout

        try:
            request = client.build_request(
                self._verb,
                url,
                headers=self._headers,
                content=content,
                **kwargs,
            )
        except Exception:
            if content is not None:
                content.close()
            raise

        if content is not None:
            request.stream = content

        logger.debug(
            f"Request.build: method={request.method}, url={request.url}, "
            f"headers={mask_headers(request.headers)}"
        )
        return request, content

    def build(
        self,
        client: Optional[httpx.Client] = None,
        timeout: TimeoutTypes = None,
    ) -> httpx.Request:
        """
        Build the httpx.Request.

        The body stream is opened here and becomes `request.stream`; it is
        drained when the request is sent. A request that is never sent must
        be released with `request.stream.close()`. If the request cannot be
        built the body is closed again before the error propagates.
        """
        request, _ = self._prepare(client, timeout)
        return request

    def do(self, timeout: TimeoutTypes = None) -> None:
        """
        Execute the request and run the response handler.

        Steps run strictly in order: URL resolution, body acquisition, the
        network call, then the handler. The first failure propagates
        unchanged. The response is always closed before returning.

        Args:
            timeout: Per-call timeout (seconds or httpx.Timeout). Defaults to
                the client's timeout.
        """
        client = self.effective_client()
        request, content = self._prepare(client, timeout)

        if self._trace:
            trace_request(request, self._console)

        try:
            response = client.send(request, stream=True)
        finally:
            if content is not None:
                content.close()

        try:
            logger.debug(f"Request.do: {request.method} {request.url} -> {response.status_code}")
            if self._trace:
                trace_response(response, self._console)
            handler = self._handler if self._handler is not None else discard()
            handler(response)
        finally:
            response.close()


def new_request(verb: HttpMethod, base_url: str) -> Request:
    """Create a Request for any supported verb."""
    return Request(verb, base_url)


def get(base_url: str) -> Request:
    """Create a GET request."""
    return Request("GET", base_url)


def head(base_url: str) -> Request:
    """Create a HEAD request."""
    return Request("HEAD", base_url)


def post(base_url: str) -> Request:
    """Create a POST request."""
    return Request("POST", base_url)


def put(base_url: str) -> Request:
    """Create a PUT request."""
    return Request("PUT", base_url)


def patch(base_url: str) -> Request:
    """Create a PATCH request."""
    return Request("PATCH", base_url)


def delete(base_url: str) -> Request:
    """Create a DELETE request."""
    return Request("DELETE", base_url)
