"""
Exceptions raised by fetch_request itself.

Errors coming from collaborators (httpx, json, the filesystem, caller
callbacks) are propagated unchanged so callers can tell configuration,
network and application failures apart.
"""
from typing import Any, Optional


class FetchRequestError(Exception):
    """Base class for errors raised by fetch_request."""


class PathParamError(FetchRequestError, TypeError):
    """A path parameter value has no canonical string form."""

    def __init__(self, name: str, value: Any):
        self.name = name
        self.value = value
        super().__init__(
            f"unable to convert path param {name!r} of type "
            f"{type(value).__name__} to string"
        )


class TemplateError(FetchRequestError, ValueError):
    """The URI template is syntactically malformed."""

    def __init__(self, template: str, reason: str):
        self.template = template
        super().__init__(f"malformed URI template {template!r}: {reason}")


class UnexpectedStatusError(FetchRequestError):
    """The response status is not one of the accepted codes."""

    def __init__(self, status_code: int, payload: Optional[Any] = None):
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"unexpected status: {status_code}")
