"""
Core modules for fetch_request.
"""
from .params import path_param, to_string
from .url_resolver import expand_template, resolve_url
from .request import (
    Request,
    derive_client,
    new_request,
    get,
    head,
    post,
    put,
    patch,
    delete,
)

__all__ = [
    "path_param",
    "to_string",
    "expand_template",
    "resolve_url",
    "Request",
    "derive_client",
    "new_request",
    "get",
    "head",
    "post",
    "put",
    "patch",
    "delete",
]
