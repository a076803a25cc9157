"""
Fluent HTTP request builder on top of httpx.

Resolves URI-template paths against a base URL, attaches lazily produced
request bodies, sends through a pluggable httpx client/transport and routes
the streamed response to a handler.

    from fetch_request import get, Slot

    out = Slot()
    get("https://example.com").path("/items/{id}", id=42).into_string(out).do()
"""
from . import body, reply
from .types import (
    HttpMethod,
    HTTP_METHODS,
    PathParam,
    Slot,
    Serializer,
)
from .errors import (
    FetchRequestError,
    PathParamError,
    TemplateError,
    UnexpectedStatusError,
)
from .config import (
    TimeoutConfig,
    ClientConfig,
    DefaultSerializer,
    create_client,
    get_default_client,
    set_default_client,
    reset_default_client,
)
from .body import (
    BodyProvider,
    from_bytes,
    from_json,
    from_form,
    from_file,
    from_reader,
    from_writer,
)
from .reply import (
    MAX_DISCARD_SIZE,
    ResponseHandler,
    to_json,
    to_string,
    to_buffer,
    to_writer,
    to_reader,
    check_status,
    chain,
    discard,
)
from .core import (
    Request,
    path_param,
    expand_template,
    resolve_url,
    new_request,
    get,
    head,
    post,
    put,
    patch,
    delete,
)

__all__ = [
    # Submodules
    "body",
    "reply",
    # Types
    "HttpMethod",
    "HTTP_METHODS",
    "PathParam",
    "Slot",
    "Serializer",
    # Errors
    "FetchRequestError",
    "PathParamError",
    "TemplateError",
    "UnexpectedStatusError",
    # Config
    "TimeoutConfig",
    "ClientConfig",
    "DefaultSerializer",
    "create_client",
    "get_default_client",
    "set_default_client",
    "reset_default_client",
    # Body providers
    "BodyProvider",
    "from_bytes",
    "from_json",
    "from_form",
    "from_file",
    "from_reader",
    "from_writer",
    # Response handlers
    "MAX_DISCARD_SIZE",
    "ResponseHandler",
    "to_json",
    "to_string",
    "to_buffer",
    "to_writer",
    "to_reader",
    "check_status",
    "chain",
    "discard",
    # Builder
    "Request",
    "path_param",
    "expand_template",
    "resolve_url",
    "new_request",
    "get",
    "head",
    "post",
    "put",
    "patch",
    "delete",
]

__version__ = "0.1.0"
