"""
URL resolution for fetch_request.

A request URL is the base URL joined (RFC 3986 reference resolution) with
the expansion of a URI template path. Expansion itself is delegated to the
uritemplate package, which omits unbound variables. The expansion is parsed
in its percent-decoded form, so reserved characters in values such as `,`
stay literal where the URL grammar allows them.
"""
import logging
import re
from typing import Mapping, Optional
from urllib.parse import unquote

import httpx
from uritemplate import URITemplate

from ..errors import TemplateError

logger = logging.getLogger("fetch_request.url_resolver")

_EXPRESSION = re.compile(r"\{[^{}]*\}")


def _validate_template(template: str) -> None:
    """Reject templates with unbalanced or nested braces."""
    remainder = _EXPRESSION.sub("", template)
    if "{" in remainder or "}" in remainder:
        raise TemplateError(template, "unbalanced braces")
    for expression in _EXPRESSION.findall(template):
        if expression == "{}":
            raise TemplateError(template, "empty expression")


def expand_template(template: str, params: Optional[Mapping[str, str]] = None) -> str:
    """
    Expand a URI template with the given variables.

    Raises:
        TemplateError: if the template is malformed.
    """
    if not template:
        return ""
    _validate_template(template)
    return URITemplate(template).expand(dict(params or {}))


def resolve_url(
    base_url: str,
    path: str = "",
    params: Optional[Mapping[str, str]] = None,
) -> httpx.URL:
    """
    Resolve `path` (a URI template) against `base_url`.

    An absolute expanded path replaces the base entirely; a relative one is
    resolved against it like a link in a document.

    Raises:
        httpx.InvalidURL: if the base URL or the expanded path is not a valid URL.
        TemplateError: if the template is malformed.
    """
    base = httpx.URL(base_url)
    if not base.is_absolute_url:
        raise httpx.InvalidURL(f"base URL must be absolute: {base_url!r}")

    expanded = expand_template(path, params)
    # httpx re-encodes only characters that are not legal in each component
    ref = httpx.URL(unquote(expanded))
    url = base.join(ref)

    logger.debug(f"resolve_url: base={base_url}, path={path}, expanded={expanded}, url={url}")
    return url
