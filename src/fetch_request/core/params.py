"""
Path parameter helpers for fetch_request.
"""
import math
from decimal import Decimal
from enum import Enum
from typing import Any

from ..errors import PathParamError
from ..types import PathParam


def _format_number(value: Any) -> str:
    """Positional notation without exponent or trailing zeros."""
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return str(value)
        value = Decimal(repr(value))
    if not value.is_finite():
        return str(value)
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def to_string(name: str, value: Any) -> str:
    """
    Convert a path parameter value to its canonical string form.

    Raises:
        PathParamError: if the value has no canonical string form.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, Enum):
        return to_string(name, value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (float, Decimal)):
        return _format_number(value)
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PathParamError(name, value) from exc
    if type(value).__str__ is not object.__str__:
        return str(value)
    raise PathParamError(name, value)


def path_param(name: str, value: Any) -> PathParam:
    """Create a PathParam, converting `value` to a string."""
    return PathParam(name=name, value=to_string(name, value))
