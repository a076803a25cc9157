"""
Type definitions for fetch_request.
"""
from dataclasses import dataclass
from typing import Any, Generic, Literal, Optional, Protocol, Tuple, TypeVar

T = TypeVar("T")

# HTTP methods
HttpMethod = Literal["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

HTTP_METHODS: Tuple[str, ...] = (
    "GET",
    "HEAD",
    "POST",
    "PUT",
    "PATCH",
    "DELETE",
    "OPTIONS",
)


@dataclass(frozen=True)
class PathParam:
    """A named value substituted into a URI template."""

    name: str
    value: str


@dataclass
class Slot(Generic[T]):
    """Mutable box a response handler writes its result into.

    Example:
        out: Slot[str] = Slot()
        get("https://example.com").into_string(out).do()
        print(out.value)
    """

    value: Optional[T] = None


class Serializer(Protocol):
    """Serializer protocol for custom JSON handling."""

    def serialize(self, data: Any) -> str:
        """Serialize data to string."""
        ...

    def deserialize(self, text: str) -> Any:
        """Deserialize string to data."""
        ...
