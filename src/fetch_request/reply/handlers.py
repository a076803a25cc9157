"""
Response handlers for fetch_request.

A handler receives the streamed httpx.Response and must consume or
deliberately stop reading its body before returning; Request.do() closes
the response afterwards. Handlers signal failure by raising.
"""
import io
import logging
from abc import ABC, abstractmethod
from collections.abc import MutableMapping, MutableSequence
from typing import Any, Callable, Iterator, Optional

import httpx

from ..config import default_serializer
from ..errors import UnexpectedStatusError
from ..types import Serializer, Slot

logger = logging.getLogger("fetch_request.reply")

# Bytes drained by the default handler so the connection can be reused.
MAX_DISCARD_SIZE = 640 * 1024


def assign(target: Any, data: Any) -> None:
    """Store decoded data into a Slot, mutable mapping or mutable sequence."""
    if isinstance(target, Slot):
        target.value = data
    elif isinstance(target, MutableMapping):
        if not isinstance(data, dict):
            raise TypeError(
                f"cannot decode {type(data).__name__} into a mapping"
            )
        target.update(data)
    elif isinstance(target, MutableSequence):
        if not isinstance(data, list):
            raise TypeError(
                f"cannot decode {type(data).__name__} into a sequence"
            )
        target[:] = data
    else:
        raise TypeError(
            f"unsupported decode target: {type(target).__name__}"
        )


def _check_target(target: Any) -> None:
    if not isinstance(target, (Slot, MutableMapping, MutableSequence)):
        raise TypeError(
            "decode target must be a Slot, a mutable mapping or a mutable "
            f"sequence, got {type(target).__name__}"
        )


class ResponseHandler(ABC):
    """Validates or consumes a response."""

    @abstractmethod
    def handle(self, response: httpx.Response) -> None:
        """Handle the response, raising on failure."""
        ...

    def __call__(self, response: httpx.Response) -> None:
        self.handle(response)


class FuncHandler(ResponseHandler):
    """Adapts a plain callable to the ResponseHandler interface."""

    def __init__(self, func: Callable[[httpx.Response], Any]):
        self._func = func

    def handle(self, response: httpx.Response) -> None:
        self._func(response)


class JSONHandler(ResponseHandler):
    """Decodes the body and stores the value into `target`."""

    def __init__(self, target: Any, serializer: Optional[Serializer] = None):
        _check_target(target)
        self._target = target
        self._serializer = serializer or default_serializer

    def handle(self, response: httpx.Response) -> None:
        response.read()
        data = self._serializer.deserialize(response.text)
        assign(self._target, data)


class StringHandler(ResponseHandler):
    """Drains the body as text into a Slot, only when the read succeeds."""

    def __init__(self, slot: Slot):
        self._slot = slot

    def handle(self, response: httpx.Response) -> None:
        parts = []
        for text in response.iter_text():
            parts.append(text)
        self._slot.value = "".join(parts)


class BufferHandler(ResponseHandler):
    """Appends the body to a bytearray."""

    def __init__(self, buffer: bytearray):
        self._buffer = buffer

    def handle(self, response: httpx.Response) -> None:
        for chunk in response.iter_bytes():
            self._buffer.extend(chunk)


class WriterHandler(ResponseHandler):
    """Copies the body to any object with a write() method."""

    def __init__(self, writer: Any):
        self._writer = writer

    def handle(self, response: httpx.Response) -> None:
        for chunk in response.iter_bytes():
            self._writer.write(chunk)


class _ResponseStream(io.RawIOBase):
    """Raw stream over the decoded chunks of a response body."""

    def __init__(self, chunks: Iterator[bytes]):
        super().__init__()
        self._chunks = chunks
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        while not self._pending:
            try:
                self._pending = next(self._chunks)
            except StopIteration:
                return 0
        n = min(len(b), len(self._pending))
        b[:n] = self._pending[:n]
        self._pending = self._pending[n:]
        return n


class ReaderHandler(ResponseHandler):
    """Hands a buffered reader over the body to a callback."""

    def __init__(self, func: Callable[[io.BufferedReader], Any]):
        self._func = func

    def handle(self, response: httpx.Response) -> None:
        reader = io.BufferedReader(_ResponseStream(response.iter_bytes()))
        self._func(reader)


class StatusHandler(ResponseHandler):
    """Accepts the listed status codes and raises for any other.

    On an unexpected status the body, if any, is decoded into `target` as an
    error payload before UnexpectedStatusError is raised.
    """

    def __init__(
        self,
        target: Any,
        accepted: Any,
        serializer: Optional[Serializer] = None,
    ):
        if target is not None:
            _check_target(target)
        self._target = target
        self._accepted = frozenset(accepted)
        self._serializer = serializer or default_serializer

    def handle(self, response: httpx.Response) -> None:
        status = response.status_code
        if status in self._accepted:
            return

        if self._target is None:
            raise UnexpectedStatusError(status)

        content = response.read()
        if not content:
            raise UnexpectedStatusError(status)

        try:
            data = self._serializer.deserialize(response.text)
            assign(self._target, data)
        except (ValueError, TypeError) as exc:
            raise UnexpectedStatusError(status) from exc
        raise UnexpectedStatusError(status, data)


class ChainHandler(ResponseHandler):
    """Runs several handlers on the same response, in order."""

    def __init__(self, handlers: Any):
        self._handlers = [as_handler(h) for h in handlers]

    def handle(self, response: httpx.Response) -> None:
        for handler in self._handlers:
            handler(response)


class DiscardHandler(ResponseHandler):
    """Reads and drops up to `limit` bytes of the body."""

    def __init__(self, limit: int = MAX_DISCARD_SIZE):
        self._limit = limit

    def handle(self, response: httpx.Response) -> None:
        discarded = 0
        for chunk in response.iter_bytes():
            discarded += len(chunk)
            if discarded >= self._limit:
                break
        logger.debug(f"DiscardHandler: discarded {discarded} bytes")


def as_handler(handler: Any) -> ResponseHandler:
    """Return `handler` as a ResponseHandler, wrapping plain callables."""
    if isinstance(handler, ResponseHandler):
        return handler
    if callable(handler):
        return FuncHandler(handler)
    raise TypeError(f"not a response handler: {handler!r}")


def to_json(target: Any, serializer: Optional[Serializer] = None) -> ResponseHandler:
    """Decode the body as JSON into a Slot, dict or list."""
    return JSONHandler(target, serializer)


def to_string(slot: Slot) -> ResponseHandler:
    """Store the body text into `slot`."""
    return StringHandler(slot)


def to_buffer(buffer: bytearray) -> ResponseHandler:
    """Append the body to `buffer`."""
    return BufferHandler(buffer)


def to_writer(writer: Any) -> ResponseHandler:
    """Copy the body to `writer`."""
    return WriterHandler(writer)


def to_reader(func: Callable[[io.BufferedReader], Any]) -> ResponseHandler:
    """Call `func` with a buffered reader over the body."""
    return ReaderHandler(func)


def check_status(
    target: Any = None,
    *accepted: int,
    serializer: Optional[Serializer] = None,
) -> ResponseHandler:
    """Raise UnexpectedStatusError unless the status is in `accepted`."""
    return StatusHandler(target, accepted, serializer)


def chain(*handlers: Any) -> ResponseHandler:
    """Combine handlers into one, stopping at the first that raises."""
    return ChainHandler(handlers)


def discard(limit: int = MAX_DISCARD_SIZE) -> ResponseHandler:
    """Drain at most `limit` bytes so the connection can be reused."""
    return DiscardHandler(limit)
