"""
Body providers for fetch_request.

A BodyProvider is a deferred factory: nothing is read, serialized or opened
until the provider is called, and every call yields a fresh stream. That lets
the same provider regenerate the body when httpx replays a request after a
redirect.
"""
import io
import logging
import threading
from abc import ABC, abstractmethod
from os import PathLike
from typing import (
    IO,
    Any,
    Callable,
    Iterator,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)
from urllib.parse import urlencode

import httpx

from ..config import default_serializer
from ..types import Serializer
from .pipe import DEFAULT_PIPE_CAPACITY, PipeWriter, create_pipe

logger = logging.getLogger("fetch_request.body")

BodyStream = IO[bytes]
FormData = Union[Mapping[str, Any], Sequence[Tuple[str, Any]]]

CHUNK_SIZE = 64 * 1024


class BodyProvider(ABC):
    """Produces a fresh readable, closable byte stream for a request body."""

    @abstractmethod
    def open(self) -> BodyStream:
        """Open a new body stream."""
        ...

    def __call__(self) -> BodyStream:
        return self.open()


class BytesBody(BodyProvider):
    """Body over an in-memory byte string."""

    def __init__(self, data: bytes):
        self._data = bytes(data)

    def open(self) -> BodyStream:
        return io.BytesIO(self._data)


class JSONBody(BodyProvider):
    """Body holding the serialized form of a structured value.

    Serialization happens on open(), so an unsupported or cyclic value
    raises there (TypeError / ValueError from the serializer).
    """

    def __init__(self, value: Any, serializer: Optional[Serializer] = None):
        self._value = value
        self._serializer = serializer or default_serializer

    def open(self) -> BodyStream:
        text = self._serializer.serialize(self._value)
        return io.BytesIO(text.encode("utf-8"))


class FormBody(BodyProvider):
    """URL-encoded form body, pairs sorted by key."""

    def __init__(self, data: FormData):
        items = data.items() if isinstance(data, Mapping) else data
        pairs = []
        for key, value in items:
            if isinstance(value, (list, tuple)):
                pairs.extend((key, v) for v in value)
            else:
                pairs.append((key, value))
        # stable sort keeps the order of repeated keys
        self._pairs = sorted(pairs, key=lambda pair: pair[0])

    def encode(self) -> str:
        return urlencode(self._pairs)

    def open(self) -> BodyStream:
        return io.BytesIO(self.encode().encode("ascii"))


class FileBody(BodyProvider):
    """Body read from a file opened at call time."""

    def __init__(self, path: Union[str, PathLike]):
        self._path = path

    def open(self) -> BodyStream:
        logger.debug(f"FileBody.open: path={self._path}")
        return open(self._path, "rb")


class _NopCloser(io.RawIOBase):
    """Adapts a read-only object to a stream whose close() leaves it untouched."""

    def __init__(self, source: Any):
        super().__init__()
        self._source = source

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        data = self._source.read(len(b))
        n = len(data)
        b[:n] = data
        return n


class ReaderBody(BodyProvider):
    """Body served from an existing readable object."""

    def __init__(self, source: Any):
        self._source = source

    def open(self) -> BodyStream:
        if callable(getattr(self._source, "close", None)):
            return self._source
        return _NopCloser(self._source)


class WriterBody(BodyProvider):
    """Body produced by a callback writing into a pipe on its own thread.

    The callback receives the write end. Whatever it raises becomes the
    terminal read error of the returned stream, and the write end is always
    closed when it returns.
    """

    def __init__(
        self,
        producer: Callable[[PipeWriter], Any],
        capacity: int = DEFAULT_PIPE_CAPACITY,
    ):
        self._producer = producer
        self._capacity = capacity

    def _run(self, writer: PipeWriter) -> None:
        error: Optional[BaseException] = None
        try:
            self._producer(writer)
        except BaseException as exc:
            # any failure, not only Exception, ends the body with an error
            logger.debug(f"WriterBody: producer raised {exc!r}")
            error = exc
        finally:
            writer.close_with_error(error)

    def open(self) -> BodyStream:
        reader, writer = create_pipe(self._capacity)
        thread = threading.Thread(
            target=self._run,
            args=(writer,),
            name="fetch-request-body-writer",
            daemon=True,
        )
        thread.start()
        return reader


class ReplayableBody(httpx.SyncByteStream):
    """Request stream that can regenerate itself.

    The first iteration drains the stream acquired up front; each later
    iteration (httpx replaying the body on a redirect) opens a new stream
    from the provider. Every stream is closed once its iteration ends.
    close() releases a stream that was acquired but never read, so a request
    built and then dropped does not leak it.
    """

    def __init__(self, first: BodyStream, provider: BodyProvider):
        self._first: Optional[BodyStream] = first
        self._provider = provider

    def __iter__(self) -> Iterator[bytes]:
        stream = self._first
        self._first = None
        if stream is None:
            logger.debug("ReplayableBody: regenerating body stream")
            stream = self._provider()
        try:
            while True:
                chunk = stream.read(CHUNK_SIZE)
                if not chunk:
                    break
                yield chunk
        finally:
            stream.close()

    def close(self) -> None:
        """Close the up-front stream if nothing ever read it."""
        if self._first is not None:
            self._first.close()
            self._first = None


def from_bytes(data: bytes) -> BodyProvider:
    """Body provider returning the given raw bytes."""
    return BytesBody(data)


def from_json(value: Any, serializer: Optional[Serializer] = None) -> BodyProvider:
    """Body provider serializing a value as JSON."""
    return JSONBody(value, serializer)


def from_form(data: FormData) -> BodyProvider:
    """Body provider encoding key/value pairs as a URL-encoded form."""
    return FormBody(data)


def from_file(path: Union[str, PathLike]) -> BodyProvider:
    """Body provider reading the file at `path`."""
    return FileBody(path)


def from_reader(source: Any) -> BodyProvider:
    """Body provider returning an existing readable object."""
    return ReaderBody(source)


def from_writer(
    producer: Callable[[PipeWriter], Any],
    capacity: int = DEFAULT_PIPE_CAPACITY,
) -> BodyProvider:
    """Body provider piping whatever `producer` writes into the request body."""
    return WriterBody(producer, capacity)
