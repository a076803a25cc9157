"""
Bounded in-memory byte pipe connecting one producer thread to one consumer.

Writes block while the buffer is full and reads block while it is empty.
The writer closes the pipe, optionally with an exception; once the buffered
bytes are drained the reader re-raises that exception instead of reporting
end-of-stream. Closing the reader makes pending and later writes fail with
BrokenPipeError so the producer can never block forever.
"""
import io
import threading
from typing import Optional, Tuple

DEFAULT_PIPE_CAPACITY = 64 * 1024


class _Pipe:
    """Shared state of a pipe, guarded by one condition variable."""

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError("pipe capacity must be positive")
        self.capacity = capacity
        self.buffer = bytearray()
        self.cond = threading.Condition()
        self.writer_closed = False
        self.reader_closed = False
        self.error: Optional[BaseException] = None

    def write(self, data: bytes) -> int:
        view = memoryview(data)
        written = 0
        with self.cond:
            while written < len(view):
                if self.reader_closed:
                    raise BrokenPipeError("write on closed pipe")
                if self.writer_closed:
                    raise ValueError("write to closed pipe writer")
                space = self.capacity - len(self.buffer)
                if space == 0:
                    self.cond.wait()
                    continue
                chunk = view[written:written + space]
                self.buffer.extend(chunk)
                written += len(chunk)
                self.cond.notify_all()
        return written

    def readinto(self, b) -> int:
        with self.cond:
            while not self.buffer:
                if self.reader_closed:
                    raise ValueError("read from closed pipe reader")
                if self.writer_closed:
                    if self.error is not None:
                        raise self.error
                    return 0
                self.cond.wait()
            n = min(len(b), len(self.buffer))
            b[:n] = self.buffer[:n]
            del self.buffer[:n]
            self.cond.notify_all()
            return n

    def close_writer(self, error: Optional[BaseException] = None) -> None:
        with self.cond:
            if self.writer_closed:
                return
            self.writer_closed = True
            self.error = error
            self.cond.notify_all()

    def close_reader(self) -> None:
        with self.cond:
            self.reader_closed = True
            self.buffer.clear()
            self.cond.notify_all()


class PipeReader(io.RawIOBase):
    """Read end of a pipe."""

    def __init__(self, pipe: _Pipe):
        super().__init__()
        self._pipe = pipe

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        return self._pipe.readinto(b)

    def close(self) -> None:
        if not self.closed:
            self._pipe.close_reader()
        super().close()


class PipeWriter(io.RawIOBase):
    """Write end of a pipe."""

    def __init__(self, pipe: _Pipe):
        super().__init__()
        self._pipe = pipe

    def writable(self) -> bool:
        return True

    def write(self, b) -> int:
        return self._pipe.write(bytes(b))

    def close_with_error(self, error: Optional[BaseException]) -> None:
        """Close the pipe so the reader sees `error` after the buffered bytes."""
        self._pipe.close_writer(error)
        super().close()

    def close(self) -> None:
        self.close_with_error(None)


def create_pipe(capacity: int = DEFAULT_PIPE_CAPACITY) -> Tuple[PipeReader, PipeWriter]:
    """Create a connected (reader, writer) pair."""
    pipe = _Pipe(capacity)
    return PipeReader(pipe), PipeWriter(pipe)
