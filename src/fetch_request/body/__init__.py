"""
Request body providers.
"""
from .pipe import PipeReader, PipeWriter, create_pipe, DEFAULT_PIPE_CAPACITY
from .providers import (
    BodyProvider,
    BodyStream,
    BytesBody,
    JSONBody,
    FormBody,
    FileBody,
    ReaderBody,
    WriterBody,
    ReplayableBody,
    from_bytes,
    from_json,
    from_form,
    from_file,
    from_reader,
    from_writer,
)

__all__ = [
    # Pipe
    "PipeReader",
    "PipeWriter",
    "create_pipe",
    "DEFAULT_PIPE_CAPACITY",
    # Providers
    "BodyProvider",
    "BodyStream",
    "BytesBody",
    "JSONBody",
    "FormBody",
    "FileBody",
    "ReaderBody",
    "WriterBody",
    "ReplayableBody",
    # Factories
    "from_bytes",
    "from_json",
    "from_form",
    "from_file",
    "from_reader",
    "from_writer",
]
