"""
Response handlers.
"""
from .handlers import (
    MAX_DISCARD_SIZE,
    ResponseHandler,
    FuncHandler,
    JSONHandler,
    StringHandler,
    BufferHandler,
    WriterHandler,
    ReaderHandler,
    StatusHandler,
    ChainHandler,
    DiscardHandler,
    as_handler,
    assign,
    to_json,
    to_string,
    to_buffer,
    to_writer,
    to_reader,
    check_status,
    chain,
    discard,
)

__all__ = [
    "MAX_DISCARD_SIZE",
    # Handlers
    "ResponseHandler",
    "FuncHandler",
    "JSONHandler",
    "StringHandler",
    "BufferHandler",
    "WriterHandler",
    "ReaderHandler",
    "StatusHandler",
    "ChainHandler",
    "DiscardHandler",
    # Factories
    "as_handler",
    "assign",
    "to_json",
    "to_string",
    "to_buffer",
    "to_writer",
    "to_reader",
    "check_status",
    "chain",
    "discard",
]
