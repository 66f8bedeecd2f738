"""Structured results returned to the command line."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Category of a failed or partially failed operation."""

    NOT_FOUND = "not_found"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    ALREADY_ASSOCIATED = "already_associated"
    LOOKUP_FAILED = "lookup_failed"
    PARTIAL_IO_FAILURE = "partial_io_failure"
    FATAL_IO_FAILURE = "fatal_io_failure"


@dataclass
class OperationResult:
    """Outcome of one user-level operation; message is meant to be shown verbatim."""

    success: bool
    message: str
    kind: ErrorKind | None = None
    data: Any = None

    @classmethod
    def ok(cls, message: str, data: Any = None, kind: ErrorKind | None = None) -> "OperationResult":
        return cls(success=True, message=message, kind=kind, data=data)

    @classmethod
    def fail(cls, message: str, kind: ErrorKind) -> "OperationResult":
        return cls(success=False, message=message, kind=kind)
