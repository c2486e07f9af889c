from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, Optional


class ErrorKind(IntEnum):
    """Protocol error kinds. The numeric values are part of the wire contract."""

    TIMEOUT = 0
    NODE_NOT_FOUND = 1
    NOT_SUPPORTED = 10
    TEMPORARILY_UNAVAILABLE = 11
    MALFORMED_REQUEST = 12
    CRASH = 13
    ABORT = 14
    KEY_DOES_NOT_EXIST = 20
    KEY_ALREADY_EXISTS = 21
    PRECONDITION_FAILED = 22
    TXN_CONFLICT = 30


class ErrorMessage(Exception):
    """Canonical error for dispatch and handler failures.

    Raised by handlers and the runtime, caught at the service boundary and
    turned into an ``error`` reply. ``cause`` is process-local and is never
    put on the wire.
    """

    def __init__(self, kind: ErrorKind, text: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(text)
        self.kind = ErrorKind(kind)
        self.text = str(text)
        self.cause = cause

    @property
    def code(self) -> int:
        return int(self.kind)

    def with_cause(self, cause: BaseException) -> "ErrorMessage":
        self.cause = cause
        return self

    def to_payload(self) -> Dict[str, Any]:
        return {"code": self.code, "text": self.text}

    def __str__(self) -> str:
        if self.cause is None:
            return f"[{self.code}] {self.text}"
        return f"[{self.code}] {self.text}\nSource: {self.cause}"

    def __repr__(self) -> str:
        return f"ErrorMessage({self.kind.name}, {self.text!r})"


def not_supported(kind: str) -> ErrorMessage:
    return ErrorMessage(ErrorKind.NOT_SUPPORTED, f"message type {kind} not supported")


def malformed(text: str, cause: Optional[BaseException] = None) -> ErrorMessage:
    return ErrorMessage(ErrorKind.MALFORMED_REQUEST, text, cause=cause)


def crash(text: str, cause: Optional[BaseException] = None) -> ErrorMessage:
    return ErrorMessage(ErrorKind.CRASH, text, cause=cause)
