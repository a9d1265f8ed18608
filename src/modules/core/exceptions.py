"""Shared domain exception base and error-kind taxonomy.

Every domain error carries an ``ErrorKind``.  Callers branch on
``exc.kind`` rather than on exception identity or message text, so the
classification survives being re-raised, wrapped or logged across layers.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Closed set of error kinds raised by the domain and DTO layers."""

    EMPTY_NAME = "EMPTY_NAME"
    RECORD_NOT_FOUND = "RECORD_NOT_FOUND"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"
    MALFORMED_INPUT = "MALFORMED_INPUT"


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    kind: ErrorKind

    def __init__(self, message: str, kind: ErrorKind) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
