"""Failure tracking and the public parse error types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(str, Enum):
    """Categories of parse failure, from least to most specific."""

    RESIDUAL_INPUT = "residual_input"
    INDENTATION_MISMATCH = "indentation_mismatch"
    UNTERMINATED = "unterminated"
    MALFORMED_ESCAPE = "malformed_escape"
    DUPLICATE_KEY = "duplicate_key"


_KIND_RANK = {kind: rank for rank, kind in enumerate(ErrorKind)}


@dataclass(frozen=True)
class Attempt:
    """A grammar production that failed at a byte offset."""

    offset: int
    production: str


class Backtrack(Exception):
    """Raised inside the grammar when an alternative does not match.

    Never escapes :mod:`syml.parser`; callers recover by trying the next
    alternative, and the entry point turns the accumulated trace into a
    :class:`SymlParseError`.
    """


@dataclass
class FailureTracker:
    """Remembers the furthest offset any production failed at.

    Every failure at that offset is kept so the final error can explain all
    the alternatives that were tried there.
    """

    offset: int = -1
    attempts: list[Attempt] = field(default_factory=list)
    kind: ErrorKind = ErrorKind.RESIDUAL_INPUT

    def fail(self, offset: int, production: str, kind: ErrorKind | None = None) -> Backtrack:
        if offset > self.offset:
            self.offset = offset
            self.attempts = []
            self.kind = ErrorKind.RESIDUAL_INPUT
        if offset == self.offset:
            attempt = Attempt(offset, production)
            if attempt not in self.attempts:
                self.attempts.append(attempt)
            if kind is not None and _KIND_RANK[kind] > _KIND_RANK[self.kind]:
                self.kind = kind
        return Backtrack(production)


class SymlParseError(ValueError):
    """Raised when the input cannot be consumed into a single value tree."""

    def __init__(
        self,
        offset: int,
        kind: ErrorKind,
        attempts: tuple[Attempt, ...] = (),
        residual_offset: int | None = None,
        message: str | None = None,
    ) -> None:
        self.offset = offset
        self.kind = kind
        self.attempts = attempts
        self.residual_offset = residual_offset
        self.path: str | None = None
        if message is None:
            message = f"Unable to parse input at byte {offset} ({kind.value})"
            if self.expected:
                message += f": expected {', '.join(self.expected)}"
        self.message = message
        super().__init__(message)

    @property
    def expected(self) -> list[str]:
        """Sorted names of the productions attempted where parsing stopped."""
        return sorted({attempt.production for attempt in self.attempts})

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class DuplicateKeyError(SymlParseError):
    """Raised in strict mode when a key repeats inside one mapping."""

    def __init__(self, key: str, offset: int) -> None:
        self.key = key
        super().__init__(
            offset,
            ErrorKind.DUPLICATE_KEY,
            (Attempt(offset, "unique key"),),
            message=f"Duplicate key '{key}' at byte {offset}",
        )
