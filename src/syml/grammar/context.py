"""Parse state shared by every grammar function."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Union

from syml.config import ParserOptions
from syml.errors import Backtrack, ErrorKind, FailureTracker

Value = Union[str, List["Value"], Dict[str, "Value"], None]


@dataclass
class ParseContext:
    """Immutable input buffer plus the options and failure trace of one parse call."""

    source: bytes
    options: ParserOptions
    tracker: FailureTracker = field(default_factory=FailureTracker)

    def fail(self, offset: int, production: str, kind: ErrorKind | None = None) -> Backtrack:
        return self.tracker.fail(offset, production, kind)

    def startswith(self, token: bytes, pos: int) -> bool:
        return self.source.startswith(token, pos)

    def decode(self, start: int, end: int) -> str:
        try:
            return self.source[start:end].decode("utf-8")
        except UnicodeDecodeError as exc:
            raise self.fail(start + exc.start, "UTF-8 text") from exc
