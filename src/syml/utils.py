"""Utility helpers for translating byte offsets into human positions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Location:
    """1-based line and column; the column counts bytes."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


def as_bytes(source: Union[str, bytes, bytearray]) -> bytes:
    return source.encode("utf-8") if isinstance(source, str) else bytes(source)


def offset_to_location(source: Union[str, bytes, bytearray], offset: int) -> Location:
    """Return the line/column of a byte offset, clamped to the buffer."""
    buffer = as_bytes(source)
    offset = max(0, min(offset, len(buffer)))
    line = buffer.count(b"\n", 0, offset) + 1
    line_start = buffer.rfind(b"\n", 0, offset) + 1
    return Location(line=line, column=offset - line_start + 1)


def line_at(source: Union[str, bytes, bytearray], offset: int) -> str:
    """Return the text of the line holding ``offset`` without its line ending."""
    buffer = as_bytes(source)
    offset = max(0, min(offset, len(buffer)))
    start = buffer.rfind(b"\n", 0, offset) + 1
    end = buffer.find(b"\n", offset)
    if end == -1:
        end = len(buffer)
    return buffer[start:end].rstrip(b"\r").decode("utf-8", errors="replace")
