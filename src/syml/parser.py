"""Entry point turning SYML text into a value tree."""

from __future__ import annotations

import logging
import time
from typing import Dict, Optional, Union

from syml.config import DEFAULT_INDENT_STEP, ParserOptions
from syml.errors import ErrorKind, SymlParseError
from syml.grammar.blocks import property_statements
from syml.grammar.context import ParseContext, Value

LOG = logging.getLogger(__name__)

Source = Union[bytes, bytearray, str]


class SymlParser:
    """Parses complete SYML documents with a fixed set of options.

    Instances hold no per-parse state and can be shared between threads.
    """

    def __init__(self, options: Optional[ParserOptions] = None) -> None:
        self.options = options or ParserOptions()

    def parse(self, source: Source) -> Dict[str, Value]:
        """
        Parse ``source`` into a mapping.

        ``str`` input is encoded as UTF-8; error offsets always refer to the
        byte buffer. Raises :class:`SymlParseError` unless the whole input is
        consumed.
        """
        buffer = source.encode("utf-8") if isinstance(source, str) else bytes(source)
        size = len(buffer)
        # Every leaf value is terminated by a line ending, including the last one;
        # a trailing lone "\r" is left in place so it fails like it would mid-document.
        if not buffer.endswith((b"\n", b"\r")):
            buffer += b"\n"

        started = time.perf_counter()
        ctx = ParseContext(buffer, self.options)
        tree, end = property_statements(ctx, 0, 0)
        if end < len(buffer):
            raise _residual_error(ctx, end, size)

        LOG.debug(
            "Parsed %d bytes into %d top-level keys in %.2f ms",
            size,
            len(tree),
            (time.perf_counter() - started) * 1000.0,
        )
        return tree


def parse(
    source: Source,
    *,
    indent_step: int = DEFAULT_INDENT_STEP,
    strict_duplicates: bool = False,
) -> Dict[str, Value]:
    """Parse a SYML document with the given options."""
    options = ParserOptions(indent_step=indent_step, strict_duplicates=strict_duplicates)
    return SymlParser(options).parse(source)


def _residual_error(ctx: ParseContext, end: int, size: int) -> SymlParseError:
    tracker = ctx.tracker
    if tracker.offset >= end:
        offset, kind, attempts = tracker.offset, tracker.kind, tuple(tracker.attempts)
    else:
        offset, kind, attempts = end, ErrorKind.RESIDUAL_INPUT, ()
    return SymlParseError(min(offset, size), kind, attempts, residual_offset=end)
