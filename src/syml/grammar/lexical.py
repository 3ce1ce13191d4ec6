"""Lexical primitives: whitespace runs, line endings, indentation and comments.

Each function takes the parse context and a byte position and returns the
position just past what it consumed, raising :class:`~syml.errors.Backtrack`
when the input does not match.
"""

from __future__ import annotations

import re

from syml.errors import Backtrack, ErrorKind
from syml.grammar.context import ParseContext

_SPACE_RUN = re.compile(rb"[ \t]*")
_INDENT_RUN = re.compile(rb" *")
_COMMENT_BODY = re.compile(rb"[^\r\n]*")


def space0(ctx: ParseContext, pos: int) -> int:
    return _SPACE_RUN.match(ctx.source, pos).end()


def space1(ctx: ParseContext, pos: int) -> int:
    end = space0(ctx, pos)
    if end == pos:
        raise ctx.fail(pos, "whitespace")
    return end


def line_ending(ctx: ParseContext, pos: int) -> int:
    if ctx.startswith(b"\n", pos):
        return pos + 1
    if ctx.startswith(b"\r\n", pos):
        return pos + 2
    raise ctx.fail(pos, "line ending")


def end_of_line(ctx: ParseContext, pos: int) -> int:
    """Consume one line ending and any blank lines after it."""
    pos = line_ending(ctx, pos)
    while True:
        try:
            pos = line_ending(ctx, space0(ctx, pos))
        except Backtrack:
            return pos


def indentation(ctx: ParseContext, pos: int, expected: int) -> int:
    """Consume exactly ``expected`` spaces; tabs never count as indentation."""
    end = min(_INDENT_RUN.match(ctx.source, pos).end(), pos + expected)
    if end - pos < expected:
        raise ctx.fail(end, f"indentation of {expected} spaces", ErrorKind.INDENTATION_MISMATCH)
    return end


def comment(ctx: ParseContext, pos: int) -> int:
    """Consume a blank or ``#`` comment line, including its line ending."""
    pos = space0(ctx, pos)
    if ctx.startswith(b"#", pos):
        pos = _COMMENT_BODY.match(ctx.source, pos + 1).end()
    else:
        # Recorded, not raised: lists "comment" among the expectations if the line fails.
        ctx.fail(pos, "comment")
    return end_of_line(ctx, pos)
