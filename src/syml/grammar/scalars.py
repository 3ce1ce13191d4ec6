"""Scalar parsing: double-quoted strings with escapes and plain unquoted text."""

from __future__ import annotations

import re

from syml.errors import Backtrack, ErrorKind
from syml.grammar.context import ParseContext

# First byte excludes the YAML indicator characters; the rest only excludes
# flow/structure characters, so dashes and the like may appear mid-scalar.
PLAIN_SCALAR_PATTERN = (
    r"""[^\r\n\t ?:,\]\[{}#&*!|>'"%@`-]"""
    r"""[^\r\n\t ,\]\[{}:#"']*"""
    r"""(?:[ \t]+[^\r\n\t ,\]\[{}:#"']+)*"""
)

_PLAIN_SCALAR = re.compile(PLAIN_SCALAR_PATTERN.encode("ascii"))
_QUOTED_RUN = re.compile(rb'[^"\\\x7f]+')
_HEX_DIGITS = re.compile(rb"[0-9A-Fa-f]{4}")

_SIMPLE_ESCAPES = {
    b'"': '"',
    b"\\": "\\",
    b"/": "/",
    b"n": "\n",
    b"r": "\r",
    b"t": "\t",
    b"b": "\b",
    b"f": "\f",
}


def scalar(ctx: ParseContext, pos: int) -> tuple[str, int]:
    """Parse a quoted scalar, falling back to a plain one."""
    try:
        return double_quoted_scalar(ctx, pos)
    except Backtrack:
        return plain_scalar(ctx, pos)


def double_quoted_scalar(ctx: ParseContext, pos: int) -> tuple[str, int]:
    if not ctx.startswith(b'"', pos):
        raise ctx.fail(pos, "'\"'")
    text, end = _double_quoted_text(ctx, pos + 1)
    if not ctx.startswith(b'"', end):
        raise ctx.fail(end, "closing '\"'", ErrorKind.UNTERMINATED)
    return text, end + 1


def _double_quoted_text(ctx: ParseContext, pos: int) -> tuple[str, int]:
    parts: list[str] = []
    while True:
        match = _QUOTED_RUN.match(ctx.source, pos)
        if match is not None:
            parts.append(ctx.decode(pos, match.end()))
            pos = match.end()
        if not ctx.startswith(b"\\", pos):
            return "".join(parts), pos
        char, pos = _escape_sequence(ctx, pos + 1)
        parts.append(char)


def _escape_sequence(ctx: ParseContext, pos: int) -> tuple[str, int]:
    code = ctx.source[pos : pos + 1]
    if code == b"u":
        return _unicode_escape(ctx, pos + 1)
    if code not in _SIMPLE_ESCAPES:
        raise ctx.fail(pos, "escape sequence", ErrorKind.MALFORMED_ESCAPE)
    return _SIMPLE_ESCAPES[code], pos + 1


def _unicode_escape(ctx: ParseContext, pos: int) -> tuple[str, int]:
    match = _HEX_DIGITS.match(ctx.source, pos)
    if match is None:
        raise ctx.fail(pos, "four hex digits", ErrorKind.MALFORMED_ESCAPE)
    codepoint = int(match.group(), 16)
    # Surrogate halves are not Unicode scalar values.
    if 0xD800 <= codepoint <= 0xDFFF:
        raise ctx.fail(pos, "unicode scalar value", ErrorKind.MALFORMED_ESCAPE)
    return chr(codepoint), match.end()


def plain_scalar(ctx: ParseContext, pos: int) -> tuple[str, int]:
    match = _PLAIN_SCALAR.match(ctx.source, pos)
    if match is None:
        raise ctx.fail(pos, "plain scalar")
    return ctx.decode(pos, match.end()), match.end()
