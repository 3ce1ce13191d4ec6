"""Block structure: property runs, item runs and the expressions they hold.

Every production is parameterized by the indentation its statements must sit
at; nested blocks sit exactly one indent step deeper than their parent.
"""

from __future__ import annotations

from typing import Dict, List

from syml.errors import Backtrack, DuplicateKeyError
from syml.grammar.context import ParseContext, Value
from syml.grammar.lexical import comment, end_of_line, indentation, line_ending, space0, space1
from syml.grammar.scalars import scalar


def property_statements(ctx: ParseContext, pos: int, indent: int) -> tuple[Dict[str, Value], int]:
    """Collect ``key: value`` lines (and comment lines) until neither matches."""
    mapping: Dict[str, Value] = {}
    while True:
        try:
            pos = comment(ctx, pos)
            continue
        except Backtrack:
            pass
        try:
            (key, value), end = property_statement(ctx, pos, indent)
        except Backtrack:
            return mapping, pos
        if key in mapping and ctx.options.strict_duplicates:
            raise DuplicateKeyError(key, pos + indent)
        mapping[key] = value
        pos = end


def property_statement(ctx: ParseContext, pos: int, indent: int) -> tuple[tuple[str, Value], int]:
    pos = indentation(ctx, pos, indent)
    key, pos = scalar(ctx, pos)
    pos = space0(ctx, pos)
    if not ctx.startswith(b":", pos):
        raise ctx.fail(pos, "':'")
    pos = space0(ctx, pos + 1)
    value, pos = expression(ctx, pos, indent)
    return (key, value), pos


def item_statements(ctx: ParseContext, pos: int, indent: int) -> tuple[List[Value], int]:
    """Collect one or more ``- value`` lines."""
    value, pos = item_statement(ctx, pos, indent)
    items: List[Value] = [value]
    while True:
        try:
            value, pos = item_statement(ctx, pos, indent)
        except Backtrack:
            return items, pos
        items.append(value)


def item_statement(ctx: ParseContext, pos: int, indent: int) -> tuple[Value, int]:
    pos = indentation(ctx, pos, indent)
    if not ctx.startswith(b"-", pos):
        raise ctx.fail(pos, "'-'")
    pos = space1(ctx, pos + 1)
    return expression(ctx, pos, indent)


def expression(ctx: ParseContext, pos: int, indent: int) -> tuple[Value, int]:
    """Resolve the value after a key or item marker.

    A line break right after the marker introduces a nested block one indent
    step deeper, tried as items first and then as properties. Anything else on
    the same line must be a scalar running to the end of the line.
    """
    try:
        block_start = line_ending(ctx, pos)
    except Backtrack:
        pass
    else:
        nested = indent + ctx.options.indent_step
        try:
            return item_statements(ctx, block_start, nested)
        except Backtrack:
            return property_statements(ctx, block_start, nested)

    value, pos = scalar(ctx, pos)
    return value, end_of_line(ctx, pos)
