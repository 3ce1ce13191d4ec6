"""Write value trees back out as SYML text the parser reads unchanged."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from typing import Any

from syml.config import DEFAULT_INDENT_STEP
from syml.grammar.scalars import PLAIN_SCALAR_PATTERN

_PLAIN_TEXT = re.compile(PLAIN_SCALAR_PATTERN)


def dumps(tree: Mapping[str, Any], *, indent_step: int = DEFAULT_INDENT_STEP) -> str:
    """
    Serialize a mapping of strings, lists and mappings.

    Keys are sorted. Strings are written bare when the plain-scalar grammar
    reads them back verbatim and double-quoted otherwise. Empty lists have no
    SYML spelling and raise ``ValueError``.
    """
    if not isinstance(tree, Mapping):
        raise TypeError(f"Top-level value must be a mapping, got {type(tree).__name__}")
    lines: list[str] = []
    _write_mapping(tree, 0, indent_step, lines)
    return "".join(lines)


def quote_scalar(text: str) -> str:
    """Return ``text`` as it should appear in a document."""
    if _PLAIN_TEXT.fullmatch(text):
        return text
    # DEL is the one character JSON leaves bare that quoted scalars reject.
    return json.dumps(text, ensure_ascii=False).replace("\x7f", "\\u007f")


def _write_mapping(mapping: Mapping[str, Any], indent: int, step: int, lines: list[str]) -> None:
    for key in sorted(mapping):
        if not isinstance(key, str):
            raise TypeError(f"Mapping keys must be strings, got {type(key).__name__}")
        _write_entry(" " * indent + quote_scalar(key) + ":", "", mapping[key], indent + step, step, lines)


def _write_sequence(items: Sequence[Any], indent: int, step: int, lines: list[str]) -> None:
    for item in items:
        # An item marker needs whitespace after it even before a line break.
        _write_entry(" " * indent + "-", " ", item, indent + step, step, lines)


def _write_entry(
    prefix: str,
    block_gap: str,
    value: Any,
    nested: int,
    step: int,
    lines: list[str],
) -> None:
    if isinstance(value, str):
        lines.append(f"{prefix} {quote_scalar(value)}\n")
    elif isinstance(value, Mapping):
        lines.append(f"{prefix}{block_gap}\n")
        _write_mapping(value, nested, step, lines)
    elif isinstance(value, Sequence):
        if not value:
            raise ValueError("Empty lists cannot be represented")
        lines.append(f"{prefix}{block_gap}\n")
        _write_sequence(value, nested, step, lines)
    else:
        raise TypeError(f"Unsupported value type {type(value).__name__}")
