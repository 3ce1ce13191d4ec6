"""
SYML package initialisation.

Exposes the parser for the indentation-based configuration dialect used by
lockfiles, together with its error types and the loading/serialization helpers.
"""

from importlib import metadata

from syml.config import ParserOptions
from syml.errors import DuplicateKeyError, ErrorKind, SymlParseError
from syml.loader import load, load_syml, loads
from syml.parser import SymlParser, parse
from syml.serializer import dumps


def get_version() -> str:
    """Return the installed package version, falling back to source version during development."""
    try:
        return metadata.version("syml")
    except metadata.PackageNotFoundError:  # pragma: no cover - only occurs during dev
        return "0.1.0"


__all__ = [
    "DuplicateKeyError",
    "ErrorKind",
    "ParserOptions",
    "SymlParseError",
    "SymlParser",
    "dumps",
    "get_version",
    "load",
    "load_syml",
    "loads",
    "parse",
]
