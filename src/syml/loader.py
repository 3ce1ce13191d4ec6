"""Helpers feeding files, streams and strings to the parser."""

from __future__ import annotations

from pathlib import Path
from typing import IO, Any, Dict, Optional, Union

from syml.config import ParserOptions
from syml.errors import SymlParseError
from syml.parser import SymlParser


def load_syml(path: Path | str, options: Optional[ParserOptions] = None) -> Dict[str, Any]:
    path_obj = Path(path)
    source = path_obj.read_bytes()
    try:
        return SymlParser(options).parse(source)
    except SymlParseError as exc:
        exc.path = str(path_obj)
        raise


def load(stream: IO[Any], options: Optional[ParserOptions] = None) -> Dict[str, Any]:
    return loads(stream.read(), options)


def loads(text: Union[str, bytes], options: Optional[ParserOptions] = None) -> Dict[str, Any]:
    return SymlParser(options).parse(text)
