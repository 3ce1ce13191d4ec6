"""Result and diagnostic presentation utilities."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from syml.config import CliConfig
from syml.errors import SymlParseError
from syml.serializer import dumps
from syml.utils import line_at, offset_to_location

LOG = logging.getLogger(__name__)


def emit_tree(tree: Dict[str, Any], config: CliConfig) -> None:
    """Write a parsed tree to stdout in the configured format."""
    if config.output.format == "syml":
        typer.echo(dumps(tree, indent_step=config.parser.indent_step), nl=False)
    else:
        indent = config.output.json_indent or None
        typer.echo(json.dumps(tree, indent=indent, ensure_ascii=False))


def emit_parse_error(
    error: SymlParseError,
    source: Union[str, bytes],
    config: CliConfig,
    path: Optional[Path] = None,
) -> None:
    """Report a parse failure on stderr, as a rich panel or a single line."""
    LOG.debug("Parse failure %r with attempts %s", error.kind, error.attempts)
    if config.output.rich_errors:
        render_parse_error(error, source, path=path)
        return
    location = offset_to_location(source, error.offset)
    where = f"{path}:{location}" if path else str(location)
    typer.secho(f"{where}: {error.message}", fg=typer.colors.RED, err=True)


def render_parse_error(
    error: SymlParseError,
    source: Union[str, bytes],
    path: Optional[Path] = None,
    console: Optional[Console] = None,
) -> None:
    console = console or Console(stderr=True)
    location = offset_to_location(source, error.offset)
    where = f"{path}:{location}" if path else f"line {location.line}, column {location.column}"

    body = Text()
    body.append(f"{where} (byte {error.offset})\n", style="bold")
    body.append(f"Kind: {error.kind.value.replace('_', ' ')}\n")
    body.append(line_at(source, error.offset) + "\n", style="cyan")
    body.append(" " * (location.column - 1) + "^", style="bold red")
    if error.expected:
        body.append("\nExpected: " + ", ".join(error.expected), style="yellow")

    console.print(
        Panel(
            body,
            title="Parse error",
            border_style="red",
            expand=False,
        ),
    )
