"""Command-line entry point for SYML."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from pydantic import ValidationError

from syml.config import CliConfig, load_config
from syml.errors import SymlParseError
from syml.parser import SymlParser
from syml.reporting.report import emit_parse_error, emit_tree

app = typer.Typer(help="SYML: parse indentation-based configuration files into structured data.")

LOG = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
    )


def _resolve_config(
    config_file: Path | None,
    indent_step: int | None,
    strict: bool | None,
    output_format: str | None = None,
) -> CliConfig:
    overrides = {
        "parser.indent_step": indent_step,
        "parser.strict_duplicates": strict,
        "output.format": output_format,
    }
    try:
        return load_config(config_path=config_file, overrides=overrides)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def parse(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="SYML document to parse."),
    output_format: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: 'json' or 'syml' (re-serialized).",
    ),
    strict: bool | None = typer.Option(
        None,
        "--strict/--no-strict",
        help="Reject duplicate keys instead of keeping the last value.",
    ),
    indent_step: int | None = typer.Option(
        None,
        "--indent-step",
        help="Spaces added per nesting level.",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Optional OmegaConf YAML configuration to load before applying CLI overrides.",
    ),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level (DEBUG, INFO, ...)."),
) -> None:
    """Parse a document and print the resulting tree."""
    _configure_logging(log_level)
    config = _resolve_config(config_file, indent_step, strict, output_format)

    source = file.read_bytes()
    try:
        tree = SymlParser(config.parser).parse(source)
    except SymlParseError as exc:
        emit_parse_error(exc, source, config, path=file)
        raise typer.Exit(code=1) from exc
    emit_tree(tree, config)


@app.command()
def check(
    files: list[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Documents to validate."),
    strict: bool | None = typer.Option(
        None,
        "--strict/--no-strict",
        help="Reject duplicate keys instead of keeping the last value.",
    ),
    indent_step: int | None = typer.Option(
        None,
        "--indent-step",
        help="Spaces added per nesting level.",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Optional OmegaConf YAML configuration to load before applying CLI overrides.",
    ),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level (DEBUG, INFO, ...)."),
) -> None:
    """Validate documents, exiting with status 1 if any fails to parse."""
    _configure_logging(log_level)
    config = _resolve_config(config_file, indent_step, strict)
    parser = SymlParser(config.parser)

    failures = 0
    for path in files:
        source = path.read_bytes()
        try:
            parser.parse(source)
        except SymlParseError as exc:
            failures += 1
            emit_parse_error(exc, source, config, path=path)
            continue
        typer.echo(f"{path}: ok")

    LOG.info("Checked %d file(s), %d failed", len(files), failures)
    if failures:
        raise typer.Exit(code=1)


if __name__ == "__main__":  # pragma: no cover
    app()
