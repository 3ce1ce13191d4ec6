"""Configuration models and helpers for SYML."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Literal, Optional, cast

from omegaconf import OmegaConf
from pydantic import BaseModel, Field

DEFAULT_INDENT_STEP = 2


class ParserOptions(BaseModel):
    """Settings that control how the grammar reads nested blocks."""

    indent_step: int = Field(
        default=DEFAULT_INDENT_STEP,
        ge=1,
        le=16,
        description="Extra leading spaces required for each nesting level.",
    )
    strict_duplicates: bool = Field(
        default=False,
        description="Reject a key that repeats inside one mapping instead of overwriting it.",
    )

    model_config = {"frozen": True}


class OutputOptions(BaseModel):
    """Presentation preferences for the command line."""

    format: Literal["json", "syml"] = Field(default="json")
    json_indent: int = Field(default=2, ge=0, le=8)
    rich_errors: bool = Field(default=True)


class CliConfig(BaseModel):
    """Top-level configuration for the ``syml`` command."""

    parser: ParserOptions = Field(default_factory=ParserOptions)
    output: OutputOptions = Field(default_factory=OutputOptions)


def load_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> CliConfig:
    """
    Build CliConfig from defaults, an optional YAML file and keyword overrides.

    Overrides use dotted notation matching the nested configuration keys
    (e.g. ``parser.indent_step=4``); ``None`` values are ignored.
    """
    merged: Dict[str, Any] = CliConfig().model_dump()

    if config_path:
        file_conf = cast(Dict[str, Any], OmegaConf.to_container(OmegaConf.load(config_path), resolve=True))
        merged = _deep_merge(merged, file_conf or {})

    if overrides:
        for dotted_key, value in overrides.items():
            if value is None:
                continue
            _apply_override(merged, dotted_key, value)

    return CliConfig.model_validate(merged)


def _deep_merge(base: Dict[str, Any], extra: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in extra.items():
        if (
            key in base
            and isinstance(base[key], dict)
            and isinstance(value, dict)
        ):
            base[key] = _deep_merge(dict(base[key]), value)
        else:
            base[key] = value
    return base


def _apply_override(target: Dict[str, Any], dotted_key: str, value: Any) -> None:
    parts = dotted_key.split(".")
    current = target
    for part in parts[:-1]:
        current = current.setdefault(part, {})
    current[parts[-1]] = value
