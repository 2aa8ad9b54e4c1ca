from __future__ import annotations

from pathlib import Path
from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from reference.types import upgrade_legacy_reference_type

CONFIG_FILENAME = "coderef.toml"

ASK = "Ask"


class CodeRefConfig(BaseModel):
    """Settings for building code references."""

    model_config = ConfigDict(extra="forbid")

    include_relative_path: bool = Field(
        default=True,
        description="Use the workspace-relative path instead of the bare file name",
    )
    link_source: bool = Field(
        default=True,
        description="Append a link to the file on its hosted remote",
    )
    cursor_reference_type: str = Field(
        default=ASK,
        description="Reference type for a cursor ('Ask' prompts each time)",
    )
    selection_reference_type: str = Field(
        default=ASK,
        description="Reference type for a selection ('Ask' prompts each time)",
    )
    use_git_root: bool = Field(
        default=True,
        description="Build source links from the repository root",
    )

    @field_validator("cursor_reference_type", "selection_reference_type", mode="before")
    @classmethod
    def upgrade_legacy_type(cls, v: Any) -> Any:
        """Rewrite the retired ``"Filename"`` value before validation."""
        if isinstance(v, str):
            return upgrade_legacy_reference_type(v)
        return v


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: str | Path) -> CodeRefConfig:
    """Load configuration from coderef.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return CodeRefConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return CodeRefConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


__all__ = ["ASK", "CONFIG_FILENAME", "CodeRefConfig", "ConfigError", "load_config"]
