"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, xrdctl.toml only contains
overrides. An empty file (or no file at all) is a valid configuration.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

# --- xrdctl.toml sections ---


class OutputConfig(BaseModel):
    """[output] section: encoded text layout."""

    model_config = {"frozen": True}

    json_indent: int | None = 2
    ensure_ascii: bool = False
    xml_pretty_print: bool = True


class ConvertConfig(BaseModel):
    """[convert] section."""

    model_config = {"frozen": True}

    default_target: Literal["json", "xml"] = "json"


class XrdConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    output: OutputConfig = Field(default_factory=OutputConfig)
    convert: ConvertConfig = Field(default_factory=ConvertConfig)
