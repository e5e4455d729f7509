"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, htmlbind.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ParserConfig(BaseModel):
    """[parser] section."""

    model_config = {"frozen": True}

    backend: str = "html.parser"


class BindingConfig(BaseModel):
    """[binding] section."""

    model_config = {"frozen": True}

    date_formats: list[str] = Field(default_factory=list)


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    disabled: list[str] = Field(default_factory=list)


class HtmlBindConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    parser: ParserConfig = Field(default_factory=ParserConfig)
    binding: BindingConfig = Field(default_factory=BindingConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
