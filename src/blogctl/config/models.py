"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, blogctl.toml only contains
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    backend: Literal["sqlite", "memory"] = "sqlite"
    path: Path = Path(".blogctl") / "blog.db"


class FindConfig(BaseModel):
    """[find] section."""

    model_config = {"frozen": True}

    default_count: int = Field(default=5, ge=1)


class BlogConfig(BaseModel):
    """Root config model: all sections with defaults."""

    model_config = {"frozen": True}

    store: StoreConfig = Field(default_factory=StoreConfig)
    find: FindConfig = Field(default_factory=FindConfig)
