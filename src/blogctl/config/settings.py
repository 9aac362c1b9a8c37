"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``BLOGCTL_*`` prefix (``BLOGCTL_STORE__BACKEND=memory``)
  3. TOML file: ``blogctl.toml`` discovered via walk-up
  4. Code defaults: baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
delegates file lookup and parsing to :mod:`blogctl.config.discovery`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from blogctl.config.discovery import (
    locate_config,
    project_root,
    read_config,
    resolve_store_path,
)
from blogctl.config.models import FindConfig, StoreConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``blogctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            self._data = read_config(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class BlogSettings(BaseSettings):
    """Unified settings for the blogctl CLI.

    Stored on the :class:`~blogctl.commands._context.AppContext` created by
    the root CLI group.

    Attributes:
        root: Project directory (parent of ``blogctl.toml``, or CWD if no
            config was found). A relative ``store.path`` resolves against it.
        config_path: The TOML file in use, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "BLOGCTL_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    store: StoreConfig = Field(default_factory=StoreConfig)
    find: FindConfig = Field(default_factory=FindConfig)

    @property
    def db_path(self) -> Path:
        """Absolute path of the SQLite database."""
        return resolve_store_path(self.root, self.store.path)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> BlogSettings:
        """Construct settings from a CLI invocation.

        Discovers ``blogctl.toml`` via walk-up (or explicit *config_path*),
        resolves *root* from the config file's parent directory, and
        merges CLI flags as highest-priority overrides.
        """
        toml_path = locate_config(config_path, root)
        resolved_root = root if root is not None else project_root(toml_path)

        _tls.toml_path = toml_path
        try:
            return cls(
                root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None
