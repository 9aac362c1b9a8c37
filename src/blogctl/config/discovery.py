"""Project layout: where blogctl.toml lives and where the store goes.

The project root is the directory holding ``blogctl.toml`` (found by
walking up from the working directory, or named by ``--config`` /
``BLOGCTL_CONFIG``). Without a config file the working directory is the
root. A relative ``[store] path`` always resolves against the root, so
every subdirectory of a project shares one database.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from blogctl.config.models import BlogConfig

CONFIG_FILENAME = "blogctl.toml"
CONFIG_ENV_VAR = "BLOGCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the ``blogctl.toml`` nearest to *start* (default: cwd), or None.

    ``BLOGCTL_CONFIG`` wins over the walk-up; when it names a missing
    file no config is used.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidate = Path(env_path)
        return candidate if candidate.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def locate_config(explicit: str | None = None, start: Path | None = None) -> Path | None:
    """The config file for a CLI invocation: ``--config`` if given, else discovery."""
    if explicit:
        path = Path(explicit)
        return path if path.is_file() else None
    return find_config(start)


def project_root(config_path: Path | None) -> Path:
    """Directory every relative project path resolves against."""
    return config_path.parent if config_path is not None else Path.cwd()


def resolve_store_path(root: Path, path: Path) -> Path:
    """Absolute location of the SQLite file; ``~`` expands to the home directory."""
    path = path.expanduser()
    return path if path.is_absolute() else root / path


def read_config(path: Path) -> dict[str, Any]:
    """Parse and validate *path*, returning the raw TOML tables.

    Only the sections the file names are returned, so code defaults stay
    in charge of everything else. Errors name the offending file.
    """
    try:
        data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc

    try:
        BlogConfig.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        msg = f"Invalid config in {path}: {problems}"
        raise click.ClickException(msg) from exc
    return data
