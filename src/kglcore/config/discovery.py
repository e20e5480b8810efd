"""Config file discovery and loading.

Walk-up finder locates kgl.toml, similar to how git finds .git/.
Environment variables are never consulted; callers pass explicit paths.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from kglcore.config.models import KglConfig

CONFIG_FILENAME = "kgl.toml"


class ConfigError(ValueError):
    """Raised when a config file cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Invalid config file {path}: {reason}")


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for kgl.toml.

    Returns the path to the config file, or None if not found.
    """
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> KglConfig:
    """Load and validate config from a TOML file.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns default KglConfig if no file is found. Malformed TOML raises
    :class:`ConfigError`; schema violations raise pydantic's
    ``ValidationError``.
    """
    if path is None:
        path = find_config(cwd)

    if path is None:
        return KglConfig()

    raw = path.read_text(encoding="utf-8")
    try:
        data: dict[str, Any] = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(path, str(exc)) from exc
    return KglConfig.model_validate(data)
