from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.toml")
CONFIG_PATH_ENV = "MITTER_CONFIG"


def resolve_config_path(path: str | Path | None = None) -> Path:
    """Explicit ``path`` first, then ``$MITTER_CONFIG``, then ./config.toml."""

    if path is not None:
        return Path(path)
    env_path = os.getenv(CONFIG_PATH_ENV)
    return Path(env_path) if env_path else DEFAULT_CONFIG_PATH


def load_raw_config(path: str | Path | None = None) -> Dict[str, Any]:
    """
    Load the SDK's TOML config and keep only the ``[mitter]`` table.

    The result is shaped ``{"mitter": {...}}`` for the section classes. A
    missing file yields ``{}`` so every setting falls back to ``MITTER_*``
    environment variables.
    """
    target = resolve_config_path(path)
    if not target.is_file():
        logger.debug("No SDK config at %s; using environment only", target)
        return {}

    with target.open("rb") as handle:
        data = tomllib.load(handle)

    section = data.get("mitter", {})
    if not isinstance(section, dict):
        raise ValueError(f"[mitter] in {target} must be a table")
    logger.debug("Loaded SDK config from %s (sections: %s)", target, sorted(section))
    return {"mitter": section} if section else {}


__all__ = ["load_raw_config", "resolve_config_path", "DEFAULT_CONFIG_PATH", "CONFIG_PATH_ENV"]
