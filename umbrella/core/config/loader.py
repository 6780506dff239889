"""
Configuration loader — builds ``UmbrellaConfig`` from its sources.

Sources are merged in precedence order:
    CLI flag  >  environment variable  >  umbrella.yml  >  model default

This is the only place that reads the environment; everything
downstream receives the validated config object.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from umbrella.core.errors import ConfigurationError
from umbrella.core.models.config import UmbrellaConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "umbrella.yml"

# Config field → environment variable
ENV_VARS: dict[str, str] = {
    "header_dest": "HEADER_DEST",
    "header_template": "HEADER_TEMPLATE",
    "includes_dir": "INCLUDES_DIR",
    "static_includes": "UMBRELLA_STATIC_INCLUDES",
    "namespace": "UMBRELLA_NAMESPACE",
    "extension": "UMBRELLA_HEADER_EXT",
    "directive": "UMBRELLA_DIRECTIVE",
}

REQUIRED_FIELDS = ("header_dest", "header_template", "includes_dir", "static_includes")

# Enough to compare the static list against the headers on disk
CHECK_FIELDS = ("includes_dir", "static_includes")

# Enough to list the headers on disk
SCAN_FIELDS = ("includes_dir",)

_PATH_FIELDS = REQUIRED_FIELDS


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for umbrella.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to umbrella.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def _read_config_file(path: Path) -> dict[str, Any]:
    """Read umbrella.yml; relative paths resolve against its directory."""
    if not path.is_file():
        raise ConfigurationError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under an "umbrella" key or be flat
    data = data.get("umbrella", data)
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected 'umbrella' to be a mapping in {path}")

    base = path.parent.resolve()
    for key in _PATH_FIELDS:
        value = data.get(key)
        if isinstance(value, str) and value and not Path(value).is_absolute():
            data[key] = str(base / value)

    return data


def _from_environ(environ: Mapping[str, str]) -> dict[str, str]:
    values = {}
    for field, var in ENV_VARS.items():
        value = environ.get(var, "")
        if value != "":
            values[field] = value
    return values


def _require_readable_file(path: Path, field: str) -> None:
    if not path.is_file() or not os.access(path, os.R_OK):
        raise ConfigurationError(f'"{path}" file must exist and be readable ({ENV_VARS[field]}).')


def load_config(
    path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
    required: tuple[str, ...] = REQUIRED_FIELDS,
) -> UmbrellaConfig:
    """Resolve and validate the run configuration.

    Args:
        path: Explicit path to umbrella.yml. If None, searches upward;
            a missing file is fine when everything comes from the environment.
        environ: Environment mapping (default: ``os.environ``).
        overrides: Values from CLI flags. ``None`` and ``""`` are ignored.
        required: Fields that must be set. Drift checks only need
            ``CHECK_FIELDS``, a scan only ``SCAN_FIELDS``; generation needs
            all of ``REQUIRED_FIELDS``.

    Returns:
        Validated UmbrellaConfig.

    Raises:
        ConfigurationError: A required setting is missing, the template or
            static includes file is unreadable, or the YAML is invalid.
    """
    if path is None:
        path = find_config_file()

    data: dict[str, Any] = _read_config_file(path) if path is not None else {}
    data.update(_from_environ(os.environ if environ is None else environ))
    for key, value in (overrides or {}).items():
        if value is not None and value != "":
            data[key] = value

    for field in REQUIRED_FIELDS:
        if field in required and data.get(field) in (None, ""):
            raise ConfigurationError(f"{ENV_VARS[field]} is required.")

    try:
        config = UmbrellaConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    if config.header_template is not None and "header_template" in required:
        _require_readable_file(config.header_template, "header_template")
    if config.static_includes is not None and "static_includes" in required:
        _require_readable_file(config.static_includes, "static_includes")

    logger.info(
        "Config: dest=%s template=%s includes=%s static=%s",
        config.header_dest,
        config.header_template,
        config.includes_dir,
        config.static_includes,
    )
    return config
