"""
Shared CLI helpers — config resolution and failure reporting.
"""

from __future__ import annotations

import json
import sys
from typing import Any, NoReturn

import click

from umbrella.core.config.loader import REQUIRED_FIELDS, load_config
from umbrella.core.errors import ConfigurationError
from umbrella.core.models.config import UmbrellaConfig


def fail(message: str, *, as_json: bool = False, kind: str | None = None) -> NoReturn:
    """Report a failure and exit 1. JSON goes to stdout, text to stderr."""
    if as_json:
        click.echo(json.dumps({"ok": False, "error": message, "error_kind": kind}, indent=2))
    else:
        click.secho(f"❌ Failed: {message}", fg="red", err=True)
    sys.exit(1)


def load_cli_config(
    ctx: click.Context,
    overrides: dict[str, Any],
    *,
    required: tuple[str, ...] = REQUIRED_FIELDS,
    as_json: bool = False,
) -> UmbrellaConfig:
    """Resolve config from --config, the environment and command flags."""
    try:
        return load_config(
            ctx.obj.get("config_path"),
            overrides=overrides,
            required=required,
        )
    except ConfigurationError as e:
        fail(str(e), as_json=as_json, kind=type(e).__name__)
