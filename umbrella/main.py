"""
Umbrella header generator — CLI entrypoint.

Usage:
    python -m umbrella.main --help
    python -m umbrella.main generate
    python -m umbrella.main includes check

Settings come from flags, the environment (HEADER_DEST, HEADER_TEMPLATE,
INCLUDES_DIR, UMBRELLA_STATIC_INCLUDES) or umbrella.yml.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from umbrella import __version__
from umbrella.core.observability.logging_config import setup_logging
from umbrella.ui.cli.helpers import fail, load_cli_config


@click.group()
@click.version_option(version=__version__, prog_name="umbrella")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to umbrella.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Umbrella header generator — build a framework umbrella header from a curated include list."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("UMBRELLA_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("UMBRELLA_LOG_FILE"),
        log_file_level=os.environ.get("UMBRELLA_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.option("--dest", "header_dest", default=None, help="Output header path [HEADER_DEST].")
@click.option("--template", "header_template", default=None, help="Template file [HEADER_TEMPLATE].")
@click.option("--includes-dir", default=None, help="Directory to scan for headers [INCLUDES_DIR].")
@click.option(
    "--static-includes",
    default=None,
    help="Curated include list [UMBRELLA_STATIC_INCLUDES].",
)
@click.option("--namespace", default=None, help="Include path namespace directory [UMBRELLA_NAMESPACE].")
@click.option("--directive", default=None, help="Include keyword, e.g. #include [UMBRELLA_DIRECTIVE].")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    header_dest: str | None,
    header_template: str | None,
    includes_dir: str | None,
    static_includes: str | None,
    namespace: str | None,
    directive: str | None,
    as_json: bool,
) -> None:
    """Generate the umbrella header from the template.

    Fails if the headers on disk no longer match the static include list.

    Examples:

        umbrella generate --dest include/OpenSSL.h --template OpenSSL.h.in

        HEADER_DEST=OpenSSL.h umbrella generate
    """
    from umbrella.core.use_cases.generate import run_generate

    config = load_cli_config(
        ctx,
        {
            "header_dest": header_dest,
            "header_template": header_template,
            "includes_dir": includes_dir,
            "static_includes": static_includes,
            "namespace": namespace,
            "directive": directive,
        },
        as_json=as_json,
    )

    result = run_generate(config)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.ok:
            sys.exit(1)
        return

    if result.error:
        fail(result.error)

    if not ctx.obj.get("quiet"):
        click.secho(f"✅ Generated {result.destination}", fg="green", bold=True)
        click.echo(f"   Includes: {result.include_count}")
        click.echo(f"   Date:     {result.date}")


@cli.group()
def config() -> None:
    """Configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate the generator configuration without running it."""
    cfg = load_cli_config(ctx, {}, as_json=as_json)

    if as_json:
        click.echo(json.dumps({"ok": True, "config": cfg.model_dump(mode="json")}, indent=2))
        return

    click.secho("✅ Configuration is valid", fg="green", bold=True)
    for key, value in cfg.model_dump(mode="json").items():
        click.echo(f"   {key}: {value}")


# ── Register sub-command groups from umbrella/ui/cli/ ─────────────

from umbrella.ui.cli.includes import includes

cli.add_command(includes)


if __name__ == "__main__":
    cli()
