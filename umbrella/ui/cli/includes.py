"""
CLI commands for the include lists.

Thin wrappers over ``umbrella.core.services.header_scan`` and
``umbrella.core.use_cases.check``.
"""

from __future__ import annotations

import json
import sys

import click

from umbrella.core.config.loader import CHECK_FIELDS, SCAN_FIELDS
from umbrella.ui.cli.helpers import fail, load_cli_config


@click.group("includes")
def includes() -> None:
    """Includes — scan headers on disk and check them against the static list."""


# ── Scan ────────────────────────────────────────────────────────


@includes.command("scan")
@click.option("--includes-dir", default=None, help="Directory to scan for headers [INCLUDES_DIR].")
@click.option("--namespace", default=None, help="Include path namespace directory [UMBRELLA_NAMESPACE].")
@click.option("--extension", default=None, help="Header file suffix [UMBRELLA_HEADER_EXT].")
@click.option("--directive", default=None, help="Include keyword, e.g. #include [UMBRELLA_DIRECTIVE].")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def scan_cmd(
    ctx: click.Context,
    includes_dir: str | None,
    namespace: str | None,
    extension: str | None,
    directive: str | None,
    as_json: bool,
) -> None:
    """Print the scanned include directives, sorted.

    The output is a starting point for the static include list; it
    still needs to be put in dependency order by hand.
    """
    from umbrella.core.errors import InvalidInputError
    from umbrella.core.services.header_scan import scan

    cfg = load_cli_config(
        ctx,
        {
            "includes_dir": includes_dir,
            "namespace": namespace,
            "extension": extension,
            "directive": directive,
        },
        required=SCAN_FIELDS,
        as_json=as_json,
    )

    try:
        directives = sorted(scan(cfg.includes_dir, cfg.namespace, cfg.extension, cfg.directive))
    except InvalidInputError as e:
        fail(str(e), as_json=as_json, kind=type(e).__name__)

    if as_json:
        click.echo(json.dumps({"ok": True, "count": len(directives), "includes": directives}, indent=2))
        return

    for entry in directives:
        click.echo(entry)


# ── Check ───────────────────────────────────────────────────────


@includes.command("check")
@click.option("--includes-dir", default=None, help="Directory to scan for headers [INCLUDES_DIR].")
@click.option(
    "--static-includes",
    default=None,
    help="Curated include list [UMBRELLA_STATIC_INCLUDES].",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check_cmd(
    ctx: click.Context,
    includes_dir: str | None,
    static_includes: str | None,
    as_json: bool,
) -> None:
    """Check the static include list against the headers on disk.

    Writes nothing. Exits 1 if the lists have drifted apart.
    """
    from umbrella.core.services.include_reconcile import format_divergence
    from umbrella.core.use_cases.check import run_check

    cfg = load_cli_config(
        ctx,
        {"includes_dir": includes_dir, "static_includes": static_includes},
        required=CHECK_FIELDS,
        as_json=as_json,
    )

    result = run_check(cfg)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.ok:
            sys.exit(1)
        return

    if result.error:
        fail(result.error)

    recon = result.reconciliation
    assert recon is not None  # guaranteed after error check above

    if recon.equivalent:
        click.secho(
            f"✅ {cfg.static_includes} matches {len(recon.scanned_sorted)} header(s)",
            fg="green",
        )
        return

    click.secho(
        f'❌ Includes have changed. Please update "{cfg.static_includes}" '
        f'with headers from "{cfg.includes_dir}"',
        fg="red",
        bold=True,
        err=True,
    )
    click.echo(format_divergence(recon), err=True)
    sys.exit(1)
