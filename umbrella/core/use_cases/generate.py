"""
Generate use case — scan, reconcile, populate, write.

Each stage runs to completion before the next begins. Any failure stops
the run; the stale destination has already been removed by then, so a
failed run never leaves an out-of-date umbrella header in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from umbrella.core.errors import UmbrellaError
from umbrella.core.models.config import UmbrellaConfig
from umbrella.core.models.includes import ReconciliationResult
from umbrella.core.models.template import GeneratedFile
from umbrella.core.services.header_scan import scan
from umbrella.core.services.include_reconcile import (
    ensure_equivalent,
    read_static_includes,
    reconcile,
)
from umbrella.core.services.template_populate import (
    populate,
    read_template,
    remove_stale,
    render_timestamp,
    write_generated_file,
)

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Outcome of one generation run."""

    destination: Path | None = None
    written: bool = False
    date: str = ""
    year: str = ""
    include_count: int = 0
    reconciliation: ReconciliationResult | None = None
    error: str | None = None
    error_kind: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.written

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        result: dict = {
            "ok": self.ok,
            "destination": str(self.destination) if self.destination else None,
            "written": self.written,
        }
        if self.error:
            result["error"] = self.error
            result["error_kind"] = self.error_kind
        else:
            result["date"] = self.date
            result["year"] = self.year
            result["include_count"] = self.include_count
        if self.reconciliation is not None:
            result["reconciliation"] = self.reconciliation.to_dict()
        return result


def run_generate(config: UmbrellaConfig, *, now: datetime | None = None) -> GenerateResult:
    """Regenerate the umbrella header described by ``config``.

    Args:
        config: Validated configuration with all required fields set.
        now: Timestamp for ``@DATE@``/``@YEAR@`` (default: current local time).

    Returns:
        GenerateResult with ``error`` set if any stage failed.
    """
    assert config.header_dest is not None and config.header_template is not None
    assert config.static_includes is not None

    result = GenerateResult(destination=config.header_dest)

    try:
        # Ensure we do not leave a stale generated header behind
        remove_stale(config.header_dest)

        result.date, result.year = render_timestamp(now)

        static = read_static_includes(config.static_includes)
        scanned = scan(
            config.includes_dir,
            namespace=config.namespace,
            extension=config.extension,
            directive=config.directive,
        )

        logger.info(
            'Comparing includes from "%s" with scanned includes...', config.static_includes
        )
        result.reconciliation = reconcile(static.entries, scanned)
        ensure_equivalent(
            result.reconciliation,
            static_includes=config.static_includes,
            includes_dir=config.includes_dir,
        )

        # The static list, not the scan, supplies the dependency-ordered content
        template = read_template(config.header_template)
        content = populate(template, static.content, result.date, result.year)

        write_generated_file(
            GeneratedFile(
                path=config.header_dest,
                content=content,
                reason=f"{len(static.entries)} includes from {config.static_includes.name}",
            )
        )
        result.written = True
        result.include_count = len(static.entries)

    except UmbrellaError as e:
        result.error = str(e)
        result.error_kind = type(e).__name__
    except OSError as e:
        logger.debug("Generation failed", exc_info=True)
        result.error = f"Cannot write {config.header_dest}: {e}"
        result.error_kind = type(e).__name__

    return result
