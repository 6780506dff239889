"""
Check use case — compare the static include list with the headers on disk.

Read-only: nothing is written, so this is safe to run in CI before
the build regenerates the umbrella header.
"""

from __future__ import annotations

from dataclasses import dataclass

from umbrella.core.errors import UmbrellaError
from umbrella.core.models.config import UmbrellaConfig
from umbrella.core.models.includes import ReconciliationResult
from umbrella.core.services.header_scan import scan
from umbrella.core.services.include_reconcile import read_static_includes, reconcile


@dataclass
class CheckResult:
    """Result of a drift check."""

    reconciliation: ReconciliationResult | None = None
    error: str | None = None
    error_kind: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.reconciliation is not None and self.reconciliation.equivalent

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        result: dict = {"ok": self.ok}
        if self.error:
            result["error"] = self.error
            result["error_kind"] = self.error_kind
        if self.reconciliation is not None:
            result["reconciliation"] = self.reconciliation.to_dict()
        return result


def run_check(config: UmbrellaConfig) -> CheckResult:
    """Reconcile the static include list against a fresh scan.

    Args:
        config: Validated configuration (``includes_dir`` and
            ``static_includes`` are used).

    Returns:
        CheckResult. Divergence is reported through ``reconciliation``,
        configuration problems through ``error``.
    """
    assert config.static_includes is not None

    result = CheckResult()

    try:
        static = read_static_includes(config.static_includes)
        scanned = scan(
            config.includes_dir,
            namespace=config.namespace,
            extension=config.extension,
            directive=config.directive,
        )
        result.reconciliation = reconcile(static.entries, scanned)
    except UmbrellaError as e:
        result.error = str(e)
        result.error_kind = type(e).__name__

    return result
