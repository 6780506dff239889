"""
Include reconciliation — compare the static include list with the scan.

The static list is the source of truth: a lexicographic ordering of
discovered headers does not respect the dependency order the umbrella
header needs to compile, so the scan only detects drift. Any mismatch
must be fixed by hand in the static file; nothing is merged automatically.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from pathlib import Path

from umbrella.core.errors import ConfigurationError, DivergenceError, EmptyContentError
from umbrella.core.models.includes import ReconciliationResult, StaticIncludes

logger = logging.getLogger(__name__)


def parse_static_includes(text: str, path: Path | None = None) -> StaticIncludes:
    """Split static include text into template content and comparable entries.

    Trailing line breaks are dropped from the content. Blank lines stay in
    the content but are not compared against the scan.
    """
    content = text.rstrip("\r\n")
    entries = [line.strip() for line in content.splitlines() if line.strip()]
    return StaticIncludes(path=path, content=content, entries=entries)


def read_static_includes(path: Path) -> StaticIncludes:
    """Read the curated include list from ``path``.

    Raises:
        ConfigurationError: If the file cannot be read.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f'Cannot read static includes "{path}": {e}') from e

    static = parse_static_includes(text, path)
    logger.debug("Read %d static include(s) from %s", len(static.entries), path)
    return static


def _multiset_difference(left: Iterable[str], right: Iterable[str]) -> list[str]:
    """Entries of ``left`` not matched one-for-one in ``right``, sorted."""
    return sorted((Counter(left) - Counter(right)).elements())


def reconcile(static_list: list[str], scanned_list: list[str]) -> ReconciliationResult:
    """Compare two include lists as multisets, ignoring order.

    Args:
        static_list: Directives from the curated static file.
        scanned_list: Directives derived from the headers on disk.

    Returns:
        ReconciliationResult. ``extra_in_static`` should be removed from the
        static file, ``extra_in_scanned`` should be added to it.

    Raises:
        EmptyContentError: If ``static_list`` is empty.
    """
    if not static_list:
        raise EmptyContentError("Unexpectedly do not have content for the umbrella header.")

    static_sorted = sorted(static_list)
    scanned_sorted = sorted(scanned_list)

    result = ReconciliationResult(
        static_sorted=static_sorted,
        scanned_sorted=scanned_sorted,
        extra_in_static=_multiset_difference(static_sorted, scanned_sorted),
        extra_in_scanned=_multiset_difference(scanned_sorted, static_sorted),
    )

    if result.equivalent:
        logger.info("Static includes match %d scanned header(s)", len(scanned_sorted))
    else:
        logger.info(
            "Include drift: %d to add, %d to remove",
            len(result.extra_in_scanned),
            len(result.extra_in_static),
        )
    return result


def ensure_equivalent(
    result: ReconciliationResult,
    static_includes: Path | None = None,
    includes_dir: Path | None = None,
) -> None:
    """Raise ``DivergenceError`` unless the reconciliation found no drift."""
    if result.equivalent:
        return
    raise DivergenceError(
        extra_in_static=result.extra_in_static,
        extra_in_scanned=result.extra_in_scanned,
        static_includes=static_includes,
        includes_dir=includes_dir,
    )


def format_divergence(result: ReconciliationResult) -> str:
    """Render drift as ``+``/``-`` lines relative to the static file."""
    lines = [f"+ {entry}" for entry in result.extra_in_scanned]
    lines.extend(f"- {entry}" for entry in result.extra_in_static)
    return "\n".join(lines)
