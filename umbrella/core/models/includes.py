"""
Include models — the static include list and the reconciliation report.

An include directive is a plain string such as ``#import <openssl/ssl.h>``;
equality is exact string equality, so lists are kept as ``list[str]``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class StaticIncludes(BaseModel):
    """The curated, dependency-ordered include list read from disk.

    ``content`` is what goes into the template verbatim. ``entries`` is the
    same list without blank lines, used for drift comparison.
    """

    path: Path | None = None
    content: str = ""
    entries: list[str] = Field(default_factory=list)


class ReconciliationResult(BaseModel):
    """Outcome of comparing the static list with the scanned list.

    Equivalent when both ``extra_*`` lists are empty, Divergent otherwise.
    """

    static_sorted: list[str] = Field(default_factory=list)
    scanned_sorted: list[str] = Field(default_factory=list)
    extra_in_static: list[str] = Field(default_factory=list)
    extra_in_scanned: list[str] = Field(default_factory=list)

    @property
    def equivalent(self) -> bool:
        return not self.extra_in_static and not self.extra_in_scanned

    @property
    def status(self) -> str:
        return "equivalent" if self.equivalent else "divergent"

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "static_count": len(self.static_sorted),
            "scanned_count": len(self.scanned_sorted),
            "extra_in_static": self.extra_in_static,
            "extra_in_scanned": self.extra_in_scanned,
        }
