"""
Error taxonomy for umbrella header generation.

Every error is terminal for the run: the use case records it on the
result and the CLI exits non-zero with the message on stderr.
"""

from __future__ import annotations

from pathlib import Path


class UmbrellaError(Exception):
    """Base class for all generation failures."""


class ConfigurationError(UmbrellaError):
    """A required setting is missing or points to an unreadable resource."""


class InvalidInputError(ConfigurationError):
    """The header scan root does not exist or is not a readable directory."""


class EmptyContentError(UmbrellaError):
    """The static include list resolved to no content."""


class DivergenceError(UmbrellaError):
    """Scanned headers and the static include list disagree.

    Attributes:
        extra_in_static:  Directives listed statically but not found on disk
                          (remove them from the static file).
        extra_in_scanned: Directives found on disk but missing from the
                          static file (add them).
    """

    def __init__(
        self,
        extra_in_static: list[str],
        extra_in_scanned: list[str],
        static_includes: Path | None = None,
        includes_dir: Path | None = None,
    ) -> None:
        self.extra_in_static = list(extra_in_static)
        self.extra_in_scanned = list(extra_in_scanned)
        self.static_includes = static_includes
        self.includes_dir = includes_dir
        super().__init__(self._render())

    def _render(self) -> str:
        target = f'"{self.static_includes}"' if self.static_includes else "the static includes"
        source = f' with headers from "{self.includes_dir}"' if self.includes_dir else ""
        lines = [f"Includes have changed. Please update {target}{source}."]
        if self.extra_in_scanned:
            lines.append("Missing from the static includes (add):")
            lines.extend(f"  + {entry}" for entry in self.extra_in_scanned)
        if self.extra_in_static:
            lines.append("Not found on disk (remove):")
            lines.extend(f"  - {entry}" for entry in self.extra_in_static)
        return "\n".join(lines)
