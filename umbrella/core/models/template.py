"""
Generated file model — the populated umbrella header before it is written.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A file produced by the populate phase.

    Attributes:
        path:      Destination path.
        content:   Full file content, written without newline translation.
                   An existing file at ``path`` is always replaced.
        reason:    Why this file was generated.
    """

    path: Path
    content: str
    reason: str = ""
