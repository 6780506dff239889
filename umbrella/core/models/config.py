"""
Run configuration — every setting the generator needs, validated once.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class UmbrellaConfig(BaseModel):
    """Settings for one generation run.

    Attributes:
        header_dest:     Output header path (overwritten). Only needed to generate.
        header_template: Template containing the placeholder tokens. Only needed to generate.
        includes_dir:    Root directory scanned for header files.
        static_includes: Curated, dependency-ordered include list. Not needed to scan.
        namespace:       Directory segment that starts each include path.
        extension:       Header file suffix to scan for.
        directive:       Include keyword written before ``<path>``.
    """

    model_config = ConfigDict(extra="forbid")

    header_dest: Path | None = None
    header_template: Path | None = None
    includes_dir: Path
    static_includes: Path | None = None

    namespace: str = "openssl"
    extension: str = ".h"
    directive: str = "#import"
