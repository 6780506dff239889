"""
Domain models — Pydantic types for umbrella header generation.

    from umbrella.core.models import GeneratedFile, ReconciliationResult, StaticIncludes
"""

from umbrella.core.models.config import UmbrellaConfig
from umbrella.core.models.includes import ReconciliationResult, StaticIncludes
from umbrella.core.models.template import GeneratedFile

__all__ = [
    "GeneratedFile",
    "ReconciliationResult",
    "StaticIncludes",
    "UmbrellaConfig",
]
