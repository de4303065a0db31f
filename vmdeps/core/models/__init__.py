"""
Domain models — Pydantic types for vmdeps.

    from vmdeps.core.models import BinaryDependency, DependencyGroup, Settings
"""

from vmdeps.core.models.dependency import (
    BinaryDependency,
    Dependency,
    DependencyGroup,
    NoneDependency,
    split_digest,
)
from vmdeps.core.models.settings import Settings, memory_to_bytes

__all__ = [
    # dependency.py
    "BinaryDependency",
    "Dependency",
    "DependencyGroup",
    "NoneDependency",
    "split_digest",
    # settings.py
    "Settings",
    "memory_to_bytes",
]
