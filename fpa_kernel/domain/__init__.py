"""
Pure domain layer.

This module contains immutable value objects with NO dependencies on:
- Storage
- Time/clock
- I/O

All domain objects are immutable and deterministic.
"""

from fpa_kernel.domain.values import (
    MAX_DEGREE_OF_INFLUENCE,
    MIN_DEGREE_OF_INFLUENCE,
    COMPLEXITY_WEIGHTS,
    CharacteristicCode,
    Complexity,
    FunctionPointEntry,
    FunctionType,
    GeneralCharacteristic,
    Project,
    ProjectTotals,
)

__all__ = [
    "MAX_DEGREE_OF_INFLUENCE",
    "MIN_DEGREE_OF_INFLUENCE",
    "COMPLEXITY_WEIGHTS",
    "CharacteristicCode",
    "Complexity",
    "FunctionPointEntry",
    "FunctionType",
    "GeneralCharacteristic",
    "Project",
    "ProjectTotals",
]
