"""
Calculator configuration schema.

Defines the human-authored, reviewable source artifact for calculator
defaults. YAML is parsed into these types by the loader; everything here is
declarative data with no executable logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP

# YAML spelling -> decimal rounding mode
ROUNDING_MODES: dict[str, str] = {
    "half_up": ROUND_HALF_UP,
    "half_even": ROUND_HALF_EVEN,
}


@dataclass(frozen=True)
class ProjectSeed:
    """A project registered when a session starts."""

    id: str
    name: str


@dataclass(frozen=True)
class EntrySeed:
    """A function point entry registered when a session starts."""

    project_id: str
    function_type: str
    name: str
    complexity: str


@dataclass(frozen=True)
class CalculatorConfig:
    """
    Parsed calculator configuration.

    ``characteristic_defaults`` holds (code, degree) pairs in canonical
    characteristic order; ``rounding`` is a ``decimal`` rounding mode.
    """

    config_id: str
    version: int
    rounding: str
    characteristic_defaults: tuple[tuple[str, int], ...]
    projects: tuple[ProjectSeed, ...] = ()
    entries: tuple[EntrySeed, ...] = ()
    checksum: str = ""
