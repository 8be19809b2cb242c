"""
Module: fpa_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    scoring engine.  This is the canonical import surface for higher
    layers (fpa_services).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import fpa_kernel (and sibling engine modules).
    MUST NOT import fpa_services or fpa_config.

Invariants enforced:
    - Purity: engines hold no state and never read the clock or files.
    - Decimal-only arithmetic for VAF and adjusted totals.
    - Determinism: identical inputs always produce identical outputs.

Audit relevance:
    Engine invocations are traced via the ``@traced_engine`` decorator
    (see ``fpa_engines.tracer``), emitting FPA_ENGINE_TRACE log records.

Usage:
    from fpa_engines import compute_vaf, unadjusted_total, weight_for
"""

from fpa_engines.scoring import (
    CHARACTERISTIC_COUNT,
    COMPLEXITY_WEIGHTS,
    adjusted_total,
    build_entry,
    compute_vaf,
    project_totals,
    summarize_projects,
    unadjusted_total,
    weight_for,
)
from fpa_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    "CHARACTERISTIC_COUNT",
    "COMPLEXITY_WEIGHTS",
    "adjusted_total",
    "build_entry",
    "compute_input_fingerprint",
    "compute_vaf",
    "project_totals",
    "summarize_projects",
    "traced_engine",
    "unadjusted_total",
    "weight_for",
]
