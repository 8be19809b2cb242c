"""
fpa_services -- Package init and public API.

Responsibility:
    Session orchestration that composes the pure scoring engine
    (fpa_engines/) with calculator configuration (fpa_config/).  This is
    the only layer that generates ids.

Architecture position:
    Services -- state transitions over engines + kernel.

    Dependency direction (enforced by tests/architecture/test_layer_boundaries.py):
        fpa_services/ -> fpa_engines/  (allowed)
        fpa_services/ -> fpa_kernel/   (allowed)
        fpa_engines/  -> fpa_services/ (FORBIDDEN)
        fpa_kernel/   -> fpa_services/ (FORBIDDEN)
"""

from fpa_services.session import (
    CalculatorState,
    add_entry,
    add_project,
    current_vaf,
    entries_for,
    initial_state,
    neutral_characteristics,
    select_project,
    set_characteristic,
    summary,
    totals_for,
)

__all__ = [
    "CalculatorState",
    "add_entry",
    "add_project",
    "current_vaf",
    "entries_for",
    "initial_state",
    "neutral_characteristics",
    "select_project",
    "set_characteristic",
    "summary",
    "totals_for",
]
