"""
fpa_services.session -- Explicit calculator state and pure transitions.

Responsibility:
    Hold the projects, entries, characteristic ratings and project
    selection of one calculator session as an immutable value, and provide
    pure transition functions (``add_project``, ``select_project``,
    ``add_entry``, ``set_characteristic``) that return a new state.
    Query helpers delegate every figure to ``fpa_engines.scoring``.

Architecture position:
    Services -- orchestration over engines + kernel + config.
    The only layer that generates ids.

Invariants enforced:
    - Exactly fourteen characteristics, one per CharacteristicCode, in
      canonical order; edits clamp the degree to 0..5.
    - Entries are append-only and always reference a registered project.
    - Entry points are derived by the scoring engine.
    - A non-empty session always has a selected project.

Failure modes:
    - ProjectNotFoundError for an unknown project id.
    - DuplicateProjectError when registering an id twice.
    - CharacteristicNotFoundError for an unknown characteristic key.
    - ValidationError subclasses propagated from entry/project construction.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal
from uuid import uuid4

from fpa_config import CalculatorConfig
from fpa_engines.scoring import (
    build_entry,
    compute_vaf,
    project_totals,
    summarize_projects,
)
from fpa_kernel.domain.values import (
    CharacteristicCode,
    Complexity,
    FunctionPointEntry,
    FunctionType,
    GeneralCharacteristic,
    Project,
    ProjectTotals,
    coerce_degree,
)
from fpa_kernel.exceptions import (
    CharacteristicCountError,
    CharacteristicNotFoundError,
    DuplicateCharacteristicError,
    DuplicateProjectError,
    ProjectNotFoundError,
)
from fpa_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.session")

_CANONICAL_ORDER = {code: position for position, code in enumerate(CharacteristicCode)}


def neutral_characteristics() -> tuple[GeneralCharacteristic, ...]:
    """Fourteen characteristics, all rated 0."""
    return tuple(GeneralCharacteristic(code, 0) for code in CharacteristicCode)


def _canonical_characteristics(
    characteristics: tuple[GeneralCharacteristic, ...],
) -> tuple[GeneralCharacteristic, ...]:
    """One rating per code, sorted into CharacteristicCode order."""
    if len(characteristics) != len(_CANONICAL_ORDER):
        raise CharacteristicCountError(len(_CANONICAL_ORDER), len(characteristics))
    seen: set[CharacteristicCode] = set()
    for characteristic in characteristics:
        if characteristic.code in seen:
            raise DuplicateCharacteristicError(characteristic.code.value)
        seen.add(characteristic.code)
    return tuple(sorted(characteristics, key=lambda c: _CANONICAL_ORDER[c.code]))


@dataclass(frozen=True)
class CalculatorState:
    """Immutable snapshot of a calculator session.

    An empty ``characteristics`` tuple means all fourteen rated 0. Any other
    value must rate each characteristic exactly once and is stored in
    canonical order, so position ``i`` is always ``list(CharacteristicCode)[i]``.
    """

    projects: tuple[Project, ...] = ()
    entries: tuple[FunctionPointEntry, ...] = ()
    characteristics: tuple[GeneralCharacteristic, ...] = ()
    selected_project_id: str | None = None
    rounding: str = ROUND_HALF_UP
    session_id: str | None = None

    def __post_init__(self) -> None:
        if not self.characteristics:
            object.__setattr__(self, "characteristics", neutral_characteristics())
        else:
            object.__setattr__(
                self,
                "characteristics",
                _canonical_characteristics(tuple(self.characteristics)),
            )

    def find_project(self, project_id: str) -> Project:
        for project in self.projects:
            if project.id == project_id:
                return project
        raise ProjectNotFoundError(project_id)

    @property
    def selected_project(self) -> Project | None:
        if self.selected_project_id is None:
            return None
        return self.find_project(self.selected_project_id)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def initial_state(config: CalculatorConfig) -> CalculatorState:
    """
    Build the starting state from configuration.

    Seeded projects keep their configured ids; seeded entries get their
    points from the weight table. The first project is selected and the
    session gets a fresh ``session_id`` for log correlation.
    """
    session_id = str(uuid4())
    with LogContext.bind(session_id=session_id):
        characteristics = tuple(
            GeneralCharacteristic(CharacteristicCode.parse(code), degree)
            for code, degree in config.characteristic_defaults
        )
        projects = tuple(Project(id=seed.id, name=seed.name) for seed in config.projects)
        entries = tuple(
            build_entry(seed.function_type, seed.name, seed.complexity, seed.project_id)
            for seed in config.entries
        )
        state = CalculatorState(
            projects=projects,
            entries=entries,
            characteristics=characteristics,
            selected_project_id=projects[0].id if projects else None,
            rounding=config.rounding,
            session_id=session_id,
        )
        logger.info("session_initialized", extra={
            "config_id": config.config_id,
            "project_count": len(projects),
            "entry_count": len(entries),
        })
    return state


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def add_project(
    state: CalculatorState,
    name: str,
    project_id: str | None = None,
) -> CalculatorState:
    """Register a project and select it.

    A ``uuid4`` id is generated when ``project_id`` is not given.
    """
    project = Project(id=project_id or str(uuid4()), name=name)
    if any(p.id == project.id for p in state.projects):
        raise DuplicateProjectError(project.id)

    with LogContext.bind(session_id=state.session_id, project_id=project.id):
        logger.info("project_added", extra={"project_name": project.name})
    return replace(
        state,
        projects=state.projects + (project,),
        selected_project_id=project.id,
    )


def select_project(state: CalculatorState, project_id: str) -> CalculatorState:
    state.find_project(project_id)
    return replace(state, selected_project_id=project_id)


def add_entry(
    state: CalculatorState,
    function_type: FunctionType | str,
    name: str,
    complexity: Complexity | str,
    project_id: str | None = None,
) -> CalculatorState:
    """
    Append a function point entry.

    The entry goes to ``project_id`` or, when omitted, to the selected
    project.

    Raises:
        ProjectNotFoundError: no such project, or nothing selected.
        InvalidFunctionTypeError / InvalidComplexityError / EmptyNameError:
            invalid entry data.
    """
    target = project_id if project_id is not None else state.selected_project_id
    if target is None:
        raise ProjectNotFoundError("<none selected>")
    state.find_project(target)

    with LogContext.bind(session_id=state.session_id, project_id=target):
        entry = build_entry(function_type, name, complexity, target)
        logger.info("entry_added", extra={
            "function_type": entry.function_type.value,
            "complexity": entry.complexity.value,
            "points": entry.points,
        })
    return replace(state, entries=state.entries + (entry,))


def _characteristic_index(key: CharacteristicCode | str | int) -> int:
    if isinstance(key, bool):
        raise CharacteristicNotFoundError(key)
    if isinstance(key, int):
        if 0 <= key < len(_CANONICAL_ORDER):
            return key
        raise CharacteristicNotFoundError(key)
    return _CANONICAL_ORDER[CharacteristicCode.parse(key)]


def set_characteristic(
    state: CalculatorState,
    key: CharacteristicCode | str | int,
    degree: int,
) -> CalculatorState:
    """Rate one characteristic; ``degree`` is clamped to 0..5.

    ``key`` is a CharacteristicCode, its value, or its 0-based position.

    Raises:
        CharacteristicNotFoundError: ``key`` names no characteristic.
        DegreeOfInfluenceOutOfRangeError: ``degree`` is not an integer.
    """
    index = _characteristic_index(key)
    current = state.characteristics[index]
    requested = coerce_degree(current.code, degree)
    updated = current.with_degree(requested)
    if updated.degree_of_influence != requested:
        with LogContext.bind(session_id=state.session_id):
            logger.warning("characteristic_degree_clamped", extra={
                "characteristic": current.code.value,
                "requested": requested,
                "applied": updated.degree_of_influence,
            })

    characteristics = list(state.characteristics)
    characteristics[index] = updated
    return replace(state, characteristics=tuple(characteristics))


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def entries_for(state: CalculatorState, project_id: str) -> tuple[FunctionPointEntry, ...]:
    """Entries of one project, in registration order."""
    return tuple(e for e in state.entries if e.project_id == project_id)


def current_vaf(state: CalculatorState) -> Decimal:
    with LogContext.bind(session_id=state.session_id):
        return compute_vaf(state.characteristics)


def totals_for(state: CalculatorState, project_id: str | None = None) -> ProjectTotals:
    """Totals of ``project_id``, or of the selected project."""
    target = project_id if project_id is not None else state.selected_project_id
    if target is None:
        raise ProjectNotFoundError("<none selected>")
    project = state.find_project(target)
    with LogContext.bind(session_id=state.session_id, project_id=target):
        return project_totals(project, state.entries, state.characteristics, state.rounding)


def summary(state: CalculatorState) -> tuple[ProjectTotals, ...]:
    """Totals of every registered project, in registration order."""
    with LogContext.bind(session_id=state.session_id):
        return summarize_projects(
            state.projects, state.entries, state.characteristics, state.rounding
        )
