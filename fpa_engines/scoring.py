"""
fpa_engines.scoring -- Function point weighting, totals and value adjustment.

Responsibility:
    Resolve the weight of a (function type, complexity) pair, sum the
    unadjusted function points of a project, derive the Value Adjustment
    Factor (VAF) from the fourteen general system characteristics and
    apply it to produce the adjusted total.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import fpa_kernel (domain values, exceptions, logging).
    Consumed by fpa_services.session.

Invariants enforced:
    - The weight table (owned by fpa_kernel.domain.values and re-exported
      here) is total over FunctionType x Complexity and read-only.
    - Entry points are always derived from the table, never supplied.
    - VAF = sum(degree of influence) * 0.01 + 0.65, in [0.65, 1.35].
    - Decimal-only arithmetic for VAF and adjusted totals; floats are
      converted through ``str`` before use.
    - Purity: identical inputs always produce identical outputs.

Failure modes:
    - InvalidFunctionTypeError / InvalidComplexityError for values outside
      the closed enumerations.
    - CharacteristicCountError if compute_vaf does not receive exactly
      fourteen characteristics.
    - DuplicateCharacteristicError if a characteristic is rated twice.
    - DegreeOfInfluenceOutOfRangeError if a degree is outside 0..5.
    - CharacteristicNotFoundError for a rating whose code is unknown.

Usage:
    from fpa_engines.scoring import adjusted_total, compute_vaf, unadjusted_total

    raw = unadjusted_total(entries, project_id="1")
    vaf = compute_vaf(characteristics)
    adjusted_total(raw, vaf)   # Decimal("20.70") for raw=23, vaf=0.90
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from fpa_engines.tracer import traced_engine
from fpa_kernel.domain.values import (
    COMPLEXITY_WEIGHTS,
    MAX_DEGREE_OF_INFLUENCE,
    MIN_DEGREE_OF_INFLUENCE,
    CharacteristicCode,
    Complexity,
    FunctionPointEntry,
    FunctionType,
    GeneralCharacteristic,
    Project,
    ProjectTotals,
)
from fpa_kernel.exceptions import (
    CharacteristicCountError,
    DegreeOfInfluenceOutOfRangeError,
    DuplicateCharacteristicError,
)
from fpa_kernel.logging_config import get_logger

logger = get_logger("engines.scoring")

ENGINE_NAME = "scoring"
ENGINE_VERSION = "1.0"

CHARACTERISTIC_COUNT = len(CharacteristicCode)

VAF_BASE = Decimal("0.65")
VAF_STEP = Decimal("0.01")
CENT = Decimal("0.01")


def weight_for(function_type: FunctionType | str, complexity: Complexity | str) -> int:
    """
    Weight of one function of ``function_type`` rated ``complexity``.

    Both arguments are parsed against their closed enumerations first, so
    the table lookup below cannot miss.

    Raises:
        InvalidFunctionTypeError: ``function_type`` is not a FunctionType.
        InvalidComplexityError: ``complexity`` is not a Complexity.
    """
    return COMPLEXITY_WEIGHTS[FunctionType.parse(function_type)][
        Complexity.parse(complexity)
    ]


def build_entry(
    function_type: FunctionType | str,
    name: str,
    complexity: Complexity | str,
    project_id: str,
) -> FunctionPointEntry:
    """Create an entry whose points are derived from the weight table."""
    ftype = FunctionType.parse(function_type)
    tier = Complexity.parse(complexity)
    entry = FunctionPointEntry(
        function_type=ftype,
        name=name.strip() if isinstance(name, str) else name,
        complexity=tier,
        points=weight_for(ftype, tier),
        project_id=project_id,
    )
    logger.debug("entry_built", extra={
        "function_type": ftype.value,
        "complexity": tier.value,
        "points": entry.points,
        "project_id": project_id,
    })
    return entry


@traced_engine(ENGINE_NAME, ENGINE_VERSION, fingerprint_fields=("entries", "project_id"))
def unadjusted_total(entries: Iterable[FunctionPointEntry], project_id: str) -> int:
    """Sum of the points of every entry that belongs to ``project_id``.

    A project with no entries totals 0.
    """
    return sum(entry.points for entry in entries if entry.project_id == project_id)


def _degree_of(code: CharacteristicCode, degree: Any) -> int:
    if (
        isinstance(degree, bool)
        or not isinstance(degree, int)
        or not MIN_DEGREE_OF_INFLUENCE <= degree <= MAX_DEGREE_OF_INFLUENCE
    ):
        raise DegreeOfInfluenceOutOfRangeError(code.value, degree)
    return degree


@traced_engine(ENGINE_NAME, ENGINE_VERSION, fingerprint_fields=("characteristics",))
def compute_vaf(characteristics: Sequence[GeneralCharacteristic]) -> Decimal:
    """
    Value Adjustment Factor of fourteen rated characteristics.

    Formula: VAF = (sum of degrees of influence) x 0.01 + 0.65

    Preconditions:
        Exactly fourteen characteristics, one per CharacteristicCode, each
        rated 0..5.

    Postconditions:
        0.65 <= VAF <= 1.35.

    Raises:
        CharacteristicCountError: not exactly fourteen characteristics.
        DuplicateCharacteristicError: a characteristic appears twice.
        DegreeOfInfluenceOutOfRangeError: a degree outside 0..5.
        CharacteristicNotFoundError: a rating whose code is not one of the
            fourteen.
    """
    characteristics = tuple(characteristics)
    if len(characteristics) != CHARACTERISTIC_COUNT:
        logger.error("vaf_characteristic_count_mismatch", extra={
            "expected": CHARACTERISTIC_COUNT,
            "actual": len(characteristics),
        })
        raise CharacteristicCountError(CHARACTERISTIC_COUNT, len(characteristics))

    seen: set[CharacteristicCode] = set()
    total_influence = 0
    for characteristic in characteristics:
        code = CharacteristicCode.parse(characteristic.code)
        if code in seen:
            raise DuplicateCharacteristicError(code.value)
        seen.add(code)
        total_influence += _degree_of(code, characteristic.degree_of_influence)

    vaf = Decimal(total_influence) * VAF_STEP + VAF_BASE
    logger.debug("vaf_computed", extra={
        "total_influence": total_influence,
        "vaf": str(vaf),
    })
    return vaf


def _as_decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


@traced_engine(ENGINE_NAME, ENGINE_VERSION, fingerprint_fields=("unadjusted", "vaf", "rounding"))
def adjusted_total(
    unadjusted: int,
    vaf: Decimal | float,
    rounding: str = ROUND_HALF_UP,
) -> Decimal:
    """
    Apply ``vaf`` to an unadjusted total, rounded to 2 decimal places.

    ``rounding`` is a ``decimal`` rounding mode; ROUND_HALF_UP unless the
    calculator configuration selects ROUND_HALF_EVEN.
    """
    return (Decimal(unadjusted) * _as_decimal(vaf)).quantize(CENT, rounding=rounding)


def project_totals(
    project: Project,
    entries: Iterable[FunctionPointEntry],
    characteristics: Sequence[GeneralCharacteristic],
    rounding: str = ROUND_HALF_UP,
) -> ProjectTotals:
    """Unadjusted total, VAF and adjusted total of one project."""
    raw = unadjusted_total(entries, project.id)
    vaf = compute_vaf(characteristics)
    totals = ProjectTotals(
        project_id=project.id,
        project_name=project.name,
        unadjusted=raw,
        vaf=vaf,
        adjusted=adjusted_total(raw, vaf, rounding),
    )
    logger.info("project_totals_calculated", extra={
        "project_id": project.id,
        "unadjusted": raw,
        "vaf": str(vaf),
        "adjusted": str(totals.adjusted),
    })
    return totals


def summarize_projects(
    projects: Iterable[Project],
    entries: Iterable[FunctionPointEntry],
    characteristics: Sequence[GeneralCharacteristic],
    rounding: str = ROUND_HALF_UP,
) -> tuple[ProjectTotals, ...]:
    """Totals of every project, in the order the projects are given.

    All projects share one VAF, computed once.
    """
    entries = tuple(entries)
    vaf = compute_vaf(characteristics)
    summary = []
    for project in projects:
        raw = unadjusted_total(entries, project.id)
        summary.append(ProjectTotals(
            project_id=project.id,
            project_name=project.name,
            unadjusted=raw,
            vaf=vaf,
            adjusted=adjusted_total(raw, vaf, rounding),
        ))
    logger.info("projects_summarized", extra={
        "project_count": len(summary),
        "vaf": str(vaf),
    })
    return tuple(summary)
