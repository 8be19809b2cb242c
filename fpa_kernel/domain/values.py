"""
Values -- Immutable, self-validating FPA domain value objects.

Responsibility:
    Provides the closed enumerations (FunctionType, Complexity,
    CharacteristicCode) and the frozen records every other layer works
    with: Project, FunctionPointEntry, GeneralCharacteristic and
    ProjectTotals.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    No outward dependencies except fpa_kernel.exceptions.

Invariants enforced:
    - FunctionType and Complexity are closed sets; free-form strings are
      parsed once at the boundary and rejected if unknown.
    - Names and project ids are never empty.
    - Entry points equal the COMPLEXITY_WEIGHTS value of their
      (function type, complexity) pair.
    - Characteristic codes are one of the fourteen CharacteristicCode members.
    - A degree of influence is an integer in 0..5.

Failure modes:
    - ValidationError subclasses from fpa_kernel.exceptions on
      construction with invalid data.

Usage:
    from fpa_kernel.domain.values import Complexity, FunctionType

    FunctionType.parse("ilf")        # FunctionType.INTERNAL_LOGICAL_FILE
    Complexity.parse("Medium")       # Complexity.MEDIUM
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any

from fpa_kernel.exceptions import (
    CharacteristicNotFoundError,
    DegreeOfInfluenceOutOfRangeError,
    EmptyNameError,
    InvalidComplexityError,
    InvalidFunctionTypeError,
    InvalidPointsError,
    MissingProjectIdError,
)

MIN_DEGREE_OF_INFLUENCE = 0
MAX_DEGREE_OF_INFLUENCE = 5


def _parse_member(enum_cls: type[Enum], value: Any) -> Enum | None:
    """Resolve a member by itself, its value or its name (case-insensitive)."""
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return None
    key = value.strip()
    for member in enum_cls:
        if key.lower() in (member.value.lower(), member.name.lower()):
            return member
    return None


class FunctionType(str, Enum):
    """Logical function category counted by FPA."""

    INTERNAL_LOGICAL_FILE = "ILF"
    EXTERNAL_INTERFACE_FILE = "EIF"
    EXTERNAL_INPUT = "EI"
    EXTERNAL_OUTPUT = "EO"
    EXTERNAL_QUERY = "EQ"

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()

    @classmethod
    def parse(cls, value: Any) -> FunctionType:
        member = _parse_member(cls, value)
        if member is None:
            raise InvalidFunctionTypeError(value)
        return member


class Complexity(str, Enum):
    """Complexity tier assigned to a measured function."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, value: Any) -> Complexity:
        member = _parse_member(cls, value)
        if member is None:
            raise InvalidComplexityError(value)
        return member


COMPLEXITY_WEIGHTS: MappingProxyType[FunctionType, MappingProxyType[Complexity, int]] = (
    MappingProxyType({
        FunctionType.INTERNAL_LOGICAL_FILE: MappingProxyType(
            {Complexity.LOW: 7, Complexity.MEDIUM: 10, Complexity.HIGH: 15}
        ),
        FunctionType.EXTERNAL_INTERFACE_FILE: MappingProxyType(
            {Complexity.LOW: 5, Complexity.MEDIUM: 7, Complexity.HIGH: 10}
        ),
        FunctionType.EXTERNAL_INPUT: MappingProxyType(
            {Complexity.LOW: 3, Complexity.MEDIUM: 4, Complexity.HIGH: 6}
        ),
        FunctionType.EXTERNAL_OUTPUT: MappingProxyType(
            {Complexity.LOW: 4, Complexity.MEDIUM: 5, Complexity.HIGH: 7}
        ),
        FunctionType.EXTERNAL_QUERY: MappingProxyType(
            {Complexity.LOW: 3, Complexity.MEDIUM: 4, Complexity.HIGH: 6}
        ),
    })
)


class CharacteristicCode(str, Enum):
    """The fourteen general system characteristics, in canonical order."""

    DATA_COMMUNICATIONS = "data_communications"
    DISTRIBUTED_PROCESSING = "distributed_processing"
    PERFORMANCE = "performance"
    HEAVILY_USED_CONFIGURATION = "heavily_used_configuration"
    TRANSACTION_RATE = "transaction_rate"
    ONLINE_DATA_ENTRY = "online_data_entry"
    END_USER_EFFICIENCY = "end_user_efficiency"
    ONLINE_UPDATE = "online_update"
    COMPLEX_PROCESSING = "complex_processing"
    REUSABILITY = "reusability"
    INSTALLATION_EASE = "installation_ease"
    OPERATIONAL_EASE = "operational_ease"
    MULTIPLE_SITES = "multiple_sites"
    FACILITATE_CHANGE = "facilitate_change"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()

    @classmethod
    def parse(cls, value: Any) -> CharacteristicCode:
        member = _parse_member(cls, value)
        if member is None:
            raise CharacteristicNotFoundError(value)
        return member


def coerce_degree(code: CharacteristicCode, degree: Any) -> int:
    """Integer value of an edited degree; integral floats and numeric strings pass."""
    if isinstance(degree, bool):
        raise DegreeOfInfluenceOutOfRangeError(code.value, degree)
    if isinstance(degree, float):
        if not degree.is_integer():
            raise DegreeOfInfluenceOutOfRangeError(code.value, degree)
        return int(degree)
    try:
        return int(degree)
    except (TypeError, ValueError):
        raise DegreeOfInfluenceOutOfRangeError(code.value, degree) from None


@dataclass(frozen=True, slots=True)
class GeneralCharacteristic:
    """
    One rated general system characteristic.

    Contract:
        degree_of_influence is an int in 0..5 (bool rejected).
    Guarantees:
        - Immutable; edits go through ``with_degree`` which clamps.
    """

    code: CharacteristicCode
    degree_of_influence: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "code", CharacteristicCode.parse(self.code))
        degree = self.degree_of_influence
        if (
            isinstance(degree, bool)
            or not isinstance(degree, int)
            or not MIN_DEGREE_OF_INFLUENCE <= degree <= MAX_DEGREE_OF_INFLUENCE
        ):
            raise DegreeOfInfluenceOutOfRangeError(self.code.value, degree)

    def with_degree(self, degree: Any) -> GeneralCharacteristic:
        """Return a copy rated ``degree``, clamped to 0..5.

        Raises:
            DegreeOfInfluenceOutOfRangeError: ``degree`` is not an integer.
        """
        value = coerce_degree(self.code, degree)
        clamped = min(MAX_DEGREE_OF_INFLUENCE, max(MIN_DEGREE_OF_INFLUENCE, value))
        return GeneralCharacteristic(code=self.code, degree_of_influence=clamped)


@dataclass(frozen=True, slots=True)
class Project:
    """A sized project. Entries reference it by id; it holds no back-collection."""

    id: str
    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise MissingProjectIdError("id")
        if not isinstance(self.name, str) or not self.name.strip():
            raise EmptyNameError("project name")
        object.__setattr__(self, "name", self.name.strip())


@dataclass(frozen=True, slots=True)
class FunctionPointEntry:
    """
    One measured function of a project.

    Contract:
        ``points`` must equal COMPLEXITY_WEIGHTS[function_type][complexity];
        ``fpa_engines.scoring.build_entry`` derives it rather than taking it
        from the caller.
    Guarantees:
        - Immutable once created; entries are only ever appended.
    """

    function_type: FunctionType
    name: str
    complexity: Complexity
    points: int
    project_id: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "function_type", FunctionType.parse(self.function_type))
        object.__setattr__(self, "complexity", Complexity.parse(self.complexity))
        if not isinstance(self.name, str) or not self.name.strip():
            raise EmptyNameError("entry name")
        if not isinstance(self.project_id, str) or not self.project_id.strip():
            raise MissingProjectIdError()
        if isinstance(self.points, bool) or not isinstance(self.points, int) or self.points <= 0:
            raise InvalidPointsError(self.points)
        expected = COMPLEXITY_WEIGHTS[self.function_type][self.complexity]
        if self.points != expected:
            raise InvalidPointsError(self.points, expected)


@dataclass(frozen=True, slots=True)
class ProjectTotals:
    """Unadjusted and adjusted totals of one project under one VAF."""

    project_id: str
    project_name: str
    unadjusted: int
    vaf: Decimal
    adjusted: Decimal
