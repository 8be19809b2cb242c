"""
Typed Exception Hierarchy for the FPA Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Sizing figures feed estimates and contracts. A silently-wrong weight is
worse than a crash, so every caller-contract violation is raised as a
TYPED exception carrying:
  1. a class-level CODE attribute (machine-readable, API-safe)
  2. structured DATA attributes (not just a message string)

Example:
    try:
        state = add_entry(state, "ILF", "", "low")
    except EmptyNameError as e:
        show_error(code=e.code, field=e.field)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    FpaKernelError (base)
    |
    +-- ValidationError
    |   +-- InvalidFunctionTypeError
    |   +-- InvalidComplexityError
    |   +-- EmptyNameError
    |   +-- MissingProjectIdError
    |   +-- InvalidPointsError
    |   +-- CharacteristicCountError
    |   +-- DuplicateCharacteristicError
    |   +-- DegreeOfInfluenceOutOfRangeError
    |   +-- CharacteristicNotFoundError
    |
    +-- ProjectError
    |   +-- ProjectNotFoundError
    |   +-- DuplicateProjectError
    |
    +-- ConfigurationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Validation      | INVALID_FUNCTION_TYPE       | Value is not one of ILF/EIF/EI/EO/EQ
                | INVALID_COMPLEXITY          | Value is not low/medium/high
                | EMPTY_NAME                  | Entry or project name is blank
                | MISSING_PROJECT_ID          | Entry or project without an id
                | INVALID_POINTS              | Points differ from the weight table
                | CHARACTERISTIC_COUNT        | VAF input is not exactly 14 ratings
                | DUPLICATE_CHARACTERISTIC    | Same characteristic rated twice
                | DEGREE_OUT_OF_RANGE         | Degree of influence outside 0..5
                | CHARACTERISTIC_NOT_FOUND    | Unknown characteristic code or index
----------------|-----------------------------|-----------------------------------------
Project         | PROJECT_NOT_FOUND           | Project id not registered
                | DUPLICATE_PROJECT           | Project id already registered
----------------|-----------------------------|-----------------------------------------
Config          | CONFIGURATION_ERROR         | Calculator YAML is malformed
"""

from __future__ import annotations

from typing import Any


class FpaKernelError(Exception):
    """
    Base exception for all FPA kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "FPA_KERNEL_ERROR"


# Validation exceptions


class ValidationError(FpaKernelError):
    """Base exception for caller-contract violations on input data."""

    code: str = "VALIDATION_ERROR"


class InvalidFunctionTypeError(ValidationError):
    """Value is not a member of the closed FunctionType set."""

    code: str = "INVALID_FUNCTION_TYPE"

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"Invalid function type: {value!r} "
            f"(expected one of ILF, EIF, EI, EO, EQ)"
        )


class InvalidComplexityError(ValidationError):
    """Value is not a member of the closed Complexity set."""

    code: str = "INVALID_COMPLEXITY"

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"Invalid complexity: {value!r} (expected one of low, medium, high)"
        )


class EmptyNameError(ValidationError):
    """A name field is empty or whitespace only."""

    code: str = "EMPTY_NAME"

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} must not be empty")


class MissingProjectIdError(ValidationError):
    """A project id is missing."""

    code: str = "MISSING_PROJECT_ID"

    def __init__(self, field: str = "project_id"):
        self.field = field
        super().__init__(f"{field} must not be empty")


class InvalidPointsError(ValidationError):
    """Points value is not the weight-table value of the entry."""

    code: str = "INVALID_POINTS"

    def __init__(self, points: Any, expected: int | None = None):
        self.points = points
        self.expected = expected
        if expected is None:
            message = f"Points must be a positive integer, got {points!r}"
        else:
            message = f"Points must be {expected} for this type and complexity, got {points!r}"
        super().__init__(message)


class CharacteristicCountError(ValidationError):
    """
    VAF input does not hold exactly the fourteen general characteristics.

    Any other count shifts the VAF outside [0.65, 1.35].
    """

    code: str = "CHARACTERISTIC_COUNT"

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected exactly {expected} general characteristics, got {actual}"
        )


class DuplicateCharacteristicError(ValidationError):
    """The same general characteristic appears more than once."""

    code: str = "DUPLICATE_CHARACTERISTIC"

    def __init__(self, characteristic: str):
        self.characteristic = characteristic
        super().__init__(f"General characteristic rated twice: {characteristic}")


class DegreeOfInfluenceOutOfRangeError(ValidationError):
    """Degree of influence is not an integer in 0..5."""

    code: str = "DEGREE_OUT_OF_RANGE"

    def __init__(self, characteristic: str, degree: Any):
        self.characteristic = characteristic
        self.degree = degree
        super().__init__(
            f"Degree of influence for {characteristic} must be an integer "
            f"in 0..5, got {degree!r}"
        )


class CharacteristicNotFoundError(ValidationError):
    """Characteristic code or index does not name one of the fourteen."""

    code: str = "CHARACTERISTIC_NOT_FOUND"

    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"Unknown general characteristic: {key!r}")


# Project exceptions


class ProjectError(FpaKernelError):
    """Base exception for project registry errors."""

    code: str = "PROJECT_ERROR"


class ProjectNotFoundError(ProjectError):
    """Project with given id is not registered."""

    code: str = "PROJECT_NOT_FOUND"

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"Project not found: {project_id}")


class DuplicateProjectError(ProjectError):
    """Project with given id is already registered."""

    code: str = "DUPLICATE_PROJECT"

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"Project already exists: {project_id}")


class ConfigurationError(FpaKernelError):
    """Calculator configuration is malformed."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid calculator configuration ({source}): {reason}")
