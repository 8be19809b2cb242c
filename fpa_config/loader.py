"""
Configuration Loader (``fpa_config.loader``).

Responsibility
--------------
Loads the calculator YAML file and parses it into the typed
``fpa_config.schema`` dataclasses.  The single public entry point for
runtime config is ``fpa_config.get_calculator_config()``.

Invariants enforced
-------------------
* Parse errors raise ``ConfigurationError`` with a descriptive reason; no
  silent defaults for required keys.
* All fourteen characteristics must be rated, each 0..5.
* Every parsed object is a frozen dataclass from ``schema.py``.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Structurally invalid content  -> ``ConfigurationError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from fpa_config.schema import (
    ROUNDING_MODES,
    CalculatorConfig,
    EntrySeed,
    ProjectSeed,
)
from fpa_kernel.domain.values import (
    MAX_DEGREE_OF_INFLUENCE,
    MIN_DEGREE_OF_INFLUENCE,
    CharacteristicCode,
    Complexity,
    FunctionType,
)
from fpa_kernel.exceptions import ConfigurationError, ValidationError

REQUIRED_KEYS = ("config_id", "version", "characteristics")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def parse_rounding(value: Any, source: str) -> str:
    """Map the YAML rounding spelling to a ``decimal`` rounding mode."""
    key = str(value).strip().lower()
    if key not in ROUNDING_MODES:
        raise ConfigurationError(
            source,
            f"rounding must be one of {sorted(ROUNDING_MODES)}, got {value!r}",
        )
    return ROUNDING_MODES[key]


def parse_characteristics(data: Any, source: str) -> tuple[tuple[str, int], ...]:
    """
    Parse the characteristic mapping into canonical-order (code, degree) pairs.

    Raises:
        ConfigurationError: unknown or missing code, or degree outside 0..5.
    """
    if not isinstance(data, dict):
        raise ConfigurationError(source, "characteristics must be a mapping")

    known = {code.value for code in CharacteristicCode}
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        raise ConfigurationError(source, f"unknown characteristics: {unknown}")

    pairs: list[tuple[str, int]] = []
    for code in CharacteristicCode:
        if code.value not in data:
            raise ConfigurationError(source, f"missing characteristic: {code.value}")
        degree = data[code.value]
        if (
            isinstance(degree, bool)
            or not isinstance(degree, int)
            or not MIN_DEGREE_OF_INFLUENCE <= degree <= MAX_DEGREE_OF_INFLUENCE
        ):
            raise ConfigurationError(
                source, f"{code.value} must be an integer in 0..5, got {degree!r}"
            )
        pairs.append((code.value, degree))
    return tuple(pairs)


def _require_text(value: Any, field: str, source: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(source, f"{field} must be a non-empty string, got {value!r}")
    return value


def _require_id(value: Any, field: str, source: str) -> str:
    # YAML reads an unquoted ``id: 1`` as an int
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return _require_text(value, field, source)


def parse_version(value: Any, source: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(source, f"version must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(
            source, f"version must be an integer, got {value!r}"
        ) from None


def parse_project(data: dict[str, Any], source: str = "<dict>") -> ProjectSeed:
    """Parse a ProjectSeed from a dict."""
    return ProjectSeed(
        id=_require_id(data["id"], "project id", source),
        name=_require_text(data["name"], "project name", source),
    )


def parse_entry(data: dict[str, Any], source: str = "<dict>") -> EntrySeed:
    """
    Parse an EntrySeed from a dict.

    Function type and complexity are resolved against the closed enums here,
    so a seed with an unknown code fails at load time.
    """
    try:
        function_type = FunctionType.parse(data["function_type"])
        complexity = Complexity.parse(data["complexity"])
    except ValidationError as exc:
        raise ConfigurationError(source, str(exc)) from exc
    return EntrySeed(
        project_id=_require_id(data["project_id"], "entry project_id", source),
        function_type=function_type.value,
        name=_require_text(data["name"], "entry name", source),
        complexity=complexity.value,
    )


def parse_calculator_config(data: dict[str, Any], source: str = "<dict>") -> CalculatorConfig:
    """
    Parse a full ``CalculatorConfig`` from a YAML-derived dict.

    Seed entries must reference seeded projects and use known function
    types and complexities; seed ids and names must be non-empty.

    Raises:
        ConfigurationError: on any structural problem.
    """
    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise ConfigurationError(source, f"missing required keys: {missing}")

    try:
        projects = tuple(parse_project(p, source) for p in data.get("projects", []))
        entries = tuple(parse_entry(e, source) for e in data.get("entries", []))
    except (KeyError, TypeError) as exc:
        raise ConfigurationError(source, f"malformed seed record: {exc}") from exc

    project_ids = {p.id for p in projects}
    if len(project_ids) != len(projects):
        raise ConfigurationError(source, "duplicate project ids in seed")
    for entry in entries:
        if entry.project_id not in project_ids:
            raise ConfigurationError(
                source, f"entry {entry.name!r} references unknown project {entry.project_id!r}"
            )

    return CalculatorConfig(
        config_id=str(data["config_id"]),
        version=parse_version(data["version"], source),
        rounding=parse_rounding(data.get("rounding", "half_up"), source),
        characteristic_defaults=parse_characteristics(data["characteristics"], source),
        projects=projects,
        entries=entries,
        checksum=compute_checksum(data),
    )


def load_calculator_config(path: Path) -> CalculatorConfig:
    """Load and parse a calculator YAML file."""
    return parse_calculator_config(load_yaml_file(path), source=str(path))
