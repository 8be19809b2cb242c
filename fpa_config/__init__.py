"""
fpa_config -- single public entrypoint for calculator configuration.

Responsibility:
    Provides the ONLY way to obtain calculator defaults at runtime through
    ``get_calculator_config()``: the rounding rule for adjusted totals, the
    default degree of each general system characteristic and the demo
    session seed.  YAML loading is internal tooling.

Architecture position:
    Configuration -- sits above ``fpa_kernel`` and below ``fpa_services``.
    The kernel and the engines MUST NEVER import from ``fpa_config``.

Failure modes:
    - ``FileNotFoundError`` -- the configuration file does not exist.
    - ``ConfigurationError`` -- schema or structural validation failures.

Audit relevance:
    Every successful ``get_calculator_config()`` call emits an
    ``FPA_CONFIG_TRACE`` log entry with the config id, version and checksum.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fpa_config.loader import load_calculator_config
from fpa_config.schema import CalculatorConfig, EntrySeed, ProjectSeed

_logger = logging.getLogger("fpa_kernel.config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults" / "calculator.yaml"


def get_calculator_config(path: Path | None = None) -> CalculatorConfig:
    """The ONLY public configuration entrypoint.

    Args:
        path: Override path to a calculator YAML file.
            Defaults to fpa_config/defaults/calculator.yaml.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the file content is invalid.
    """
    config = load_calculator_config(path or DEFAULT_CONFIG_PATH)

    _logger.info(
        "FPA_CONFIG_TRACE",
        extra={
            "trace_type": "FPA_CONFIG_TRACE",
            "config_id": config.config_id,
            "config_version": config.version,
            "checksum": config.checksum,
            "rounding": config.rounding,
            "project_count": len(config.projects),
            "entry_count": len(config.entries),
        },
    )
    return config


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "CalculatorConfig",
    "EntrySeed",
    "ProjectSeed",
    "get_calculator_config",
]
