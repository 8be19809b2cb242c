"""
Pytest fixtures for the FPA calculator test suite.

Provides:
- Structured logging configuration and log capture
- The bundled calculator configuration and a seeded session
- Characteristic and entry builders
"""

import json
import logging
from io import StringIO

import pytest

from fpa_config import get_calculator_config
from fpa_kernel.domain.values import CharacteristicCode, GeneralCharacteristic
from fpa_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from fpa_services.session import initial_state

# Default ratings of the bundled configuration, canonical order (sum 25)
DEFAULT_DEGREES = (3, 2, 1, 1, 2, 3, 2, 2, 1, 2, 1, 2, 1, 2)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture fpa_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            compute_vaf(characteristics)
            logs = captured_logs()
            assert any(r["message"] == "FPA_ENGINE_TRACE" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("fpa_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Domain builders
# =============================================================================


def _make_characteristics(degrees):
    return tuple(
        GeneralCharacteristic(code, degree)
        for code, degree in zip(CharacteristicCode, degrees, strict=True)
    )


@pytest.fixture
def make_characteristics():
    """Factory: fourteen characteristics rated ``degrees`` in canonical order."""
    return _make_characteristics


@pytest.fixture
def default_characteristics():
    return _make_characteristics(DEFAULT_DEGREES)


@pytest.fixture
def calculator_config():
    return get_calculator_config()


@pytest.fixture
def seeded_state(calculator_config):
    """Session seeded from the bundled configuration."""
    return initial_state(calculator_config)
