"""
Pytest fixtures for the BS calendar test suite.

Provides:
- Structured logging configured once per session, with a fresh LogContext
  and ambient calendar configuration around every test
- A deterministic clock
- A helper that captures bs_kernel log records as parsed JSON dicts
"""

import json
import logging
from datetime import UTC, datetime
from io import StringIO

import pytest

from bs_config import reset_config
from bs_kernel.domain.clock import DeterministicClock
from bs_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

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


@pytest.fixture(autouse=True)
def _reset_ambient_config():
    """Every test starts from the built-in calendar settings."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def captured_logs():
    """
    Capture bs_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            convert_to_bs("2024-11-04")
            logs = captured_logs()
            assert any(r["message"] == "BS_ENGINE_TRACE" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("bs_kernel")
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
# Clock fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock():
    """Clock fixed at 2024-11-07 06:00 UTC (BS 2081-07-22 in Kathmandu)."""
    return DeterministicClock(datetime(2024, 11, 7, 6, 0, 0, tzinfo=UTC))
