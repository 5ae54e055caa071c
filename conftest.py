"""
Repository-level pytest configuration.

Responsibilities:
  - Register command line options that must live in the root conftest
  - Initialize Loguru once per test session from the configuration file

Live suites (real API / deployed UI) only run with ``--live``; everything
else runs offline.
"""

from __future__ import annotations

from typing import Generator

import pytest

from qa_automation.common import ConfigLoader, init_logger_from_config


def pytest_addoption(parser):
    parser.addoption(
        "--live",
        action="store_true",
        default=False,
        help="Run tests marked 'live' against the configured API / application",
    )


@pytest.fixture(scope="session", autouse=True)
def _configure_logging() -> Generator[None, None, None]:
    """Set up Loguru sinks from ``logging.*`` keys before any test runs."""
    init_logger_from_config(ConfigLoader())
    yield
