"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the pytest configuration for the whole harness.
It registers common markers and tags tests by the directory they live in.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user flows"
    )
    config.addinivalue_line(
        "markers", "unit: Offline tests of the framework itself"
    )
    config.addinivalue_line(
        "markers", "live: Tests that talk to the real API or deployed application"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "api: API-specific tests"
    )
    config.addinivalue_line(
        "markers", "ui: UI-specific tests"
    )
    config.addinivalue_line(
        "markers", "employee: Tests related to the employee endpoints"
    )
    config.addinivalue_line(
        "markers", "submit_form: Tests related to the comment submission form"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify collected test items.

    Adds domain markers by directory and skips live tests unless --live
    was given.
    """
    run_live = config.getoption("--live", default=False)
    skip_live = pytest.mark.skip(reason="live test: pass --live to run")

    for item in items:
        path = str(item.fspath)

        if "api_testing" in path:
            item.add_marker(pytest.mark.api)

        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)

        if "unit" in item.nodeid.split("/"):
            item.add_marker(pytest.mark.unit)

        if "live" in item.keywords and not run_live:
            item.add_marker(skip_live)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "QA Automation Harness (Playwright UI + httpx API)",
        "=" * 60,
        "",
    ]
