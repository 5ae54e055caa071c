"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module provides fixtures for browser-backed UI tests.

Key Features:
- One SessionLifecycle per test (no browser sharing between tests)
- Page Object fixtures
- Screenshot capture on failure

Tests run against ``app.base.url``, or the bundled local form when that key is
empty. They are skipped when no Playwright browser binary is installed.

================================================================================
"""

from __future__ import annotations

from typing import Generator

import pytest
from playwright.sync_api import Page

from qa_automation.common import get_logger
from qa_automation.ui_testing.framework import BasePage, SessionLifecycle, SessionSetupError
from qa_automation.ui_testing.pages import SubmitPage


log = get_logger("ui-fixtures")

# Playwright's message when `playwright install` has not been run
MISSING_BROWSER_MARKER = "Executable doesn't exist"


# ================================================================================
# Browser Session Fixtures
# ================================================================================

@pytest.fixture
def lifecycle() -> Generator[SessionLifecycle, None, None]:
    """
    Set up a fresh browser session for the test and tear it down afterwards.

    The lifecycle loads its own configuration as the first setup step.
    Teardown runs even when setup fails half-way.
    """
    session = SessionLifecycle()
    try:
        try:
            session.setup()
        except SessionSetupError as e:
            if MISSING_BROWSER_MARKER in str(e.__cause__):
                pytest.skip(f"Playwright browser not installed: {session.config.browser_type}")
            raise
        yield session
    finally:
        session.teardown()


@pytest.fixture
def page(lifecycle: SessionLifecycle) -> Page:
    return lifecycle.page


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def submit_page(page: Page, lifecycle: SessionLifecycle) -> SubmitPage:
    """SubmitPage already opened, with the consent banner dismissed."""
    return SubmitPage(page, lifecycle.config.app_base_url).open()


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Capture a screenshot and the current URL when a UI test fails.

    Capture is best-effort; a failure here never masks the test result.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        page = getattr(item, "funcargs", {}).get("page")
        if page is None:
            return
        try:
            BasePage(page, log=log).capture_failure(item.name)
        except Exception as e:
            log.warning(f"Failed to capture screenshot on failure: {e}")
