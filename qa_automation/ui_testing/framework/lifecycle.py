"""
================================================================================
Test Session Lifecycle
================================================================================

Per-test setup and teardown, independent of individual test bodies.

    setup():    load configuration -> resolve engine -> launch browser
                -> open context (en-US) -> open page
    teardown(): close page -> context -> browser -> Playwright

A failed setup raises SessionSetupError naming the step that broke. Teardown
never raises; it logs each failed release and carries on.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Callable, Optional

from playwright.sync_api import Page

from ...common.config_loader import ConfigLoader
from ...common.logging_config import get_logger
from .browser_manager import BrowserManager
from .wait_helper import DEFAULT_TIMEOUT


class SessionSetupError(RuntimeError):
    """Raised when the test environment cannot be set up."""

    def __init__(self, step: str, cause: BaseException):
        super().__init__(f"Failed to setup test environment during '{step}': {cause}")
        self.step = step


class SessionLifecycle:
    """
    Acquires and releases everything a UI test needs.

    Usage:
        with SessionLifecycle() as session:
            SubmitPage(session.page, session.config.app_base_url).open()

    Or, from a pytest fixture:
        lifecycle = SessionLifecycle()
        try:
            lifecycle.setup()
            yield lifecycle
        finally:
            lifecycle.teardown()
    """

    def __init__(
        self,
        config: Optional[ConfigLoader] = None,
        manager_factory: Callable[..., BrowserManager] = BrowserManager,
        config_factory: Callable[[], ConfigLoader] = ConfigLoader,
        log=None,
    ):
        """
        Args:
            config: Pre-loaded configuration; loaded during setup() if None
            manager_factory: Builds the BrowserManager (engine, headless, log)
            config_factory: Loads configuration when none was given
            log: Logger to use (defaults to a ``SessionLifecycle`` bound logger)
        """
        self.config = config
        self.log = log or get_logger("SessionLifecycle")
        self._manager_factory = manager_factory
        self._config_factory = config_factory
        self.manager: Optional[BrowserManager] = None

    def __enter__(self) -> "SessionLifecycle":
        try:
            self.setup()
        except Exception:
            self.teardown()
            raise
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.teardown()

    def setup(self) -> Page:
        """
        Acquire configuration and browser session.

        Raises:
            SessionSetupError: If any step fails; the original error is chained
        """
        self.log.info("========== TEST SETUP START ==========")
        step = "load configuration"
        try:
            if self.config is None:
                self.config = self._config_factory()
            self.log.info("Configuration loaded successfully")

            step = "launch browser"
            engine = self.config.browser_engine
            self.log.info(f"Launching browser: {engine.value}")
            self.manager = self._manager_factory(
                engine=engine,
                headless=self.config.headless,
                log=self.log.bind(component="BrowserManager"),
            )
            page = self.manager.start()

            step = "configure page"
            page.set_default_timeout(self.config.wait_timeout)
            page.set_default_navigation_timeout(DEFAULT_TIMEOUT)
        except Exception as e:
            self.log.opt(exception=e).error(f"Error during test setup ({step})")
            raise SessionSetupError(step, e) from e

        self.log.info("========== TEST SETUP END ==========")
        return page

    def teardown(self) -> None:
        """Release page, context, browser and engine; never raises."""
        self.log.info("========== TEST TEARDOWN START ==========")
        if self.manager is not None:
            errors = self.manager.close()
            if errors:
                failed = ", ".join(label for label, _ in errors)
                self.log.warning(f"Teardown finished with errors in: {failed}")
            self.manager = None
        self.log.info("========== TEST TEARDOWN END ==========")

    @property
    def page(self) -> Page:
        if self.manager is None or self.manager.page is None:
            raise RuntimeError("Session not set up. Call setup() first.")
        return self.manager.page


__all__ = [
    "SessionLifecycle",
    "SessionSetupError",
]
