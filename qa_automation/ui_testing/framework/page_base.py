"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation with best-effort cookie consent dismissal
    - Wait-then-act element interactions
    - Screenshot and failure capture for Allure

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

import allure
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from ...common.logging_config import get_logger
from .wait_helper import WaitHelper


# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parent.parent / "screenshots"

CONSENT_BUTTON = "button:has-text('Consent')"

# How long to look for the consent button before assuming there is none
CONSENT_TIMEOUT = 3000


class BasePage:
    """
    Base class for all page objects.

    Every interaction waits for its element to be visible first.

    Usage:
        class SubmitPage(BasePage):
            NAME_INPUT = "input[id*='name']"

            def enter_username(self, username: str):
                self.fill(self.NAME_INPUT, username)
    """

    # Override in subclasses
    URL_PATH: str = ""
    PAGE_TITLE: str = ""

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        waits: Optional[WaitHelper] = None,
        log=None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Base URL for the application
            waits: Wait helper (defaults to one with the 30s timeout)
            log: Logger to use (defaults to one bound to the class name)
        """
        self.page = page
        self.base_url = base_url.rstrip("/")
        self.log = log or get_logger(type(self).__name__)
        self.waits = waits or WaitHelper(page, log=self.log.bind(component="WaitHelper"))
        self.log.info(f"{type(self).__name__} initialized")

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    def open(self, wait_for: str = "load") -> "BasePage":
        """
        Navigate to this page and dismiss the cookie consent if shown.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        with allure.step(f"Navigate to {self.url}"):
            self.log.info(f"Navigating to URL: {self.url}")
            self.page.goto(self.url, wait_until=wait_for)
            self.click_consent_button()
            self.log.info("Navigation completed")
        return self

    def click_consent_button(self) -> bool:
        """
        Click the cookie consent button if the page shows one.

        Returns:
            True if the button was clicked
        """
        try:
            self.page.click(CONSENT_BUTTON, timeout=CONSENT_TIMEOUT)
        except PlaywrightError as e:
            self.log.info(f"Consent button not found: {type(e).__name__}")
            return False
        self.log.info("Consent button clicked")
        return True

    # =========================================================================
    # Wait-then-act Interactions
    # =========================================================================

    def fill(self, selector: str, value: str) -> None:
        """Wait for the input to be visible, then fill it."""
        self.waits.wait_for_element_visible(selector)
        self.page.fill(selector, value)

    def click(self, selector: str) -> None:
        """Wait for the element to be visible, then click it."""
        self.waits.wait_for_element_visible(selector)
        self.page.click(selector)

    def get_text(self, selector: str) -> str:
        """Wait for the element to be visible, then read its text."""
        self.waits.wait_for_element_visible(selector)
        return self.page.text_content(selector) or ""

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        self.page.screenshot(path=str(filepath), full_page=full_page)

        if attach_to_allure:
            allure.attach.file(
                str(filepath),
                name=name,
                attachment_type=allure.attachment_type.PNG
            )

        self.log.debug(f"Screenshot saved: {filepath}")
        return filepath

    def capture_failure(self, test_name: str) -> None:
        """
        Capture debugging information on test failure.

        Saves a screenshot and the current URL.
        """
        with allure.step("Capture failure details"):
            self.screenshot(f"failure_{test_name}", full_page=True)
            allure.attach(
                self.page.url,
                name="Current URL",
                attachment_type=allure.attachment_type.TEXT
            )


__all__ = [
    "BasePage",
    "CONSENT_BUTTON",
]
