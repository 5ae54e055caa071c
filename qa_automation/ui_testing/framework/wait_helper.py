# ================================================================================
# Wait Helper Module
# ================================================================================
#
# Explicit waits for asynchronous UI conditions.
#
# Every interaction that depends on an element being present goes through one
# of these primitives first. A wait either succeeds within its timeout or
# raises WaitTimeoutError; only is_element_visible() turns a timeout into
# False.
#
# Usage:
#   waits = WaitHelper(page)
#   waits.wait_for_element_visible("input[id*='email']")
#   waits.wait_for_navigation()
#
# ================================================================================

import time
from typing import Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ...common.logging_config import get_logger


# 30 seconds in milliseconds
DEFAULT_TIMEOUT = 30000


class WaitTimeoutError(Exception):
    """Raised when a UI condition does not hold within the timeout."""

    def __init__(self, message: str, selector: Optional[str] = None, timeout: Optional[int] = None):
        super().__init__(message)
        self.selector = selector
        self.timeout = timeout


class WaitHelper:
    """
    Explicit wait primitives bound to one page.

    Example:
        waits = WaitHelper(page, timeout=10000)
        waits.wait_for_element_hidden(".spinner")
    """

    def __init__(self, page: Page, timeout: int = DEFAULT_TIMEOUT, log=None):
        """
        Args:
            page: Playwright Page object
            timeout: Default timeout for every wait, in milliseconds
            log: Logger to use (defaults to a ``WaitHelper`` bound logger)
        """
        self.page = page
        self.timeout = timeout
        self.log = log or get_logger("WaitHelper")

    def wait_for_element_visible(self, selector: str, timeout: Optional[int] = None) -> None:
        """
        Wait until an element matching selector is attached and visible.

        Raises:
            WaitTimeoutError: If the element is not visible within the timeout
        """
        timeout = self.timeout if timeout is None else timeout
        self.log.info(f"Waiting for element to be visible: {selector}")
        try:
            self.page.wait_for_selector(selector, state="visible", timeout=timeout)
        except PlaywrightTimeoutError as e:
            self.log.error(f"Element not visible within {timeout}ms: {selector}")
            raise WaitTimeoutError(
                f"Element not visible within {timeout}ms: {selector}",
                selector=selector,
                timeout=timeout,
            ) from e
        self.log.debug(f"Element is visible: {selector}")

    def wait_for_element_hidden(self, selector: str, timeout: Optional[int] = None) -> None:
        """
        Wait until the first element matching selector is absent or invisible.

        Raises:
            WaitTimeoutError: If the element stays visible past the timeout
        """
        timeout = self.timeout if timeout is None else timeout
        self.log.info(f"Waiting for element to be hidden: {selector}")
        try:
            self.page.wait_for_selector(selector, state="hidden", timeout=timeout)
        except PlaywrightTimeoutError as e:
            self.log.error(f"Element did not hide within {timeout}ms: {selector}")
            raise WaitTimeoutError(
                f"Element did not hide within {timeout}ms: {selector}",
                selector=selector,
                timeout=timeout,
            ) from e
        self.log.debug(f"Element is hidden: {selector}")

    def wait_for_navigation(self, state: str = "load", timeout: Optional[int] = None) -> None:
        """
        Wait until the current navigation reaches a stable load state.

        Args:
            state: Playwright load state ('load', 'domcontentloaded', 'networkidle')
            timeout: Timeout in milliseconds

        Raises:
            WaitTimeoutError: If the load state is not reached in time
        """
        timeout = self.timeout if timeout is None else timeout
        self.log.info("Waiting for page navigation to complete")
        try:
            self.page.wait_for_load_state(state, timeout=timeout)
        except PlaywrightTimeoutError as e:
            self.log.error(f"Navigation did not complete within {timeout}ms")
            raise WaitTimeoutError(
                f"Navigation did not reach '{state}' within {timeout}ms",
                timeout=timeout,
            ) from e
        self.log.debug("Page navigation completed")

    def is_element_visible(self, selector: str, timeout: Optional[int] = None) -> bool:
        """
        Boolean form of wait_for_element_visible.

        A timeout, or the page going away mid-wait, yields False.
        """
        try:
            self.wait_for_element_visible(selector, timeout=timeout)
            return True
        except WaitTimeoutError:
            return False
        except PlaywrightError as e:
            self.log.debug(f"Visibility check aborted for {selector}: {e}")
            return False

    def pause(self, milliseconds: int) -> None:
        """Fixed sleep. Prefer one of the condition waits above."""
        self.log.debug(f"Waiting for {milliseconds} milliseconds")
        time.sleep(milliseconds / 1000)


__all__ = [
    "DEFAULT_TIMEOUT",
    "WaitHelper",
    "WaitTimeoutError",
]
