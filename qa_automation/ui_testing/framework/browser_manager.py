"""
================================================================================
Browser Manager
================================================================================

Owns the Playwright resource chain for one test:

    engine (Playwright) -> browser -> context -> page

Each handle is exclusively owned by its parent. ``start()`` acquires them in
that order; ``close()`` releases them in reverse, attempting every release
even when an earlier one fails.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Tuple

from playwright.sync_api import (
    Browser,
    BrowserContext,
    BrowserType,
    Page,
    Playwright,
    sync_playwright,
)

from ...common.config_loader import BrowserEngine
from ...common.logging_config import get_logger


# Delay between Playwright actions, in milliseconds
DEFAULT_SLOW_MO = 100

DEFAULT_LOCALE = "en-US"

DEFAULT_VIEWPORT = {"width": 1920, "height": 1080}

CHROMIUM_ARGS = ["--disable-blink-features=AutomationControlled"]


def _start_playwright() -> Playwright:
    return sync_playwright().start()


class BrowserManager:
    """
    Manages the browser resources of a single test.

    Usage:
        with BrowserManager(BrowserEngine.FIREFOX) as manager:
            manager.page.goto("https://example.com")

    Handles stay None until acquired, so ``close()`` is safe to call after a
    partially failed ``start()``.
    """

    def __init__(
        self,
        engine: BrowserEngine = BrowserEngine.CHROMIUM,
        headless: bool = True,
        slow_mo: int = DEFAULT_SLOW_MO,
        locale: str = DEFAULT_LOCALE,
        playwright_factory: Callable[[], Playwright] = _start_playwright,
        log=None,
    ):
        """
        Initialize browser manager.

        Args:
            engine: Browser engine to launch
            headless: Run browser in headless mode
            slow_mo: Delay between actions in milliseconds
            locale: Locale of the browsing context
            playwright_factory: Starts the Playwright engine
            log: Logger to use (defaults to a ``BrowserManager`` bound logger)
        """
        self.engine = engine
        self.headless = headless
        self.slow_mo = slow_mo
        self.locale = locale
        self.log = log or get_logger("BrowserManager")
        self._playwright_factory = playwright_factory

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    def __enter__(self) -> "BrowserManager":
        try:
            self.start()
        except Exception:
            self.close()
            raise
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def start(self) -> Page:
        """Start Playwright, launch the browser, open one context and page."""
        self._playwright = self._playwright_factory()
        self._browser = self.launch_browser()
        self._context = self.new_context()
        self._page = self._context.new_page()
        self.log.info("Browser context created successfully")
        return self._page

    def launch_browser(self) -> Browser:
        """Launch the configured engine with headless flag and action delay."""
        if self._playwright is None:
            raise RuntimeError("Playwright not started. Call start() first.")

        self.log.info(f"Creating browser of type: {self.engine.value}")
        launch_options: Dict[str, Any] = {
            "headless": self.headless,
            "slow_mo": self.slow_mo,
        }
        if self.engine is BrowserEngine.CHROMIUM:
            launch_options["args"] = list(CHROMIUM_ARGS)
        self.log.debug(f"Browser headless mode: {self.headless}")

        browser = self._launcher().launch(**launch_options)
        self.log.info(f"{self.engine.value} browser launched successfully")
        return browser

    def _launcher(self) -> BrowserType:
        if self.engine is BrowserEngine.FIREFOX:
            return self._playwright.firefox
        if self.engine is BrowserEngine.WEBKIT:
            return self._playwright.webkit
        return self._playwright.chromium

    def new_context(self, **options: Any) -> BrowserContext:
        """
        Create the isolated browsing context.

        Args:
            **options: Extra context options (override the defaults)
        """
        if self._browser is None:
            raise RuntimeError("Browser not started. Call start() first.")

        context_options = {
            "locale": self.locale,
            "viewport": dict(DEFAULT_VIEWPORT),
            **options,
        }
        context = self._browser.new_context(**context_options)
        self.log.info(
            f"Browser context created with locale {self.locale} and viewport "
            f"{context_options['viewport']['width']}x{context_options['viewport']['height']}"
        )
        return context

    def close(self) -> List[Tuple[str, Exception]]:
        """
        Release page, context, browser and engine, in that order.

        A failing release is logged and the remaining ones still run.

        Returns:
            (handle name, error) pairs for releases that failed
        """
        releases = [
            ("Page", "_page", "close"),
            ("Browser context", "_context", "close"),
            ("Browser", "_browser", "close"),
            ("Playwright", "_playwright", "stop"),
        ]
        errors: List[Tuple[str, Exception]] = []

        for label, attr, method in releases:
            handle = getattr(self, attr)
            if handle is None:
                continue
            try:
                getattr(handle, method)()
                self.log.info(f"{label} closed")
            except Exception as e:
                self.log.opt(exception=e).error(f"Error while closing {label.lower()}")
                errors.append((label, e))
            finally:
                setattr(self, attr, None)

        return errors

    @property
    def playwright(self) -> Optional[Playwright]:
        return self._playwright

    @property
    def browser(self) -> Optional[Browser]:
        """Get browser instance."""
        return self._browser

    @property
    def context(self) -> Optional[BrowserContext]:
        return self._context

    @property
    def page(self) -> Optional[Page]:
        return self._page


__all__ = [
    "BrowserManager",
    "DEFAULT_LOCALE",
    "DEFAULT_SLOW_MO",
]
