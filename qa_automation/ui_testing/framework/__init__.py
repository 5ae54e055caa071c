"""
================================================================================
UI Testing Framework
================================================================================

Playwright (sync API) based UI automation framework.

Components:
    - browser_manager: engine -> browser -> context -> page ownership
    - lifecycle: per-test setup/teardown around a BrowserManager
    - wait_helper: explicit visible / hidden / settled waits
    - page_base: base page object for common operations

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import BrowserManager
from .lifecycle import SessionLifecycle, SessionSetupError
from .page_base import BasePage
from .wait_helper import WaitHelper, WaitTimeoutError

__all__ = [
    "BasePage",
    "BrowserManager",
    "SessionLifecycle",
    "SessionSetupError",
    "WaitHelper",
    "WaitTimeoutError",
]
