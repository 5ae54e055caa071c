"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for application pages.

Each page class encapsulates:
    - Element locators
    - Page-specific actions
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .submit_page import PageStateError, SubmissionState, SubmitPage

__all__ = [
    "PageStateError",
    "SubmissionState",
    "SubmitPage",
]
