"""
================================================================================
Submit Page Object
================================================================================

Page Object for the comment submission form: name, email, comment, submit.

Submission flow:

    IDLE --fill--> FILLING --submit + settle--> SUBMITTED
    SUBMITTED --resolve_outcome()--> SUCCESS | VALIDATION_ERROR

There is no way back to FILLING once submitted; open() (a fresh page load)
resets the flow to IDLE.

================================================================================
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import allure

from qa_automation.ui_testing.framework.page_base import BasePage


# Local copy of the form, used when app.base.url is not configured
LOCAL_FORM_URL = (
    Path(__file__).parent.parent / "fixtures" / "submit_form.html"
).resolve().as_uri()


class SubmissionState(Enum):
    IDLE = "idle"
    FILLING = "filling"
    SUBMITTED = "submitted"
    SUCCESS = "success"
    VALIDATION_ERROR = "validation_error"


class PageStateError(RuntimeError):
    """Raised when an action is not allowed in the current submission state."""
    pass


class SubmitPage(BasePage):
    """Submit form page object."""

    PAGE_TITLE = "Submit"

    # Locators
    USERNAME_INPUT = "input[id*='name']"
    EMAIL_INPUT = "input[id*='email']"
    COMMENT_INPUT = "textarea[id*='comment']"
    SUBMIT_BUTTON = "button:has-text('Submit')"
    EMAIL_ERROR_MESSAGE = "span[id*='email-error-message']"
    ERROR_MESSAGE = "span[id*='error-message']"
    VISIBLE_ERROR_MESSAGE = f"{ERROR_MESSAGE}:visible"
    SUCCESS_MESSAGE = ".success-message"

    # Short window for deciding the outcome after a submit
    OUTCOME_TIMEOUT = 2000

    def __init__(self, page, base_url: str = "", **kwargs):
        super().__init__(page, base_url or LOCAL_FORM_URL, **kwargs)
        self.state = SubmissionState.IDLE

    def open(self, wait_for: str = "load") -> "SubmitPage":
        super().open(wait_for)
        self.state = SubmissionState.IDLE
        return self

    def _start_filling(self) -> None:
        if self.state not in (SubmissionState.IDLE, SubmissionState.FILLING):
            raise PageStateError(
                f"Cannot fill the form in state '{self.state.value}'; reload the page first"
            )
        self.state = SubmissionState.FILLING

    @allure.step("Enter username: {username}")
    def enter_username(self, username: str) -> None:
        self._start_filling()
        self.log.info(f"Entering username: {username}")
        self.fill(self.USERNAME_INPUT, username)
        self.log.debug("Username entered successfully")

    @allure.step("Enter email")
    def enter_email(self, email: str) -> None:
        self._start_filling()
        self.log.info("Entering email")
        self.fill(self.EMAIL_INPUT, email)
        self.log.debug("Email entered successfully")

    @allure.step("Enter comment")
    def enter_comment(self, comment: str) -> None:
        self._start_filling()
        self.log.info("Entering comment")
        self.fill(self.COMMENT_INPUT, comment)
        self.log.debug("Comment entered successfully")

    @allure.step("Click submit button")
    def click_submit_button(self) -> None:
        if self.state is not SubmissionState.FILLING:
            raise PageStateError(
                f"Cannot submit in state '{self.state.value}'; fill the form first"
            )
        self.log.info("Clicking submit button")
        self.click(self.SUBMIT_BUTTON)
        self.state = SubmissionState.SUBMITTED
        self.log.debug("Submit button clicked")

    def fill_required_fields(self, username: str, email: str, comment: str) -> None:
        """Fill name, email and comment."""
        self.log.info("Performing fill the required fields")
        self.enter_username(username)
        self.enter_email(email)
        self.enter_comment(comment)
        self.log.info("Fill completed")

    @allure.step("Submit form")
    def submit(self, username: str, email: str, comment: str) -> None:
        """Fill all required fields, click submit and wait for the page to settle."""
        self.log.info("Performing submit")
        self.fill_required_fields(username, email, comment)
        self.click_submit_button()
        self.waits.wait_for_navigation()
        self.log.info("Submit completed")

    def resolve_outcome(self) -> SubmissionState:
        """
        Decide SUCCESS or VALIDATION_ERROR after a submit.

        Any error message becoming visible within OUTCOME_TIMEOUT means
        VALIDATION_ERROR.
        """
        if self.state is not SubmissionState.SUBMITTED:
            return self.state

        if self.waits.is_element_visible(self.VISIBLE_ERROR_MESSAGE, timeout=self.OUTCOME_TIMEOUT):
            self.state = SubmissionState.VALIDATION_ERROR
        else:
            self.state = SubmissionState.SUCCESS
        self.log.info(f"Submission outcome: {self.state.value}")
        return self.state

    def get_error_message(self) -> str:
        """
        Read the email validation message.

        Raises:
            WaitTimeoutError: If the message does not appear in time
        """
        self.log.info("Getting error message")
        error_text = self.get_text(self.EMAIL_ERROR_MESSAGE)
        self.log.debug(f"Error message: {error_text}")
        return error_text

    def is_error_message_displayed(self) -> bool:
        """True if the email validation message becomes visible in time."""
        self.log.info("Checking if error message is displayed")
        displayed = self.waits.is_element_visible(self.EMAIL_ERROR_MESSAGE)
        self.log.debug(f"Error message is {'displayed' if displayed else 'not displayed'}")
        return displayed

    def get_success_message(self) -> str:
        self.log.info("Getting success message")
        return self.get_text(self.SUCCESS_MESSAGE)

    def is_all_error_message_hidden(self) -> bool:
        """False if any element matching ERROR_MESSAGE is visible."""
        for message in self.page.locator(self.ERROR_MESSAGE).all():
            if message.is_visible():
                return False
        return True


__all__ = [
    "LOCAL_FORM_URL",
    "PageStateError",
    "SubmissionState",
    "SubmitPage",
]
