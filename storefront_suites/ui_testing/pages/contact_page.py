"""
================================================================================
Contact Us Page Object
================================================================================

"Get In Touch" form with an optional file attachment. Submitting opens a
browser confirm dialog, which the page accepts.

================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Union

import allure

from storefront_suites.ui_testing.framework.locators import LiveQuery
from storefront_suites.ui_testing.framework.page_base import PageBase
from storefront_tools.data_generator import ContactMessage

if TYPE_CHECKING:
    from .home_page import HomePage


SUBMISSION_SUCCESS = "Success! Your details have been submitted successfully."


class ContactPage(PageBase):
    """Contact form."""

    URL_PATH = "/contact_us"

    @property
    def contact_form(self) -> LiveQuery:
        return self.element(".contact-form", "Contact form")

    @property
    def upload_input(self) -> LiveQuery:
        return self.element('input[name="upload_file"]', "Attachment")

    @property
    def submit_button(self) -> LiveQuery:
        return self.element('input[name="submit"]', "Submit")

    @property
    def status_message(self) -> LiveQuery:
        return self.element(".contact-form .status", "Submission status")

    @property
    def home_button(self) -> LiveQuery:
        return self.element("#form-section .btn-success", "Home button")

    def field(self, name: str) -> LiveQuery:
        return self.element(f'[data-qa="{name}"]', f"Contact {name}")

    @allure.step("Fill contact form")
    def fill_contact_form(self, message: ContactMessage) -> "ContactPage":
        self.actions.fill(self.field("name"), message.name)
        self.actions.fill(self.field("email"), message.email)
        self.actions.fill(self.field("subject"), message.subject)
        self.actions.fill(self.field("message"), message.message)
        return self

    @allure.step("Attach {path}")
    def attach_file(self, path: Union[str, Path]) -> "ContactPage":
        self.actions.upload_file(self.upload_input, str(path))
        return self

    @allure.step("Submit contact form")
    def submit(self) -> "ContactPage":
        self.page.once("dialog", lambda dialog: dialog.accept())
        self.actions.click(self.submit_button)
        return self

    @allure.step("Return home")
    def return_home(self) -> HomePage:
        from .home_page import HomePage

        self.actions.click(self.home_button)
        return self.open(HomePage)

    @allure.step("Verify contact form loaded")
    def verify_contact_form_loaded(self) -> "ContactPage":
        self.actions.expect_visible(self.contact_form)
        self.actions.expect_visible(self.field("name"))
        return self

    @allure.step("Verify submission success")
    def verify_submission_success(self) -> "ContactPage":
        self.actions.expect_contains_text(self.status_message, SUBMISSION_SUCCESS)
        return self


__all__ = ["ContactPage", "SUBMISSION_SUCCESS"]
