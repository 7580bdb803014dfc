"""
================================================================================
Signup Page Object
================================================================================

"Enter Account Information" form reached from the login page's signup
section, plus the "Account Created!" confirmation screen.

================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

import allure

from storefront_suites.ui_testing.framework.locators import LiveQuery
from storefront_suites.ui_testing.framework.page_base import PageBase
from storefront_tools.data_generator import User

if TYPE_CHECKING:
    from .home_page import HomePage


DEFAULT_BIRTH_DATE: Tuple[str, str, str] = ("15", "January", "1990")


class SignupPage(PageBase):
    """Account information form."""

    URL_PATH = "/signup"

    @property
    def password_input(self) -> LiveQuery:
        return self.element('[data-qa="password"]', "Account password")

    @property
    def create_account_button(self) -> LiveQuery:
        return self.element('[data-qa="create-account"]', "Create account button")

    @property
    def account_created(self) -> LiveQuery:
        return self.element('[data-qa="account-created"]', "Account created banner")

    @property
    def continue_button(self) -> LiveQuery:
        return self.element('[data-qa="continue-button"]', "Continue button")

    def field(self, name: str) -> LiveQuery:
        """Input or select tagged with data-qa=`name`."""
        return self.element(f'[data-qa="{name}"]', name.replace("_", " ").capitalize())

    def title_radio(self, title: str) -> LiveQuery:
        return self.element(f'input[name="title"][value="{title}"]', f"Title {title}")

    @allure.step("Fill account information for {user.email}")
    def fill_account_information(
        self,
        user: User,
        title: str = "Mr",
        birth_date: Tuple[str, str, str] = DEFAULT_BIRTH_DATE,
        newsletter: bool = False,
    ) -> "SignupPage":
        """
        Fill every field of the account information form.

        Args:
            user: Generated user supplying the form values
            title: "Mr" or "Mrs"
            birth_date: (day, month name, year)
            newsletter: Also tick the newsletter and special offers boxes
        """
        day, month, year = birth_date

        self.actions.check(self.title_radio(title))
        self.actions.fill(self.password_input, user.password)
        self.actions.select_option(self.field("days"), day)
        self.actions.select_option(self.field("months"), month, by="label")
        self.actions.select_option(self.field("years"), year)

        if newsletter:
            self.actions.check(self.element("#newsletter", "Newsletter"))
            self.actions.check(self.element("#optin", "Special offers"))

        for name, value in (
            ("first_name", user.first_name),
            ("last_name", user.last_name),
            ("company", user.company),
            ("address", user.address1),
            ("address2", user.address2),
        ):
            self.actions.fill(self.field(name), value)

        self.actions.select_option(self.field("country"), user.country, by="label")

        for name, value in (
            ("state", user.state),
            ("city", user.city),
            ("zipcode", user.zipcode),
            ("mobile_number", user.mobile_number),
        ):
            self.actions.fill(self.field(name), value)
        return self

    @allure.step("Create account")
    def create_account(self) -> "SignupPage":
        self.actions.click(self.create_account_button)
        return self

    @allure.step("Continue after account creation")
    def continue_after_creation(self) -> HomePage:
        from .home_page import HomePage

        self.actions.click(self.continue_button)
        return self.open(HomePage)

    @allure.step("Verify signup form loaded")
    def verify_signup_form_loaded(self) -> "SignupPage":
        self.actions.expect_visible(self.password_input)
        self.actions.expect_visible(self.create_account_button)
        return self

    @allure.step("Verify account created")
    def verify_account_created(self) -> "SignupPage":
        self.actions.expect_visible(self.account_created)
        return self


__all__ = ["SignupPage", "DEFAULT_BIRTH_DATE"]
