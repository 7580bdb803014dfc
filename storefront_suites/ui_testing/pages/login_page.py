"""
================================================================================
Login Page Object
================================================================================

The /login screen carries two forms side by side:
  - "Login to your account" (email + password)
  - "New User Signup!" (name + email), which continues to /signup

`login()` only drives the form; callers assert the outcome with
`verify_left_login_page()` or `verify_login_error()`.

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from storefront_suites.ui_testing.framework.locators import LiveQuery
from storefront_suites.ui_testing.framework.page_base import PageBase

from .signup_page import SignupPage


INVALID_LOGIN_MESSAGE = "Your email or password is incorrect!"
EMAIL_EXISTS_MESSAGE = "Email Address already exist!"


class LoginPage(PageBase):
    """Login / signup entry page."""

    URL_PATH = "/login"
    PAGE_TITLE = "Automation Exercise - Signup / Login"

    # =========================================================================
    # Locators
    # =========================================================================

    @property
    def login_form(self) -> LiveQuery:
        return self.element(".login-form", "Login form")

    @property
    def signup_form(self) -> LiveQuery:
        return self.element(".signup-form", "Signup form")

    @property
    def login_email_input(self) -> LiveQuery:
        return self.element('[data-qa="login-email"]', "Login email")

    @property
    def login_password_input(self) -> LiveQuery:
        return self.element('[data-qa="login-password"]', "Login password")

    @property
    def login_button(self) -> LiveQuery:
        return self.element('[data-qa="login-button"]', "Login button")

    @property
    def signup_name_input(self) -> LiveQuery:
        return self.element('[data-qa="signup-name"]', "Signup name")

    @property
    def signup_email_input(self) -> LiveQuery:
        return self.element('[data-qa="signup-email"]', "Signup email")

    @property
    def signup_button(self) -> LiveQuery:
        return self.element('[data-qa="signup-button"]', "Signup button")

    @property
    def login_error_message(self) -> LiveQuery:
        return self.element(".login-form p", "Login error")

    @property
    def signup_error_message(self) -> LiveQuery:
        return self.element(".signup-form p", "Signup error")

    # =========================================================================
    # Actions
    # =========================================================================

    @allure.step("Login with {email}")
    def login(self, email: str, password: str) -> "LoginPage":
        logger.info(f"Logging in as {email or '<empty>'}")
        self.actions.fill(self.login_email_input, email)
        self.actions.fill(self.login_password_input, password)
        self.actions.click(self.login_button)
        return self

    @allure.step("Signup as {name} <{email}>")
    def signup(self, name: str, email: str) -> SignupPage:
        self.actions.fill(self.signup_name_input, name)
        self.actions.fill(self.signup_email_input, email)
        self.actions.click(self.signup_button)
        return self.open(SignupPage)

    def clear_login_form(self) -> "LoginPage":
        self.actions.clear(self.login_email_input)
        self.actions.clear(self.login_password_input)
        return self

    def clear_signup_form(self) -> "LoginPage":
        self.actions.clear(self.signup_name_input)
        self.actions.clear(self.signup_email_input)
        return self

    # =========================================================================
    # Assertions
    # =========================================================================

    @allure.step("Verify login page loaded")
    def verify_login_page_loaded(self) -> "LoginPage":
        self.actions.expect_visible(self.login_form)
        self.actions.expect_visible(self.signup_form)
        return self

    @allure.step("Verify login error: {message}")
    def verify_login_error(self, message: str = INVALID_LOGIN_MESSAGE) -> "LoginPage":
        self.actions.expect_contains_text(self.login_error_message, message)
        return self

    @allure.step("Verify signup error: {message}")
    def verify_signup_error(self, message: str = EMAIL_EXISTS_MESSAGE) -> "LoginPage":
        self.actions.expect_contains_text(self.signup_error_message, message)
        return self

    @allure.step("Verify browser left the login page")
    def verify_left_login_page(self, timeout: int = None) -> "LoginPage":
        self.actions.expect_url_not_contains(
            self.URL_PATH, description="login form submit", timeout=timeout
        )
        return self


__all__ = ["LoginPage", "INVALID_LOGIN_MESSAGE", "EMAIL_EXISTS_MESSAGE"]
