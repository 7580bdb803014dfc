"""
================================================================================
Home Page Object
================================================================================

Storefront landing page: header navigation, featured items, category
sidebar, newsletter subscription and account links.

================================================================================
"""

from __future__ import annotations

import allure

from storefront_suites.ui_testing.framework.locators import LiveQuery
from storefront_suites.ui_testing.framework.page_base import PageBase

from .cart_page import CartPage
from .contact_page import ContactPage
from .login_page import LoginPage
from .products_page import ProductsPage


SUBSCRIPTION_SUCCESS = "You have been successfully subscribed!"


class HomePage(PageBase):
    """Storefront home page."""

    URL_PATH = "/"
    PAGE_TITLE = "Automation Exercise"

    # =========================================================================
    # Locators
    # =========================================================================

    @property
    def header(self) -> LiveQuery:
        return self.element("header", "Header")

    @property
    def logo(self) -> LiveQuery:
        return self.element(".logo img", "Logo")

    @property
    def navigation_menu(self) -> LiveQuery:
        return self.element(".navbar-nav", "Navigation menu")

    @property
    def home_link(self) -> LiveQuery:
        return self.element('.navbar-nav a[href="/"]', "Home link")

    @property
    def products_link(self) -> LiveQuery:
        return self.element('.navbar-nav a[href="/products"]', "Products link")

    @property
    def cart_link(self) -> LiveQuery:
        return self.element('.navbar-nav a[href="/view_cart"]', "Cart link")

    @property
    def login_link(self) -> LiveQuery:
        return self.element('.navbar-nav a[href="/login"]', "Signup / Login link")

    @property
    def contact_link(self) -> LiveQuery:
        return self.element('.navbar-nav a[href="/contact_us"]', "Contact us link")

    @property
    def logout_link(self) -> LiveQuery:
        return self.element('a[href="/logout"]', "Logout link")

    @property
    def delete_account_link(self) -> LiveQuery:
        return self.element('a[href="/delete_account"]', "Delete account link")

    @property
    def logged_in_as(self) -> LiveQuery:
        return self.element(".navbar-nav li:has-text('Logged in as')", "Logged in as")

    @property
    def featured_items(self) -> LiveQuery:
        return self.element(".features_items", "Featured items")

    @property
    def category_section(self) -> LiveQuery:
        return self.element(".left-sidebar", "Category sidebar")

    @property
    def footer(self) -> LiveQuery:
        return self.element("footer", "Footer")

    @property
    def subscription_input(self) -> LiveQuery:
        return self.element("#susbscribe_email", "Subscription email")

    @property
    def subscription_button(self) -> LiveQuery:
        return self.element("#subscribe", "Subscribe button")

    @property
    def success_alert(self) -> LiveQuery:
        return self.element(".alert-success", "Success alert")

    @property
    def account_deleted(self) -> LiveQuery:
        return self.element('[data-qa="account-deleted"]', "Account deleted banner")

    @property
    def continue_button(self) -> LiveQuery:
        return self.element('[data-qa="continue-button"]', "Continue button")

    # =========================================================================
    # Actions
    # =========================================================================

    @allure.step("Open Products")
    def click_products(self) -> ProductsPage:
        self.actions.click(self.products_link)
        return self.open(ProductsPage)

    @allure.step("Open Cart")
    def click_cart(self) -> CartPage:
        self.actions.click(self.cart_link)
        return self.open(CartPage)

    @allure.step("Open Signup / Login")
    def click_login(self) -> LoginPage:
        self.actions.click(self.login_link)
        return self.open(LoginPage)

    @allure.step("Open Contact us")
    def click_contact(self) -> ContactPage:
        self.actions.click(self.contact_link)
        return self.open(ContactPage)

    @allure.step("Logout")
    def click_logout(self) -> LoginPage:
        self.actions.click(self.logout_link)
        self.actions.expect_url_contains("/login", description="logout")
        return self.open(LoginPage)

    @allure.step("Subscribe to newsletter with {email}")
    def subscribe_to_newsletter(self, email: str) -> "HomePage":
        self.actions.scroll_into_view(self.subscription_input)
        self.actions.type_text(self.subscription_input, email)
        self.actions.click(self.subscription_button)
        return self

    @allure.step("Select category {category}")
    def select_category(self, category: str) -> "HomePage":
        """Expand a category in the sidebar accordion."""
        self.actions.click(
            self.element(f".panel-group .panel-title a:has-text('{category}')", f"Category {category}")
        )
        return self

    @allure.step("Select sub-category {sub_category}")
    def select_sub_category(self, sub_category: str) -> ProductsPage:
        self.actions.click(
            self.element(
                f".panel-body a:has-text('{sub_category}')", f"Sub-category {sub_category}"
            ).first()
        )
        return self.open(ProductsPage)

    @allure.step("Delete account")
    def delete_account(self) -> "HomePage":
        self.actions.click(self.delete_account_link)
        self.verify_account_deleted()
        self.actions.click(self.continue_button)
        return self

    # =========================================================================
    # Assertions
    # =========================================================================

    @allure.step("Verify home page loaded")
    def verify_home_page_loaded(self) -> "HomePage":
        self.actions.expect_visible(self.logo)
        self.actions.expect_visible(self.navigation_menu)
        self.actions.expect_visible(self.featured_items)
        return self

    @allure.step("Verify navigation menu")
    def verify_navigation_menu(self) -> "HomePage":
        for link in (
            self.home_link,
            self.products_link,
            self.cart_link,
            self.login_link,
            self.contact_link,
        ):
            self.actions.expect_visible(link)
        return self

    @allure.step("Verify subscription success")
    def verify_subscription_success(self) -> "HomePage":
        self.actions.expect_visible(self.success_alert)
        self.actions.expect_contains_text(self.success_alert, SUBSCRIPTION_SUCCESS)
        return self

    @allure.step("Verify logged in as {name}")
    def verify_logged_in_as(self, name: str) -> "HomePage":
        self.actions.expect_contains_text(self.logged_in_as, name)
        self.actions.expect_visible(self.logout_link)
        return self

    @allure.step("Verify account deleted")
    def verify_account_deleted(self) -> "HomePage":
        self.actions.expect_visible(self.account_deleted)
        return self


__all__ = ["HomePage"]
