"""
================================================================================
Cart Page Object
================================================================================

Shopping cart (/view_cart): item rows, removal, checkout entry point.

Guests who proceed to checkout get a modal asking them to register or log
in instead of the checkout page.

================================================================================
"""

from __future__ import annotations

from typing import List

import allure

from storefront_suites.ui_testing.framework.locators import LiveQuery
from storefront_suites.ui_testing.framework.page_base import PageBase

from .checkout_page import CheckoutPage


CHECKOUT_LOGIN_PROMPT = "Register / Login account to proceed on checkout."


class CartPage(PageBase):
    """Shopping cart."""

    URL_PATH = "/view_cart"
    PAGE_TITLE = "Automation Exercise - Checkout"

    # =========================================================================
    # Locators
    # =========================================================================

    @property
    def cart_table(self) -> LiveQuery:
        return self.element("#cart_info_table", "Cart table")

    @property
    def cart_items(self) -> LiveQuery:
        return self.element("#cart_info_table tbody tr", "Cart row")

    @property
    def proceed_to_checkout_button(self) -> LiveQuery:
        return self.element(".check_out", "Proceed to checkout")

    @property
    def empty_cart_message(self) -> LiveQuery:
        return self.element("#empty_cart", "Empty cart message")

    @property
    def remove_buttons(self) -> LiveQuery:
        return self.element(".cart_quantity_delete", "Remove item")

    @property
    def quantity_inputs(self) -> LiveQuery:
        return self.element(".cart_quantity_input", "Quantity input")

    @property
    def checkout_modal_body(self) -> LiveQuery:
        return self.element("#checkoutModal .modal-body", "Checkout login prompt")

    def item(self, index: int) -> LiveQuery:
        return self.cart_items.eq(index)

    # =========================================================================
    # Actions
    # =========================================================================

    @allure.step("Remove cart item #{index}")
    def remove_item(self, index: int = 0) -> "CartPage":
        before = self.actions.expect_count_greater_than(self.cart_items, index)
        self.actions.click(self.remove_buttons.eq(index))
        self.actions.expect_count(self.cart_items, before - 1)
        return self

    @allure.step("Set quantity of item #{index} to {quantity}")
    def update_quantity(self, index: int, quantity: int) -> "CartPage":
        target = self.quantity_inputs.eq(index)
        self.actions.clear(target)
        self.actions.fill(target, str(quantity))
        return self

    @allure.step("Proceed to checkout")
    def proceed_to_checkout(self) -> "CartPage":
        self.actions.click(self.proceed_to_checkout_button)
        return self

    def checkout(self) -> CheckoutPage:
        """Proceed to checkout as a logged-in user."""
        self.proceed_to_checkout()
        return self.open(CheckoutPage).verify_checkout_loaded()

    def get_item_name(self, index: int = 0) -> str:
        return self.actions.text_of(self.item(index).find(".cart_description h4", f"Item name [{index}]"))

    def get_item_price(self, index: int = 0) -> str:
        return self.actions.text_of(self.item(index).find(".cart_price p", f"Item price [{index}]"))

    def get_item_quantity(self, index: int = 0) -> str:
        return self.actions.text_of(self.item(index).find(".cart_quantity button", f"Item quantity [{index}]"))

    def get_item_total(self, index: int = 0) -> str:
        return self.actions.text_of(self.item(index).find(".cart_total_price", f"Item total [{index}]"))

    def get_item_names(self) -> List[str]:
        return self.actions.texts_of(self.cart_items.find(".cart_description h4", "Item names"))

    # =========================================================================
    # Assertions
    # =========================================================================

    @allure.step("Verify cart page loaded")
    def verify_cart_page_loaded(self) -> "CartPage":
        self.actions.expect_visible(self.cart_table)
        return self

    @allure.step("Verify cart is not empty")
    def verify_cart_not_empty(self) -> "CartPage":
        self.actions.expect_count_greater_than(self.cart_items, 0)
        return self

    @allure.step("Verify cart is empty")
    def verify_cart_empty(self) -> "CartPage":
        self.actions.expect_visible(self.empty_cart_message)
        return self

    @allure.step("Verify '{name}' is in the cart")
    def verify_item_in_cart(self, name: str) -> "CartPage":
        self.actions.expect_contains_text(self.cart_items, name)
        return self

    @allure.step("Verify {expected} item(s) in cart")
    def verify_item_count(self, expected: int) -> "CartPage":
        self.actions.expect_count(self.cart_items, expected)
        return self

    @allure.step("Verify checkout requires login")
    def verify_checkout_requires_login(self) -> "CartPage":
        self.actions.expect_contains_text(self.checkout_modal_body, CHECKOUT_LOGIN_PROMPT)
        return self


__all__ = ["CartPage", "CHECKOUT_LOGIN_PROMPT"]
