"""
================================================================================
Checkout Page Object
================================================================================

Order review (/checkout): delivery/billing addresses, order comment and the
"Place Order" button leading to payment.

================================================================================
"""

from __future__ import annotations

import allure

from storefront_suites.ui_testing.framework.locators import LiveQuery
from storefront_suites.ui_testing.framework.page_base import PageBase

from .payment_page import PaymentPage


class CheckoutPage(PageBase):
    """Checkout / order review."""

    URL_PATH = "/checkout"

    @property
    def checkout_information(self) -> LiveQuery:
        return self.element(".checkout-information", "Checkout information")

    @property
    def delivery_address(self) -> LiveQuery:
        return self.element("#address_delivery", "Delivery address")

    @property
    def comment_input(self) -> LiveQuery:
        return self.element('[data-qa="comment-text"]', "Order comment")

    @property
    def place_order_button(self) -> LiveQuery:
        return self.element('a.check_out[href="/payment"]', "Place order")

    @allure.step("Place order")
    def place_order(self, comment: str = "") -> PaymentPage:
        if comment:
            self.actions.fill(self.comment_input, comment)
        self.actions.click(self.place_order_button)
        return self.open(PaymentPage)

    @allure.step("Verify checkout loaded")
    def verify_checkout_loaded(self) -> "CheckoutPage":
        self.actions.expect_url_contains(self.URL_PATH)
        self.actions.expect_visible(self.checkout_information)
        return self

    @allure.step("Verify delivery address contains {text}")
    def verify_delivery_address_contains(self, text: str) -> "CheckoutPage":
        self.actions.expect_contains_text(self.delivery_address, text)
        return self


__all__ = ["CheckoutPage"]
