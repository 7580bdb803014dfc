"""
================================================================================
Payment Page Object
================================================================================

Card entry (/payment) and the "Order Placed!" confirmation.

================================================================================
"""

from __future__ import annotations

import allure

from storefront_suites.ui_testing.framework.locators import LiveQuery
from storefront_suites.ui_testing.framework.page_base import PageBase
from storefront_tools.data_generator import PaymentCard


class PaymentPage(PageBase):
    """Payment form."""

    URL_PATH = "/payment"

    @property
    def pay_button(self) -> LiveQuery:
        return self.element('[data-qa="pay-button"]', "Pay and confirm")

    @property
    def order_placed(self) -> LiveQuery:
        return self.element('[data-qa="order-placed"]', "Order placed banner")

    def field(self, name: str) -> LiveQuery:
        return self.element(f'[data-qa="{name}"]', name.replace("-", " ").capitalize())

    @allure.step("Enter card details")
    def enter_card(self, card: PaymentCard) -> "PaymentPage":
        for name, value in (
            ("name-on-card", card.name_on_card),
            ("card-number", card.card_number),
            ("cvc", card.cvc),
            ("expiry-month", card.expiry_month),
            ("expiry-year", card.expiry_year),
        ):
            self.actions.fill(self.field(name), value)
        return self

    @allure.step("Pay and confirm order")
    def pay_and_confirm(self) -> "PaymentPage":
        self.actions.click(self.pay_button)
        return self

    @allure.step("Verify order placed")
    def verify_order_placed(self) -> "PaymentPage":
        self.actions.expect_visible(self.order_placed)
        return self


__all__ = ["PaymentPage"]
