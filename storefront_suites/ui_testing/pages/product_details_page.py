"""
================================================================================
Product Details Page Object
================================================================================

Single product view (/product_details/<id>): quantity, add to cart and the
"Write Your Review" form.

================================================================================
"""

from __future__ import annotations

import allure

from storefront_suites.ui_testing.framework.locators import LiveQuery
from storefront_suites.ui_testing.framework.page_base import PageBase

from .cart_page import CartPage


REVIEW_THANKS = "Thank you for your review."


class ProductDetailsPage(PageBase):
    """Product details with review form."""

    URL_PATH = "/product_details/1"

    @classmethod
    def path_for(cls, product_id: int) -> str:
        return f"/product_details/{product_id}"

    @property
    def product_information(self) -> LiveQuery:
        return self.element(".product-information", "Product information")

    @property
    def product_name(self) -> LiveQuery:
        return self.element(".product-information h2", "Product name")

    @property
    def quantity_input(self) -> LiveQuery:
        return self.element("#quantity", "Quantity")

    @property
    def add_to_cart_button(self) -> LiveQuery:
        return self.element(".product-information .btn-cart", "Add to cart")

    @property
    def view_cart_link(self) -> LiveQuery:
        return self.element('.modal-body a[href="/view_cart"]', "View cart link")

    @property
    def review_name(self) -> LiveQuery:
        return self.element("#name", "Review name")

    @property
    def review_email(self) -> LiveQuery:
        return self.element("#email", "Review email")

    @property
    def review_text(self) -> LiveQuery:
        return self.element("#review", "Review text")

    @property
    def review_button(self) -> LiveQuery:
        return self.element("#button-review", "Submit review")

    @property
    def review_success(self) -> LiveQuery:
        return self.element("#review-section .alert-success", "Review confirmation")

    def get_product_name(self) -> str:
        return self.actions.text_of(self.product_name)

    @allure.step("Set quantity to {quantity}")
    def set_quantity(self, quantity: int) -> "ProductDetailsPage":
        self.actions.fill(self.quantity_input, str(quantity))
        return self

    @allure.step("Add to cart")
    def add_to_cart(self) -> "ProductDetailsPage":
        self.actions.click(self.add_to_cart_button)
        return self

    @allure.step("View cart from modal")
    def view_cart(self) -> CartPage:
        self.actions.click(self.view_cart_link)
        return self.open(CartPage)

    @allure.step("Write review as {name}")
    def write_review(self, name: str, email: str, text: str) -> "ProductDetailsPage":
        self.actions.fill(self.review_name, name)
        self.actions.fill(self.review_email, email)
        self.actions.fill(self.review_text, text)
        self.actions.click(self.review_button)
        return self

    @allure.step("Verify product details loaded")
    def verify_product_details_loaded(self) -> "ProductDetailsPage":
        self.actions.expect_visible(self.product_information)
        self.actions.expect_url_contains("/product_details/")
        return self

    @allure.step("Verify review submitted")
    def verify_review_submitted(self) -> "ProductDetailsPage":
        self.actions.expect_contains_text(self.review_success, REVIEW_THANKS)
        return self


__all__ = ["ProductDetailsPage", "REVIEW_THANKS"]
