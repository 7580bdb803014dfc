"""
================================================================================
Products Page Object
================================================================================

Catalog listing with search, per-product "Add to cart" (opening a modal with
"Continue Shopping" / "View Cart") and links to product details.

================================================================================
"""

from __future__ import annotations

from typing import List

import allure

from storefront_suites.ui_testing.framework.locators import LiveQuery
from storefront_suites.ui_testing.framework.page_base import PageBase

from .cart_page import CartPage
from .product_details_page import ProductDetailsPage


class ProductsPage(PageBase):
    """All products / search results page."""

    URL_PATH = "/products"
    PAGE_TITLE = "Automation Exercise - All Products"

    # =========================================================================
    # Locators
    # =========================================================================

    @property
    def products_container(self) -> LiveQuery:
        return self.element(".features_items", "Products container")

    @property
    def section_title(self) -> LiveQuery:
        return self.element(".features_items h2.title", "Products section title")

    @property
    def product_items(self) -> LiveQuery:
        return self.element(".productinfo", "Product card")

    @property
    def search_input(self) -> LiveQuery:
        return self.element("#search_product", "Search input")

    @property
    def search_button(self) -> LiveQuery:
        return self.element("#submit_search", "Search button")

    @property
    def view_product_links(self) -> LiveQuery:
        return self.element('.choose a[href*="product_details"]', "View product link")

    @property
    def continue_shopping_button(self) -> LiveQuery:
        return self.element(".modal-footer .btn-success", "Continue shopping")

    @property
    def view_cart_link(self) -> LiveQuery:
        return self.element('.modal-body a[href="/view_cart"]', "View cart link")

    def product(self, index: int) -> LiveQuery:
        return self.product_items.eq(index)

    # =========================================================================
    # Actions
    # =========================================================================

    @allure.step("Search product: {term}")
    def search_product(self, term: str) -> "ProductsPage":
        self.actions.fill(self.search_input, term)
        self.actions.click(self.search_button)
        return self

    @allure.step("View product #{index}")
    def view_product(self, index: int = 0) -> ProductDetailsPage:
        self.actions.click(self.view_product_links.eq(index))
        return self.open(ProductDetailsPage)

    def _click_add_to_cart(self, index: int) -> None:
        self.actions.click(self.product(index).find(".add-to-cart", f"Add to cart [{index}]"))

    @allure.step("Add product #{index} to cart and continue shopping")
    def add_product_to_cart(self, index: int = 0) -> "ProductsPage":
        self._click_add_to_cart(index)
        self.actions.click(self.continue_shopping_button)
        self.actions.expect_hidden(self.continue_shopping_button)
        return self

    @allure.step("Add product #{index} to cart and view cart")
    def add_product_to_cart_and_view(self, index: int = 0) -> CartPage:
        self._click_add_to_cart(index)
        self.actions.click(self.view_cart_link)
        return self.open(CartPage)

    def hover_on_product(self, index: int = 0) -> "ProductsPage":
        self.actions.hover(self.product(index))
        return self

    def get_product_name(self, index: int = 0) -> str:
        return self.actions.text_of(self.product(index).find("p", f"Product name [{index}]"))

    def get_product_price(self, index: int = 0) -> str:
        return self.actions.text_of(self.product(index).find("h2", f"Product price [{index}]"))

    def get_product_names(self) -> List[str]:
        return self.actions.texts_of(self.product_items.find("p", "Product names"))

    # =========================================================================
    # Assertions
    # =========================================================================

    @allure.step("Verify products page loaded")
    def verify_products_page_loaded(self) -> "ProductsPage":
        self.actions.expect_visible(self.products_container)
        self.actions.expect_count_greater_than(self.product_items, 0)
        return self

    @allure.step("Verify 'Searched Products' title")
    def verify_searched_products_title(self) -> "ProductsPage":
        self.actions.expect_contains_text(self.section_title, "Searched Products", ignore_case=True)
        return self

    @allure.step("Verify every result matches '{term}'")
    def verify_search_results(self, term: str) -> "ProductsPage":
        count = self.actions.expect_count_greater_than(self.product_items, 0)
        for index in range(count):
            self.actions.expect_contains_text(
                self.product(index).find("p", f"Product name [{index}]"),
                term,
                ignore_case=True,
            )
        return self

    @allure.step("Verify {expected} products listed")
    def verify_product_count(self, expected: int) -> "ProductsPage":
        self.actions.expect_count(self.product_items, expected)
        return self

    @allure.step("Verify category title: {text}")
    def verify_category_title(self, text: str) -> "ProductsPage":
        self.actions.expect_contains_text(self.section_title, text, ignore_case=True)
        return self


__all__ = ["ProductsPage"]
