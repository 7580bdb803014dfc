"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the storefront pages.

Each page class encapsulates:
    - Element locators (LiveQuery properties)
    - Page-specific actions
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .cart_page import CartPage
from .checkout_page import CheckoutPage
from .contact_page import ContactPage
from .home_page import HomePage
from .login_page import LoginPage
from .payment_page import PaymentPage
from .product_details_page import ProductDetailsPage
from .products_page import ProductsPage
from .signup_page import SignupPage

__all__ = [
    "CartPage",
    "CheckoutPage",
    "ContactPage",
    "HomePage",
    "LoginPage",
    "PaymentPage",
    "ProductDetailsPage",
    "ProductsPage",
    "SignupPage",
]
