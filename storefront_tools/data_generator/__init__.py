"""
Synthetic test data for the storefront suites.
"""

from .entity_generator import (
    ContactMessage,
    PaymentCard,
    Product,
    User,
    generate_contact_form,
    generate_credit_card,
    generate_date,
    generate_email,
    generate_password,
    generate_product,
    generate_random_number,
    generate_random_string,
    generate_user,
)

__all__ = [
    "ContactMessage",
    "PaymentCard",
    "Product",
    "User",
    "generate_contact_form",
    "generate_credit_card",
    "generate_date",
    "generate_email",
    "generate_password",
    "generate_product",
    "generate_random_number",
    "generate_random_string",
    "generate_user",
]
