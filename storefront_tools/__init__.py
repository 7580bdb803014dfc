"""
================================================================================
Storefront Tools
================================================================================

Support utilities shared by the storefront UI and API suites.

Modules:
    - common: Settings, logging setup and wait primitives
    - data_generator: Faker-backed synthetic domain entities

Example:
    from storefront_tools.data_generator import generate_user

    user = generate_user()
    payload = user.to_account_payload()

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "data_generator",
]
