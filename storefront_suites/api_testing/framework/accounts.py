"""
================================================================================
Test Accounts
================================================================================

Short-lived storefront accounts for tests that need an existing customer.
The account is created through /createAccount and removed through
/deleteAccount when the block exits, whatever the test outcome.

Usage:
    with registered_account(api_client, generate_user()) as user:
        api_client.post("/verifyLogin", body={...}, headers=FORM_HEADERS)

Author: Automation Team
License: MIT
================================================================================
"""

from contextlib import contextmanager
from typing import Iterator

import allure
from loguru import logger

from storefront_tools.data_generator import User

from .http_client import FORM_HEADERS, HttpClient


# responseCode answered by /createAccount on success
ACCOUNT_CREATED = 201


class AccountSetupError(AssertionError):
    """The storefront refused to create a test account."""
    pass


@contextmanager
def registered_account(client: HttpClient, user: User) -> Iterator[User]:
    """
    Register `user` for the duration of the block.

    Raises:
        AccountSetupError: When /createAccount does not answer responseCode 201
    """
    with allure.step(f"Register test account {user.email}"):
        response = client.post("/createAccount", body=user.to_account_payload(), headers=FORM_HEADERS)
        if response.response_code != ACCOUNT_CREATED:
            raise AccountSetupError(f"Account setup failed for {user.email}: {response.body}")
    logger.debug(f"Registered test account: {user.email}")

    try:
        yield user
    finally:
        # Cleanup after test
        response = client.delete(
            "/deleteAccount",
            body={"email": user.email, "password": user.password},
            headers=FORM_HEADERS,
        )
        if response.response_code != 200:
            logger.warning(f"Failed to delete test account {user.email}: {response.body}")


__all__ = [
    "ACCOUNT_CREATED",
    "AccountSetupError",
    "registered_account",
]
