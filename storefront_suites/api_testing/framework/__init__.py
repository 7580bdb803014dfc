"""
================================================================================
API Testing Framework
================================================================================

API automation components for the storefront suites.

Modules:
    - http_client: HTTP client with transport retry and Allure logging
    - config_loader: YAML configuration management
    - response_validator: Stateless response assertions
    - accounts: Test accounts created and deleted around a test

Author: Automation Team
License: MIT
================================================================================
"""

from .accounts import ACCOUNT_CREATED, AccountSetupError, registered_account
from .config_loader import ConfigLoader, ConfigurationError
from .http_client import (
    FORM_HEADERS,
    ApiResponse,
    HttpClient,
    HttpClientError,
    merge_headers,
)
from .response_validator import (
    ResponseValidationError,
    create_auth_headers,
    extract_from_response,
    log_response,
    validate_response,
    validate_response_schema,
)

__all__ = [
    "ACCOUNT_CREATED",
    "AccountSetupError",
    "registered_account",
    "ConfigLoader",
    "ConfigurationError",
    "FORM_HEADERS",
    "ApiResponse",
    "HttpClient",
    "HttpClientError",
    "merge_headers",
    "ResponseValidationError",
    "create_auth_headers",
    "extract_from_response",
    "log_response",
    "validate_response",
    "validate_response_schema",
]
