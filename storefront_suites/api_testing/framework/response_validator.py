# ================================================================================
# Response Validator
# ================================================================================
#
# Stateless helpers for asserting on storefront API responses. They accept an
# ApiResponse, a raw httpx.Response, or a plain mapping with `status`/`body`
# keys, and raise ResponseValidationError (an AssertionError) on failure so
# pytest reports them as ordinary test failures.
#
# Key Features:
#   - Status + non-empty body validation
#   - Nominal schema checks (presence and runtime type per field)
#   - Dot-path extraction with list indexing
#   - Bearer auth header construction
#   - Loguru + Allure response logging
#
# ================================================================================

import json
from typing import Any, Dict, Mapping, Tuple

import allure
import httpx
from allure_commons.types import AttachmentType
from loguru import logger

from .http_client import ApiResponse


class ResponseValidationError(AssertionError):
    """Raised when a response does not satisfy a validation."""
    pass


# Schema type names mapped to the Python types they accept
_TYPE_NAMES: Dict[str, Tuple[type, ...]] = {
    "number": (int, float),
    "string": (str,),
    "boolean": (bool,),
    "object": (dict,),
    "array": (list,),
    "null": (type(None),),
}


def _as_api_response(response: Any) -> ApiResponse:
    """Normalize supported response shapes into an ApiResponse."""
    if isinstance(response, ApiResponse):
        return response
    if isinstance(response, httpx.Response):
        return ApiResponse.from_httpx(response)
    if isinstance(response, Mapping) and "status" in response:
        return ApiResponse(
            status=int(response["status"]),
            body=response.get("body"),
            headers=dict(response.get("headers") or {}),
        )
    raise TypeError(
        f"Unsupported response type {type(response).__name__}; expected "
        f"ApiResponse, httpx.Response or a mapping with 'status'/'body'"
    )


def _body_of(response: Any) -> Any:
    """Body of any supported response; a mapping needs only a `body` key here."""
    if isinstance(response, Mapping) and "status" not in response:
        if "body" not in response:
            raise TypeError("Response mapping has no 'body' key")
        return response["body"]
    return _as_api_response(response).body


def _is_empty(body: Any) -> bool:
    if body is None:
        return True
    if isinstance(body, (str, bytes, dict, list)):
        return len(body) == 0
    return False


def _matches_type(value: Any, expected: Any) -> bool:
    """Nominal runtime type check; bool never counts as a number."""
    if isinstance(expected, str):
        accepted = _TYPE_NAMES.get(expected.lower())
        if accepted is None:
            raise ValueError(f"Unknown schema type name: {expected!r}")
        if expected.lower() == "number" and isinstance(value, bool):
            return False
        return isinstance(value, accepted)
    if isinstance(expected, type):
        return type(value) is expected
    raise ValueError(f"Unsupported schema type specifier: {expected!r}")


def _type_label(expected: Any) -> str:
    return expected if isinstance(expected, str) else getattr(expected, "__name__", str(expected))


def validate_response(response: Any, expected_status: int = 200) -> Any:
    """
    Assert the HTTP status and that the body is not empty.

    Args:
        response: ApiResponse, httpx.Response or {status, body} mapping
        expected_status: Required HTTP status

    Returns:
        The response, unchanged

    Raises:
        ResponseValidationError: On status mismatch or empty body
    """
    normalized = _as_api_response(response)
    with allure.step(f"Validate response status == {expected_status}"):
        if normalized.status != expected_status:
            raise ResponseValidationError(
                f"Expected status {expected_status}, got {normalized.status}. "
                f"Body: {str(normalized.body)[:500]}"
            )
        if _is_empty(normalized.body):
            raise ResponseValidationError(
                f"Expected a non-empty body for status {normalized.status}"
            )
    return response


def validate_response_schema(response: Any, schema: Mapping[str, Any]) -> Any:
    """
    Check that every schema key is present on the body with the right type.

    Schema entries are mappings; an entry with a `type` key constrains the
    runtime type of the value. Type may be one of "number", "string",
    "boolean", "object", "array", "null", or a Python type compared exactly.

    Example:
        validate_response_schema(response, {
            "responseCode": {"type": "number"},
            "products": {"type": "array"},
        })
    """
    body = _body_of(response)
    if not isinstance(body, Mapping):
        raise ResponseValidationError(
            f"Expected an object body for schema validation, got {type(body).__name__}"
        )

    with allure.step(f"Validate response schema ({len(schema)} fields)"):
        for key, rule in schema.items():
            if key not in body:
                raise ResponseValidationError(
                    f"Missing field '{key}' in response body. "
                    f"Present fields: {sorted(body)}"
                )
            expected_type = rule.get("type") if isinstance(rule, Mapping) else None
            if expected_type is None:
                continue
            value = body[key]
            if not _matches_type(value, expected_type):
                raise ResponseValidationError(
                    f"Field '{key}' expected type {_type_label(expected_type)}, "
                    f"got {type(value).__name__} ({value!r})"
                )
    return response


def extract_from_response(response: Any, path: str) -> Any:
    """
    Read a value from the body by dot path; None when any segment is missing.

    Digit segments index into lists: "products.0.name".
    """
    current: Any = _body_of(response)
    for segment in path.split("."):
        if isinstance(current, Mapping):
            if segment not in current:
                return None
            current = current[segment]
        elif isinstance(current, list) and segment.isdigit():
            index = int(segment)
            if index >= len(current):
                return None
            current = current[index]
        else:
            return None
    return current


def create_auth_headers(token: str) -> Dict[str, str]:
    """Bearer authorization headers with a JSON Content-Type."""
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }


def log_response(response: Any) -> Any:
    """Log status and body, attach the body to the Allure report, return response."""
    normalized = _as_api_response(response)
    if isinstance(normalized.body, (dict, list)):
        content = json.dumps(normalized.body, ensure_ascii=False, indent=2)
    else:
        content = str(normalized.body)

    logger.info(f"Response status: {normalized.status}")
    logger.debug(f"Response body: {content}")
    allure.attach(
        content,
        name=f"Response {normalized.status}",
        attachment_type=AttachmentType.JSON,
    )
    return response


__all__ = [
    "ResponseValidationError",
    "validate_response",
    "validate_response_schema",
    "extract_from_response",
    "create_auth_headers",
    "log_response",
]
