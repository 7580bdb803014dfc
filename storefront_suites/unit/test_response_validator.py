import httpx
import pytest

from storefront_suites.api_testing.framework.http_client import ApiResponse
from storefront_suites.api_testing.framework.response_validator import (
    ResponseValidationError,
    create_auth_headers,
    extract_from_response,
    log_response,
    validate_response,
    validate_response_schema,
)


PRODUCTS = ApiResponse(
    status=200,
    body={
        "responseCode": 200,
        "products": [
            {"id": 1, "name": "Blue Top", "category": {"usertype": {"usertype": "Women"}}},
            {"id": 2, "name": "Men Tshirt"},
        ],
    },
)


def test_validate_response_passes_and_returns_input():
    assert validate_response(PRODUCTS) is PRODUCTS
    assert validate_response({"status": 201, "body": {"id": 1}}, 201)


def test_validate_response_status_mismatch():
    with pytest.raises(ResponseValidationError, match="Expected status 200, got 404"):
        validate_response(ApiResponse(status=404, body={"message": "nope"}))


@pytest.mark.parametrize("body", [None, "", {}, []])
def test_validate_response_rejects_empty_body(body):
    with pytest.raises(ResponseValidationError, match="non-empty body"):
        validate_response({"status": 200, "body": body})


def test_validate_response_accepts_raw_httpx_response():
    raw = httpx.Response(
        200,
        text='{"responseCode": 200}',
        request=httpx.Request("GET", "https://storefront.test/api/brandsList"),
    )
    assert validate_response(raw) is raw


def test_unsupported_response_type():
    with pytest.raises(TypeError):
        validate_response(200)


def test_schema_accepts_matching_types():
    validate_response_schema(PRODUCTS, {
        "responseCode": {"type": "number"},
        "products": {"type": "array"},
    })
    validate_response_schema(PRODUCTS, {"responseCode": {"type": int}})


def test_schema_reports_missing_field():
    with pytest.raises(ResponseValidationError, match="Missing field 'brands'"):
        validate_response_schema(PRODUCTS, {"brands": {"type": "array"}})


def test_schema_reports_wrong_type():
    with pytest.raises(ResponseValidationError, match="'products' expected type object"):
        validate_response_schema(PRODUCTS, {"products": {"type": "object"}})


def test_schema_boolean_is_not_a_number():
    response = ApiResponse(status=200, body={"flag": True})
    with pytest.raises(ResponseValidationError):
        validate_response_schema(response, {"flag": {"type": "number"}})
    validate_response_schema(response, {"flag": {"type": "boolean"}})


def test_schema_entry_without_type_only_checks_presence():
    validate_response_schema(PRODUCTS, {"products": {}})


def test_schema_needs_object_body():
    with pytest.raises(ResponseValidationError, match="object body"):
        validate_response_schema(ApiResponse(status=200, body=[1, 2]), {"x": {}})


@pytest.mark.parametrize(
    "path,expected",
    [
        ("responseCode", 200),
        ("products.0.name", "Blue Top"),
        ("products.1.id", 2),
        ("products.0.category.usertype.usertype", "Women"),
        ("products.5.name", None),
        ("products.x", None),
        ("missing.deeper", None),
    ],
)
def test_extract_from_response(path, expected):
    assert extract_from_response(PRODUCTS, path) == expected


def test_extract_from_body_only_mapping():
    assert extract_from_response({"body": {"user": {"id": 7}}}, "user.id") == 7
    assert extract_from_response({"body": {}}, "user.id") is None


def test_schema_accepts_body_only_mapping():
    response = {"body": {"responseCode": 200}}
    assert validate_response_schema(response, {"responseCode": {"type": "number"}}) is response


def test_validate_response_still_requires_status():
    with pytest.raises(TypeError):
        validate_response({"body": {"responseCode": 200}})


def test_create_auth_headers():
    assert create_auth_headers("abc") == {
        "Authorization": "Bearer abc",
        "Content-Type": "application/json",
    }


def test_log_response_returns_input():
    assert log_response(PRODUCTS) is PRODUCTS
    plain = ApiResponse(status=200, body="<html></html>")
    assert log_response(plain) is plain
