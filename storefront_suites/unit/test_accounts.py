import json
from urllib.parse import parse_qs

import httpx
import pytest

from storefront_suites.api_testing.framework.accounts import AccountSetupError, registered_account
from storefront_suites.api_testing.framework.http_client import HttpClient
from storefront_tools.common.global_config import HarnessSettings
from storefront_tools.data_generator import generate_user


SETTINGS = HarnessSettings(
    api_base_url="https://api.storefront.test/api",
    request_timeout=1000,
    response_timeout=1000,
)


def storefront_api(calls, create_code=201, delete_code=200):
    def handler(request):
        calls.append((request.method, request.url.path, parse_qs(request.content.decode())))
        code = create_code if request.url.path.endswith("/createAccount") else delete_code
        return httpx.Response(200, text=json.dumps({"responseCode": code, "message": "ok"}))

    return HttpClient(settings=SETTINGS, transport=httpx.MockTransport(handler))


def test_account_is_created_then_deleted():
    calls = []
    user = generate_user()

    with storefront_api(calls) as client:
        with registered_account(client, user) as registered:
            assert registered is user
            assert [path for _, path, _ in calls] == ["/api/createAccount"]

    (create_method, _, created), (delete_method, delete_path, deleted) = calls
    assert create_method == "POST"
    assert created["email"] == [user.email]
    assert delete_method == "DELETE"
    assert delete_path == "/api/deleteAccount"
    assert deleted == {"email": [user.email], "password": [user.password]}


def test_account_is_deleted_when_the_test_fails():
    calls = []

    with storefront_api(calls) as client:
        with pytest.raises(RuntimeError):
            with registered_account(client, generate_user()):
                raise RuntimeError("test body failed")

    assert [path for _, path, _ in calls] == ["/api/createAccount", "/api/deleteAccount"]


def test_refused_account_setup_raises_and_skips_cleanup():
    calls = []

    with storefront_api(calls, create_code=400) as client:
        with pytest.raises(AccountSetupError, match="Account setup failed"):
            with registered_account(client, generate_user()):
                pass

    assert [path for _, path, _ in calls] == ["/api/createAccount"]


def test_failed_cleanup_is_only_logged():
    calls = []

    with storefront_api(calls, delete_code=404) as client:
        with registered_account(client, generate_user()):
            pass

    assert len(calls) == 2
