"""
================================================================================
Storefront HTTP Client with Allure Integration
================================================================================

Thin httpx wrapper used by the API suites and by the `api_*` commands:
    - One call per request; HTTP status never raises (4xx/5xx are data)
    - Caller headers merged over a JSON Content-Type default
    - Transport errors retried with backoff via the shared poll combinator
    - Allure reporting with redacted headers/bodies and a cURL command
    - Short history of recent calls for failure diagnostics

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
import time
from collections import deque
from dataclasses import dataclass, field, replace
from typing import Any, Deque, Dict, List, Mapping, Optional
from urllib.parse import urlencode

import allure
import httpx
from allure_commons.types import AttachmentType
from loguru import logger

from storefront_tools.common.global_config import HarnessSettings
from storefront_tools.common.wait_helpers import get_wait_config, retry_until

from .config_loader import ConfigLoader


# Maximum response length to include in Allure reports
MAX_RESPONSE_LENGTH = 3000

# Number of recent calls kept for failure reports
HISTORY_SIZE = 20

DEFAULT_HEADERS: Dict[str, str] = {"Content-Type": "application/json"}

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# The storefront API reads its parameters from form fields
FORM_HEADERS: Dict[str, str] = {"Content-Type": FORM_CONTENT_TYPE}

# Transport failures worth another attempt; everything else propagates at once
RETRYABLE_ERRORS = (httpx.TimeoutException, httpx.NetworkError)


class HttpClientError(Exception):
    """Base exception for HTTP client errors."""
    pass


@dataclass
class ApiResponse:
    """
    Normalized view of one HTTP exchange.

    `body` is the decoded JSON document when the payload parses as JSON
    (the storefront API serves JSON as text/html), otherwise the raw text.
    """
    status: int
    body: Any
    headers: Dict[str, str] = field(default_factory=dict)
    elapsed_ms: float = 0.0
    method: str = ""
    url: str = ""

    @classmethod
    def from_httpx(
        cls,
        response: httpx.Response,
        elapsed_ms: float = 0.0,
    ) -> "ApiResponse":
        text = response.text
        try:
            body: Any = json.loads(text) if text else ""
        except ValueError:
            body = text
        return cls(
            status=response.status_code,
            body=body,
            headers=dict(response.headers),
            elapsed_ms=elapsed_ms,
            method=response.request.method,
            url=str(response.request.url),
        )

    @property
    def status_code(self) -> int:
        """httpx-compatible alias of `status`."""
        return self.status

    @property
    def response_code(self) -> Optional[int]:
        """Application-level `responseCode` carried in the body, if any."""
        if isinstance(self.body, dict):
            return self.body.get("responseCode")
        return None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def merge_headers(
    headers: Optional[Mapping[str, str]] = None,
    defaults: Mapping[str, str] = DEFAULT_HEADERS,
) -> Dict[str, str]:
    """Overlay caller headers on the defaults; names compare case-insensitively."""
    headers = dict(headers or {})
    overridden = {key.lower() for key in headers}
    merged = {k: v for k, v in defaults.items() if k.lower() not in overridden}
    merged.update(headers)
    return merged


def _content_type(headers: Mapping[str, str]) -> str:
    for key, value in headers.items():
        if key.lower() == "content-type":
            return str(value).lower()
    return ""


class HttpClient:
    """
    HTTP client bound to the configured API base URL.

    Usage:
        >>> with HttpClient() as client:
        ...     response = client.get("/productsList")
        ...     response.body["responseCode"]
        200

        >>> client.post(
        ...     "/verifyLogin",
        ...     body={"email": "a@b.c", "password": "x"},
        ...     headers={"Content-Type": "application/x-www-form-urlencoded"},
        ... )
    """

    def __init__(
        self,
        config: Optional[ConfigLoader] = None,
        settings: Optional[HarnessSettings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Initialize HTTP client with configuration.

        Args:
            config: Configuration loader; used when `settings` is not given.
            settings: Pre-built harness settings.
            transport: Optional httpx transport (MockTransport in unit tests).
        """
        if settings is None:
            settings = (config or ConfigLoader()).settings

        self.settings = settings
        self.base_url = settings.api_base_url
        self.request_timeout = settings.request_timeout
        self.response_timeout = settings.response_timeout
        self.transport = transport
        self.history: Deque[Dict[str, Any]] = deque(maxlen=HISTORY_SIZE)

        self.session: Optional[httpx.Client] = None

    def __enter__(self) -> "HttpClient":
        """Enter context manager - initialize HTTP session."""
        self.session = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(
                self.response_timeout / 1000.0,
                connect=self.request_timeout / 1000.0,
            ),
            transport=self.transport,
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager - close HTTP session."""
        if self.session:
            self.session.close()
            self.session = None

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        **kwargs: Any,
    ) -> ApiResponse:
        """
        Execute one HTTP request with transport retry and Allure logging.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, PATCH)
            path: Request path relative to the API base URL
            body: JSON document, form mapping (with a form Content-Type)
                  or raw str/bytes
            headers: Caller headers, merged over DEFAULT_HEADERS
            **kwargs: Additional arguments passed to httpx (params, cookies)

        Returns:
            ApiResponse for any HTTP status

        Raises:
            HttpClientError: When used outside the context manager
            httpx.TransportError: When transport retries are exhausted
        """
        if self.session is None:
            raise HttpClientError(
                "HttpClient must be used within a context manager. "
                "Use 'with HttpClient() as client:'"
            )

        method = method.upper()
        merged_headers = merge_headers(headers)
        send_kwargs = dict(kwargs)
        send_kwargs["headers"] = merged_headers
        send_kwargs.update(self._encode_body(body, merged_headers))

        wait_config = replace(
            get_wait_config("request"),
            timeout=self.request_timeout / 1000.0,
        )
        attempts: List[int] = []

        def send() -> ApiResponse:
            attempts.append(1)
            if len(attempts) > 1:
                logger.warning(f"Retrying {method} {path} (attempt {len(attempts)})")
            started = time.monotonic()
            response = self.session.request(method, path, **send_kwargs)
            elapsed_ms = (time.monotonic() - started) * 1000.0
            return ApiResponse.from_httpx(response, elapsed_ms)

        result = retry_until(
            send,
            wait_config,
            description=f"{method} {path}",
            retry_on=RETRYABLE_ERRORS,
        )
        if not result.ok:
            logger.error(f"All retries exhausted for {method} {path}: {result.last_error}")
            if result.last_error is not None:
                raise result.last_error
            raise HttpClientError(result.failure_message())

        api_response = result.value
        logger.info(
            f"{method} {path} -> {api_response.status} "
            f"({api_response.elapsed_ms:.0f} ms)"
        )
        self.history.append({
            "method": method,
            "path": path,
            "status": api_response.status,
            "elapsed_ms": round(api_response.elapsed_ms, 1),
        })
        self._log_to_allure(method, path, merged_headers, body, kwargs, api_response)
        return api_response

    def get(self, path: str, **kwargs: Any) -> ApiResponse:
        """Execute GET request."""
        return self.request("GET", path, **kwargs)

    def post(self, path: str, body: Any = None, **kwargs: Any) -> ApiResponse:
        """Execute POST request."""
        return self.request("POST", path, body=body, **kwargs)

    def put(self, path: str, body: Any = None, **kwargs: Any) -> ApiResponse:
        """Execute PUT request."""
        return self.request("PUT", path, body=body, **kwargs)

    def delete(self, path: str, body: Any = None, **kwargs: Any) -> ApiResponse:
        """Execute DELETE request."""
        return self.request("DELETE", path, body=body, **kwargs)

    def recent_calls(self) -> List[Dict[str, Any]]:
        """Most recent calls, oldest first."""
        return list(self.history)

    @staticmethod
    def _encode_body(body: Any, headers: Mapping[str, str]) -> Dict[str, Any]:
        """Pick the httpx argument matching the body shape and Content-Type."""
        if body is None:
            return {}
        if isinstance(body, (str, bytes)):
            return {"content": body}
        if _content_type(headers).startswith(FORM_CONTENT_TYPE):
            return {"data": body}
        return {"json": body}

    def _log_to_allure(
        self,
        method: str,
        path: str,
        headers: Dict[str, str],
        body: Any,
        kwargs: Dict[str, Any],
        response: ApiResponse,
    ) -> None:
        """
        Log HTTP request/response to Allure report.

        Attaches:
            - Request URL with query parameters
            - Request headers and body (redacted)
            - cURL command for reproduction
            - Response status and body (truncated if too long)
        """
        full_url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        params = kwargs.get("params")
        if params:
            query_string = urlencode(
                {k: v for k, v in params.items() if v is not None}
            )
            if query_string:
                full_url = f"{full_url}?{query_string}"

        status_emoji = "✅" if response.status < 400 else "❌"
        step_title = f"{status_emoji} {method} {path} → {response.status}"

        with allure.step(step_title):
            allure.attach(
                full_url,
                name="🔗 Request URL",
                attachment_type=AttachmentType.TEXT
            )

            safe_headers = self._redact_headers(headers)
            if safe_headers:
                allure.attach(
                    json.dumps(safe_headers, ensure_ascii=False, indent=2),
                    name="📤 Request Headers",
                    attachment_type=AttachmentType.JSON
                )

            safe_body = self._redact_body(body)
            if safe_body:
                allure.attach(
                    json.dumps(safe_body, ensure_ascii=False, indent=2, default=str),
                    name="📤 Request Body",
                    attachment_type=AttachmentType.JSON
                )

            curl_cmd = self._build_curl(method, full_url, safe_headers, safe_body)
            allure.attach(
                curl_cmd,
                name="🔧 cURL Command",
                attachment_type=AttachmentType.TEXT
            )

            allure.attach(
                f"{status_emoji} {response.status} ({response.elapsed_ms:.0f} ms)",
                name="📥 Response Status",
                attachment_type=AttachmentType.TEXT
            )

            if isinstance(response.body, (dict, list)):
                response_content = json.dumps(
                    response.body, ensure_ascii=False, indent=2
                )
            else:
                response_content = str(response.body) or "<empty>"

            if len(response_content) > MAX_RESPONSE_LENGTH:
                response_content = (
                    f"{response_content[:MAX_RESPONSE_LENGTH]}\n\n"
                    f"... [Truncated, full length: {len(response_content)} chars] ..."
                )

            allure.attach(
                response_content,
                name="📥 Response Body",
                attachment_type=AttachmentType.JSON
            )

    def _redact_headers(self, headers: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Mask sensitive header values before logging.
        """
        sensitive_keys = {"authorization", "x-api-key", "cookie", "set-cookie"}
        masked = {}
        for key, value in headers.items():
            if key.lower() in sensitive_keys:
                masked[key] = "***MASKED***"
            else:
                masked[key] = value
        return masked

    def _redact_body(self, payload: Any) -> Any:
        """
        Recursively mask sensitive fields in request bodies.
        """
        if isinstance(payload, dict):
            redacted = {}
            for key, value in payload.items():
                if any(token in str(key).lower() for token in [
                    "password", "secret", "token", "api_key", "authorization",
                    "card_number", "cvc",
                ]):
                    redacted[key] = "***MASKED***"
                else:
                    redacted[key] = self._redact_body(value)
            return redacted
        if isinstance(payload, list):
            return [self._redact_body(item) for item in payload]
        if isinstance(payload, bytes):
            return payload.decode("utf-8", errors="replace")
        return payload

    def _build_curl(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Any,
    ) -> str:
        """
        Build cURL command for request reproduction.

        Form bodies are rendered URL-encoded, everything else as JSON.
        """
        parts = [f"curl -X {method}"]

        for key, value in headers.items():
            parts.append(f"-H '{key}: {value}'")

        if body:
            if isinstance(body, dict) and _content_type(headers).startswith(FORM_CONTENT_TYPE):
                payload = urlencode(body)
            elif isinstance(body, str):
                payload = body
            else:
                payload = json.dumps(body, ensure_ascii=False, default=str)
            parts.append(f"-d '{payload}'")

        parts.append(f"'{url}'")

        return " \\\n  ".join(parts)


__all__ = [
    "ApiResponse",
    "DEFAULT_HEADERS",
    "FORM_HEADERS",
    "HttpClient",
    "HttpClientError",
    "merge_headers",
]
