"""
================================================================================
HTTP Client with Allure Integration
================================================================================

A thin httpx wrapper for REST API tests featuring:
    - JSON content negotiation and payload serialization
    - Optional bearer token authentication
    - Rate limit (429) handling with increasing backoff
    - Allure reporting with cURL command generation
    - Response descriptor with dotted-path field extraction

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import dataclasses
import json
import time
from typing import Any, Dict, Optional

import allure
import httpx
from allure_commons.types import AttachmentType

from ...common.config_loader import ConfigLoader
from ...common.logging_config import get_logger
from .retry_policy import RetryPolicy


# Maximum response length to include in Allure reports
MAX_RESPONSE_LENGTH = 3000

DEFAULT_TIMEOUT = 30

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class HttpClientError(Exception):
    """Base exception for HTTP client errors."""
    pass


class RateLimitExceeded(HttpClientError):
    """Raised when rate limit is exceeded and all retries are exhausted."""

    def __init__(self, message: str, response: Optional["ApiResponse"] = None):
        super().__init__(message)
        self.response = response


class ApiResponse:
    """
    Response descriptor returned by every HttpClient call.

    Exposes status code, headers, raw body text and structured field
    extraction from the JSON body.

    Usage:
        >>> response = client.post("/api/v1/create", payload)
        >>> response.status_code
        200
        >>> response.get_string("data.id")
        '4711'
    """

    def __init__(self, response: httpx.Response):
        self.raw = response

    @property
    def status_code(self) -> int:
        return self.raw.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.raw.headers

    @property
    def text(self) -> str:
        return self.raw.text

    def json(self) -> Any:
        """Parsed JSON body. Raises ValueError if the body is not JSON."""
        return self.raw.json()

    def get_field(self, path: str) -> Any:
        """
        Look up a value in the JSON body by dotted path.

        Numeric segments index into lists ("data.0.id"). Returns None when
        any segment is missing or the body is not JSON.

        Args:
            path: Dotted path (e.g., "data.id")
        """
        try:
            current = self.json()
        except ValueError:
            return None

        for part in path.split("."):
            if isinstance(current, dict):
                current = current.get(part)
            elif isinstance(current, list) and part.lstrip("-").isdigit():
                index = int(part)
                current = current[index] if -len(current) <= index < len(current) else None
            else:
                return None

            if current is None:
                return None

        return current

    def get_string(self, path: str) -> Optional[str]:
        """
        Dotted-path lookup returning the value as a string.

        Numbers are rendered without quotes, booleans as true/false, nested
        objects as JSON. Missing values stay None.
        """
        value = self.get_field(path)
        if value is None:
            return None
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (dict, list)):
            return json.dumps(value, ensure_ascii=False)
        return str(value)

    def __repr__(self) -> str:
        return f"<ApiResponse [{self.status_code}] {self.raw.request.method} {self.raw.request.url}>"


class HttpClient:
    """
    HTTP client for REST API tests.

    Features:
        - JSON request/response handling against a configured base URL
        - Bearer token header on demand
        - 429 retries driven by a RetryPolicy (no other retries)
        - Full Allure reporting with request/response details

    Usage:
        >>> config = ConfigLoader()
        >>> with HttpClient(config) as client:
        ...     response = client.get("/api/v1/employee/1")
        ...     print(response.status_code)
    """

    def __init__(
        self,
        config: Optional[ConfigLoader] = None,
        base_url: Optional[str] = None,
        retry_policy: Optional[RetryPolicy] = None,
        transport: Optional[httpx.BaseTransport] = None,
        log=None,
    ) -> None:
        """
        Initialize HTTP client with configuration.

        Args:
            config: Configuration loader instance. Creates new one if None.
            base_url: Overrides ``api.base.url``
            retry_policy: Overrides the ``api.retry.*`` settings
            transport: Custom httpx transport (e.g. httpx.MockTransport)
            log: Logger to use (defaults to an ``HttpClient`` bound logger)
        """
        if config is None:
            config = ConfigLoader()

        self.config = config
        self.log = log or get_logger("HttpClient")
        self.base_url = base_url or config.api_base_url or "http://localhost:8000"
        self.timeout = float(config.get("api.timeout", DEFAULT_TIMEOUT))
        self.retry_policy = retry_policy or RetryPolicy.from_config(config)
        self._transport = transport

        self.session: Optional[httpx.Client] = None
        self.log.info(f"API Client initialized with base URL: {self.base_url}")

    def __enter__(self) -> "HttpClient":
        """Enter context manager - initialize HTTP session."""
        self.session = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            headers=JSON_HEADERS,
            transport=self._transport,
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
        endpoint: str,
        payload: Any = None,
        token: Optional[str] = None,
    ) -> ApiResponse:
        """
        Execute one HTTP request, retrying only on 429.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: Request path (relative to base_url)
            payload: Body object; dicts and dataclasses are sent as JSON
            token: Bearer token for the Authorization header

        Returns:
            ApiResponse descriptor

        Raises:
            HttpClientError: When used outside the context manager
            RateLimitExceeded: When every attempt was answered with 429
        """
        if self.session is None:
            raise HttpClientError(
                "HttpClient must be used within a context manager. "
                "Use 'with HttpClient() as client:'"
            )

        headers: Dict[str, str] = {}
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"

        body = to_json_body(payload)
        kwargs: Dict[str, Any] = {"headers": headers}
        if body is not None:
            kwargs["json"] = body
            self.log.debug(f"Request payload: {json.dumps(self._redact_body(body))}")

        self.log.info(f"Performing {method} request to: {endpoint}")
        max_attempts = self.retry_policy.max_attempts

        for attempt in range(max_attempts):
            response = self.session.request(method, endpoint, **kwargs)

            if response.status_code == 429:
                if attempt == max_attempts - 1:
                    self._log_to_allure(method, endpoint, kwargs, response)
                    break
                wait_time = self.retry_policy.interval_for(
                    attempt, response.headers.get("Retry-After")
                )
                self.log.warning(
                    f"Rate limited (429). Waiting {wait_time:.1f}s before retry. "
                    f"Attempt {attempt + 1}/{max_attempts}"
                )
                time.sleep(wait_time)
                continue

            self.log.info(f"{method} Response Status Code: {response.status_code}")
            self.log.debug(f"{method} Response Body: {response.text[:MAX_RESPONSE_LENGTH]}")
            self._log_to_allure(method, endpoint, kwargs, response)
            return ApiResponse(response)

        self.log.error(f"Rate limit exceeded after {max_attempts} attempts: {method} {endpoint}")
        raise RateLimitExceeded(
            f"Rate limit exceeded after {max_attempts} attempts: {method} {endpoint}",
            response=ApiResponse(response),
        )

    def get(self, endpoint: str) -> ApiResponse:
        """Execute GET request."""
        return self.request("GET", endpoint)

    def post(self, endpoint: str, payload: Any = None) -> ApiResponse:
        """Execute POST request with a JSON body."""
        return self.request("POST", endpoint, payload=payload)

    def put(self, endpoint: str, payload: Any = None) -> ApiResponse:
        """Execute PUT request with a JSON body."""
        return self.request("PUT", endpoint, payload=payload)

    def delete(self, endpoint: str) -> ApiResponse:
        """Execute DELETE request."""
        return self.request("DELETE", endpoint)

    def get_with_auth(self, endpoint: str, auth_token: str) -> ApiResponse:
        """Execute GET request with ``Authorization: Bearer <token>``."""
        self.log.info(f"Performing GET request with authorization to: {endpoint}")
        return self.request("GET", endpoint, token=auth_token)

    def _log_to_allure(
        self,
        method: str,
        url: str,
        kwargs: Dict[str, Any],
        response: httpx.Response,
    ) -> None:
        """
        Log HTTP request/response to Allure report.

        Attaches:
            - Request URL
            - Request headers (redacted)
            - Request body (redacted, if present)
            - cURL command for reproduction
            - Response status
            - Response body (truncated if too long)
        """
        full_url = str(response.request.url)

        status_mark = "PASS" if response.status_code < 400 else "FAIL"
        step_title = f"[{status_mark}] {method} {url} -> {response.status_code}"

        with allure.step(step_title):
            allure.attach(
                full_url,
                name="Request URL",
                attachment_type=AttachmentType.TEXT
            )

            headers = {**JSON_HEADERS, **kwargs.get("headers", {})}
            safe_headers = self._redact_headers(headers)
            allure.attach(
                json.dumps(safe_headers, ensure_ascii=False, indent=2),
                name="Request Headers",
                attachment_type=AttachmentType.JSON
            )

            safe_body = self._redact_body(kwargs.get("json"))
            if safe_body:
                allure.attach(
                    json.dumps(safe_body, ensure_ascii=False, indent=2),
                    name="Request Body",
                    attachment_type=AttachmentType.JSON
                )

            curl_cmd = self._build_curl(method, full_url, safe_headers, safe_body)
            allure.attach(
                curl_cmd,
                name="cURL Command",
                attachment_type=AttachmentType.TEXT
            )

            allure.attach(
                f"{status_mark} {response.status_code}",
                name="Response Status",
                attachment_type=AttachmentType.TEXT
            )

            try:
                response_content = json.dumps(
                    response.json(), ensure_ascii=False, indent=2
                )
            except ValueError:
                response_content = response.text or "<empty>"

            if len(response_content) > MAX_RESPONSE_LENGTH:
                response_content = (
                    f"{response_content[:MAX_RESPONSE_LENGTH]}\n\n"
                    f"... [Truncated, full length: {len(response_content)} chars] ..."
                )

            allure.attach(
                response_content,
                name="Response Body",
                attachment_type=AttachmentType.TEXT
            )

    def _redact_headers(self, headers: Dict[str, Any]) -> Dict[str, Any]:
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
                if any(token in key.lower() for token in [
                    "password", "secret", "token", "api_key", "authorization"
                ]):
                    redacted[key] = "***MASKED***"
                else:
                    redacted[key] = self._redact_body(value)
            return redacted
        if isinstance(payload, list):
            return [self._redact_body(item) for item in payload]
        return payload

    def _build_curl(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[Dict[str, Any]],
    ) -> str:
        """
        Build cURL command for request reproduction.
        """
        parts = [f"curl -X {method}"]

        for key, value in headers.items():
            parts.append(f"-H '{key}: {value}'")

        if body:
            body_json = json.dumps(body, ensure_ascii=False)
            parts.append(f"-d '{body_json}'")

        parts.append(f"'{url}'")

        return " \\\n  ".join(parts)


def to_json_body(payload: Any) -> Any:
    """
    Convert a payload object to something ``json=`` accepts.

    Objects with ``to_dict()`` and dataclass instances are converted to
    dicts; everything else is passed through unchanged.
    """
    if payload is None:
        return None
    if hasattr(payload, "to_dict"):
        return payload.to_dict()
    if dataclasses.is_dataclass(payload) and not isinstance(payload, type):
        return dataclasses.asdict(payload)
    return payload


__all__ = [
    "ApiResponse",
    "HttpClient",
    "HttpClientError",
    "RateLimitExceeded",
    "to_json_body",
]
