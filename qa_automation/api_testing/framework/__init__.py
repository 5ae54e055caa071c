"""
================================================================================
API Testing Framework
================================================================================

API automation framework components.

Modules:
    - http_client: HTTP client with 429 backoff and Allure logging
    - retry_policy: Rate limit backoff settings
    - payloads: Employee request/response models
    - endpoints: Employee API paths

Author: Automation Team
License: MIT
================================================================================
"""

from .http_client import ApiResponse, HttpClient, HttpClientError, RateLimitExceeded
from .endpoints import (
    CREATE_ENDPOINT,
    DELETE_ENDPOINT,
    EMPLOYEE_ENDPOINT,
    UPDATE_ENDPOINT,
    USER_ENDPOINT,
)
from .payloads import EmployeeRecord, EmployeeScenario, FieldStyle, detect_field_style
from .retry_policy import RetryPolicy

__all__ = [
    "CREATE_ENDPOINT",
    "DELETE_ENDPOINT",
    "EMPLOYEE_ENDPOINT",
    "UPDATE_ENDPOINT",
    "USER_ENDPOINT",
    "ApiResponse",
    "EmployeeRecord",
    "EmployeeScenario",
    "FieldStyle",
    "HttpClient",
    "HttpClientError",
    "RateLimitExceeded",
    "RetryPolicy",
    "detect_field_style",
]
