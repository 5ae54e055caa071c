"""
================================================================================
API Testing Pytest Configuration
================================================================================

Shared fixtures for the employee API tests.

Fixtures:
    - config: Configuration loader instance
    - http_client: Configured HTTP client for API requests
    - employee_payload: Create payload used by the scenarios
    - created_employee: An employee created for (and deleted after) one test

Each scenario creates the records it needs, so tests do not depend on each
other's side effects or on execution order.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Generator

import allure
import pytest

from qa_automation.common import ConfigLoader, get_logger

from ..framework import (
    CREATE_ENDPOINT,
    DELETE_ENDPOINT,
    EmployeeRecord,
    EmployeeScenario,
    HttpClient,
)


log = get_logger("api-fixtures")


# =============================================================================
# Session-Scoped Fixtures (Shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def config() -> ConfigLoader:
    """
    Provide configuration loader instance.

    Session-scoped to ensure configuration is loaded only once.
    """
    return ConfigLoader()


# =============================================================================
# Function-Scoped Fixtures (Fresh for each test)
# =============================================================================

@pytest.fixture
def http_client(config: ConfigLoader) -> Generator[HttpClient, None, None]:
    """
    Provide configured HTTP client for API requests.

    Usage:
        def test_example(http_client):
            response = http_client.get("/api/v1/employee/1")
            assert response.status_code == 200
    """
    with HttpClient(config) as client:
        yield client


@pytest.fixture
def employee_payload() -> EmployeeRecord:
    return EmployeeRecord(name="Test User", salary="1001", age="99")


@pytest.fixture
def updated_payload() -> EmployeeRecord:
    return EmployeeRecord(name="Modified User", salary="1002", age="100")


@pytest.fixture
def created_employee(
    http_client: HttpClient,
    employee_payload: EmployeeRecord,
) -> Generator[EmployeeScenario, None, None]:
    """
    Create an employee for the test and delete it afterwards.

    The test fails at setup if the record cannot be created.
    """
    with allure.step("Setup: create employee"):
        response = http_client.post(CREATE_ENDPOINT, employee_payload)
        assert response.status_code == 200, (
            f"Employee setup failed: {response.status_code} {response.text}"
        )
        employee_id = response.get_string("data.id")
        assert employee_id, f"Create response has no data.id: {response.text}"
        log.info(f"Employee created with ID: {employee_id}")

    scenario = EmployeeScenario(
        employee_id=employee_id,
        created_with=employee_payload,
        create_response=response,
    )
    yield scenario

    try:
        http_client.delete(DELETE_ENDPOINT.format(id=employee_id))
        log.debug(f"Cleaned up employee: {employee_id}")
    except Exception as e:
        log.warning(f"Failed to cleanup employee {employee_id}: {e}")


# =============================================================================
# Allure Reporting Hooks
# =============================================================================

def pytest_exception_interact(node, call, report):
    """Attach additional info on test failure."""
    if report.failed:
        allure.attach(
            str(call.excinfo.value),
            name="Error Details",
            attachment_type=allure.attachment_type.TEXT
        )
