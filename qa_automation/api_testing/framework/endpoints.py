"""
Employee API endpoint paths, relative to ``api.base.url``.
"""

CREATE_ENDPOINT = "/api/v1/create"
EMPLOYEE_ENDPOINT = "/api/v1/employee/{id}"
UPDATE_ENDPOINT = "/api/v1/update/{id}"
DELETE_ENDPOINT = "/api/v1/delete/{id}"
USER_ENDPOINT = "/api/users/{id}"

__all__ = [
    "CREATE_ENDPOINT",
    "DELETE_ENDPOINT",
    "EMPLOYEE_ENDPOINT",
    "UPDATE_ENDPOINT",
    "USER_ENDPOINT",
]
