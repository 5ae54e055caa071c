"""
================================================================================
Employee API Payloads
================================================================================

Request body model for the employee endpoints and helpers for reading an
employee back out of a response.

The API has answered with two field naming styles over time:

    PLAIN     {"name": ..., "salary": ..., "age": ...}
    PREFIXED  {"employee_name": ..., "employee_salary": ..., "employee_age": ...}

Neither style is treated as authoritative; callers pick one explicitly or
use ``detect_field_style``.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class FieldStyle(Enum):
    """Field naming styles seen in employee responses."""

    PLAIN = ""
    PREFIXED = "employee_"

    def key(self, field_name: str) -> str:
        return f"{self.value}{field_name}"


EMPLOYEE_FIELDS = ("name", "salary", "age")


@dataclass
class EmployeeRecord:
    """
    Employee request payload.

    All fields are strings, matching what the API echoes back.
    """

    name: str = ""
    salary: str = ""
    age: str = ""

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_response_data(
        cls,
        data: Dict[str, Any],
        style: FieldStyle = FieldStyle.PLAIN,
    ) -> "EmployeeRecord":
        """
        Build a record from the ``data`` object of an employee response.

        Args:
            data: The ``data`` mapping of the response body
            style: Which field naming style to read

        Raises:
            KeyError: If a field of the requested style is missing
        """
        values = {}
        for field_name in EMPLOYEE_FIELDS:
            value = data[style.key(field_name)]
            values[field_name] = "" if value is None else str(value)
        return cls(**values)

    @classmethod
    def from_detected_style(cls, data: Optional[Dict[str, Any]]) -> "EmployeeRecord":
        """
        Build a record from ``data`` in whichever naming style it uses.

        Raises:
            ValueError: If ``data`` carries neither complete set of fields
        """
        style = detect_field_style(data)
        if style is None:
            raise ValueError(
                f"Employee data has neither plain nor employee_-prefixed fields: {data!r}"
            )
        return cls.from_response_data(data, style)


@dataclass
class EmployeeScenario:
    """State threaded through one employee scenario."""

    employee_id: str
    created_with: EmployeeRecord
    create_response: Any
    history: List[Any] = field(default_factory=list)


def detect_field_style(data: Optional[Dict[str, Any]]) -> Optional[FieldStyle]:
    """
    Report which naming style a response ``data`` object uses.

    Returns None when the object carries neither complete set of fields.
    """
    if not isinstance(data, dict):
        return None
    for style in FieldStyle:
        if all(style.key(field_name) in data for field_name in EMPLOYEE_FIELDS):
            return style
    return None


__all__ = [
    "EMPLOYEE_FIELDS",
    "EmployeeRecord",
    "EmployeeScenario",
    "FieldStyle",
    "detect_field_style",
]
