"""In-memory employee repository.

Used when no employee API is configured and as the repository double in
tests. Behaves like the REST API: ids are assigned on create, employee
numbers are unique and failures carry a ``detail``-style message.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from payroll_app.core.exceptions import RepositoryError
from payroll_app.models.employee import EmployeeRecord, normalize_for_submission

logger = logging.getLogger(__name__)

DEMO_EMPLOYEES: list[EmployeeRecord] = [
    EmployeeRecord(
        employee_number="1001",
        first_name="Alice",
        last_name="Anderson",
        full_name="Alice Anderson",
        salutation="Ms.",
        gender="Female",
        gross_salary="50 000",
        profile_color="Blue",
    ),
    EmployeeRecord(
        employee_number="1002",
        first_name="Bob",
        last_name="Brown",
        full_name="Bob Brown",
        salutation="Mr.",
        gender="Male",
        gross_salary="60 000",
        profile_color="Green",
    ),
]


def demo_payloads() -> list[dict[str, Any]]:
    return [normalize_for_submission(record).to_external() for record in DEMO_EMPLOYEES]


class InMemoryEmployeeRepository:
    def __init__(self, records: list[dict[str, Any]] | None = None) -> None:
        self._records: dict[str, dict[str, Any]] = {}
        self._next_id = 1
        self.calls: list[tuple[Any, ...]] = []
        for record in records or []:
            self._insert(record, record.get("id"))

    @classmethod
    def with_demo_data(cls) -> InMemoryEmployeeRepository:
        return cls(demo_payloads())

    def count(self, operation: str) -> int:
        return sum(1 for call in self.calls if call[0] == operation)

    async def list_employees(self) -> list[dict[str, Any]]:
        self.calls.append(("list",))
        return [copy.deepcopy(record) for record in self._records.values()]

    async def create_employee(self, payload: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("create", copy.deepcopy(payload)))
        self._check_unique(payload.get("employee_number"))
        return copy.deepcopy(self._insert(payload))

    async def update_employee(self, employee_id: int | str, payload: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("update", employee_id, copy.deepcopy(payload)))
        key = str(employee_id)
        if key not in self._records:
            raise RepositoryError("Not found.", status=404)
        self._check_unique(payload.get("employee_number"), exclude=key)

        record = {**copy.deepcopy(payload), "id": self._records[key]["id"]}
        self._records[key] = record
        logger.debug("Updated in-memory employee id=%s", employee_id)
        return copy.deepcopy(record)

    def _insert(self, payload: dict[str, Any], employee_id: int | str | None = None) -> dict[str, Any]:
        if employee_id is None:
            employee_id = self._next_id
        record = {**copy.deepcopy(payload), "id": employee_id}
        self._records[str(employee_id)] = record
        if isinstance(employee_id, int):
            self._next_id = max(self._next_id, employee_id + 1)
        return record

    def _check_unique(self, employee_number: Any, exclude: str | None = None) -> None:
        for key, record in self._records.items():
            if key != exclude and str(record.get("employee_number")) == str(employee_number):
                raise RepositoryError(
                    "Employee with this employee number already exists.",
                    status=409,
                )


demo_repository = InMemoryEmployeeRepository.with_demo_data()
