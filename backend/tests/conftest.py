from __future__ import annotations

import pytest
from starlette.testclient import TestClient

from payroll_app.core.dependencies import get_employee_repository
from payroll_app.main import app
from payroll_app.models.employee import EmployeeRecord
from payroll_app.services.memory_repository import InMemoryEmployeeRepository

SAMPLE_RAW_EMPLOYEE = {
    "id": 7,
    "employee_number": 1001,
    "first_name": "Alice",
    "last_name": "Anderson",
    "full_name": "Alice Anderson",
    "salutation": "Ms.",
    "gender": "Female",
    "gross_salary": "50000",
    "profile_color": "Blue",
}


def make_record(**overrides) -> EmployeeRecord:
    fields = {
        "employee_number": "2001",
        "first_name": "Carol",
        "last_name": "Clark",
        "salutation": "Dr.",
        "gender": "Female",
        "gross_salary": "70 000",
        "profile_color": "Red",
    }
    fields.update(overrides)
    return EmployeeRecord(**fields)


@pytest.fixture
def repository():
    return InMemoryEmployeeRepository([dict(SAMPLE_RAW_EMPLOYEE)])


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def repository_client(repository):
    app.dependency_overrides[get_employee_repository] = lambda: repository
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
