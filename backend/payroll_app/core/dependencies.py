from __future__ import annotations

from fastapi import Depends

from payroll_app.services.employee_repository import EmployeeRepository, employee_repository
from payroll_app.services.memory_repository import demo_repository
from payroll_app.services.submission_coordinator import SubmissionCoordinator


def get_employee_repository() -> EmployeeRepository:
    if employee_repository.initialized:
        return employee_repository
    return demo_repository


def get_submission_coordinator(
    repository: EmployeeRepository = Depends(get_employee_repository),  # noqa: B008
) -> SubmissionCoordinator:
    return SubmissionCoordinator(repository)
