"""Create/update routing and list reconciliation for the employee form."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as ModelValidationError

from payroll_app.core.exceptions import RepositoryError, SelectionError, SubmissionError, ValidationError
from payroll_app.models.employee import EmployeeRecord, EmployeeSubmission, normalize_for_submission
from payroll_app.models.selection import SelectionState
from payroll_app.services.employee_repository import EmployeeRepository

logger = logging.getLogger(__name__)

UNEXPECTED_RESPONSE = "Unexpected response from employee service"


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of a submit or quick-add.

    ``record`` is set once the repository accepted the write. ``employees`` is
    the re-listed table, or ``None`` when nothing was written or the re-list
    failed. ``error`` explains whatever went wrong.
    """

    selection: SelectionState
    record: EmployeeRecord | None = None
    employees: list[EmployeeRecord] | None = None
    error: SubmissionError | None = None

    @property
    def saved(self) -> bool:
        return self.record is not None

    @property
    def ok(self) -> bool:
        return self.saved and self.error is None


def record_from_external(raw: Any) -> EmployeeRecord:
    if not isinstance(raw, dict):
        raise RepositoryError(UNEXPECTED_RESPONSE)
    try:
        return EmployeeRecord.from_external(raw)
    except ModelValidationError as err:
        raise RepositoryError(UNEXPECTED_RESPONSE) from err


class SubmissionCoordinator:
    def __init__(self, repository: EmployeeRepository) -> None:
        self.repository = repository

    async def refresh(self) -> list[EmployeeRecord]:
        """Fetch the full employee list; the repository is the source of truth.

        Raises:
            RepositoryError: if the list cannot be loaded.
        """
        raw_records = await self.repository.list_employees()
        return [record_from_external(raw) for raw in raw_records]

    async def submit(self, form_record: EmployeeRecord, selection: SelectionState) -> SubmissionResult:
        """Create or update ``form_record`` depending on ``selection``.

        An update is issued only when the selection holds a persisted record;
        its id is used, not whatever id the form carries. On success the list
        is reloaded and the selection cleared. On failure the selection is
        returned untouched.
        """
        try:
            submission = normalize_for_submission(form_record)
        except ValidationError as err:
            logger.warning("Rejected employee submission: %s", err)
            return SubmissionResult(selection=selection, error=err)

        return await self._write(submission, selection.persisted_id, selection)

    async def quick_add(
        self,
        record: EmployeeRecord | None,
        selection: SelectionState | None = None,
    ) -> SubmissionResult:
        """Store a copy of a table row as a new employee."""
        selection = selection if selection is not None else SelectionState()

        if record is None:
            return SubmissionResult(
                selection=selection,
                error=SelectionError("Select an employee to add first"),
            )
        if record.is_persisted:
            return SubmissionResult(
                selection=selection,
                error=SelectionError(f"Employee {record.employee_number or record.id} already exists"),
            )

        try:
            submission = normalize_for_submission(record)
        except ValidationError as err:
            logger.warning("Rejected quick add: %s", err)
            return SubmissionResult(selection=selection, error=err)

        return await self._write(submission, None, selection)

    async def _write(
        self,
        submission: EmployeeSubmission,
        employee_id: int | str | None,
        selection: SelectionState,
    ) -> SubmissionResult:
        payload = submission.to_external()
        try:
            if employee_id is not None:
                raw = await self.repository.update_employee(employee_id, payload)
            else:
                raw = await self.repository.create_employee(payload)
        except RepositoryError as err:
            logger.warning("Employee write failed: %s", err)
            return SubmissionResult(selection=selection, error=err)

        # The write is accepted from here on, even if its response is unreadable
        cleared = selection.submit_succeeded()
        response_error: RepositoryError | None = None
        try:
            record = record_from_external(raw)
        except RepositoryError as err:
            logger.warning("Employee saved but the response could not be read: %s", err)
            record = EmployeeRecord.model_validate({**submission.model_dump(), "id": employee_id})
            response_error = err

        try:
            employees = await self.refresh()
        except RepositoryError as err:
            logger.warning("Employee saved but list reload failed: %s", err)
            return SubmissionResult(selection=cleared, record=record, error=err)

        return SubmissionResult(selection=cleared, record=record, employees=employees, error=response_error)
