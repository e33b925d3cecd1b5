from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from payroll_app.core.dependencies import get_submission_coordinator
from payroll_app.core.exceptions import RepositoryError, SelectionError, SubmissionError, ValidationError
from payroll_app.models.views import (
    FormRequest,
    FormView,
    QuickAddRequest,
    SubmitRequest,
    SubmitResponse,
    TableView,
)
from payroll_app.services.submission_coordinator import SubmissionCoordinator, SubmissionResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])


def _status_for(error: SubmissionError) -> int:
    if isinstance(error, ValidationError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(error, SelectionError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(error, RepositoryError) and error.status and 400 <= error.status < 500:
        return error.status
    return status.HTTP_502_BAD_GATEWAY


def _to_response(result: SubmissionResult) -> SubmitResponse:
    if result.record is None:
        if result.error is None:
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Employee was not saved")
        raise HTTPException(status_code=_status_for(result.error), detail=result.error.message)

    return SubmitResponse(
        record=result.record,
        employees=result.employees,
        form=FormView.from_selection(result.selection),
        warning=result.error.message if result.error else None,
    )


@router.get("", response_model=TableView)
async def list_employees(
    coordinator: SubmissionCoordinator = Depends(get_submission_coordinator),  # noqa: B008
):
    try:
        employees = await coordinator.refresh()
    except RepositoryError as err:
        logger.warning("Failed to list employees: %s", err)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=err.message) from err

    return TableView.from_records(employees)


@router.post("/form", response_model=FormView)
async def employee_form(request: FormRequest):
    return FormView.from_selection(request.selection())


@router.post("/submit", response_model=SubmitResponse)
async def submit_employee(
    request: SubmitRequest,
    coordinator: SubmissionCoordinator = Depends(get_submission_coordinator),  # noqa: B008
):
    result = await coordinator.submit(request.form, request.selection())
    return _to_response(result)


@router.post("/quick-add", response_model=SubmitResponse)
async def quick_add_employee(
    request: QuickAddRequest,
    coordinator: SubmissionCoordinator = Depends(get_submission_coordinator),  # noqa: B008
):
    result = await coordinator.quick_add(request.record)
    return _to_response(result)
