"""Table and form view models plus the request bodies of the employee API."""

from __future__ import annotations

from payroll_app.models.employee import CamelModel, EmployeeRecord
from payroll_app.models.selection import SelectionState

CREATE_LABEL = "Create Employee"
UPDATE_LABEL = "Update Employee"


class TableView(CamelModel):
    """Rows in the order the repository returned them."""

    rows: list[EmployeeRecord]
    total: int

    @classmethod
    def from_records(cls, records: list[EmployeeRecord]) -> TableView:
        return cls(rows=records, total=len(records))


class FormView(CamelModel):
    record: EmployeeRecord
    is_update: bool
    submit_label: str

    @classmethod
    def from_selection(cls, selection: SelectionState) -> FormView:
        return cls(
            record=selection.form_record,
            is_update=selection.is_update,
            submit_label=UPDATE_LABEL if selection.is_update else CREATE_LABEL,
        )


class FormRequest(CamelModel):
    selected: EmployeeRecord | None = None

    def selection(self) -> SelectionState:
        if self.selected is None:
            return SelectionState()
        return SelectionState().select_record(self.selected)


class SubmitRequest(FormRequest):
    form: EmployeeRecord


class QuickAddRequest(CamelModel):
    record: EmployeeRecord | None = None


class SubmitResponse(CamelModel):
    record: EmployeeRecord
    employees: list[EmployeeRecord] | None = None
    form: FormView
    warning: str | None = None
