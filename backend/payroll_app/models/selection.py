"""Which employee, if any, is loaded into the edit form."""

from __future__ import annotations

from pydantic import BaseModel

from payroll_app.models.employee import EmployeeRecord


class SelectionState(BaseModel):
    """Immutable form selection.

    ``record is None`` means nothing is loaded and the form shows defaults.
    Otherwise the record is being edited. Transitions return a new state.
    """

    model_config = {"frozen": True}

    record: EmployeeRecord | None = None

    def select_record(self, record: EmployeeRecord) -> SelectionState:
        # The form gets its own copy so editing it never touches the table row
        return SelectionState(record=record.model_copy(deep=True))

    def cancel(self) -> SelectionState:
        return SelectionState()

    def reset(self) -> SelectionState:
        return SelectionState()

    def submit_succeeded(self) -> SelectionState:
        return SelectionState()

    @property
    def is_editing(self) -> bool:
        return self.record is not None

    @property
    def persisted_id(self) -> int | str | None:
        if self.record is None:
            return None
        return self.record.id

    @property
    def is_update(self) -> bool:
        return self.persisted_id is not None

    @property
    def form_record(self) -> EmployeeRecord:
        return self.record.model_copy(deep=True) if self.record is not None else EmployeeRecord()
