"""Employee models for the payroll records screen."""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ValidationInfo, field_validator

from payroll_app.core.casing import to_external, to_internal, to_internal_key
from payroll_app.core.exceptions import ValidationError

DEFAULT_GENDER = "Unspecified"
DEFAULT_PROFILE_COLOR = "Default"

_EMPLOYEE_NUMBER = re.compile(r"\d+", re.ASCII)
_AMOUNT = re.compile(r"\d+(?:\.\d+)?", re.ASCII)


class CamelModel(BaseModel):
    """Base for models exchanged with the client in camelCase."""

    model_config = {
        "alias_generator": to_internal_key,
        "populate_by_name": True,
    }


class EmployeeRecord(CamelModel):
    """One employee as shown in the table and edited in the form.

    ``id`` is assigned by the server; a record without one is a draft.
    """

    id: int | str | None = None
    employee_number: str = ""
    first_name: str = ""
    last_name: str = ""
    full_name: str = ""
    salutation: str = ""
    gender: str = DEFAULT_GENDER
    gross_salary: str = ""
    profile_color: str = DEFAULT_PROFILE_COLOR

    @field_validator("id", mode="before")
    @classmethod
    def _blank_id_is_draft(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator(
        "employee_number",
        "first_name",
        "last_name",
        "full_name",
        "salutation",
        "gender",
        "gross_salary",
        "profile_color",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: Any, info: ValidationInfo) -> Any:
        # The API sends numbers for employee_number and gross_salary
        if value is None:
            return cls.model_fields[info.field_name].default
        if info.field_name == "employee_number" and isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    @classmethod
    def from_external(cls, raw: dict[str, Any]) -> EmployeeRecord:
        return cls.model_validate(to_internal(raw))


class EmployeeSubmission(CamelModel):
    """Normalized record ready to be written to the repository."""

    id: int | str | None = None
    employee_number: int
    first_name: str = ""
    last_name: str = ""
    full_name: str = ""
    salutation: str = ""
    gender: str = DEFAULT_GENDER
    gross_salary: str
    profile_color: str = DEFAULT_PROFILE_COLOR

    def to_external(self) -> dict[str, Any]:
        """Request body in server key convention. The id travels in the URL."""
        return to_external(self.model_dump(by_alias=True, exclude={"id"}))


def normalize_for_submission(record: EmployeeRecord) -> EmployeeSubmission:
    """Validate and clean a form record before it is sent to the repository.

    The employee number must be a whole number. All whitespace is removed from
    the gross salary ("50 000" -> "50000") and what remains must be a plain
    decimal amount. The full name is rebuilt from first and last name.

    Raises:
        ValidationError: if the employee number or gross salary is unusable.
    """
    number = record.employee_number.strip()
    if not number:
        raise ValidationError("Employee number is required", field="employeeNumber")
    if not _EMPLOYEE_NUMBER.fullmatch(number):
        raise ValidationError(
            f"Employee number must be numeric, got '{record.employee_number}'",
            field="employeeNumber",
        )

    salary = "".join(record.gross_salary.split())
    if not salary:
        raise ValidationError("Gross salary is required", field="grossSalary")
    if not _AMOUNT.fullmatch(salary):
        raise ValidationError(
            f"Gross salary must be a number, got '{record.gross_salary}'",
            field="grossSalary",
        )

    first_name = record.first_name.strip()
    last_name = record.last_name.strip()

    return EmployeeSubmission(
        id=record.id,
        employee_number=int(number),
        first_name=first_name,
        last_name=last_name,
        full_name=" ".join(part for part in (first_name, last_name) if part),
        salutation=record.salutation.strip(),
        gender=record.gender.strip() or DEFAULT_GENDER,
        gross_salary=salary,
        profile_color=record.profile_color.strip() or DEFAULT_PROFILE_COLOR,
    )
