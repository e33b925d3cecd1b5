"""Errors surfaced to the employee screen.

Repositories raise these, the submission coordinator catches them and hands
them back as values so the caller can show the message and let the user
retry or cancel.
"""

from __future__ import annotations

from typing import Any


class SubmissionError(Exception):
    """Base class for everything the employee screen reports to the user."""

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(SubmissionError):
    """Form input rejected locally, before any repository call."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class RepositoryError(SubmissionError):
    """The employee repository rejected a call or could not be reached."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status

    @classmethod
    def from_payload(cls, payload: Any, fallback: str, status: int | None = None) -> RepositoryError:
        detail = payload.get("detail") if isinstance(payload, dict) else None
        if isinstance(detail, str) and detail.strip():
            return cls(detail, status=status)
        return cls(fallback, status=status)


class SelectionError(SubmissionError):
    """An add/update action was requested without a valid target record."""
