"""Key casing adapter between the payroll API and the client models.

The REST API names fields in ``snake_case`` (``first_name``), the client side
uses ``camelCase`` (``firstName``). Only keys are renamed, values are passed
through as-is and nested mappings are left alone.

The two directions are exact inverses on the keys the other one produces:
``to_internal(to_external(r)) == r`` for camelCase keys (no ``_`` followed by
a lowercase letter) and ``to_external(to_internal(r)) == r`` for snake_case
keys (no uppercase letters).
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

_WORD_SEPARATOR = re.compile(r"_([a-z])")
_WORD_BOUNDARY = re.compile(r"([A-Z])")


def to_internal_key(key: str) -> str:
    return _WORD_SEPARATOR.sub(lambda m: m.group(1).upper(), key)


def to_external_key(key: str) -> str:
    return _WORD_BOUNDARY.sub(lambda m: "_" + m.group(1).lower(), key)


def _rename_keys(record: Mapping[Any, Any], rename: Callable[[str], str]) -> dict[Any, Any]:
    return {(rename(key) if isinstance(key, str) else key): value for key, value in record.items()}


def to_internal(record: Mapping[Any, Any]) -> dict[Any, Any]:
    """Rename server (snake_case) keys to client (camelCase) keys."""
    return _rename_keys(record, to_internal_key)


def to_external(record: Mapping[Any, Any]) -> dict[Any, Any]:
    """Rename client (camelCase) keys to server (snake_case) keys."""
    return _rename_keys(record, to_external_key)
