"""Ready-made mapping callbacks for common result conversions."""

from __future__ import annotations

from typing import Any, Optional

from .mapped_result import MappedResult
from .types import MaybeRow, Rows


def all_rows(result: MappedResult) -> Rows:
    """Collect every row as a plain `dict`, in driver order."""

    rows: Rows = []
    while result.advance():
        rows.append(result.row())
    return rows


def first_row(result: MappedResult) -> MaybeRow:
    if not result.advance():
        return None
    return result.row()


def scalar(result: MappedResult) -> Optional[Any]:
    """Return the first column of the first row, or `None` without rows."""

    row = first_row(result)
    if not row:
        return None
    return next(iter(row.values()))


def generated_keys(result: MappedResult) -> list[Any]:
    keys = []
    while result.advance():
        keys.append(result.generated_key())
    return keys


def first_generated_key(result: MappedResult) -> Optional[Any]:
    if not result.advance():
        return None
    return result.generated_key()


def rows_affected(result: MappedResult) -> int:
    return result.rows_affected()
