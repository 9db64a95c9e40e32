"""Single-pass cursor over rows, generated keys, or an affected-row count."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Sequence

from .errors import PersistenceFailure
from .types import GeneratedKeys, Row, RowMapping, Rows

_UNSET = -1


class ResultShape(str, Enum):
    EMPTY = "empty"
    ROWS = "rows"
    GENERATED_KEYS = "generated_keys"
    ROWS_AFFECTED = "rows_affected"


class MappedResult:
    """Result handed to mapping callbacks.

    Exactly one shape is populated per execution. Row and key data is read
    after moving the cursor with `advance()`; the cursor starts before the
    first element and only moves forward. Instances belong to one execution
    and must not be kept after the mapping callback returns.
    """

    def __init__(self) -> None:
        self._rows: Optional[Rows] = None
        self._generated_keys: Optional[GeneratedKeys] = None
        self._rows_affected = _UNSET
        self._index = -1

    @property
    def shape(self) -> ResultShape:
        if self._rows is not None:
            return ResultShape.ROWS
        if self._generated_keys is not None:
            return ResultShape.GENERATED_KEYS
        if self._rows_affected != _UNSET:
            return ResultShape.ROWS_AFFECTED
        return ResultShape.EMPTY

    def _require_empty(self) -> None:
        if self.shape is not ResultShape.EMPTY:
            raise PersistenceFailure(
                f"MappedResult is already populated with {self.shape.value}"
            )

    def _set_rows(self, rows: Sequence[RowMapping]) -> None:
        self._require_empty()
        self._rows = [dict(row) for row in rows]
        self._index = -1

    def _set_generated_keys(self, keys: Sequence[Any]) -> None:
        self._require_empty()
        self._generated_keys = list(keys)
        self._index = -1

    def _set_rows_affected(self, rows_affected: int) -> None:
        self._require_empty()
        if rows_affected < 0:
            raise PersistenceFailure("The affected row count cannot be negative")
        self._rows_affected = rows_affected

    def advance(self) -> bool:
        """Move to the next row or key and report whether it exists."""

        if self._rows is None and self._generated_keys is None:
            raise PersistenceFailure(
                "There are no query results (avoid calling methods that are out of scope)"
            )
        self._index += 1
        size = len(self._rows) if self._rows is not None else len(self._generated_keys or ())
        return self._index < size

    has_next = advance

    def _current(self, items: Sequence[Any]) -> Any:
        if 0 <= self._index < len(items):
            return items[self._index]
        raise PersistenceFailure(
            "You need to call advance() to move forward in MappedResult"
        )

    def _current_row(self) -> Row:
        if self._rows is None:
            raise PersistenceFailure(
                "There are no results with named columns (avoid calling methods that are out of scope)"
            )
        return self._current(self._rows)

    def row(self) -> Row:
        """Return a copy of the current row, columns in declared order."""

        return dict(self._current_row())

    def column(self, name: str) -> Any:
        """Return the value of column `name` in the current row."""

        row = self._current_row()
        if name not in row:
            raise PersistenceFailure(f"The current row has no column named '{name}'")
        return row[name]

    def generated_key(self) -> Any:
        """Return the generated key at the cursor position."""

        if self._generated_keys is None:
            raise PersistenceFailure(
                "There is no key generated per affected row (avoid calling methods that are out of scope)"
            )
        return self._current(self._generated_keys)

    def rows_affected(self) -> int:
        if self._rows_affected == _UNSET:
            raise PersistenceFailure(
                "No affected row count was recorded (avoid calling methods that are out of scope)"
            )
        return self._rows_affected

    def __repr__(self) -> str:
        return f"MappedResult(shape={self.shape.value!r}, cursor={self._index})"
