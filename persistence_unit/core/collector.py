"""Query execution: one statement, one connection, one transaction."""

from __future__ import annotations

import contextlib
from collections.abc import Iterable
from typing import Any, Mapping, Sequence, TypeVar

from .contracts import ConnectionManagerPort, DialectPort, RowMapper
from .errors import PersistenceFailure
from .mapped_result import MappedResult
from .statement import StatementKind, StatementSpec
from .types import Row, Rows
from .validation import require_non_null

T = TypeVar("T")


def _column_names(description: Sequence[Sequence[Any]]) -> list[str]:
    return [column[0] for column in description]


def _row_to_mapping(columns: Sequence[str], row: Any) -> Row:
    """Snapshot one driver row into a name -> value dict.

    Supports mapping rows (dict cursors) directly and tuple-like rows via
    the cursor description.
    """

    if isinstance(row, Mapping):
        return dict(row)
    if isinstance(row, Iterable):
        return dict(zip(columns, row))
    raise PersistenceFailure(f"Unsupported row type: {type(row).__name__}")


def drain_rows(cursor: Any) -> Rows:
    """Fetch every remaining row of `cursor` as dicts in driver order."""

    columns = _column_names(cursor.description)
    return [_row_to_mapping(columns, row) for row in cursor.fetchall()]


class QueryCollector:
    """Executes a `StatementSpec` and hands the outcome to a mapping callback.

    Each `execute()` call opens its own connection, runs the statement in a
    single transaction and commits before the mapper runs. Mapper errors are
    therefore raised after the data is persisted and propagate unchanged;
    driver errors before the commit roll the transaction back and surface as
    `PersistenceFailure`.
    """

    def __init__(self, manager: ConnectionManagerPort, statement: StatementSpec):
        self.manager = require_non_null(manager, "manager")
        self.statement = require_non_null(statement, "statement")

    def execute(self, mapper: RowMapper[T]) -> T:
        mapper = require_non_null(mapper, "mapper")
        dialect = self.manager.dialect
        with self.manager.connection() as conn:
            if self.statement.has_args:
                self.manager.logger.info(
                    "Query statement built",
                    extra={"sql": self.statement.text, "arg_count": len(self.statement.bind_args)},
                )
            cursor = self._open_cursor(conn)
            with contextlib.closing(cursor):
                result = self._run(conn, cursor, dialect)
                return mapper(result)

    def _open_cursor(self, conn: Any) -> Any:
        try:
            return conn.cursor()
        except Exception as exc:
            raise PersistenceFailure("Unable to prepare the query statement", exc) from exc

    def _run(self, conn: Any, cursor: Any, dialect: DialectPort) -> MappedResult:
        result = MappedResult()
        try:
            if self.statement.has_args:
                cursor.execute(self.statement.text, self.statement.bind_args)
            else:
                cursor.execute(self.statement.text)
            self._populate(result, cursor, dialect)
            conn.commit()
        except Exception as exc:
            self.manager.rollback(conn)
            if isinstance(exc, PersistenceFailure):
                raise
            raise PersistenceFailure(
                "The execution of the query statement has failed", exc
            ) from exc
        return result

    def _populate(self, result: MappedResult, cursor: Any, dialect: DialectPort) -> None:
        kind = self.statement.outcome_kind
        if cursor.description is not None:
            result._set_rows(drain_rows(cursor))
        elif kind is StatementKind.INSERT:
            result._set_generated_keys(dialect.generated_keys(cursor))
        elif kind is StatementKind.SELECT:
            result._set_rows([])
        else:
            rowcount = getattr(cursor, "rowcount", None)
            if rowcount is None or rowcount < 0:
                if kind is not StatementKind.OTHER:
                    raise PersistenceFailure(
                        f"The driver did not report an affected row count for {kind.name}"
                    )
                rowcount = 0
            result._set_rows_affected(rowcount)
