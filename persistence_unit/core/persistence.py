"""Entry point pairing a connection manager with statement execution."""

from __future__ import annotations

from typing import List, TypeVar, Union

from .collector import QueryCollector
from .contracts import ConnectionManagerPort, QueryStatement, RowMapper
from .errors import PersistenceFailure
from .migrations import MigrationRunner, MigrationScript, PathInput
from .statement import QueryBuilder, StatementSpec
from .validation import require_non_null

T = TypeVar("T")

StatementInput = Union[StatementSpec, QueryStatement]


class PersistenceUnit:
    """Build statements and execute them against one database.

    Example:
        unit = PersistenceUnit(ConnectionManager(settings))
        user_id = unit.persist(
            lambda q: q.set_query("INSERT INTO users(email) VALUES (?)").set_args(email)
        ).execute(first_generated_key)
    """

    def __init__(self, manager: ConnectionManagerPort):
        self.manager = require_non_null(manager, "manager")

    def statement(self, statement: StatementInput) -> StatementSpec:
        """Resolve a spec or a builder callback into an immutable `StatementSpec`."""

        statement = require_non_null(statement, "statement")
        if isinstance(statement, StatementSpec):
            return statement
        builder = statement(QueryBuilder())
        if not isinstance(builder, QueryBuilder):
            raise PersistenceFailure("A statement callback must return the QueryBuilder it was given")
        return builder.build()

    def persist(self, statement: StatementInput) -> QueryCollector:
        return QueryCollector(self.manager, self.statement(statement))

    def execute(self, statement: StatementInput, mapper: RowMapper[T]) -> T:
        return self.persist(statement).execute(mapper)

    def migrate(self, directory: PathInput) -> List[MigrationScript]:
        return MigrationRunner(self.manager).apply(directory)
