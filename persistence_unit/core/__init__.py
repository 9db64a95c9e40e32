"""Public core API for statements, result mapping, execution and migrations."""

from .collector import QueryCollector, drain_rows
from .contracts import (
    ConnectionExecutor,
    ConnectionLoader,
    ConnectionManagerPort,
    DialectPort,
    QueryStatement,
    RowMapper,
)
from .errors import PersistenceFailure
from .mapped_result import MappedResult, ResultShape
from .mappers import (
    all_rows,
    first_generated_key,
    first_row,
    generated_keys,
    rows_affected,
    scalar,
)
from .migrations import (
    LEDGER_COLUMN,
    LEDGER_TABLE,
    MIGRATION_FILE_PATTERN,
    MigrationRecord,
    MigrationRunner,
    MigrationScript,
    apply_migrations,
    discover_migrations,
)
from .persistence import PersistenceUnit
from .statement import (
    QueryBuilder,
    StatementKind,
    StatementSpec,
    classify_statement,
    coerce_kind,
)
from .validation import has_arguments, require_at_least_one_argument, require_non_null

__all__ = [
    "ConnectionExecutor",
    "ConnectionLoader",
    "ConnectionManagerPort",
    "DialectPort",
    "QueryStatement",
    "RowMapper",
    "PersistenceFailure",
    "MappedResult",
    "ResultShape",
    "QueryBuilder",
    "StatementKind",
    "StatementSpec",
    "classify_statement",
    "coerce_kind",
    "QueryCollector",
    "drain_rows",
    "PersistenceUnit",
    "MigrationRecord",
    "MigrationRunner",
    "MigrationScript",
    "LEDGER_TABLE",
    "LEDGER_COLUMN",
    "MIGRATION_FILE_PATTERN",
    "apply_migrations",
    "discover_migrations",
    "all_rows",
    "first_row",
    "scalar",
    "generated_keys",
    "first_generated_key",
    "rows_affected",
    "has_arguments",
    "require_at_least_one_argument",
    "require_non_null",
]
