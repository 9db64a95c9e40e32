"""Transactional query execution and versioned migrations over DB-API drivers."""

from .core import (
    LEDGER_COLUMN,
    LEDGER_TABLE,
    MIGRATION_FILE_PATTERN,
    MappedResult,
    MigrationRecord,
    MigrationRunner,
    MigrationScript,
    PersistenceFailure,
    PersistenceUnit,
    QueryBuilder,
    QueryCollector,
    ResultShape,
    StatementKind,
    StatementSpec,
    all_rows,
    apply_migrations,
    classify_statement,
    discover_migrations,
    first_generated_key,
    first_row,
    generated_keys,
    rows_affected,
    scalar,
)
from .ports import (
    ConnectionManager,
    ConnectionSettings,
    Dialect,
    MySQLDialect,
    PostgresDialect,
    SQLiteDialect,
    dialect_for_driver,
)

__version__ = "0.1.0"

__all__ = [
    "ConnectionManager",
    "ConnectionSettings",
    "Dialect",
    "SQLiteDialect",
    "PostgresDialect",
    "MySQLDialect",
    "dialect_for_driver",
    "PersistenceFailure",
    "PersistenceUnit",
    "QueryBuilder",
    "QueryCollector",
    "StatementKind",
    "StatementSpec",
    "classify_statement",
    "MappedResult",
    "ResultShape",
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
]
