"""Public port exports for concrete adapter implementations."""

from .db_api import (
    ConnectionManager,
    ConnectionSettings,
    Dialect,
    MySQLDialect,
    PostgresDialect,
    SQLiteDialect,
    dialect_for_driver,
)

__all__ = [
    "ConnectionManager",
    "ConnectionSettings",
    "Dialect",
    "SQLiteDialect",
    "PostgresDialect",
    "MySQLDialect",
    "dialect_for_driver",
]
