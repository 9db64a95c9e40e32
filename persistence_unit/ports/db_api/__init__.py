"""DB-API adapter, dialect and settings exports."""

from .connection_manager import ConnectionManager
from .dialects import Dialect, MySQLDialect, PostgresDialect, SQLiteDialect, dialect_for_driver
from .settings import ConnectionSettings

__all__ = [
    "ConnectionManager",
    "ConnectionSettings",
    "Dialect",
    "MySQLDialect",
    "PostgresDialect",
    "SQLiteDialect",
    "dialect_for_driver",
]
