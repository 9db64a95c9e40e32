"""Concrete driver-family dialects for DB-API adapters."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Type
from urllib.parse import unquote, urlparse

from ...core.errors import PersistenceFailure


class Dialect:
    """Base dialect: connection, transaction, placeholder and key behavior.

    The generic dialect passes the URL straight to the driver's `connect()`
    and takes its placeholder style from the driver module's `paramstyle`.
    """

    name: str = "generic"
    paramstyle: str = "qmark"
    quote_char: str = '"'
    ledger_column_type: str = "TEXT"
    drivers: tuple[str, ...] = ()

    def __init__(self, paramstyle: Optional[str] = None):
        if paramstyle is not None:
            self.paramstyle = paramstyle

    def q(self, ident: str) -> str:
        """Quote SQL identifier."""

        escaped = ident.replace(self.quote_char, self.quote_char * 2)
        return f"{self.quote_char}{escaped}{self.quote_char}"

    def placeholder(self, position: int = 1) -> str:
        """Return the positional placeholder for 1-based `position`."""

        if self.paramstyle == "qmark":
            return "?"
        if self.paramstyle in ("format", "pyformat"):
            return "%s"
        if self.paramstyle == "numeric":
            return f":{position}"
        raise PersistenceFailure(f"Unsupported positional paramstyle: {self.paramstyle}")

    def connect(self, module: Any, url: str, username: str, password: str) -> Any:
        kwargs: Dict[str, Any] = {}
        if username:
            kwargs["user"] = username
        if password:
            kwargs["password"] = password
        return module.connect(url, **kwargs)

    def disable_autocommit(self, conn: Any) -> None:
        """Start the transaction scope on `conn`.

        Handles both the attribute form (`conn.autocommit = False`) and the
        method form (`conn.autocommit(False)`).
        """

        autocommit = getattr(conn, "autocommit", None)
        if callable(autocommit):
            autocommit(False)
        elif hasattr(conn, "autocommit"):
            conn.autocommit = False

    def generated_keys(self, cursor: Any) -> List[Any]:
        """Read keys produced by an INSERT that returned no result set.

        The cursor's `lastrowid` is used when the insert touched any row.
        """

        if getattr(cursor, "rowcount", -1) == 0:
            return []
        lastrowid = self.get_lastrowid(cursor)
        if lastrowid is None:
            return []
        return [lastrowid]

    def get_lastrowid(self, cursor: Any) -> Optional[int]:
        """Extract `lastrowid` from DB-API cursor when available."""

        return getattr(cursor, "lastrowid", None)

    def ledger_table_sql(self, table: str, column: str) -> str:
        return (
            f"CREATE TABLE IF NOT EXISTS {self.q(table)}"
            f"({self.q(column)} {self.ledger_column_type} PRIMARY KEY)"
        )


class SQLiteDialect(Dialect):
    """SQLite dialect (`?` parameters, `sqlite:///path` or plain path URLs)."""

    name = "sqlite"
    paramstyle = "qmark"
    quote_char = '"'
    drivers = ("sqlite3",)

    def connect(self, module: Any, url: str, username: str, password: str) -> Any:
        if url.startswith("sqlite://"):
            url = url[len("sqlite://"):]
            if url.startswith("/"):
                url = url[1:]
        if url.startswith("file:"):
            return module.connect(url, uri=True)
        return module.connect(url)

    def disable_autocommit(self, conn: Any) -> None:
        if hasattr(conn, "autocommit"):
            conn.autocommit = False
            return
        # Interpreters before 3.12 only offer the legacy transaction control.
        conn.isolation_level = None
        if not conn.in_transaction:
            conn.execute("BEGIN")


class PostgresDialect(Dialect):
    """PostgreSQL dialect (`%s` positional parameters, no `lastrowid` keys)."""

    name = "postgres"
    paramstyle = "format"
    quote_char = '"'
    drivers = ("psycopg", "psycopg2")

    def get_lastrowid(self, cursor: Any) -> Optional[int]:
        # psycopg reports table OIDs here, not primary keys.
        return None


class MySQLDialect(Dialect):
    """MySQL dialect (`%s` positional parameters, `mysql://host:port/db` URLs)."""

    name = "mysql"
    paramstyle = "format"
    quote_char = "`"
    ledger_column_type = "VARCHAR(255)"
    drivers = ("pymysql", "MySQLdb")

    def connect(self, module: Any, url: str, username: str, password: str) -> Any:
        parsed = urlparse(url)
        if not parsed.hostname:
            raise PersistenceFailure(f"Unable to read a MySQL host from url {url!r}")
        kwargs: Dict[str, Any] = {
            "host": parsed.hostname,
            "user": username or unquote(parsed.username or ""),
            "password": password or unquote(parsed.password or ""),
            "database": parsed.path.lstrip("/"),
        }
        if parsed.port:
            kwargs["port"] = parsed.port
        return module.connect(**kwargs)


_DIALECTS: tuple[Type[Dialect], ...] = (SQLiteDialect, PostgresDialect, MySQLDialect)


def dialect_for_driver(driver: str, module: Any = None) -> Dialect:
    """Resolve the dialect for a DB-API driver module name.

    Unknown drivers get the generic dialect, configured with the module's
    `paramstyle` when the module is given.
    """

    for dialect_cls in _DIALECTS:
        if driver in dialect_cls.drivers:
            return dialect_cls()
    return Dialect(paramstyle=getattr(module, "paramstyle", None))
