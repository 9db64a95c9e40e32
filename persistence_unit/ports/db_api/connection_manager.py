"""Scoped DB-API connections with one transaction per scope."""

from __future__ import annotations

import contextlib
import importlib
import logging
from typing import Any, Iterator, Optional, TypeVar

from ...core.contracts import ConnectionExecutor, ConnectionLoader
from ...core.errors import PersistenceFailure
from ...core.validation import require_non_null
from .dialects import Dialect, dialect_for_driver

T = TypeVar("T")

DEFAULT_LOGGER_NAME = "persistence_unit"


class ConnectionManager:
    """Open, configure and release DB-API connections for the core.

    Every scope gets a fresh connection with autocommit disabled, so one
    scope is one transaction. Nothing is pooled or shared between scopes;
    concurrent callers each hold their own connection.
    """

    def __init__(
        self,
        loader: ConnectionLoader,
        *,
        dialect: Optional[Dialect] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Create connection manager.

        Args:
            loader: Supplier of driver module name, URL, username and password.
            dialect: Dialect override; resolved from the driver name when omitted.
            logger: Logger for connection and statement events.
        """

        self.loader = require_non_null(loader, "loader")
        self._dialect = dialect
        self._logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def dialect(self) -> Dialect:
        if self._dialect is not None:
            return self._dialect
        driver = require_non_null(self.loader.driver, "driver")
        return dialect_for_driver(driver, self._load_driver())

    def _load_driver(self) -> Any:
        driver = require_non_null(self.loader.driver, "driver")
        try:
            return importlib.import_module(driver)
        except ImportError as exc:
            raise PersistenceFailure(f"Unable to load database driver '{driver}'", exc) from exc

    def _connect(self, module: Any, dialect: Dialect) -> Any:
        url = require_non_null(self.loader.url, "url")
        username = require_non_null(self.loader.username, "username")
        password = require_non_null(self.loader.password, "password")
        try:
            return dialect.connect(module, url, username, password)
        except PersistenceFailure:
            raise
        except Exception as exc:
            raise PersistenceFailure("Connection has failed", exc) from exc

    @contextlib.contextmanager
    def connection(self) -> Iterator[Any]:
        """Provide a connection inside its own transaction.

        The connection is closed on every exit path. When the block raises,
        the open transaction is rolled back first; work already committed in
        the block is unaffected.
        """

        module = self._load_driver()
        dialect = self._dialect
        if dialect is None:
            dialect = dialect_for_driver(self.loader.driver, module)
        conn = self._connect(module, dialect)
        try:
            self._logger.info("The database connection has been accepted")
            try:
                dialect.disable_autocommit(conn)
            except Exception as exc:
                raise PersistenceFailure("Unable to start a transaction", exc) from exc
            try:
                yield conn
            except BaseException:
                self.rollback(conn)
                raise
        finally:
            self._close(conn)

    def execute(self, executor: ConnectionExecutor[T]) -> T:
        """Run `executor` with a managed connection and return its result.

        The executor commits its own work. Errors raised by the driver are
        wrapped in `PersistenceFailure`; any other error propagates unchanged.
        """

        executor = require_non_null(executor, "executor")
        driver_error = getattr(self._load_driver(), "Error", None)
        with self.connection() as conn:
            try:
                return executor(conn)
            except PersistenceFailure:
                raise
            except Exception as exc:
                if driver_error is not None and isinstance(exc, driver_error):
                    raise PersistenceFailure("The database operation has failed", exc) from exc
                raise

    def rollback(self, conn: Any) -> None:
        try:
            conn.rollback()
        except Exception:
            self._logger.warning("Rollback failed", exc_info=True)

    def _close(self, conn: Any) -> None:
        close = getattr(conn, "close", None)
        if not callable(close):
            return
        try:
            close()
        except Exception:
            self._logger.warning("Closing the database connection failed", exc_info=True)
