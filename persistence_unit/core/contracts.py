"""Core port contracts used by the collector, the migration runner and adapters."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any, Callable, List, Optional, Protocol, TypeVar

from .mapped_result import MappedResult
from .statement import QueryBuilder

T = TypeVar("T")

RowMapper = Callable[[MappedResult], T]
"""Caller-owned conversion of a populated `MappedResult` into a value."""

ConnectionExecutor = Callable[[Any], T]
"""Operation run against a managed DB-API connection."""

QueryStatement = Callable[[QueryBuilder], QueryBuilder]
"""Callback that fills a fresh `QueryBuilder`."""


class ConnectionLoader(Protocol):
    """Connection supplier: all four values are required."""

    driver: Optional[str]
    url: Optional[str]
    username: Optional[str]
    password: Optional[str]


class DialectPort(Protocol):
    """Driver-family behavior required by the collector and the migration runner."""

    name: str
    paramstyle: str

    def q(self, ident: str) -> str: ...

    def placeholder(self, position: int = 1) -> str: ...

    def generated_keys(self, cursor: Any) -> List[Any]: ...

    def ledger_table_sql(self, table: str, column: str) -> str: ...


class ConnectionManagerPort(Protocol):
    """Scoped-connection behavior required by the collector and the migration runner."""

    @property
    def dialect(self) -> DialectPort: ...

    @property
    def logger(self) -> Any: ...

    def connection(self) -> AbstractContextManager[Any]: ...

    def execute(self, executor: ConnectionExecutor[T]) -> T: ...

    def rollback(self, conn: Any) -> None: ...
