"""Error type raised by the persistence layer."""

from __future__ import annotations

from typing import Optional


class PersistenceFailure(Exception):
    """Raised for configuration, driver, statement, migration and cursor failures.

    The wrapped driver error, when there is one, is available as `cause` and is
    also chained as `__cause__` by the raising code.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"
