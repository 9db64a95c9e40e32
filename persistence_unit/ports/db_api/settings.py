"""Connection settings supplied to the connection manager."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ...core.errors import PersistenceFailure


@dataclass(frozen=True)
class ConnectionSettings:
    """Driver module name, URL and credentials for one database.

    `driver` is the importable DB-API module name (`sqlite3`, `psycopg`,
    `pymysql`, ...). Drivers that take credentials inside the URL can use
    empty `username`/`password` values.
    """

    driver: str
    url: str
    username: str = ""
    password: str = ""

    @classmethod
    def from_env(
        cls,
        prefix: str = "PERSISTENCE_",
        environ: Optional[Mapping[str, str]] = None,
    ) -> ConnectionSettings:
        """Read `<prefix>DRIVER`, `<prefix>URL`, `<prefix>USERNAME`, `<prefix>PASSWORD`."""

        env = os.environ if environ is None else environ
        missing = [key for key in ("DRIVER", "URL") if not env.get(prefix + key)]
        if missing:
            names = ", ".join(prefix + key for key in missing)
            raise PersistenceFailure(f"Missing connection settings in environment: {names}")
        return cls(
            driver=env[prefix + "DRIVER"],
            url=env[prefix + "URL"],
            username=env.get(prefix + "USERNAME", ""),
            password=env.get(prefix + "PASSWORD", ""),
        )

    def __repr__(self) -> str:
        masked = "***" if self.password else ""
        return (
            f"ConnectionSettings(driver={self.driver!r}, url={self.url!r}, "
            f"username={self.username!r}, password={masked!r})"
        )
