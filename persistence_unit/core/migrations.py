"""Versioned SQL migration runner built on the query collector."""

from __future__ import annotations

import contextlib
import os
import re
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any, List, Sequence, Set, Union

from .collector import QueryCollector
from .contracts import ConnectionManagerPort
from .errors import PersistenceFailure
from .mapped_result import MappedResult
from .mappers import rows_affected
from .statement import StatementKind, StatementSpec
from .validation import require_non_null

LEDGER_TABLE = "migration_info"
LEDGER_COLUMN = "migration_version"
MIGRATION_FILE_PATTERN = re.compile(r"^V(\d+)__(.+)\.sql$")

PathInput = Union[str, os.PathLike]


@dataclass(frozen=True)
class MigrationRecord:
    """One applied version as stored in the ledger table."""

    version: str


@dataclass(frozen=True)
class MigrationScript:
    """A discovered `V<digits>__<description>.sql` file."""

    version: str
    description: str
    path: Path

    @property
    def number(self) -> int:
        return int(self.version)

    def read_statements(self) -> List[str]:
        """Read the script and split it on `;`, dropping blank fragments."""

        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceFailure(f"Unable to read migration file '{self.path.name}'", exc) from exc
        return [part.strip() for part in text.split(";") if part.strip()]


def _require_directory(directory: PathInput) -> Path:
    path = Path(require_non_null(directory, "directory"))
    if not path.is_dir():
        raise PersistenceFailure(f"Could not access directory '{path}', make sure it exists")
    return path


def discover_migrations(directory: PathInput) -> List[MigrationScript]:
    """Validate every entry of `directory` and return scripts in version order.

    Any entry that is not a readable regular file named
    `V<digits>__<description>.sql` fails the whole discovery, as does a
    version number used by two files.
    """

    root = _require_directory(directory)
    try:
        entries = sorted(root.iterdir())
    except OSError as exc:
        raise PersistenceFailure(f"Could not list directory '{root}'", exc) from exc

    scripts: List[MigrationScript] = []
    seen: dict[int, str] = {}
    for entry in entries:
        match = MIGRATION_FILE_PATTERN.match(entry.name)
        if match is None or not entry.is_file() or not os.access(entry, os.R_OK):
            raise PersistenceFailure(
                f"Unable to access SQL file '{entry.name}', make sure the file is valid or accessible"
            )
        version, description = match.groups()
        script = MigrationScript(version=version, description=description, path=entry)
        if script.number in seen:
            raise PersistenceFailure(
                f"Migration version {version} is used by both '{seen[script.number]}' and '{entry.name}'"
            )
        seen[script.number] = entry.name
        scripts.append(script)
    return sorted(scripts, key=lambda script: script.number)


def _collect_versions(result: MappedResult) -> List[str]:
    versions = []
    while result.advance():
        versions.append(str(result.column(LEDGER_COLUMN)))
    return versions


class MigrationRunner:
    """Apply pending migration scripts, one transaction per script.

    Scripts are not isolated from a concurrently running runner; run one
    runner per database at a time.
    """

    def __init__(self, manager: ConnectionManagerPort):
        self.manager = require_non_null(manager, "manager")

    def _ensure_ledger(self) -> None:
        ddl = self.manager.dialect.ledger_table_sql(LEDGER_TABLE, LEDGER_COLUMN)
        QueryCollector(self.manager, StatementSpec(ddl, kind=StatementKind.OTHER)).execute(rows_affected)

    def applied_records(self) -> List[MigrationRecord]:
        self._ensure_ledger()
        dialect = self.manager.dialect
        statement = StatementSpec(
            f"SELECT {dialect.q(LEDGER_COLUMN)} FROM {dialect.q(LEDGER_TABLE)}"
        )
        versions = QueryCollector(self.manager, statement).execute(_collect_versions)
        return [MigrationRecord(version) for version in versions]

    def applied_versions(self) -> Set[str]:
        """Create the ledger table when absent and return the applied versions."""

        return {record.version for record in self.applied_records()}

    def pending(self, directory: PathInput) -> List[MigrationScript]:
        _require_directory(directory)
        applied = self.applied_versions()
        return [script for script in discover_migrations(directory) if script.version not in applied]

    def apply(self, directory: PathInput) -> List[MigrationScript]:
        """Apply every unapplied script found in `directory`.

        Returns:
            Scripts applied by this call, in the order they ran. Scripts
            committed before a failing one stay applied.
        """

        _require_directory(directory)
        applied = self.applied_versions()
        scripts = discover_migrations(directory)

        executed: List[MigrationScript] = []
        for script in scripts:
            if script.version in applied:
                continue
            statements = script.read_statements()
            self.manager.execute(partial(self._apply_script, script, statements))
            self.manager.logger.info(
                "The migration has been successfully executed",
                extra={"migration_version": script.version, "migration_file": script.path.name},
            )
            applied.add(script.version)
            executed.append(script)
        return executed

    def _apply_script(self, script: MigrationScript, statements: Sequence[str], conn: Any) -> None:
        dialect = self.manager.dialect
        insert = (
            f"INSERT INTO {dialect.q(LEDGER_TABLE)} ({dialect.q(LEDGER_COLUMN)}) "
            f"VALUES ({dialect.placeholder(1)})"
        )
        try:
            with contextlib.closing(conn.cursor()) as cursor:
                for statement in statements:
                    cursor.execute(statement)
                cursor.execute(insert, (script.version,))
            conn.commit()
        except Exception as exc:
            self.manager.rollback(conn)
            raise PersistenceFailure(f"Unable to perform migration '{script.path.name}'", exc) from exc


def apply_migrations(manager: ConnectionManagerPort, directory: PathInput) -> List[MigrationScript]:
    """Apply pending migrations without instantiating the runner directly."""

    return MigrationRunner(manager).apply(directory)
