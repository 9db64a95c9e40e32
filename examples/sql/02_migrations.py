"""Versioned SQL migration example for persistence_unit."""

from __future__ import annotations

import sys
import tempfile
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "persistence_unit").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from persistence_unit import (
    ConnectionManager,
    ConnectionSettings,
    MigrationRunner,
    PersistenceUnit,
    StatementSpec,
    all_rows,
)


def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        scripts = root / "migrations"
        scripts.mkdir()

        # 1) Scripts are named V<version>__<description>.sql and split on ';'.
        (scripts / "V1__init.sql").write_text(
            "CREATE TABLE t (id INTEGER PRIMARY KEY, name TEXT);", encoding="utf-8"
        )
        (scripts / "V2__seed.sql").write_text(
            "INSERT INTO t(name) VALUES ('first');", encoding="utf-8"
        )

        manager = ConnectionManager(ConnectionSettings(driver="sqlite3", url=str(root / "app.db")))
        runner = MigrationRunner(manager)

        # 2) Each pending script runs in its own transaction with its ledger row.
        print("Pending:", [script.path.name for script in runner.pending(scripts)])
        print("Applied:", [script.version for script in runner.apply(scripts)])

        # 3) Running again is a no-op.
        print("Applied again:", runner.apply(scripts))
        print("Ledger:", sorted(runner.applied_versions()))
        print("Rows:", PersistenceUnit(manager).execute(StatementSpec("SELECT * FROM t"), all_rows))


if __name__ == "__main__":
    main()
