"""Statement execution and result mapping example for persistence_unit."""

from __future__ import annotations

import logging
import sys
import tempfile
from dataclasses import dataclass
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
    MappedResult,
    PersistenceUnit,
    StatementSpec,
    first_generated_key,
    rows_affected,
)


@dataclass
class User:
    id: int
    email: str
    age: int


def to_users(result: MappedResult) -> list[User]:
    # Move the cursor before every read.
    users = []
    while result.advance():
        users.append(User(result.column("id"), result.column("email"), result.column("age")))
    return users


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    with tempfile.TemporaryDirectory() as tmp:
        # 1) One manager per database; every call gets its own connection and transaction.
        settings = ConnectionSettings(driver="sqlite3", url=str(Path(tmp) / "example.db"))
        unit = PersistenceUnit(ConnectionManager(settings))

        # 2) DDL reports an affected-row count.
        unit.execute(
            StatementSpec("CREATE TABLE users (id INTEGER PRIMARY KEY, email TEXT, age INTEGER)"),
            rows_affected,
        )

        # 3) INSERT exposes generated keys.
        alice_id = unit.persist(
            lambda q: q.set_query("INSERT INTO users(email, age) VALUES (?, ?)").set_args(
                "alice@example.com", 25
            )
        ).execute(first_generated_key)
        unit.execute(
            StatementSpec("INSERT INTO users(email, age) VALUES (?, ?)", ["bob@example.com", 30]),
            first_generated_key,
        )
        print("Alice id:", alice_id)

        # 4) UPDATE/DELETE expose the affected-row count.
        updated = unit.execute(
            StatementSpec("UPDATE users SET age = age + 1 WHERE id = ?", [alice_id]), rows_affected
        )
        print("Updated rows:", updated)

        # 5) SELECT rows go through the caller's mapper.
        print("Users:", unit.execute(StatementSpec("SELECT id, email, age FROM users"), to_users))


if __name__ == "__main__":
    main()
