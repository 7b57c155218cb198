"""
Schema migrations for the account database.

Each ``NNNN_name.sql`` file holds an Up section, optionally followed by a
``-- Down`` section that is never run here. A migration's statements and its
``_migrations`` bookkeeping row commit together or not at all.
"""

import logging
import sqlite3
from contextlib import closing
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_MIGRATIONS_DIR = Path(__file__).parent / "migrations"
DOWN_MARKER = "-- Down"


class SQLiteMigrator:
    def __init__(self, db_path: str, migrations_dir: str | Path = DEFAULT_MIGRATIONS_DIR):
        self.db_path = db_path
        self.migrations_dir = Path(migrations_dir)

    def run_migrations(self) -> list[str]:
        """Apply all pending migrations. Returns the filenames applied."""
        applied_now: list[str] = []
        with closing(sqlite3.connect(self.db_path, isolation_level=None)) as conn:
            applied = self._applied(conn)
            for path in self._discover():
                if path.name in applied:
                    continue
                logger.info("Applying migration: %s", path.name)
                self._apply(conn, path)
                applied_now.append(path.name)

        if applied_now:
            logger.info("Applied %d migration(s)", len(applied_now))
        else:
            logger.info("Schema is up to date")
        return applied_now

    def _discover(self) -> list[Path]:
        if not self.migrations_dir.is_dir():
            raise FileNotFoundError(f"Migrations directory not found: {self.migrations_dir}")
        return sorted(self.migrations_dir.glob("*.sql"))

    @staticmethod
    def _applied(conn: sqlite3.Connection) -> set[str]:
        conn.execute(
            "CREATE TABLE IF NOT EXISTS _migrations ("
            " filename TEXT PRIMARY KEY,"
            " applied_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP)"
        )
        return {row[0] for row in conn.execute("SELECT filename FROM _migrations")}

    @staticmethod
    def _apply(conn: sqlite3.Connection, path: Path) -> None:
        up_script = path.read_text(encoding="utf-8").split(DOWN_MARKER, 1)[0]
        try:
            # executescript would commit on its own; an explicit BEGIN keeps
            # the script and the bookkeeping row in a single transaction.
            conn.executescript("BEGIN;\n" + up_script)
            conn.execute("INSERT INTO _migrations (filename) VALUES (?)", (path.name,))
            conn.execute("COMMIT")
        except sqlite3.Error as exc:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise RuntimeError(f"Migration {path.name} failed: {exc}") from exc

