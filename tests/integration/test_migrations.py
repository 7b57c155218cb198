import sqlite3

import pytest

from authcore.adapters.sqlite.migrator import SQLiteMigrator


@pytest.fixture
def temp_db_path(tmp_path):
    return str(tmp_path / "test_db.sqlite")


def _tables(db_path: str) -> set[str]:
    conn = sqlite3.connect(db_path)
    try:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
    finally:
        conn.close()
    return {row[0] for row in rows}


def test_migrator_applies_packaged_migrations(temp_db_path):
    applied = SQLiteMigrator(temp_db_path).run_migrations()

    assert applied == ["0001_create_accounts.sql"]
    assert {"_migrations", "accounts"} <= _tables(temp_db_path)


def test_migrator_is_idempotent(temp_db_path):
    migrator = SQLiteMigrator(temp_db_path)

    migrator.run_migrations()
    assert migrator.run_migrations() == []

    conn = sqlite3.connect(temp_db_path)
    count = conn.execute("SELECT COUNT(*) FROM _migrations").fetchone()[0]
    conn.close()
    assert count == 1


def test_migrator_skips_down_section(tmp_path, temp_db_path):
    migrations = tmp_path / "migrations"
    migrations.mkdir()
    (migrations / "001_t.sql").write_text(
        "-- Up\nCREATE TABLE t (id INTEGER);\n-- Down\nDROP TABLE t;\n"
    )

    SQLiteMigrator(temp_db_path, migrations).run_migrations()

    assert "t" in _tables(temp_db_path)


def test_migrator_reports_broken_script(tmp_path, temp_db_path):
    migrations = tmp_path / "migrations"
    migrations.mkdir()
    (migrations / "001_bad.sql").write_text("CREATE TABLE (;")

    with pytest.raises(RuntimeError, match="001_bad.sql"):
        SQLiteMigrator(temp_db_path, migrations).run_migrations()


def test_failed_migration_leaves_nothing_behind(tmp_path, temp_db_path):
    migrations = tmp_path / "migrations"
    migrations.mkdir()
    (migrations / "001_half.sql").write_text("CREATE TABLE half (id INTEGER);\nCREATE TABLE (;\n")

    with pytest.raises(RuntimeError):
        SQLiteMigrator(temp_db_path, migrations).run_migrations()

    assert "half" not in _tables(temp_db_path)
    conn = sqlite3.connect(temp_db_path)
    count = conn.execute("SELECT COUNT(*) FROM _migrations").fetchone()[0]
    conn.close()
    assert count == 0


def test_failed_migration_can_be_retried(tmp_path, temp_db_path):
    migrations = tmp_path / "migrations"
    migrations.mkdir()
    script = migrations / "001_t.sql"
    script.write_text("CREATE TABLE t (id INTEGER);\nCREATE TABLE (;\n")
    migrator = SQLiteMigrator(temp_db_path, migrations)

    with pytest.raises(RuntimeError):
        migrator.run_migrations()

    script.write_text("CREATE TABLE t (id INTEGER);\n")
    assert migrator.run_migrations() == ["001_t.sql"]


def test_missing_migrations_directory(tmp_path, temp_db_path):
    with pytest.raises(FileNotFoundError):
        SQLiteMigrator(temp_db_path, tmp_path / "nowhere").run_migrations()
