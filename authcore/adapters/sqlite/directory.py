import logging
import sqlite3
from datetime import datetime
from typing import Any
from uuid import UUID

from authcore.domain.entities import Account
from authcore.ports.directory import DirectoryError, DuplicateKey, NotFound

logger = logging.getLogger(__name__)


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


class SQLiteAccountDirectory:
    """
    Account directory backed by SQLite.

    Email uniqueness comes from the UNIQUE constraint on accounts.email,
    so two concurrent inserts for one email cannot both succeed. Driver
    errors are wrapped in DirectoryError.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        return conn

    def create(self, account: Account) -> None:
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise DirectoryError(f"Cannot open account database: {e}") from e
        try:
            conn.execute(
                """
                INSERT INTO accounts (
                    id, name, email, password_hash, phone, address, role, is_admin, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
                (
                    str(account.id),
                    account.name,
                    account.email,
                    account.password_hash,
                    account.phone,
                    account.address,
                    account.role,
                    int(account.is_admin),
                    account.created_at.isoformat(),
                ),
            )
            conn.commit()
        except sqlite3.IntegrityError as e:
            if "accounts.email" in str(e):
                raise DuplicateKey(account.email) from e
            raise DirectoryError(f"Account insert rejected: {e}") from e
        except sqlite3.Error as e:
            raise DirectoryError(f"Account insert failed: {e}") from e
        finally:
            conn.close()

    def fetch_by_email(self, email: str) -> Account:
        row = self._fetch_one("SELECT * FROM accounts WHERE email = ?", (email,))
        if not row:
            raise NotFound(email)
        return self._map_row_to_account(row)

    def fetch_by_id(self, account_id: UUID) -> Account:
        row = self._fetch_one("SELECT * FROM accounts WHERE id = ?", (str(account_id),))
        if not row:
            raise NotFound(str(account_id))
        return self._map_row_to_account(row)

    def delete(self, account_id: UUID) -> None:
        deleted = self._execute("DELETE FROM accounts WHERE id = ?", (str(account_id),))
        if deleted == 0:
            raise NotFound(str(account_id))

    def list_all(self) -> list[Account]:
        try:
            conn = self._get_conn()
            try:
                rows = conn.execute("SELECT * FROM accounts ORDER BY email").fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise DirectoryError(f"Account listing failed: {e}") from e
        return [self._map_row_to_account(row) for row in rows]

    def update_password_hash(self, account_id: UUID, password_hash: str) -> None:
        updated = self._execute(
            "UPDATE accounts SET password_hash = ? WHERE id = ?",
            (password_hash, str(account_id)),
        )
        if updated == 0:
            raise NotFound(str(account_id))

    def _fetch_one(self, sql: str, params: tuple[Any, ...]) -> dict[str, Any] | None:
        try:
            conn = self._get_conn()
            try:
                row: dict[str, Any] | None = conn.execute(sql, params).fetchone()
                return row
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise DirectoryError(f"Account lookup failed: {e}") from e

    def _execute(self, sql: str, params: tuple[Any, ...]) -> int:
        """Run a write statement and return the affected row count."""
        try:
            conn = self._get_conn()
            try:
                cursor = conn.execute(sql, params)
                conn.commit()
                return cursor.rowcount
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise DirectoryError(f"Account write failed: {e}") from e

    def _map_row_to_account(self, row: dict[str, Any]) -> Account:
        return Account(
            id=UUID(row["id"]),
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
            phone=row["phone"],
            address=row["address"],
            role=row["role"],
            is_admin=bool(row["is_admin"]),
            created_at=datetime.fromisoformat(row["created_at"]),
        )
