"""
SQLite Repository

Relational ledger storage. Every append is one INSERT; insertion order is
kept by an autoincrement sequence column.
"""

import logging
import sqlite3
import threading
from datetime import datetime
from pathlib import Path
from typing import List

from pantrylog.exceptions import PersistenceFailureError
from pantrylog.models.ledger import Transaction, TransactionKind
from pantrylog.storage.base import PersistenceBackend

logger = logging.getLogger(__name__)

# Default database path
DEFAULT_DB_PATH = "./data/db/pantrylog.db"

# Seconds to wait on a locked database before failing
BUSY_TIMEOUT = 30.0


class SQLiteBackend(PersistenceBackend):
    """SQLite-backed ledger."""

    name = "sqlite"

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        self.db_path = db_path
        self._lock = threading.Lock()
        self._init_lock = threading.Lock()
        self._initialized = False

    def get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        try:
            # Ensure directory exists
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path, timeout=BUSY_TIMEOUT)
        except (OSError, sqlite3.Error) as e:
            logger.error(f"Cannot open database {self.db_path}: {e}")
            raise PersistenceFailureError(
                f"Cannot open database: {e}",
                details={"path": self.db_path},
            ) from e

        conn.row_factory = sqlite3.Row
        return conn

    def init_database(self) -> None:
        """Create the transactions table if needed."""
        conn = self.get_connection()

        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS transactions (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT NOT NULL UNIQUE,
                    timestamp TEXT NOT NULL,
                    kind TEXT NOT NULL,
                    item_name TEXT NOT NULL,
                    quantity REAL NOT NULL,
                    unit TEXT NOT NULL
                )
            """)
            conn.commit()
            self._initialized = True
            logger.info(f"Database initialized at {self.db_path}")

        except sqlite3.Error as e:
            raise PersistenceFailureError(f"Failed to initialize database: {e}") from e

        finally:
            conn.close()

    def _ensure_initialized(self) -> None:
        with self._init_lock:
            if not self._initialized:
                self.init_database()

    def append_one(self, transaction: Transaction) -> None:
        self._ensure_initialized()

        with self._lock:
            conn = self.get_connection()
            try:
                with conn:
                    conn.execute("""
                        INSERT INTO transactions (id, timestamp, kind, item_name, quantity, unit)
                        VALUES (?, ?, ?, ?, ?, ?)
                    """, (
                        transaction.id,
                        transaction.timestamp.isoformat(),
                        transaction.kind.value,
                        transaction.item_name,
                        transaction.quantity,
                        transaction.unit,
                    ))
            except sqlite3.Error as e:
                logger.error(f"Failed to insert transaction {transaction.id}: {e}")
                raise PersistenceFailureError(f"Failed to insert transaction: {e}") from e

            finally:
                conn.close()

    def load_all(self) -> List[Transaction]:
        self._ensure_initialized()

        conn = self.get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM transactions ORDER BY seq ASC")
            return [
                Transaction(
                    id=row["id"],
                    timestamp=datetime.fromisoformat(row["timestamp"]),
                    kind=TransactionKind(row["kind"]),
                    item_name=row["item_name"],
                    quantity=row["quantity"],
                    unit=row["unit"],
                )
                for row in cursor.fetchall()
            ]

        except sqlite3.Error as e:
            logger.error(f"Failed to read transactions: {e}")
            raise PersistenceFailureError(f"Failed to read transactions: {e}") from e

        finally:
            conn.close()
