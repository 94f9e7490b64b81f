"""
JSON Lines File Storage

Stores the ledger as one JSON object per line. Records are only ever
appended; the file is never rewritten.
"""

import json
import logging
import os
import threading
from pathlib import Path
from typing import List

from pydantic import ValidationError

from pantrylog.exceptions import PersistenceFailureError
from pantrylog.models.ledger import Transaction
from pantrylog.storage.base import PersistenceBackend

logger = logging.getLogger(__name__)

DEFAULT_LEDGER_FILE = "./data/transactions.jsonl"


class JsonlFileBackend(PersistenceBackend):
    """
    Local file ledger.

    Each record is written with a single write() on a file opened in
    append mode, then flushed and fsynced before append_one returns.
    Records are ASCII-only JSON, so a cut-off write is never invalid UTF-8.

    A trailing line without a newline is a write still in flight and is
    not returned by load_all. If such a fragment is left behind by a crash,
    the next append starts on a fresh line and the fragment is skipped on
    every later read.
    """

    name = "file"

    def __init__(self, file_path: str = DEFAULT_LEDGER_FILE):
        self.file_path = Path(file_path)
        self._lock = threading.Lock()

        # Ensure directory exists
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceFailureError(
                f"Cannot create ledger directory: {e}",
                details={"path": str(self.file_path.parent)},
            ) from e

    def append_one(self, transaction: Transaction) -> None:
        record = json.dumps(transaction.model_dump(mode="json"), ensure_ascii=True)
        line = (record + "\n").encode("ascii")

        with self._lock:
            try:
                with open(self.file_path, "a+b") as f:
                    if f.seek(0, os.SEEK_END) > 0:
                        f.seek(-1, os.SEEK_END)
                        if f.read(1) != b"\n":
                            logger.warning(f"Unterminated record in {self.file_path}, starting a new line")
                            line = b"\n" + line
                    f.write(line)
                    f.flush()
                    os.fsync(f.fileno())
            except OSError as e:
                logger.error(f"Failed to append transaction {transaction.id}: {e}")
                raise PersistenceFailureError(
                    f"Failed to write ledger file: {e}",
                    details={"path": str(self.file_path)},
                ) from e

        logger.debug(f"Appended {transaction.id} to {self.file_path}")

    def load_all(self) -> List[Transaction]:
        if not self.file_path.exists():
            return []

        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read ledger file: {e}")
            raise PersistenceFailureError(
                f"Failed to read ledger file: {e}",
                details={"path": str(self.file_path)},
            ) from e

        lines = content.split("\n")
        # Last element is either "" (complete file) or an in-flight partial line
        complete = lines[:-1]

        transactions = []
        for line_no, line in enumerate(complete, start=1):
            if not line.strip():
                continue

            try:
                data = json.loads(line)
            except json.JSONDecodeError:
                # A record cut off by a crash; never part of the durable history
                logger.warning(f"Skipping unterminated record at line {line_no} of {self.file_path}")
                continue

            try:
                transactions.append(Transaction.model_validate(data))
            except ValidationError as e:
                raise PersistenceFailureError(
                    f"Corrupt ledger record at line {line_no}",
                    details={"path": str(self.file_path), "line": line_no, "error": str(e)},
                ) from e

        return transactions
