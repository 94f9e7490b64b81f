"""In-memory persistence backend (tests and previews)."""

import threading
from typing import List

from pantrylog.models.ledger import Transaction
from pantrylog.storage.base import PersistenceBackend


class InMemoryBackend(PersistenceBackend):
    """Keeps transactions in a process-local list."""

    name = "memory"

    def __init__(self):
        self._lock = threading.Lock()
        self._transactions: List[Transaction] = []

    def append_one(self, transaction: Transaction) -> None:
        with self._lock:
            self._transactions.append(transaction)

    def load_all(self) -> List[Transaction]:
        with self._lock:
            return list(self._transactions)
