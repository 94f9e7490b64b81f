"""Persistence backend interface for the transaction ledger."""

from abc import ABC, abstractmethod
from typing import List

from pantrylog.models.ledger import Transaction


class PersistenceBackend(ABC):
    """
    Durable, ordered storage for ledger transactions.

    Implementations must:
    - return from append_one only once the record is durable
    - never lose a write when append_one is called concurrently
    - make an appended record visible to every later load_all
    - return records in insertion order, each record whole or not at all

    Failures are raised as PersistenceFailureError.
    """

    name = "base"

    @abstractmethod
    def append_one(self, transaction: Transaction) -> None:
        """Durably append a single transaction."""
        ...

    @abstractmethod
    def load_all(self) -> List[Transaction]:
        """Load every stored transaction in insertion order."""
        ...
