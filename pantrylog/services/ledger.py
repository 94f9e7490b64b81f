"""
Transaction Ledger

Append-only log of quantity changes. Quantities are normalized once, here,
before they are stored; the ledger never holds raw units.
"""

import logging
import math
import threading
import uuid
from datetime import datetime
from typing import List, Optional

from pantrylog.exceptions import ParseRejectedError
from pantrylog.models.ledger import NormalizedQuantity, Transaction, TransactionKind
from pantrylog.services.unit_normalizer import normalize
from pantrylog.storage.base import PersistenceBackend

logger = logging.getLogger(__name__)


class Ledger:
    """Ordered, durable transaction history on top of a persistence backend."""

    def __init__(self, backend: PersistenceBackend):
        self.backend = backend
        self._write_lock = threading.Lock()
        self._last_timestamp: Optional[datetime] = None

    def _next_timestamp(self) -> datetime:
        now = datetime.utcnow()
        if self._last_timestamp is None:
            # Continue after whatever is already stored
            history = self.backend.load_all()
            if history:
                self._last_timestamp = max(t.timestamp for t in history)
        if self._last_timestamp is not None and now < self._last_timestamp:
            now = self._last_timestamp
        self._last_timestamp = now
        return now

    def normalize(self, quantity: float, unit: Optional[str] = None) -> NormalizedQuantity:
        """
        Normalize a quantity the way append() stores it.

        Raises:
            ParseRejectedError: if the normalized quantity is not a finite number
        """
        normalized = normalize(quantity, unit)
        if not math.isfinite(normalized.quantity):
            raise ParseRejectedError(
                "The quantity is too large to record.",
                details={"quantity": str(quantity), "unit": unit},
            )
        return normalized

    def append(
        self,
        kind: TransactionKind,
        item_name: str,
        quantity: float,
        unit: Optional[str] = None,
    ) -> Transaction:
        """
        Normalize and durably record a quantity change.

        Args:
            kind: ADD or REMOVE
            item_name: Item name as spoken
            quantity: Amount in `unit`
            unit: Unit label as spoken, None for discrete items

        Returns:
            The stored transaction

        Raises:
            ParseRejectedError: if the normalized quantity is not a finite number
            PersistenceFailureError: if the backend did not store the record
        """
        normalized = self.normalize(quantity, unit)

        # Stamp and store under one lock so storage order follows timestamps
        with self._write_lock:
            transaction = Transaction(
                id=f"tx_{uuid.uuid4().hex}",
                timestamp=self._next_timestamp(),
                kind=kind,
                item_name=item_name.strip(),
                quantity=normalized.quantity,
                unit=normalized.unit,
            )
            self.backend.append_one(transaction)

        logger.info(
            f"Recorded {transaction.kind.value} {transaction.quantity:g} "
            f"{transaction.unit} {transaction.item_name} ({transaction.id})"
        )
        return transaction

    def read_all(self) -> List[Transaction]:
        """Full history ordered by timestamp, ties kept in insertion order."""
        # sorted() is stable, so equal timestamps keep backend order
        return sorted(self.backend.load_all(), key=lambda t: t.timestamp)
