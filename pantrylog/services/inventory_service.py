"""
Inventory Service

Records inventory events and derives the current inventory from the ledger.
"""

import logging
import threading
from typing import List, Optional, Tuple

from pantrylog.exceptions import ParseRejectedError, UnitConflictError
from pantrylog.models.commands import CommandAction, CommandIntent, CommandResult
from pantrylog.models.ledger import InventoryItem, InventorySnapshot, Transaction, TransactionKind
from pantrylog.services.aggregator import build_snapshot, find_add_conflict
from pantrylog.services.command_parser import CommandParser
from pantrylog.services.ledger import Ledger
from pantrylog.storage.base import PersistenceBackend

logger = logging.getLogger(__name__)

ACTION_KINDS = {
    CommandAction.ADD: TransactionKind.ADD,
    CommandAction.REMOVE: TransactionKind.REMOVE,
}

ACTION_VERBS = {
    TransactionKind.ADD: "Added",
    TransactionKind.REMOVE: "Removed",
}


class InventoryService:
    """Main service for recording events and reading the inventory."""

    def __init__(
        self,
        backend: PersistenceBackend,
        parser: Optional[CommandParser] = None,
    ):
        self.ledger = Ledger(backend)
        self.parser = parser or CommandParser()
        self._lock = threading.Lock()

    # =========================================================================
    # Events
    # =========================================================================

    def record_event(
        self,
        kind: TransactionKind,
        item_name: str,
        quantity: float,
        unit: Optional[str] = None,
    ) -> Tuple[Transaction, InventorySnapshot]:
        """
        Append an event to the ledger and return it with the new snapshot.

        Raises:
            ParseRejectedError: the quantity does not fit a finite number once normalized
            UnitConflictError: an add in a unit the item's stock is not kept in
            PersistenceFailureError: the ledger could not be read or written
        """
        self.ledger.normalize(quantity, unit)

        with self._lock:
            if kind == TransactionKind.ADD:
                conflict = find_add_conflict(self.ledger.read_all(), item_name, quantity, unit)
                if conflict:
                    logger.warning(
                        f"Rejected add of {conflict.incoming_unit} to {item_name}: "
                        f"stock is kept in {conflict.current_unit}"
                    )
                    raise UnitConflictError(conflict)

            transaction = self.ledger.append(kind, item_name, quantity, unit)

        return transaction, self.current_snapshot()

    def current_snapshot(self) -> InventorySnapshot:
        """Current inventory, recomputed from the full ledger."""
        return build_snapshot(self.ledger.read_all())

    def current_items(self) -> List[InventoryItem]:
        """Visible inventory lines only."""
        return self.current_snapshot().items

    def history(self) -> List[Transaction]:
        """Full ledger history in timestamp order."""
        return self.ledger.read_all()

    # =========================================================================
    # Commands
    # =========================================================================

    def apply_intent(self, intent: CommandIntent) -> CommandResult:
        """
        Record a pre-parsed command.

        Raises:
            ParseRejectedError: unknown action, or item/quantity missing
        """
        if intent.action not in ACTION_KINDS:
            raise ParseRejectedError(
                "Could not understand the command.",
                details={"parsed": intent.model_dump(mode="json")},
            )
        if not intent.item or not intent.item.strip() or not intent.quantity:
            raise ParseRejectedError(
                "The command needs an item and a quantity.",
                details={"parsed": intent.model_dump(mode="json")},
            )

        kind = ACTION_KINDS[intent.action]
        transaction, snapshot = self.record_event(kind, intent.item, intent.quantity, intent.unit)

        unit_text = f"{intent.unit} " if intent.unit else ""
        message = f"{ACTION_VERBS[kind]} {intent.quantity:g} {unit_text}{intent.item.strip()}."

        return CommandResult(
            message=message,
            transaction=transaction,
            inventory=snapshot,
            parsed=intent,
        )

    def handle_command(self, text: str) -> CommandResult:
        """Parse a transcribed command and record it."""
        intent = self.parser.parse(text)
        logger.info(f"Parsed command {text!r} as {intent.action.value}")
        return self.apply_intent(intent)
