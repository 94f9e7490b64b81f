"""Data models for PantryLog."""

from pantrylog.models.commands import CommandAction, CommandIntent, CommandResult
from pantrylog.models.ledger import (
    InventoryItem,
    InventorySnapshot,
    NormalizedQuantity,
    Transaction,
    TransactionKind,
    UnitConflict,
)

__all__ = [
    # Ledger
    "TransactionKind",
    "Transaction",
    "NormalizedQuantity",
    "InventoryItem",
    "UnitConflict",
    "InventorySnapshot",
    # Commands
    "CommandAction",
    "CommandIntent",
    "CommandResult",
]
