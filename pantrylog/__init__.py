"""
PantryLog Core Package

Ledger-backed kitchen inventory: unit normalization, the append-only
transaction ledger and the fold that derives the current inventory.
No framework dependencies (Streamlit, FastAPI) in this package.
"""

__version__ = "0.1.0"

from pantrylog.models.commands import CommandIntent, CommandResult
from pantrylog.models.ledger import InventoryItem, InventorySnapshot, Transaction, TransactionKind, UnitConflict

__all__ = [
    "Transaction",
    "TransactionKind",
    "InventoryItem",
    "InventorySnapshot",
    "UnitConflict",
    "CommandIntent",
    "CommandResult",
]
