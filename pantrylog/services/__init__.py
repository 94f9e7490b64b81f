"""
PantryLog Business Logic Services

Normalization and aggregation are pure functions; the ledger and the
inventory service sit on top of a pluggable persistence backend.
"""

from pantrylog.services.aggregator import aggregate, build_snapshot, find_add_conflict
from pantrylog.services.command_parser import CommandParser
from pantrylog.services.inventory_service import InventoryService
from pantrylog.services.ledger import Ledger
from pantrylog.services.unit_normalizer import normalize

__all__ = [
    "normalize",
    "aggregate",
    "build_snapshot",
    "find_add_conflict",
    "Ledger",
    "CommandParser",
    "InventoryService",
]
