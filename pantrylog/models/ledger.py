"""
Ledger Data Models

Transactions are the only persisted data. Inventory items and snapshots
are derived from them on every read and never stored.
"""

from datetime import datetime
from enum import Enum
from typing import List, NamedTuple

from pydantic import BaseModel, ConfigDict, Field


class TransactionKind(str, Enum):
    """Direction of a quantity change."""
    ADD = "add"
    REMOVE = "remove"


class NormalizedQuantity(NamedTuple):
    """A quantity expressed in its canonical unit."""
    quantity: float
    unit: str


class Transaction(BaseModel):
    """A single immutable ledger entry."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique identifier, never reused")
    timestamp: datetime = Field(..., description="Creation time, non-decreasing within a ledger")
    kind: TransactionKind
    item_name: str = Field(..., min_length=1, description="Name as the user said it")
    quantity: float = Field(..., ge=0, allow_inf_nan=False, description="Already normalized to `unit`")
    unit: str = Field(..., min_length=1, description="Canonical unit (g, ml, count, ...)")

    @property
    def item_key(self) -> str:
        """Case-folded identity used for aggregation."""
        return self.item_name.lower()


class InventoryItem(BaseModel):
    """A visible line of the current inventory."""
    name: str
    quantity: float
    unit: str


class UnitConflict(BaseModel):
    """An add that was not applied because its unit did not match the balance."""
    transaction_id: str
    item_name: str
    current_quantity: float
    current_unit: str
    incoming_quantity: float
    incoming_unit: str


class InventorySnapshot(BaseModel):
    """Current inventory derived from the full ledger."""
    items: List[InventoryItem] = Field(default_factory=list)
    conflicts: List[UnitConflict] = Field(default_factory=list)
    transaction_count: int = 0
