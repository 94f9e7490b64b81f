"""
Inventory Aggregator

Folds the ordered transaction history into the current inventory.

Per case-folded item name the fold tracks (quantity, unit):
- ADD on a depleted balance adopts the incoming unit.
- ADD in the same unit accumulates.
- ADD in another unit while stock remains is a unit conflict: it is
  reported and the balance is left untouched.
- REMOVE in the same unit subtracts (the balance may go negative).
- REMOVE in another unit is ignored.

Items whose final quantity is not positive are left out of the result.
The fold holds no state between calls.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from pantrylog.models.ledger import (
    InventoryItem,
    InventorySnapshot,
    Transaction,
    TransactionKind,
    UnitConflict,
)
from pantrylog.services.unit_normalizer import normalize

logger = logging.getLogger(__name__)

# Unit factors and decimal amounts (0.1 kg + 0.2 kg - 0.3 kg) leave float
# residue; a balance at or below this counts as zero
QUANTITY_EPSILON = 1e-9


@dataclass
class _Balance:
    quantity: float = 0.0
    unit: Optional[str] = None
    display_name: str = ""

    @property
    def depleted(self) -> bool:
        return self.quantity <= QUANTITY_EPSILON


def _apply(balance: _Balance, txn: Transaction) -> Optional[UnitConflict]:
    """Apply one transaction to a balance. Returns a conflict if the add was refused."""
    if txn.kind == TransactionKind.ADD:
        if balance.depleted:
            if balance.unit != txn.unit:
                # A negative remainder in the old unit means nothing in the new one
                balance.quantity = 0.0
                balance.unit = txn.unit
            balance.quantity += txn.quantity
        elif balance.unit == txn.unit:
            balance.quantity += txn.quantity
        else:
            return UnitConflict(
                transaction_id=txn.id,
                item_name=txn.item_name,
                current_quantity=balance.quantity,
                current_unit=balance.unit,
                incoming_quantity=txn.quantity,
                incoming_unit=txn.unit,
            )
    else:
        if balance.unit == txn.unit:
            balance.quantity -= txn.quantity
        else:
            logger.debug(
                f"Ignoring removal of {txn.quantity:g} {txn.unit} {txn.item_name}: "
                f"balance is kept in {balance.unit or 'no unit'}"
            )
    return None


def _fold(transactions: Iterable[Transaction]) -> Tuple[Dict[str, _Balance], List[UnitConflict]]:
    balances: Dict[str, _Balance] = {}
    conflicts: List[UnitConflict] = []

    for txn in transactions:
        balance = balances.setdefault(txn.item_key, _Balance())
        # Last transaction for the key wins the display name
        balance.display_name = txn.item_name

        conflict = _apply(balance, txn)
        if conflict:
            logger.debug(
                f"Unit conflict for {conflict.item_name}: "
                f"{conflict.incoming_unit} vs {conflict.current_unit}"
            )
            conflicts.append(conflict)

    return balances, conflicts


def _emit(balances: Dict[str, _Balance]) -> List[InventoryItem]:
    return [
        InventoryItem(name=b.display_name, quantity=b.quantity, unit=b.unit)
        for b in balances.values()
        # Zero up to float residue, see QUANTITY_EPSILON
        if b.quantity > QUANTITY_EPSILON
    ]


def aggregate(transactions: Sequence[Transaction]) -> List[InventoryItem]:
    """
    Derive the visible inventory from an ordered transaction sequence.

    Items are returned in the order their name first appears in the ledger.
    """
    balances, _ = _fold(transactions)
    return _emit(balances)


def build_snapshot(transactions: Sequence[Transaction]) -> InventorySnapshot:
    """Derive the inventory together with any unit conflicts found in the ledger."""
    balances, conflicts = _fold(transactions)
    return InventorySnapshot(
        items=_emit(balances),
        conflicts=conflicts,
        transaction_count=len(transactions),
    )


def find_add_conflict(
    transactions: Sequence[Transaction],
    item_name: str,
    quantity: float,
    unit: Optional[str] = None,
) -> Optional[UnitConflict]:
    """
    Check whether adding `quantity` `unit` of `item_name` would conflict.

    The unit is normalized the same way the ledger normalizes on append.
    """
    normalized = normalize(quantity, unit)
    key = item_name.lower()
    balances, _ = _fold(t for t in transactions if t.item_key == key)
    balance = balances.get(key)
    if balance is None or balance.depleted or balance.unit == normalized.unit:
        return None

    return UnitConflict(
        transaction_id="",
        item_name=item_name,
        current_quantity=balance.quantity,
        current_unit=balance.unit,
        incoming_quantity=normalized.quantity,
        incoming_unit=normalized.unit,
    )
