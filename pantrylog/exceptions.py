"""Error kinds raised by the inventory core."""

from typing import Any, Dict, Optional

from pantrylog.models.ledger import UnitConflict


class InventoryError(Exception):
    """Base class for inventory errors."""

    code = "INVENTORY_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ParseRejectedError(InventoryError):
    """The upstream command intent was unusable; nothing was recorded."""

    code = "PARSE_REJECTED"


class PersistenceFailureError(InventoryError):
    """The persistence backend failed to read or durably write."""

    code = "PERSISTENCE_FAILURE"


class UnitConflictError(InventoryError):
    """An add used a unit incompatible with the item's non-empty balance."""

    code = "UNIT_CONFLICT"

    def __init__(self, conflict: UnitConflict):
        self.conflict = conflict
        super().__init__(
            f"Cannot add {conflict.incoming_unit} to {conflict.item_name}: "
            f"{conflict.current_quantity:g} {conflict.current_unit} on hand",
            details=conflict.model_dump(),
        )
