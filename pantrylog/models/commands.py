"""
Command Models

Structured intents produced by the natural-language parser and the
result returned to callers after an intent has been recorded.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from pantrylog.models.ledger import InventorySnapshot, Transaction


class CommandAction(str, Enum):
    """What the user asked for."""
    ADD = "add"
    REMOVE = "remove"
    UNKNOWN = "unknown"


class CommandIntent(BaseModel):
    """Pre-parsed command, possibly incomplete."""
    action: CommandAction = CommandAction.UNKNOWN
    item: Optional[str] = None
    quantity: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    unit: Optional[str] = None


class CommandResult(BaseModel):
    """Outcome of applying a command intent."""
    message: str
    transaction: Transaction
    inventory: InventorySnapshot
    parsed: CommandIntent
