"""
Inventory API Routes

Record kitchen events (as free text or pre-parsed) and read the inventory.
"""

from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.dependencies import get_inventory_service
from api.middleware.auth import verify_api_key
from pantrylog.models import CommandIntent, CommandResult, InventoryItem, InventorySnapshot, Transaction
from pantrylog.services import InventoryService

router = APIRouter(dependencies=[Depends(verify_api_key)])


class CommandRequest(BaseModel):
    """A transcribed voice command."""
    command: str = Field(..., min_length=1, description="e.g. 'add two liters of milk'")


# =============================================================================
# Inventory
# =============================================================================

@router.get("", response_model=List[InventoryItem])
def list_inventory(
    service: InventoryService = Depends(get_inventory_service),
):
    """Current inventory: one line per item in stock."""
    return service.current_items()


@router.get("/snapshot", response_model=InventorySnapshot)
def get_snapshot(
    service: InventoryService = Depends(get_inventory_service),
):
    """Current inventory together with unresolved unit conflicts."""
    return service.current_snapshot()


@router.get("/transactions", response_model=List[Transaction])
def list_transactions(
    service: InventoryService = Depends(get_inventory_service),
):
    """Full ledger history, oldest first."""
    return service.history()


# =============================================================================
# Events
# =============================================================================

@router.post("/commands", response_model=CommandResult)
def run_command(
    request: CommandRequest,
    service: InventoryService = Depends(get_inventory_service),
):
    """
    Parse and record a spoken command.

    Examples:
    - "add 2 kg apples"
    - "we drank a liter of milk"
    """
    return service.handle_command(request.command.strip())


@router.post("/events", response_model=CommandResult)
def record_event(
    intent: CommandIntent,
    service: InventoryService = Depends(get_inventory_service),
):
    """Record an already-parsed command."""
    return service.apply_intent(intent)
