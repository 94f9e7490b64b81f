"""
API Dependencies

Dependency injection for services.
"""

import logging
from functools import lru_cache

from api.config import get_settings
from pantrylog.services import CommandParser, InventoryService
from pantrylog.storage import PersistenceBackend, create_backend

logger = logging.getLogger(__name__)


@lru_cache()
def get_backend() -> PersistenceBackend:
    """Get the configured ledger backend."""
    settings = get_settings()
    backend = create_backend(settings.storage_backend, settings.storage_path)
    logger.info(f"Using {backend.name} ledger backend")
    return backend


@lru_cache()
def get_command_parser() -> CommandParser:
    """Get singleton command parser."""
    settings = get_settings()
    return CommandParser(api_key=settings.openai_api_key, model=settings.openai_model)


@lru_cache()
def get_inventory_service() -> InventoryService:
    """Get singleton inventory service."""
    return InventoryService(backend=get_backend(), parser=get_command_parser())
