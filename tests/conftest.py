"""Pytest configuration and fixtures."""

import json
import os
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from types import SimpleNamespace
from typing import Generator, List

import pytest
from fastapi.testclient import TestClient

# Set test environment before importing app
os.environ["DEBUG"] = "true"
os.environ["API_KEYS"] = ""
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["OPENAI_API_KEY"] = ""

from pantrylog.models import Transaction, TransactionKind  # noqa: E402
from pantrylog.services import CommandParser, InventoryService  # noqa: E402
from pantrylog.storage import InMemoryBackend  # noqa: E402


class FakeCompletions:
    """Stands in for client.chat.completions; replies with queued payloads."""

    def __init__(self):
        self.replies: List[str] = []
        self.calls: List[dict] = []

    def queue(self, payload) -> None:
        self.replies.append(payload if isinstance(payload, str) else json.dumps(payload))

    def create(self, **kwargs):
        self.calls.append(kwargs)
        content = self.replies.pop(0)
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    def __init__(self):
        self.chat = SimpleNamespace(completions=FakeCompletions())


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_openai() -> FakeOpenAI:
    return FakeOpenAI()


@pytest.fixture
def parser(fake_openai) -> CommandParser:
    return CommandParser(api_key="test-key", client=fake_openai)


@pytest.fixture
def service(parser) -> InventoryService:
    """Inventory service on a fresh in-memory ledger."""
    return InventoryService(backend=InMemoryBackend(), parser=parser)


@pytest.fixture
def api_client(service) -> Generator[TestClient, None, None]:
    """Create a FastAPI test client wired to the test service."""
    from api.dependencies import get_backend, get_inventory_service
    from api.main import app

    app.dependency_overrides[get_inventory_service] = lambda: service
    app.dependency_overrides[get_backend] = lambda: service.ledger.backend

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_transactions():
    """
    Build a ledger from (kind, quantity, name, unit) tuples.

    Timestamps are one second apart, in list order.
    """
    def _make(*entries) -> List[Transaction]:
        start = datetime(2024, 3, 1, 12, 0, 0)
        return [
            Transaction(
                id=f"tx_{i}",
                timestamp=start + timedelta(seconds=i),
                kind=TransactionKind(kind),
                item_name=name,
                quantity=quantity,
                unit=unit,
            )
            for i, (kind, quantity, name, unit) in enumerate(entries)
        ]

    return _make
