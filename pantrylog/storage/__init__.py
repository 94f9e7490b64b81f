"""Ledger persistence backends."""

from typing import Optional

from pantrylog.storage.base import PersistenceBackend
from pantrylog.storage.file_storage import JsonlFileBackend
from pantrylog.storage.memory import InMemoryBackend
from pantrylog.storage.sqlite_repo import SQLiteBackend

BACKENDS = {
    InMemoryBackend.name: InMemoryBackend,
    JsonlFileBackend.name: JsonlFileBackend,
    SQLiteBackend.name: SQLiteBackend,
}


def create_backend(kind: str, path: Optional[str] = None) -> PersistenceBackend:
    """
    Build a persistence backend by name.

    Args:
        kind: "memory", "file" or "sqlite"
        path: File or database path (ignored for memory)
    """
    try:
        backend_cls = BACKENDS[kind.lower()]
    except KeyError:
        raise ValueError(f"Unknown storage backend: {kind}. Use one of {sorted(BACKENDS)}")

    if backend_cls is InMemoryBackend or path is None:
        return backend_cls()
    return backend_cls(path)


__all__ = [
    "PersistenceBackend",
    "InMemoryBackend",
    "JsonlFileBackend",
    "SQLiteBackend",
    "create_backend",
]
