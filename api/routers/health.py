"""Health check endpoints."""

from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Depends

from api.config import Settings, get_settings
from api.dependencies import get_backend
from pantrylog.exceptions import PersistenceFailureError
from pantrylog.storage import PersistenceBackend

router = APIRouter()


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """
    Basic liveness check.

    Returns 200 if the service is running.
    """
    return {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat() + "Z"
    }


@router.get("/health/ready")
def readiness_check(
    settings: Settings = Depends(get_settings),
    backend: PersistenceBackend = Depends(get_backend),
) -> Dict[str, Any]:
    """
    Readiness check - verifies dependencies are available.

    Checks:
    - Ledger storage (loads the full history)
    - OpenAI API (if configured)
    """
    checks: Dict[str, Dict[str, Any]] = {}

    try:
        transactions = backend.load_all()
        checks["ledger"] = {
            "status": "ok",
            "backend": backend.name,
            "transactions": len(transactions),
        }
    except PersistenceFailureError as e:
        checks["ledger"] = {"status": "error", "backend": backend.name, "message": e.message}

    # Parsing commands needs OpenAI; the ledger works without it
    checks["openai"] = {"status": "configured" if settings.openai_api_key else "not_configured"}

    all_ok = checks["ledger"]["status"] == "ok"

    return {
        "status": "ready" if all_ok else "degraded",
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "version": settings.app_version,
        "checks": checks
    }


@router.get("/health/info")
async def service_info(
    settings: Settings = Depends(get_settings)
) -> Dict[str, Any]:
    """Return service information."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": "development" if settings.debug else "production",
        "storage_backend": settings.storage_backend,
    }
