"""
API Client for the PantryLog Streamlit UI

Provides a clean interface to the FastAPI backend.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests.exceptions import RequestException, Timeout

from ui.config import get_settings

logger = logging.getLogger(__name__)

INVENTORY_PATH = "/api/v1/inventory"


@dataclass
class APIResponse:
    """Wrapper for API responses."""
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    status_code: int = 0


class PantryLogClient:
    """
    Client for the PantryLog API.

    Usage:
        client = PantryLogClient()

        # Speak a command
        result = client.send_command("add two liters of milk")

        # Show the inventory
        result = client.get_snapshot()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.api_key = api_key or settings.api_key
        self.timeout = timeout or settings.request_timeout

        self.session = requests.Session()
        if self.api_key:
            self.session.headers["X-API-Key"] = self.api_key

    def _request(
        self,
        method: str,
        endpoint: str,
        **kwargs,
    ) -> APIResponse:
        """Make an API request."""
        url = f"{self.base_url}{endpoint}"

        # Set default timeout
        kwargs.setdefault("timeout", self.timeout)

        try:
            response = self.session.request(method, url, **kwargs)
        except Timeout:
            return APIResponse(success=False, error="Request timed out")
        except RequestException as e:
            logger.warning(f"Request to {url} failed: {e}")
            return APIResponse(success=False, error=f"Request failed: {e}")

        try:
            data = response.json() if response.content else {}
        except ValueError:
            data = {}

        if response.status_code >= 400:
            error = data.get("error", {}) if isinstance(data, dict) else {}
            return APIResponse(
                success=False,
                data=data,
                error=error.get("message") or response.text,
                status_code=response.status_code,
            )

        return APIResponse(success=True, data=data, status_code=response.status_code)

    # Health endpoints

    def health_check(self) -> APIResponse:
        """Check if the API is healthy."""
        return self._request("GET", "/health")

    # Inventory endpoints

    def get_snapshot(self) -> APIResponse:
        """Current inventory and unit conflicts."""
        return self._request("GET", f"{INVENTORY_PATH}/snapshot")

    def send_command(self, command: str) -> APIResponse:
        """Parse and record a spoken command."""
        return self._request("POST", f"{INVENTORY_PATH}/commands", json={"command": command})

    def record_event(
        self,
        action: str,
        item: str,
        quantity: float,
        unit: Optional[str] = None,
    ) -> APIResponse:
        """Record an already-parsed command."""
        body = {"action": action, "item": item, "quantity": quantity}
        if unit:
            body["unit"] = unit
        return self._request("POST", f"{INVENTORY_PATH}/events", json=body)


# Singleton client instance
_client: Optional[PantryLogClient] = None


def get_client() -> PantryLogClient:
    """Get or create the API client singleton."""
    global _client
    if _client is None:
        _client = PantryLogClient()
    return _client
