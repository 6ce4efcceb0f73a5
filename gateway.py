"""
HTTP gateway to the mock REST API.

Calls never raise on network or HTTP failure: they log a warning and return a
failed GatewayResult so the calling store can fall back to local data. There
is no retry; each call degrades at most once.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

import config

logger = logging.getLogger(__name__)


@dataclass
class GatewayResult:
    ok: bool
    data: Any = None
    error: Optional[str] = None
    status_code: Optional[int] = None


class RemoteGateway:
    def __init__(self, base_url: Optional[str] = None, client: Optional[httpx.Client] = None,
                 timeout: float = config.API_TIMEOUT):
        if client is None:
            client = httpx.Client(base_url=base_url or config.resolve_api_base_url(), timeout=timeout)
        self.client = client

    @property
    def base_url(self) -> str:
        return str(self.client.base_url)

    def _request(self, method: str, path: str, action: str, payload: Any = None) -> GatewayResult:
        try:
            response = self.client.request(method, path, json=payload)
        except httpx.HTTPError as e:
            logger.warning("Failed to %s: %s", action, e)
            return GatewayResult(ok=False, error=str(e) or type(e).__name__)

        if not response.is_success:
            logger.warning("Failed to %s: HTTP %s", action, response.status_code)
            return GatewayResult(ok=False, error=f"HTTP {response.status_code}", status_code=response.status_code)

        try:
            data = response.json() if response.content else None
        except ValueError:
            logger.warning("Failed to %s: response was not JSON", action)
            return GatewayResult(ok=False, error="Invalid JSON response", status_code=response.status_code)
        return GatewayResult(ok=True, data=data, status_code=response.status_code)

    def list(self, entity: str) -> GatewayResult:
        return self._request("GET", f"/{entity}", f"fetch {entity}")

    def create(self, entity: str, payload: dict) -> GatewayResult:
        return self._request("POST", f"/{entity}", f"create {entity}", payload)

    def update(self, entity: str, item_id: Any, payload: dict) -> GatewayResult:
        return self._request("PUT", f"/{entity}/{item_id}", f"update {entity}/{item_id}", payload)

    def delete(self, entity: str, item_id: Any) -> GatewayResult:
        return self._request("DELETE", f"/{entity}/{item_id}", f"delete {entity}/{item_id}")

    def health(self) -> GatewayResult:
        return self._request("GET", "/health", "check API health")

    def close(self) -> None:
        self.client.close()
