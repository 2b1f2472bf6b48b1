"""KV REST API client (Vercel KV / Upstash Redis REST wire format).

Each command is POSTed to the endpoint as a JSON array, e.g.
``["SET", "abc12", "{...}", "NX"]``, authenticated with a bearer token. The
endpoint answers ``{"result": ...}`` or ``{"error": "..."}``.
"""

import json
import logging
from typing import Any, Optional

import httpx

from .base import KVStoreBase
from ..errors import StoreUnavailableError


class RestKVStore(KVStoreBase):
    """Key-value store reached over the KV REST API."""

    def __init__(
        self,
        url: str,
        token: str,
        timeout_seconds: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize REST store client.

        Args:
            url: REST endpoint (e.g. https://example.kv.vercel-storage.com)
            token: Access token
            timeout_seconds: Per-request timeout
            client: Optional pre-built httpx client (owned by the caller)
            logger: Optional logger instance
        """
        self.url = url.rstrip("/")
        self.logger = logger or logging.getLogger(__name__)
        self._headers = {"Authorization": f"Bearer {token}"}
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout_seconds)

    async def _command(self, *args: str) -> Any:
        """Run one command and return its ``result``."""
        try:
            response = await self.client.post(self.url, json=list(args), headers=self._headers)
        except httpx.HTTPError as e:
            self.logger.error(f"KV {args[0]} request failed: {e}")
            raise StoreUnavailableError(f"KV request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            self.logger.error(f"KV {args[0]} returned non-JSON (HTTP {response.status_code})")
            raise StoreUnavailableError(
                f"KV returned an unreadable response (HTTP {response.status_code})"
            ) from e

        if not isinstance(payload, dict):
            raise StoreUnavailableError("KV returned an unexpected response shape")

        if response.status_code >= 400 or "error" in payload:
            error = payload.get("error", f"HTTP {response.status_code}")
            self.logger.error(f"KV {args[0]} error: {error}")
            raise StoreUnavailableError(f"KV error: {error}")

        return payload.get("result")

    async def get(self, key: str) -> Optional[Any]:
        result = await self._command("GET", key)
        if result is None:
            return None
        if isinstance(result, str):
            try:
                return json.loads(result)
            except ValueError:
                # Plain string written by another client
                return result
        return result

    async def set(self, key: str, value: Any, only_if_absent: bool = False) -> bool:
        args = ["SET", key, json.dumps(value)]
        if only_if_absent:
            args.append("NX")
        result = await self._command(*args)
        return result == "OK"

    async def health_check(self) -> bool:
        try:
            return await self._command("PING") == "PONG"
        except StoreUnavailableError:
            return False

    async def close(self) -> None:
        if self._owns_client:
            await self.client.aclose()
            self.logger.info("KV REST client closed")
