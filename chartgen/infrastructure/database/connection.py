"""Supabase REST (PostgREST) access using httpx.

Every request is sent with the caller's access token so the database's own
row-level policies decide what the caller can reach.
"""

import logging
from typing import Any

import httpx

from chartgen.config.settings import Settings

logger = logging.getLogger(__name__)


class ExecutionChannelError(Exception):
    """The execution channel refused or failed a request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    """Extract PostgREST's error message, falling back to the raw body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "error_description", "error", "msg"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    text = response.text.strip()
    return text or f"HTTP {response.status_code}"


class SupabaseRestClient:
    """
    Thin async client for Supabase's REST endpoint.

    Usage:
        async with SupabaseRestClient(settings) as rest:
            rows = await rest.rpc("SELECT ...", access_token=token)
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        self.settings = settings
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=f"{settings.supabase_url.rstrip('/')}/rest/v1",
            timeout=settings.execution_timeout,
        )

    async def __aenter__(self) -> "SupabaseRestClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    def _headers(self, access_token: str | None) -> dict[str, str]:
        bearer = access_token or self.settings.supabase_anon_key
        return {
            "apikey": self.settings.supabase_anon_key,
            "Authorization": f"Bearer {bearer}",
            "Content-Type": "application/json",
        }

    async def rpc(self, sql: str, access_token: str | None = None) -> list[Any]:
        """
        Run one SQL string through the configured RPC function.

        Args:
            sql: Pre-validated SQL text, sent as a single named argument
            access_token: Caller's access token for row-level policy

        Returns:
            Rows as returned by the function; a non-list body counts as no rows

        Raises:
            ExecutionChannelError: transport failure or non-2xx response
        """
        path = f"/rpc/{self.settings.sql_rpc_function}"
        payload = {self.settings.sql_rpc_argument: sql}
        try:
            response = await self._client.post(path, json=payload, headers=self._headers(access_token))
        except httpx.HTTPError as e:
            logger.error("Execution channel transport error: %s", e)
            raise ExecutionChannelError(str(e) or type(e).__name__) from e

        if response.is_error:
            message = _error_message(response)
            logger.error("Execution channel error (%s): %s", response.status_code, message)
            raise ExecutionChannelError(message, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ExecutionChannelError("Execution channel returned invalid JSON") from e

        if not isinstance(data, list):
            logger.debug("RPC returned %s instead of a list, treating as no rows", type(data).__name__)
            return []
        return data

    async def select(
        self,
        table: str,
        params: dict[str, str],
        access_token: str | None = None,
    ) -> list[dict[str, Any]]:
        """Read rows from *table* with PostgREST query params (``select``, ``id=eq.x``)."""
        try:
            response = await self._client.get(
                f"/{table}", params=params, headers=self._headers(access_token)
            )
        except httpx.HTTPError as e:
            raise ExecutionChannelError(str(e) or type(e).__name__) from e

        if response.is_error:
            raise ExecutionChannelError(_error_message(response), status_code=response.status_code)

        data = response.json()
        if not isinstance(data, list):
            return []
        return [row for row in data if isinstance(row, dict)]
