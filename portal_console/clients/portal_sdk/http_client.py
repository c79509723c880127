from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from portal_console.app.infrastructure.logging.logger import get_logger
from portal_console.clients.portal_sdk.auth_store import AuthStore
from portal_console.clients.portal_sdk.errors import APIError

Sleeper = Callable[[float], Awaitable[None]]

logger = get_logger(__name__)


class HttpClient:
    def __init__(
        self,
        base_url: str,
        auth_store: AuthStore | None = None,
        timeout_seconds: float = 30,
        verify_ssl: bool = True,
        retry_max_attempts: int = 3,
        retry_backoff_ms: int = 150,
        client: httpx.AsyncClient | None = None,
        sleeper: Sleeper | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.auth_store = auth_store or AuthStore()
        self.retry_max_attempts = max(1, retry_max_attempts)
        self.retry_backoff_ms = max(0, retry_backoff_ms)
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds, verify=verify_ssl)
        self._sleeper = sleeper or asyncio.sleep
        self._unauthorized_handler: Callable[[APIError], None] | None = None

    def register_unauthorized_handler(self, handler: Callable[[APIError], None] | None) -> None:
        self._unauthorized_handler = handler

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        request_headers = {"Accept": "application/json", **(headers or {})}
        token = self.auth_store.get_token()
        if token:
            request_headers["Authorization"] = f"Bearer {token}"
        url = f"{self.base_url}/{path.lstrip('/')}"
        allow_retry = method.upper() == "GET"

        for attempt in range(1, self.retry_max_attempts + 1):
            try:
                response = await self._client.request(
                    method,
                    url,
                    params=params,
                    json=json_body,
                    headers=request_headers,
                )
            except httpx.TimeoutException as exc:
                if (not allow_retry) or attempt >= self.retry_max_attempts:
                    raise APIError(
                        code="TIMEOUT_ERROR",
                        message="The request timed out",
                        details=str(exc),
                    ) from exc
                await self._backoff(method, path, attempt)
                continue
            except httpx.TransportError as exc:
                if (not allow_retry) or attempt >= self.retry_max_attempts:
                    raise APIError(
                        code="NETWORK_ERROR",
                        message="Could not reach the portal API",
                        details=str(exc),
                    ) from exc
                await self._backoff(method, path, attempt)
                continue
            except httpx.RequestError as exc:
                raise APIError(
                    code="NETWORK_ERROR",
                    message="Could not reach the portal API",
                    details=str(exc),
                ) from exc

            if response.status_code >= 400:
                error = APIError.from_http_response(response)
                if allow_retry and self._is_retryable_status(response.status_code) and attempt < self.retry_max_attempts:
                    await self._backoff(method, path, attempt)
                    continue
                if response.status_code == 401 and "login" not in path:
                    self.auth_store.clear()
                    if self._unauthorized_handler:
                        self._unauthorized_handler(error)
                raise error
            return self._safe_json(response)
        raise APIError(code="NETWORK_ERROR", message="Could not reach the portal API", details="retry exhausted")

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _backoff(self, method: str, path: str, attempt: int) -> None:
        logger.warning("retrying %s %s (attempt %s/%s)", method.upper(), path, attempt + 1, self.retry_max_attempts)
        await self._sleeper((self.retry_backoff_ms * attempt) / 1000)

    @staticmethod
    def _is_retryable_status(status_code: int) -> bool:
        return 500 <= status_code <= 599

    @staticmethod
    def _safe_json(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None
