"""Async REST client for the sports admin backend."""

from __future__ import annotations

from typing import Any

import httpx

from .config import settings
from .errors import ApiError, ResourceNotFoundError
from .logging import get_logger

logger = get_logger(__name__)


def get_api_headers() -> dict[str, str]:
    """Return headers for backend calls, including X-API-Key when configured."""
    headers: dict[str, str] = {"User-Agent": settings.client_config.user_agent}
    if settings.api_key:
        headers["X-API-Key"] = settings.api_key
    return headers


def _truncate_body(body: str | None, limit: int = 500) -> str | None:
    if not body:
        return None
    if len(body) <= limit:
        return body
    return f"{body[:limit]}..."


class ApiClient:
    """Thin wrapper over ``httpx.AsyncClient`` that raises ApiError on non-2xx.

    ``put`` and ``delete`` take the collection endpoint and an item id and
    join them as ``{endpoint}/{id}``. Pass ``client`` to reuse an existing
    ``httpx.AsyncClient`` (tests inject one built on ``httpx.MockTransport``).

    Delete responses are never decoded. Any other success body that is not
    JSON is logged and returned as None.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        config = settings.client_config
        self.client = client or httpx.AsyncClient(
            base_url=config.base_url,
            headers=get_api_headers(),
            timeout=config.request_timeout_seconds,
        )

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        data: Any = None,
        params: dict[str, Any] | None = None,
        decode: bool = True,
    ) -> Any:
        logger.debug("api_request", method=method, endpoint=endpoint)
        try:
            response = await self.client.request(method, endpoint, json=data, params=params)
        except httpx.HTTPError as exc:
            logger.warning("api_transport_error", method=method, endpoint=endpoint, error=str(exc))
            raise

        if not response.is_success:
            body = _truncate_body(response.text)
            logger.warning(
                "api_request_failed",
                method=method,
                endpoint=endpoint,
                status=response.status_code,
                body=body,
            )
            error_cls = ResourceNotFoundError if response.status_code == 404 else ApiError
            raise error_cls(response.status_code, method, endpoint, body)

        logger.debug("api_request_succeeded", method=method, endpoint=endpoint, status=response.status_code)
        if not decode or not response.content:
            return None
        content_type = response.headers.get("content-type", "")
        if "json" not in content_type:
            logger.warning(
                "api_response_not_json",
                method=method,
                endpoint=endpoint,
                content_type=content_type,
                body=_truncate_body(response.text),
            )
            return None
        return response.json()

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", endpoint, params=params)

    async def post(self, endpoint: str, data: Any = None) -> Any:
        return await self._request("POST", endpoint, data=data)

    async def put(self, endpoint: str, item_id: int, data: Any) -> Any:
        return await self._request("PUT", f"{endpoint}/{item_id}", data=data)

    async def delete(self, endpoint: str, item_id: int | str) -> None:
        await self._request("DELETE", f"{endpoint}/{item_id}", decode=False)
