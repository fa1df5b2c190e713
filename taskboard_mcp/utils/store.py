"""Row-level client for the remote task store."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic_core import to_jsonable_python

from taskboard_mcp.config import Settings
from taskboard_mcp.errors import StoreError

logger = logging.getLogger(__name__)

SINGLE_OBJECT = "application/vnd.pgrst.object+json"


@dataclass
class StoreResponse:
    """Result of a store call: either ``data`` or ``error`` is meaningful."""

    data: Any = None
    error: StoreError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _eq_filters(filters: dict[str, Any] | None) -> dict[str, str]:
    """Turn ``{"id": 5}`` into PostgREST query parameters (``id=eq.5``)."""
    params: dict[str, str] = {}
    for column, value in (filters or {}).items():
        if value is None:
            params[column] = "is.null"
        else:
            params[column] = f"eq.{to_jsonable_python(value)}"
    return params


def _error_from_response(response: httpx.Response) -> StoreError:
    """Build a StoreError from the backend's JSON error body, falling back to the status."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        message = body.get("message") or body.get("msg") or body.get("error") or response.reason_phrase
        code = body.get("code")
        return StoreError(str(message), str(code) if code else str(response.status_code))

    message = response.text.strip() or response.reason_phrase or "Request failed"
    return StoreError(message, str(response.status_code))


class RemoteStore:
    """
    Thin async client over a PostgREST-style REST endpoint.

    Each method is a single round trip. Nothing is retried; transport
    failures and backend errors come back as ``StoreResponse.error``.
    """

    def __init__(
        self,
        settings: Settings,
        token_provider: Callable[[], str | None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._token_provider = token_provider or (lambda: None)
        self._client = httpx.AsyncClient(
            base_url=settings.rest_url,
            timeout=settings.timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        token = self._token_provider() or self._settings.anon_key
        headers = {
            "apikey": self._settings.anon_key,
            "Authorization": f"Bearer {token}",
        }
        if extra:
            headers.update(extra)
        return headers

    async def _request(
        self,
        method: str,
        collection: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> StoreResponse:
        logger.debug("%s %s params=%s", method, collection, params)
        try:
            response = await self._client.request(
                method,
                f"/{collection}",
                params=params,
                json=to_jsonable_python(json) if json is not None else None,
                headers=self._headers(headers),
            )
        except httpx.TimeoutException as e:
            return StoreResponse(error=StoreError(f"Request timed out: {e}", "timeout"))
        except httpx.HTTPError as e:
            return StoreResponse(error=StoreError(f"{type(e).__name__}: {e}", "network"))

        if response.is_error:
            error = _error_from_response(response)
            logger.warning("%s %s failed: %s", method, collection, error.describe())
            return StoreResponse(error=error)

        if not response.content:
            return StoreResponse(data=None)
        try:
            data = response.json()
        except ValueError:
            logger.warning("%s %s returned a non-JSON body", method, collection)
            return StoreResponse(error=StoreError("Invalid response body", str(response.status_code)))
        return StoreResponse(data=data)

    async def select(
        self,
        collection: str,
        columns: str = "*",
        filters: dict[str, Any] | None = None,
        order: str | None = None,
        descending: bool = False,
        single: bool = False,
    ) -> StoreResponse:
        """
        Fetch rows from a collection.

        Args:
            collection: Table name (e.g. ``tasks``)
            columns: Column list, may embed relations (``*,comments(*)``)
            filters: Equality predicates
            order: Column to order by
            descending: Order direction
            single: Expect exactly one row and return it as a dict

        Returns:
            StoreResponse with a list of rows (or one row when ``single``)
        """
        params = {"select": columns, **_eq_filters(filters)}
        if order:
            params["order"] = f"{order}.{'desc' if descending else 'asc'}"
        headers = {"Accept": SINGLE_OBJECT} if single else None
        return await self._request("GET", collection, params=params, headers=headers)

    async def insert(self, collection: str, rows: list[dict[str, Any]]) -> StoreResponse:
        """Insert rows and return them as stored."""
        return await self._request(
            "POST",
            collection,
            json=rows,
            headers={"Prefer": "return=representation"},
        )

    async def upsert(
        self,
        collection: str,
        rows: list[dict[str, Any]],
        on_conflict: str,
        ignore_duplicates: bool = True,
    ) -> StoreResponse:
        """Insert rows, resolving conflicts on ``on_conflict`` in a single atomic statement."""
        resolution = "ignore-duplicates" if ignore_duplicates else "merge-duplicates"
        return await self._request(
            "POST",
            collection,
            params={"on_conflict": on_conflict},
            json=rows,
            headers={"Prefer": f"resolution={resolution},return=representation"},
        )

    async def update(
        self,
        collection: str,
        patch: dict[str, Any],
        filters: dict[str, Any],
    ) -> StoreResponse:
        """Apply a partial patch to matching rows and return them."""
        return await self._request(
            "PATCH",
            collection,
            params=_eq_filters(filters),
            json=patch,
            headers={"Prefer": "return=representation"},
        )

    async def delete(self, collection: str, filters: dict[str, Any]) -> StoreResponse:
        """Delete matching rows."""
        return await self._request("DELETE", collection, params=_eq_filters(filters))
