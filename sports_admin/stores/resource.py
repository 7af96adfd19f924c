"""Generic REST-backed stores for admin entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from ..api_client import ApiClient
from ..models import (
    DependentKind,
    Match,
    PaginatedResponse,
    Sponsor,
    SponsorLine,
    Team,
    Tournament,
)

M = TypeVar("M", bound=BaseModel)

TEAMS_ENDPOINT = "/api/teams"
TOURNAMENTS_ENDPOINT = "/api/tournaments"
MATCHES_ENDPOINT = "/api/matches"
SPONSORS_ENDPOINT = "/api/sponsors"
SPONSOR_LINES_ENDPOINT = "/api/sponsor_lines"


class ResourceStore(Generic[M]):
    """list/get/create/update/delete for one entity collection.

    ``endpoint`` is the item prefix (``/api/teams`` -> ``/api/teams/{id}``);
    ``list_path`` is the full-collection URL, which on this backend usually
    carries a trailing slash.
    """

    def __init__(
        self,
        client: ApiClient,
        endpoint: str,
        model: type[M],
        *,
        list_path: str | None = None,
    ) -> None:
        self.client = client
        self.endpoint = endpoint
        self.model = model
        self.list_path = list_path if list_path is not None else f"{endpoint}/"

    def __repr__(self) -> str:
        return f"ResourceStore({self.endpoint!r}, {self.model.__name__})"

    async def list_all(self) -> list[M]:
        payload = await self.client.get(self.list_path)
        return [self.model.model_validate(item) for item in payload or []]

    async def list_paginated(self, page: int, items_per_page: int) -> PaginatedResponse[M]:
        params = {"page": page, "items_per_page": items_per_page}
        payload = await self.client.get(self.list_path, params=params)
        return PaginatedResponse[self.model].model_validate(payload)

    async def get(self, item_id: int) -> M:
        payload = await self.client.get(f"{self.endpoint}/{item_id}")
        return self.model.model_validate(payload)

    async def create(self, data: dict[str, Any]) -> M:
        payload = await self.client.post(self.list_path, data)
        return self.model.model_validate(payload)

    async def update(self, item_id: int, data: dict[str, Any]) -> M | None:
        payload = await self.client.put(self.endpoint, item_id, data)
        if payload is None:
            return None
        return self.model.model_validate(payload)

    async def delete(self, item_id: int) -> None:
        await self.client.delete(self.endpoint, item_id)


@dataclass(frozen=True)
class DependentStores:
    """The three collections that can reference a sponsor or sponsor line."""

    teams: ResourceStore[Team]
    tournaments: ResourceStore[Tournament]
    matches: ResourceStore[Match]

    @classmethod
    def from_client(cls, client: ApiClient) -> DependentStores:
        return cls(
            teams=ResourceStore(client, TEAMS_ENDPOINT, Team),
            tournaments=ResourceStore(client, TOURNAMENTS_ENDPOINT, Tournament),
            matches=ResourceStore(client, MATCHES_ENDPOINT, Match),
        )

    def by_kind(self, kind: DependentKind) -> ResourceStore[Any]:
        return getattr(self, kind)


def sponsor_store(client: ApiClient) -> ResourceStore[Sponsor]:
    return ResourceStore(client, SPONSORS_ENDPOINT, Sponsor)


def sponsor_line_store(client: ApiClient) -> ResourceStore[SponsorLine]:
    # The sponsor line collection is served without a trailing slash.
    return ResourceStore(client, SPONSOR_LINES_ENDPOINT, SponsorLine, list_path=SPONSOR_LINES_ENDPOINT)
