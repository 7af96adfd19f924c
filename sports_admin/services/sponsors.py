"""Sponsor and sponsor line operations used by the admin screens and CLI."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from typing import Any

from ..api_client import ApiClient
from ..cascade import CascadeOrchestrator, CascadeRun
from ..logging import get_logger
from ..models import PaginatedResponse, Sponsor, SponsorLine, SponsorLineSponsors
from ..stores import MembershipStore, ResourceStore, sponsor_line_store, sponsor_store

logger = get_logger(__name__)


def _drop_unset(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


class SponsorStore:
    """Facade over the sponsor, sponsor line and membership endpoints.

    Deletes go through the cascade orchestrator so nothing is left pointing
    at the removed entity. Membership edits from the line screen are plain
    writes: their failures propagate.
    """

    def __init__(
        self,
        sponsors: ResourceStore[Sponsor],
        sponsor_lines: ResourceStore[SponsorLine],
        memberships: MembershipStore,
        orchestrator: CascadeOrchestrator,
    ) -> None:
        self.sponsors = sponsors
        self.sponsor_lines = sponsor_lines
        self.memberships = memberships
        self.orchestrator = orchestrator
        self.resolver = orchestrator.resolver

    @classmethod
    def from_client(cls, client: ApiClient) -> SponsorStore:
        return cls(
            sponsors=sponsor_store(client),
            sponsor_lines=sponsor_line_store(client),
            memberships=MembershipStore(client),
            orchestrator=CascadeOrchestrator.from_client(client),
        )

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    async def list_sponsors(self) -> list[Sponsor]:
        return await self.sponsors.list_all()

    async def list_sponsor_lines(self) -> list[SponsorLine]:
        return await self.sponsor_lines.list_all()

    async def get_sponsors_paginated(self, page: int, items_per_page: int) -> PaginatedResponse[Sponsor]:
        return await self.sponsors.list_paginated(page, items_per_page)

    async def get_sponsor_line(self, sponsor_line_id: int) -> SponsorLine:
        return await self.sponsor_lines.get(sponsor_line_id)

    async def get_sponsors_in_sponsor_line(self, sponsor_line_id: int) -> SponsorLineSponsors:
        return await self.memberships.list_line_sponsors(sponsor_line_id)

    async def get_sponsor_line_connections(
        self,
        sponsor_id: int,
        sponsor_lines: list[SponsorLine],
    ) -> list[SponsorLine]:
        """Lines that currently contain the sponsor, in ``sponsor_lines`` order."""
        return await self.resolver.resolve_lines(sponsor_id, sponsor_lines)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------
    async def create_sponsor(
        self,
        title: str,
        logo_url: str | None = None,
        scale_logo: float | None = None,
    ) -> Sponsor:
        data = {"title": title, **_drop_unset({"logo_url": logo_url, "scale_logo": scale_logo})}
        return await self.sponsors.create(data)

    async def create_sponsor_line(self, title: str | None = None, is_visible: bool | None = None) -> SponsorLine:
        return await self.sponsor_lines.create(_drop_unset({"title": title, "is_visible": is_visible}))

    async def update_sponsor(self, sponsor_id: int, **changes: Any) -> Sponsor | None:
        return await self.sponsors.update(sponsor_id, changes)

    async def update_sponsor_line(self, sponsor_line_id: int, **changes: Any) -> SponsorLine | None:
        return await self.sponsor_lines.update(sponsor_line_id, changes)

    async def add_sponsor_to_line(self, sponsor_id: int, sponsor_line_id: int) -> None:
        await self.memberships.add(sponsor_id, sponsor_line_id)

    async def remove_sponsor_from_line(self, sponsor_id: int, sponsor_line_id: int) -> None:
        await self.memberships.remove(sponsor_id, sponsor_line_id)

    async def sync_line_sponsors(
        self,
        sponsor_line_id: int,
        previous_ids: Iterable[int],
        next_ids: Iterable[int],
    ) -> tuple[list[int], list[int]]:
        """Apply a new sponsor selection to a line.

        Returns ``(added, removed)``. Adds and removes run concurrently; the
        first failure is raised once all of them have been issued.
        """
        previous = list(dict.fromkeys(previous_ids))
        selected = list(dict.fromkeys(next_ids))
        added = [sponsor_id for sponsor_id in selected if sponsor_id not in previous]
        removed = [sponsor_id for sponsor_id in previous if sponsor_id not in selected]
        if not added and not removed:
            return [], []

        logger.info("line_sponsors_sync", sponsor_line_id=sponsor_line_id, added=added, removed=removed)
        await asyncio.gather(
            *(self.add_sponsor_to_line(sponsor_id, sponsor_line_id) for sponsor_id in added),
            *(self.remove_sponsor_from_line(sponsor_id, sponsor_line_id) for sponsor_id in removed),
        )
        return added, removed

    # -------------------------------------------------------------------------
    # Cascading deletes
    # -------------------------------------------------------------------------
    async def delete_sponsor_with_connections(
        self,
        sponsor_id: int,
        connected_lines: list[SponsorLine] | None = None,
    ) -> CascadeRun:
        return await self.orchestrator.delete_sponsor_with_connections(sponsor_id, connected_lines)

    async def delete_sponsor_line_with_connections(self, sponsor_line_id: int) -> CascadeRun:
        return await self.orchestrator.delete_sponsor_line_with_connections(sponsor_line_id)
