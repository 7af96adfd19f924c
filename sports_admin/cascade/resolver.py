"""Resolve sponsor-in-line memberships from either side of the join."""

from __future__ import annotations

import asyncio

from ..logging import get_logger
from ..models import SponsorInLine, SponsorLine
from ..stores import MembershipStore

logger = get_logger(__name__)


class MembershipResolver:
    """Look up which lines hold a sponsor, or which sponsors a line holds.

    A sponsor carries no back-reference to its lines, so the sponsor side
    queries every candidate line (one query each). A line owns its membership
    list and needs a single query. Failed queries resolve to "no members".
    """

    def __init__(self, memberships: MembershipStore) -> None:
        self.memberships = memberships

    async def resolve_lines(self, sponsor_id: int, candidate_lines: list[SponsorLine]) -> list[SponsorLine]:
        if not candidate_lines:
            return []
        found = await asyncio.gather(
            *(self._line_contains(line, sponsor_id) for line in candidate_lines)
        )
        return [line for line, contains in zip(candidate_lines, found) if contains]

    async def resolve_sponsors(self, sponsor_line_id: int) -> list[SponsorInLine]:
        try:
            connections = await self.memberships.list_line_sponsors(sponsor_line_id)
        except Exception as exc:
            logger.warning("line_membership_read_failed", sponsor_line_id=sponsor_line_id, error=str(exc))
            return []
        return connections.sponsors

    async def _line_contains(self, line: SponsorLine, sponsor_id: int) -> bool:
        try:
            connections = await self.memberships.list_line_sponsors(line.id)
        except Exception as exc:
            logger.warning(
                "line_membership_check_failed",
                sponsor_id=sponsor_id,
                sponsor_line_id=line.id,
                error=str(exc),
            )
            return False
        return any(entry.sponsor.id == sponsor_id for entry in connections.sponsors)
