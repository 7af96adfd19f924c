"""Find dependent records that point at a sponsor or sponsor line."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import get_args

from ..logging import get_logger
from ..models import DependentKind, DependentRecord, SponsorForeignKey
from ..stores import DependentStores

logger = get_logger(__name__)

DEPENDENT_KINDS: tuple[DependentKind, ...] = get_args(DependentKind)


@dataclass(frozen=True)
class ScanResult:
    teams: list[DependentRecord] = field(default_factory=list)
    tournaments: list[DependentRecord] = field(default_factory=list)
    matches: list[DependentRecord] = field(default_factory=list)

    def hits(self) -> Iterator[tuple[DependentKind, DependentRecord]]:
        for kind in DEPENDENT_KINDS:
            for record in getattr(self, kind):
                yield kind, record

    @property
    def total(self) -> int:
        return len(self.teams) + len(self.tournaments) + len(self.matches)


class ReferenceScanner:
    """Reads the full team, tournament and match collections and filters them.

    The backend offers no server-side filter for this path, so every scan
    pulls all three collections. A failed read counts as an empty
    collection and never stops the other two.
    """

    def __init__(self, stores: DependentStores) -> None:
        self.stores = stores

    async def scan(self, entity_id: int, foreign_key: SponsorForeignKey) -> ScanResult:
        collections = await asyncio.gather(*(self._read(kind) for kind in DEPENDENT_KINDS))
        matched = {
            kind: [record for record in records if getattr(record, foreign_key) == entity_id]
            for kind, records in zip(DEPENDENT_KINDS, collections)
        }
        result = ScanResult(**matched)
        logger.debug(
            "dependent_scan_complete",
            entity_id=entity_id,
            foreign_key=foreign_key,
            teams=len(result.teams),
            tournaments=len(result.tournaments),
            matches=len(result.matches),
        )
        return result

    async def _read(self, kind: DependentKind) -> list[DependentRecord]:
        try:
            return await self.stores.by_kind(kind).list_all()
        except Exception as exc:
            logger.warning("dependent_scan_read_failed", kind=kind, error=str(exc))
            return []
