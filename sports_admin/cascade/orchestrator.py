"""Delete a sponsor or sponsor line after clearing everything that points at it.

One ``CascadeRun`` is created per delete action:

    IDLE -> SCANNING -> RESOLVING -> [CLEANING ->] DELETING -> DONE | FAILED

The scan is started on entering SCANNING and runs alongside membership
resolution. CLEANING is skipped when nothing references the entity. Only
the final delete can fail the run; its error reaches the caller unchanged.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from ..api_client import ApiClient
from ..errors import CascadeStateError
from ..logging import get_logger
from ..models import SponsorForeignKey, SponsorLine
from ..stores import (
    DependentStores,
    MembershipStore,
    ResourceStore,
    sponsor_line_store,
    sponsor_store,
)
from .dispatcher import (
    CleanupDispatcher,
    DispatchSummary,
    FieldClearOp,
    MembershipDeleteOp,
    plan_field_clears,
    plan_membership_deletes,
)
from .resolver import MembershipResolver
from .scanner import ReferenceScanner

logger = get_logger(__name__)


class CascadeStage(str, Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    RESOLVING = "resolving"
    CLEANING = "cleaning"
    DELETING = "deleting"
    DONE = "done"
    FAILED = "failed"


_TRANSITIONS: dict[CascadeStage, frozenset[CascadeStage]] = {
    CascadeStage.IDLE: frozenset({CascadeStage.SCANNING}),
    CascadeStage.SCANNING: frozenset({CascadeStage.RESOLVING}),
    CascadeStage.RESOLVING: frozenset({CascadeStage.CLEANING, CascadeStage.DELETING}),
    CascadeStage.CLEANING: frozenset({CascadeStage.DELETING}),
    CascadeStage.DELETING: frozenset({CascadeStage.DONE, CascadeStage.FAILED}),
    CascadeStage.DONE: frozenset(),
    CascadeStage.FAILED: frozenset(),
}


@dataclass(frozen=True)
class CascadeTarget:
    """Which shared entity is deleted and which foreign key points at it."""

    kind: Literal["sponsor", "sponsor_line"]
    foreign_key: SponsorForeignKey


SPONSOR = CascadeTarget(kind="sponsor", foreign_key="main_sponsor_id")
SPONSOR_LINE = CascadeTarget(kind="sponsor_line", foreign_key="sponsor_line_id")


@dataclass
class CascadeRun:
    """Transient state of one cascade. Never persisted.

    ``candidate_lines`` applies to sponsor cascades only: the lines to check
    for memberships. ``None`` means "read every sponsor line".
    """

    target: CascadeTarget
    entity_id: int
    candidate_lines: list[SponsorLine] | None = None
    stage: CascadeStage = CascadeStage.IDLE
    history: list[CascadeStage] = field(default_factory=lambda: [CascadeStage.IDLE])
    updates: list[FieldClearOp] = field(default_factory=list)
    deletions: list[MembershipDeleteOp] = field(default_factory=list)
    summary: DispatchSummary | None = None

    def advance(self, stage: CascadeStage) -> None:
        if stage not in _TRANSITIONS[self.stage]:
            raise CascadeStateError(
                f"{self.target.kind} cascade {self.entity_id}: {self.stage.value} -> {stage.value} not allowed"
            )
        self.stage = stage
        self.history.append(stage)
        logger.debug(
            "cascade_stage_entered",
            cascade=self.target.kind,
            entity_id=self.entity_id,
            stage=stage.value,
        )

    @property
    def finished(self) -> bool:
        return self.stage in (CascadeStage.DONE, CascadeStage.FAILED)


class CascadeOrchestrator:
    def __init__(
        self,
        scanner: ReferenceScanner,
        resolver: MembershipResolver,
        dispatcher: CleanupDispatcher,
        sponsors: ResourceStore[Any],
        sponsor_lines: ResourceStore[Any],
    ) -> None:
        self.scanner = scanner
        self.resolver = resolver
        self.dispatcher = dispatcher
        self.sponsors = sponsors
        self.sponsor_lines = sponsor_lines

    @classmethod
    def from_client(cls, client: ApiClient) -> CascadeOrchestrator:
        stores = DependentStores.from_client(client)
        memberships = MembershipStore(client)
        return cls(
            scanner=ReferenceScanner(stores),
            resolver=MembershipResolver(memberships),
            dispatcher=CleanupDispatcher(stores, memberships),
            sponsors=sponsor_store(client),
            sponsor_lines=sponsor_line_store(client),
        )

    async def delete_sponsor_with_connections(
        self,
        sponsor_id: int,
        connected_lines: list[SponsorLine] | None = None,
    ) -> CascadeRun:
        run = CascadeRun(target=SPONSOR, entity_id=sponsor_id, candidate_lines=connected_lines)
        return await self.execute(run)

    async def delete_sponsor_line_with_connections(self, sponsor_line_id: int) -> CascadeRun:
        return await self.execute(CascadeRun(target=SPONSOR_LINE, entity_id=sponsor_line_id))

    async def execute(self, run: CascadeRun) -> CascadeRun:
        log = logger.bind(cascade=run.target.kind, entity_id=run.entity_id)

        run.advance(CascadeStage.SCANNING)
        scan_task = asyncio.create_task(self.scanner.scan(run.entity_id, run.target.foreign_key))

        run.advance(CascadeStage.RESOLVING)
        scan, deletions = await asyncio.gather(scan_task, self._resolve_memberships(run))
        run.updates = plan_field_clears(scan, run.target.foreign_key)
        run.deletions = deletions

        if run.updates or run.deletions:
            run.advance(CascadeStage.CLEANING)
            run.summary = await self.dispatcher.dispatch(run.updates, run.deletions)

        run.advance(CascadeStage.DELETING)
        try:
            await self._entity_store(run.target).delete(run.entity_id)
        except Exception as exc:
            run.advance(CascadeStage.FAILED)
            log.warning("cascade_delete_failed", error=str(exc))
            raise

        run.advance(CascadeStage.DONE)
        log.info(
            "cascade_complete",
            field_clears=len(run.updates),
            membership_deletes=len(run.deletions),
            cleanup_failed=run.summary.failed if run.summary else 0,
        )
        return run

    def _entity_store(self, target: CascadeTarget) -> ResourceStore[Any]:
        return self.sponsors if target.kind == "sponsor" else self.sponsor_lines

    async def _resolve_memberships(self, run: CascadeRun) -> list[MembershipDeleteOp]:
        if run.target.kind == "sponsor_line":
            members = await self.resolver.resolve_sponsors(run.entity_id)
            return plan_membership_deletes((entry.sponsor.id, run.entity_id) for entry in members)

        candidates = run.candidate_lines
        if candidates is None:
            candidates = await self._load_sponsor_lines()
        lines = await self.resolver.resolve_lines(run.entity_id, candidates)
        return plan_membership_deletes((run.entity_id, line.id) for line in lines)

    async def _load_sponsor_lines(self) -> list[SponsorLine]:
        try:
            return await self.sponsor_lines.list_all()
        except Exception as exc:
            logger.warning("sponsor_lines_read_failed", error=str(exc))
            return []
