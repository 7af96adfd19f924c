"""Best-effort cleanup of references to a shared entity."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass

from ..logging import get_logger
from ..models import DependentKind, SponsorForeignKey
from ..stores import DependentStores, MembershipStore
from .scanner import ScanResult

logger = get_logger(__name__)


@dataclass(frozen=True)
class FieldClearOp:
    """Set one foreign key on one dependent record to null."""

    kind: DependentKind
    record_id: int
    field: SponsorForeignKey


@dataclass(frozen=True)
class MembershipDeleteOp:
    """Remove one sponsor-in-line join row."""

    sponsor_id: int
    sponsor_line_id: int


@dataclass(frozen=True)
class DispatchSummary:
    attempted: int = 0
    failed: int = 0


def plan_field_clears(scan: ScanResult, foreign_key: SponsorForeignKey) -> list[FieldClearOp]:
    return [FieldClearOp(kind=kind, record_id=record.id, field=foreign_key) for kind, record in scan.hits()]


def plan_membership_deletes(pairs: Iterable[tuple[int, int]]) -> list[MembershipDeleteOp]:
    """Build deletions from ``(sponsor_id, sponsor_line_id)`` pairs, dropping repeats."""
    seen: set[tuple[int, int]] = set()
    ops: list[MembershipDeleteOp] = []
    for sponsor_id, sponsor_line_id in pairs:
        if (sponsor_id, sponsor_line_id) in seen:
            continue
        seen.add((sponsor_id, sponsor_line_id))
        ops.append(MembershipDeleteOp(sponsor_id=sponsor_id, sponsor_line_id=sponsor_line_id))
    return ops


class CleanupDispatcher:
    """Fires every cleanup op at once and waits for all of them to settle.

    Ops touch disjoint rows, so there is no ordering between them. Each op
    recovers from its own failure; ``dispatch`` never raises.
    """

    def __init__(self, stores: DependentStores, memberships: MembershipStore) -> None:
        self.stores = stores
        self.memberships = memberships

    async def dispatch(
        self,
        updates: list[FieldClearOp],
        deletions: list[MembershipDeleteOp],
    ) -> DispatchSummary:
        if not updates and not deletions:
            return DispatchSummary()

        outcomes = await asyncio.gather(
            *(self._clear_field(op) for op in updates),
            *(self._delete_membership(op) for op in deletions),
        )
        summary = DispatchSummary(attempted=len(outcomes), failed=outcomes.count(False))
        logger.info(
            "cleanup_batch_settled",
            updates=len(updates),
            deletions=len(deletions),
            failed=summary.failed,
        )
        return summary

    async def _clear_field(self, op: FieldClearOp) -> bool:
        try:
            await self.stores.by_kind(op.kind).update(op.record_id, {op.field: None})
        except Exception as exc:
            logger.warning(
                "cleanup_field_clear_failed",
                kind=op.kind,
                record_id=op.record_id,
                field=op.field,
                error=str(exc),
            )
            return False
        return True

    async def _delete_membership(self, op: MembershipDeleteOp) -> bool:
        try:
            await self.memberships.remove(op.sponsor_id, op.sponsor_line_id)
        except Exception as exc:
            logger.warning(
                "cleanup_membership_delete_failed",
                sponsor_id=op.sponsor_id,
                sponsor_line_id=op.sponsor_line_id,
                error=str(exc),
            )
            return False
        return True
