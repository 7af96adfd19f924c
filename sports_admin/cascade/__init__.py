"""Cascading reference cleanup for sponsor and sponsor line deletes."""

from .dispatcher import (
    CleanupDispatcher,
    DispatchSummary,
    FieldClearOp,
    MembershipDeleteOp,
    plan_field_clears,
    plan_membership_deletes,
)
from .orchestrator import (
    SPONSOR,
    SPONSOR_LINE,
    CascadeOrchestrator,
    CascadeRun,
    CascadeStage,
    CascadeTarget,
)
from .resolver import MembershipResolver
from .scanner import DEPENDENT_KINDS, ReferenceScanner, ScanResult

__all__ = [
    "CascadeOrchestrator",
    "CascadeRun",
    "CascadeStage",
    "CascadeTarget",
    "SPONSOR",
    "SPONSOR_LINE",
    "ReferenceScanner",
    "ScanResult",
    "DEPENDENT_KINDS",
    "MembershipResolver",
    "CleanupDispatcher",
    "DispatchSummary",
    "FieldClearOp",
    "MembershipDeleteOp",
    "plan_field_clears",
    "plan_membership_deletes",
]
