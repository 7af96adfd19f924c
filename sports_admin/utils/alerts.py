"""Confirm-then-act helpers that report the outcome through an alert sink.

The helpers never decide what an operation does; they only ask first
(for deletes), announce success or failure, and re-raise failures so the
caller still sees them.
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Awaitable, Callable
from typing import Literal, Protocol, TextIO, TypeVar

from ..logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Appearance = Literal["positive", "negative"]


class Confirmer(Protocol):
    async def confirm(self, label: str, content: str, *, yes: str, no: str) -> bool: ...


class Alerts(Protocol):
    def open(self, message: str, *, label: str, appearance: Appearance) -> None: ...


def _error_message(exc: BaseException) -> str:
    return str(exc) or "Unknown error"


async def _run_with_alert(
    alerts: Alerts,
    operation: Callable[[], Awaitable[T]],
    on_success: Callable[[], None] | None,
    success_message: str,
    failure_prefix: str,
) -> T:
    try:
        result = await operation()
    except Exception as exc:
        alerts.open(f"{failure_prefix}: {_error_message(exc)}", label="Error", appearance="negative")
        raise
    alerts.open(success_message, label="Success", appearance="positive")
    if on_success is not None:
        on_success()
    return result


async def with_create_alert(
    alerts: Alerts,
    operation: Callable[[], Awaitable[T]],
    entity_type: str,
    on_success: Callable[[], None] | None = None,
) -> T:
    return await _run_with_alert(
        alerts, operation, on_success, f"{entity_type} created successfully", "Failed to create"
    )


async def with_update_alert(
    alerts: Alerts,
    operation: Callable[[], Awaitable[T]],
    entity_type: str,
    on_success: Callable[[], None] | None = None,
) -> T:
    return await _run_with_alert(
        alerts, operation, on_success, f"{entity_type} updated successfully", "Failed to update"
    )


async def with_delete_confirm(
    confirmer: Confirmer,
    alerts: Alerts,
    *,
    label: str,
    content: str,
    operation: Callable[[], Awaitable[T]],
    entity_type: str,
    on_success: Callable[[], None] | None = None,
) -> T | None:
    """Ask before deleting. Returns None without calling ``operation`` when declined."""
    if not await confirmer.confirm(label, content, yes="Delete", no="Cancel"):
        logger.info("delete_declined", entity_type=entity_type)
        return None
    return await _run_with_alert(
        alerts, operation, on_success, f"{entity_type} deleted successfully", "Failed to delete"
    )


class ConsoleConfirmer:
    """Yes/no prompt on the terminal. ``assume_yes`` skips the prompt."""

    def __init__(self, *, assume_yes: bool = False, input_func: Callable[[str], str] | None = None) -> None:
        self.assume_yes = assume_yes
        self._input = input_func or input

    async def confirm(self, label: str, content: str, *, yes: str, no: str) -> bool:
        if self.assume_yes:
            return True
        answer = await asyncio.to_thread(self._input, f"{label}\n{content} [{yes}/{no}]: ")
        return answer.strip().lower() in {"y", "yes", yes.lower()}


class ConsoleAlerts:
    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream

    def open(self, message: str, *, label: str, appearance: Appearance) -> None:
        logger.info("alert_opened", label=label, appearance=appearance, alert=message)
        print(f"[{label}] {message}", file=self.stream or sys.stdout)
