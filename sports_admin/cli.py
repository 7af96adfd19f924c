"""Command-line entry point for sponsor administration.

Usage:
    sports-admin delete-sponsor 7 [--yes]
    sports-admin delete-sponsor-line 3 [--yes]
    sports-admin sponsor-lines 7
"""

from __future__ import annotations

import argparse
import asyncio

import httpx
from pydantic import ValidationError

from .api_client import ApiClient
from .errors import ApiError
from .logging import get_logger
from .services.sponsors import SponsorStore
from .utils.alerts import Alerts, ConsoleAlerts, ConsoleConfirmer, Confirmer, with_delete_confirm

logger = get_logger(__name__)

DELETE_WARNING = "This action cannot be undone!"


async def _delete_sponsor(store: SponsorStore, confirmer: Confirmer, alerts: Alerts, sponsor_id: int) -> None:
    sponsor = await store.sponsors.get(sponsor_id)
    lines = await store.list_sponsor_lines()
    connected = await store.get_sponsor_line_connections(sponsor_id, lines)
    if connected:
        titles = ", ".join(line.title or f"Sponsor Line #{line.id}" for line in connected)
        content = f"Member of: {titles}. {DELETE_WARNING}"
    else:
        content = DELETE_WARNING

    await with_delete_confirm(
        confirmer,
        alerts,
        label=f'Delete sponsor "{sponsor.title}"?',
        content=content,
        operation=lambda: store.delete_sponsor_with_connections(sponsor_id, connected),
        entity_type="Sponsor",
    )


async def _delete_sponsor_line(
    store: SponsorStore,
    confirmer: Confirmer,
    alerts: Alerts,
    sponsor_line_id: int,
) -> None:
    line = await store.get_sponsor_line(sponsor_line_id)
    await with_delete_confirm(
        confirmer,
        alerts,
        label=f'Delete sponsor line "{line.title or "Sponsor Line"}"?',
        content=DELETE_WARNING,
        operation=lambda: store.delete_sponsor_line_with_connections(sponsor_line_id),
        entity_type="Sponsor Line",
    )


async def _show_sponsor_lines(store: SponsorStore, sponsor_id: int) -> None:
    lines = await store.list_sponsor_lines()
    connected = await store.get_sponsor_line_connections(sponsor_id, lines)
    if not connected:
        print(f"Sponsor #{sponsor_id} is not in any sponsor line.")
        return
    for line in connected:
        print(f"{line.id}\t{line.title or ''}")


async def _run(args: argparse.Namespace, confirmer: Confirmer, alerts: Alerts) -> None:
    async with ApiClient() as client:
        store = SponsorStore.from_client(client)
        if args.command == "delete-sponsor":
            await _delete_sponsor(store, confirmer, alerts, args.id)
        elif args.command == "delete-sponsor-line":
            await _delete_sponsor_line(store, confirmer, alerts, args.id)
        else:
            await _show_sponsor_lines(store, args.id)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="sports-admin", description="Sponsor administration.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    delete_sponsor = subparsers.add_parser(
        "delete-sponsor", help="Delete a sponsor after clearing every reference to it."
    )
    delete_sponsor.add_argument("id", type=int, help="Sponsor ID.")
    delete_sponsor.add_argument("--yes", action="store_true", help="Skip the confirmation prompt.")

    delete_line = subparsers.add_parser(
        "delete-sponsor-line", help="Delete a sponsor line after clearing every reference to it."
    )
    delete_line.add_argument("id", type=int, help="Sponsor line ID.")
    delete_line.add_argument("--yes", action="store_true", help="Skip the confirmation prompt.")

    show_lines = subparsers.add_parser("sponsor-lines", help="List the sponsor lines a sponsor belongs to.")
    show_lines.add_argument("id", type=int, help="Sponsor ID.")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    confirmer = ConsoleConfirmer(assume_yes=getattr(args, "yes", False))
    alerts = ConsoleAlerts()

    logger.info("cli_command_started", command=args.command, id=args.id)
    try:
        asyncio.run(_run(args, confirmer, alerts))
    except (ApiError, httpx.HTTPError, ValidationError) as exc:
        logger.error("cli_command_failed", command=args.command, id=args.id, error=str(exc))
        raise SystemExit(1) from exc

    logger.info("cli_command_completed", command=args.command, id=args.id)


if __name__ == "__main__":
    main()
