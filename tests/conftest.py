"""Shared pytest fixtures and an in-memory stand-in for the admin API."""

from __future__ import annotations

import asyncio
import json
import math
import os
import re
from typing import Any

import httpx
import pytest

# Set required environment variables before any imports
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("API_BASE_URL", "http://testserver")

from sports_admin.api_client import ApiClient  # noqa: E402

BASE_URL = "http://testserver"

TABLES = ("teams", "tournaments", "matches", "sponsors", "sponsor_lines")

_COLLECTION_RE = re.compile(r"^/api/(teams|tournaments|matches|sponsors|sponsor_lines)/?$")
_ITEM_RE = re.compile(r"^/api/(teams|tournaments|matches|sponsors|sponsor_lines)/(\d+)$")
_LINE_MEMBERS_RE = re.compile(r"^/api/sponsor_in_sponsor_line/sponsor_line/id/(\d+)/sponsors$")
_MEMBERSHIP_RE = re.compile(r"^/api/sponsor_in_sponsor_line/(\d+)in(\d+)$")


class FakeBackend:
    """Minimal REST backend served through ``httpx.MockTransport``.

    Records a ``start``/``end`` event per request so tests can check how
    requests were ordered relative to each other.
    """

    def __init__(self) -> None:
        self.tables: dict[str, dict[int, dict[str, Any]]] = {name: {} for name in TABLES}
        self.memberships: dict[tuple[int, int], int | None] = {}
        self.events: list[tuple[str, str, str]] = []
        self.bodies: list[tuple[str, str, Any]] = []
        self._failures: dict[tuple[str, str], int] = {}
        self._delays: dict[tuple[str, str], float] = {}
        self._plain_text: set[tuple[str, str]] = set()

    # -------------------------------------------------------------------------
    # Setup helpers
    # -------------------------------------------------------------------------
    def add(self, table: str, **row: Any) -> dict[str, Any]:
        self.tables[table][row["id"]] = row
        return row

    def add_membership(self, sponsor_id: int, sponsor_line_id: int, position: int | None = None) -> None:
        self.memberships[(sponsor_id, sponsor_line_id)] = position

    def fail(self, method: str, path: str, status: int = 500) -> None:
        self._failures[(method, path)] = status

    def delay(self, method: str, path: str, seconds: float) -> None:
        self._delays[(method, path)] = seconds

    def reply_with_text(self, method: str, path: str) -> None:
        """Apply the request normally but answer 200 with a plain-text body."""
        self._plain_text.add((method, path))

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    # -------------------------------------------------------------------------
    # Inspection helpers
    # -------------------------------------------------------------------------
    @property
    def calls(self) -> list[tuple[str, str]]:
        return [(method, path) for phase, method, path in self.events if phase == "start"]

    def calls_with(self, method: str) -> list[str]:
        return [path for call_method, path in self.calls if call_method == method]

    def event_index(self, phase: str, method: str, path: str) -> int:
        return self.events.index((phase, method, path))

    # -------------------------------------------------------------------------
    # Request handling
    # -------------------------------------------------------------------------
    async def handle(self, request: httpx.Request) -> httpx.Response:
        method, path = request.method, request.url.path
        self.events.append(("start", method, path))
        try:
            await asyncio.sleep(self._delays.get((method, path), 0))
            status = self._failures.get((method, path))
            if status is not None:
                return httpx.Response(status, json={"detail": "injected failure"})
            body = json.loads(request.content) if request.content else None
            self.bodies.append((method, path, body))
            response = self._route(method, path, body, request.url.params)
            if (method, path) in self._plain_text and response.is_success:
                return httpx.Response(200, text="OK")
            return response
        finally:
            self.events.append(("end", method, path))

    def _route(self, method: str, path: str, body: Any, params: httpx.QueryParams) -> httpx.Response:
        match = _LINE_MEMBERS_RE.match(path)
        if match and method == "GET":
            return self._line_members(int(match.group(1)))

        match = _MEMBERSHIP_RE.match(path)
        if match:
            key = (int(match.group(1)), int(match.group(2)))
            if method == "POST":
                self.memberships[key] = None
                return httpx.Response(200, json={"sponsor_id": key[0], "sponsor_line_id": key[1]})
            if method == "DELETE":
                self.memberships.pop(key, None)
                return httpx.Response(204)

        match = _ITEM_RE.match(path)
        if match:
            return self._item(method, match.group(1), int(match.group(2)), body)

        match = _COLLECTION_RE.match(path)
        if match:
            return self._collection(method, match.group(1), body, params)

        return httpx.Response(404, json={"detail": "Not Found"})

    def _line_members(self, line_id: int) -> httpx.Response:
        sponsors = [
            {
                "sponsor": self.tables["sponsors"].get(sponsor_id, {"id": sponsor_id, "title": f"Sponsor {sponsor_id}"}),
                "position": position,
            }
            for (sponsor_id, member_line_id), position in self.memberships.items()
            if member_line_id == line_id
        ]
        return httpx.Response(
            200,
            json={"sponsor_line": self.tables["sponsor_lines"].get(line_id), "sponsors": sponsors},
        )

    def _item(self, method: str, table: str, item_id: int, body: Any) -> httpx.Response:
        rows = self.tables[table]
        if item_id not in rows:
            return httpx.Response(404, json={"detail": "Not Found"})
        if method == "GET":
            return httpx.Response(200, json=rows[item_id])
        if method == "PUT":
            rows[item_id].update(body or {})
            return httpx.Response(200, json=rows[item_id])
        if method == "DELETE":
            del rows[item_id]
            return httpx.Response(204)
        return httpx.Response(405)

    def _collection(self, method: str, table: str, body: Any, params: httpx.QueryParams) -> httpx.Response:
        rows = self.tables[table]
        if method == "POST":
            new_id = max(rows, default=0) + 1
            rows[new_id] = {"id": new_id, **(body or {})}
            return httpx.Response(200, json=rows[new_id])
        if method != "GET":
            return httpx.Response(405)

        items = list(rows.values())
        if "page" not in params:
            return httpx.Response(200, json=items)

        page = int(params["page"])
        per_page = int(params["items_per_page"])
        total_pages = math.ceil(len(items) / per_page) if items else 0
        return httpx.Response(
            200,
            json={
                "data": items[(page - 1) * per_page : page * per_page],
                "metadata": {
                    "page": page,
                    "items_per_page": per_page,
                    "total_items": len(items),
                    "total_pages": total_pages,
                    "has_next": page < total_pages,
                    "has_previous": page > 1,
                },
            },
        )


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def api_client(backend: FakeBackend) -> ApiClient:
    return ApiClient(httpx.AsyncClient(base_url=BASE_URL, transport=backend.transport()))


@pytest.fixture
def scenario_backend(backend: FakeBackend) -> FakeBackend:
    """Sponsor 7 on Team 1 and Match 9, member of line 3.

    Sponsor 8 and line 5 are unrelated bystanders. Tournament 4 points at
    sponsor line 7, which must not be confused with sponsor 7.
    """
    backend.add("sponsors", id=7, title="Acme")
    backend.add("sponsors", id=8, title="Globex")
    backend.add("sponsor_lines", id=3, title="Main line", is_visible=True)
    backend.add("sponsor_lines", id=5, title="Side line", is_visible=True)
    backend.add("teams", id=1, title="Bears", main_sponsor_id=7, sponsor_line_id=None)
    backend.add("teams", id=2, title="Wolves", main_sponsor_id=8, sponsor_line_id=5)
    backend.add("tournaments", id=4, title="Cup", main_sponsor_id=None, sponsor_line_id=7)
    backend.add("matches", id=9, team_a_id=1, team_b_id=2, main_sponsor_id=7, sponsor_line_id=None)
    backend.add("matches", id=10, team_a_id=2, team_b_id=1, main_sponsor_id=None, sponsor_line_id=None)
    backend.add_membership(7, 3, position=1)
    backend.add_membership(8, 5, position=1)
    return backend
