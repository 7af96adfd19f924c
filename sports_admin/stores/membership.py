"""Sponsor-in-sponsor-line join table endpoints."""

from __future__ import annotations

from ..api_client import ApiClient
from ..models import SponsorLineSponsors

MEMBERSHIP_ENDPOINT = "/api/sponsor_in_sponsor_line"


def membership_key(sponsor_id: int, sponsor_line_id: int) -> str:
    """Path segment the backend uses to address one join row."""
    return f"{sponsor_id}in{sponsor_line_id}"


class MembershipStore:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    async def list_line_sponsors(self, sponsor_line_id: int) -> SponsorLineSponsors:
        payload = await self.client.get(
            f"{MEMBERSHIP_ENDPOINT}/sponsor_line/id/{sponsor_line_id}/sponsors"
        )
        return SponsorLineSponsors.model_validate(payload or {})

    async def add(self, sponsor_id: int, sponsor_line_id: int) -> None:
        await self.client.post(f"{MEMBERSHIP_ENDPOINT}/{membership_key(sponsor_id, sponsor_line_id)}")

    async def remove(self, sponsor_id: int, sponsor_line_id: int) -> None:
        await self.client.delete(MEMBERSHIP_ENDPOINT, membership_key(sponsor_id, sponsor_line_id))
