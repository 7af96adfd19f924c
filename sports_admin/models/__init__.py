"""Typed models shared by stores and the cascade."""

from .schemas import (
    DependentKind,
    DependentRecord,
    Match,
    Membership,
    PaginatedResponse,
    PaginationMetadata,
    Sponsor,
    SponsorForeignKey,
    SponsorInLine,
    SponsorLine,
    SponsorLineSponsors,
    Team,
    Tournament,
)

__all__ = [
    "DependentKind",
    "DependentRecord",
    "Team",
    "Tournament",
    "Match",
    "Sponsor",
    "SponsorLine",
    "SponsorForeignKey",
    "Membership",
    "SponsorInLine",
    "SponsorLineSponsors",
    "PaginationMetadata",
    "PaginatedResponse",
]
