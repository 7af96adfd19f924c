"""Pydantic models for the admin API payloads."""

from __future__ import annotations

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

DependentKind = Literal["teams", "tournaments", "matches"]
SponsorForeignKey = Literal["main_sponsor_id", "sponsor_line_id"]

T = TypeVar("T")


class Sponsor(BaseModel):
    id: int
    title: str
    logo_url: str | None = None
    scale_logo: float | None = None


class SponsorLine(BaseModel):
    id: int
    title: str | None = None
    is_visible: bool | None = None


class DependentRecord(BaseModel):
    """A row that may point at a sponsor and/or a sponsor line.

    Only the sponsor foreign keys matter here; every other attribute the
    backend sends is kept as an extra field.
    """

    model_config = ConfigDict(extra="allow")

    id: int
    main_sponsor_id: int | None = None
    sponsor_line_id: int | None = None


class Team(DependentRecord):
    title: str | None = None
    sport_id: int | None = None


class Tournament(DependentRecord):
    title: str | None = None
    season_id: int | None = None
    sport_id: int | None = None


class Match(DependentRecord):
    team_a_id: int | None = None
    team_b_id: int | None = None
    tournament_id: int | None = None


class Membership(BaseModel):
    """Sponsor-in-line join row. ``position`` only orders display."""

    sponsor_id: int
    sponsor_line_id: int
    position: int | None = None


class SponsorInLine(BaseModel):
    sponsor: Sponsor
    position: int | None = None


class SponsorLineSponsors(BaseModel):
    sponsor_line: SponsorLine | None = None
    sponsors: list[SponsorInLine] = Field(default_factory=list)


class PaginationMetadata(BaseModel):
    page: int
    items_per_page: int
    total_items: int
    total_pages: int
    has_next: bool
    has_previous: bool


class PaginatedResponse(BaseModel, Generic[T]):
    data: list[T]
    metadata: PaginationMetadata
