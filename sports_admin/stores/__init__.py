"""REST-backed stores for admin entities."""

from .membership import MEMBERSHIP_ENDPOINT, MembershipStore, membership_key
from .resource import (
    MATCHES_ENDPOINT,
    SPONSOR_LINES_ENDPOINT,
    SPONSORS_ENDPOINT,
    TEAMS_ENDPOINT,
    TOURNAMENTS_ENDPOINT,
    DependentStores,
    ResourceStore,
    sponsor_line_store,
    sponsor_store,
)

__all__ = [
    "ResourceStore",
    "DependentStores",
    "MembershipStore",
    "membership_key",
    "sponsor_store",
    "sponsor_line_store",
    "TEAMS_ENDPOINT",
    "TOURNAMENTS_ENDPOINT",
    "MATCHES_ENDPOINT",
    "SPONSORS_ENDPOINT",
    "SPONSOR_LINES_ENDPOINT",
    "MEMBERSHIP_ENDPOINT",
]
