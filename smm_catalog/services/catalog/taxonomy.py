"""Name-matching heuristics that map remote services onto the local taxonomy.

Both lookups are ordered and first-match-wins; reordering either table changes
classification results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from smm_catalog.domain.enums import ServiceCategory

CATEGORY_KEYWORDS: tuple[tuple[ServiceCategory, tuple[str, ...]], ...] = (
    (ServiceCategory.FOLLOWERS, ("follower", "followers", "takipçi")),
    (ServiceCategory.LIKES, ("like", "likes", "beğeni")),
    (ServiceCategory.VIEWS, ("view", "views", "izlenme")),
    (ServiceCategory.COMMENTS, ("comment", "comments", "yorum")),
    (ServiceCategory.SUBSCRIBERS, ("subscriber", "subscribers", "abone")),
)

DEFAULT_PLATFORMS: tuple[tuple[str, str], ...] = (
    ("Instagram", "instagram"),
    ("Twitch", "twitch"),
    ("YouTube", "youtube"),
    ("TikTok", "tiktok"),
    ("Facebook", "facebook"),
    ("Twitter", "twitter"),
    ("Kick", "kick"),
)


@dataclass(frozen=True, slots=True)
class PlatformRef:
    id: int
    name: str
    slug: str = ""


def normalize_name(value: str) -> str:
    # str.lower() turns Turkish dotted capital I into "i" plus a combining dot.
    return value.lower().replace("\u0307", "")


def classify_category(service_name: str | None) -> ServiceCategory:
    if not service_name:
        return ServiceCategory.OTHER
    name = normalize_name(service_name)
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return category
    return ServiceCategory.OTHER


def match_platform(service_name: str | None, platforms: Sequence[PlatformRef]) -> PlatformRef | None:
    """Return the first platform, in registration order, whose name occurs in the service name."""
    if not service_name:
        return None
    name = normalize_name(service_name)
    for platform in platforms:
        needle = normalize_name(platform.name.strip())
        if needle and needle in name:
            return platform
    return None
