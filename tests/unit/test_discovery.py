from __future__ import annotations

from typing import Any

from smm_catalog.domain.enums import AdapterMode, ProviderAction
from smm_catalog.services.catalog.discovery import discover, group_by_category
from smm_catalog.services.providers.base import ProviderAdapter
from smm_catalog.services.providers.client import SmmApiClient


class FixedServicesAdapter(ProviderAdapter):
    mode = AdapterMode.LIVE

    def __init__(self, services: list[Any]) -> None:
        super().__init__("https://panel.example.com/api", "live-key")
        self.services = services

    def call(self, action: ProviderAction, params: dict[str, Any] | None = None) -> Any:
        assert action is ProviderAction.SERVICES
        return self.services


def _discover(services: list[Any]) -> list:
    return discover(SmmApiClient(FixedServicesAdapter(services)))


def test_unpriceable_services_are_dropped() -> None:
    found = _discover(
        [
            {"service": 1, "name": "Instagram Likes", "rate": "1.20"},
            {"service": 2, "name": "Instagram Views", "rate": "NaN"},
            {"service": 3, "name": "Twitch Followers", "rate": "Infinity"},
            {"service": 4, "name": "YouTube Views", "rate": "n/a"},
            {"service": 5, "name": "TikTok Likes"},
            "garbage",
        ]
    )
    assert [s.external_service_id for s in found] == ["1"]


def test_grouping_uses_remote_category_then_name() -> None:
    found = _discover(
        [
            {"service": 1, "name": "Instagram Likes", "rate": "1.20"},
            {"service": 2, "name": "Kick Takipçi", "rate": "2", "min": 50},
            {"service": 3, "name": "Bundle", "rate": "3", "category": "Packages"},
        ]
    )
    grouped = group_by_category(found)

    assert sorted(grouped) == ["Packages", "followers", "likes"]
    [kick] = grouped["followers"]
    assert (kick.id, kick.rate, kick.min, kick.max, kick.type) == ("2", 2.0, 50, 1000, "Default")
