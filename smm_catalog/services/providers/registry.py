from __future__ import annotations

from typing import Any, Dict, Type

from smm_catalog.domain.enums import AdapterMode
from smm_catalog.services.providers.base import ProviderAdapter

MOCK_URL_MARKER = "testing"
MOCK_KEY_MARKER = "test"


def resolve_mode(api_url: str | None, api_key: str | None, force_mock: bool = False) -> AdapterMode:
    """Pick the adapter mode once, up front: explicit flag or a test/testing credential."""
    if force_mock:
        return AdapterMode.MOCK
    if MOCK_URL_MARKER in (api_url or "") or MOCK_KEY_MARKER in (api_key or ""):
        return AdapterMode.MOCK
    return AdapterMode.LIVE


class AdapterRegistry:
    def __init__(self) -> None:
        self._adapters: Dict[AdapterMode, Type[ProviderAdapter]] = {}

    def register(self, mode: AdapterMode, adapter: Type[ProviderAdapter]) -> None:
        self._adapters[mode] = adapter

    def create(self, mode: AdapterMode, api_url: str, api_key: str, **options: Any) -> ProviderAdapter:
        if mode not in self._adapters:
            raise KeyError(f"Unknown provider adapter mode: {mode}")
        return self._adapters[mode](api_url, api_key, **options)

    def list_modes(self) -> list[str]:
        return sorted(mode.value for mode in self._adapters)


registry = AdapterRegistry()
