from __future__ import annotations

import copy
import random
from typing import Any

from smm_catalog.core.logging import get_logger
from smm_catalog.domain.enums import AdapterMode, ProviderAction
from smm_catalog.services.providers.base import ProviderAdapter
from smm_catalog.services.providers.registry import registry

logger = get_logger("smm_catalog.adapter")

MOCK_SERVICES: tuple[dict[str, Any], ...] = (
    {"service": 1, "name": "Instagram Takipçiler | Max: 5K | Hızlı", "category": "Instagram", "type": "Default", "rate": "10.80", "min": 100, "max": 5000},
    {"service": 2, "name": "Instagram Beğeniler | Max: 10K | Normal", "category": "Instagram", "type": "Default", "rate": "5.20", "min": 50, "max": 10000},
    {"service": 3, "name": "Instagram Yorumlar | Max: 500 | Yavaş", "category": "Instagram", "type": "Custom Comments", "rate": "25.00", "min": 10, "max": 500},
    {"service": 4, "name": "Twitch Takipçiler | Max: 1K | Gerçek", "category": "Twitch", "type": "Default", "rate": "18.00", "min": 100, "max": 1000},
    {"service": 5, "name": "Twitch İzleyiciler | Max: 500 | Canlı", "category": "Twitch", "type": "Default", "rate": "30.00", "min": 10, "max": 500},
    {"service": 6, "name": "Twitch Sohbet Mesajları | Max: 200 | Gerçek", "category": "Twitch", "type": "Default", "rate": "15.00", "min": 10, "max": 200},
    {"service": 7, "name": "YouTube Aboneler | Max: 2K | Yüksek Kaliteli", "category": "YouTube", "type": "Default", "rate": "45.00", "min": 100, "max": 2000},
    {"service": 8, "name": "YouTube İzlenmeler | Max: 50K | Garantili", "category": "YouTube", "type": "Default", "rate": "8.00", "min": 500, "max": 50000},
    {"service": 9, "name": "YouTube Beğeniler | Max: 5K | Hızlı", "category": "YouTube", "type": "Default", "rate": "12.50", "min": 50, "max": 5000},
    {"service": 10, "name": "TikTok Takipçiler | Max: 10K | Normal", "category": "TikTok", "type": "Default", "rate": "15.80", "min": 100, "max": 10000},
    {"service": 11, "name": "TikTok Beğeniler | Max: 20K | Hızlı", "category": "TikTok", "type": "Default", "rate": "6.40", "min": 100, "max": 20000},
    {"service": 12, "name": "TikTok İzlenmeler | Max: 100K | Bot", "category": "TikTok", "type": "Default", "rate": "3.20", "min": 1000, "max": 100000},
    {"service": 13, "name": "Facebook Sayfa Beğenileri | Max: 3K | Garantili", "category": "Facebook", "type": "Default", "rate": "35.00", "min": 100, "max": 3000},
    {"service": 14, "name": "Facebook Gönderi Beğenileri | Max: 5K | Hızlı", "category": "Facebook", "type": "Default", "rate": "8.50", "min": 50, "max": 5000},
    {"service": 15, "name": "Twitter Takipçiler | Max: 2K | Kaliteli", "category": "Twitter", "type": "Default", "rate": "20.00", "min": 100, "max": 2000},
    {"service": 16, "name": "Twitter Retweet | Max: 1K | Normal", "category": "Twitter", "type": "Default", "rate": "12.00", "min": 10, "max": 1000},
    {"service": 17, "name": "Twitter Beğeniler | Max: 5K | Hızlı", "category": "Twitter", "type": "Default", "rate": "7.50", "min": 50, "max": 5000},
    {"service": 18, "name": "Kick İzleyiciler | Max: 300 | Gerçek", "category": "Kick", "type": "Default", "rate": "50.00", "min": 10, "max": 300},
    {"service": 19, "name": "Kick Takipçiler | Max: 1K | Normal", "category": "Kick", "type": "Default", "rate": "25.00", "min": 100, "max": 1000},
    {"service": 20, "name": "VK Play İzleyiciler | Max: 200 | Kaliteli", "category": "VKPlay", "type": "Default", "rate": "40.00", "min": 10, "max": 200},
)

MOCK_BALANCE = {"balance": "1000.00", "currency": "TRY"}


def _completed_order() -> dict[str, Any]:
    return {"status": "Completed", "charge": "10.80", "start_count": 0, "remains": 0, "currency": "TRY"}


class MockProviderAdapter(ProviderAdapter):
    """Network-free panel returning a fixed catalog for test credentials."""

    mode = AdapterMode.MOCK

    def __init__(self, api_url: str, api_key: str, *, rng: random.Random | None = None, **_: Any) -> None:
        super().__init__(api_url, api_key)
        self._rng = rng or random.Random()

    def call(self, action: ProviderAction, params: dict[str, Any] | None = None) -> Any:
        fields = self.build_params(action, params)
        logger.info("Mock provider %s action=%s", self.api_url, action.value)

        if action is ProviderAction.SERVICES:
            return copy.deepcopy(list(MOCK_SERVICES))
        if action is ProviderAction.BALANCE:
            return dict(MOCK_BALANCE)
        if action is ProviderAction.ADD:
            return {"order": self._rng.randint(1, 9_999_999)}
        if action is ProviderAction.STATUS:
            if "orders" in fields:
                order_ids = [item.strip() for item in fields["orders"].split(",") if item.strip()]
                return {order_id: _completed_order() for order_id in order_ids}
            return _completed_order()
        return {"success": True, "message": "API response"}


registry.register(AdapterMode.MOCK, MockProviderAdapter)
