from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from smm_catalog.domain.enums import AdapterMode, ProviderAction
from smm_catalog.services.providers.errors import ConfigurationError


class ProviderAdapter(ABC):
    """One key/action POST against a reseller panel per call; no retries."""

    mode: AdapterMode

    def __init__(self, api_url: str, api_key: str) -> None:
        if not api_url or not api_url.strip():
            raise ConfigurationError("Provider API URL is required")
        if not api_key or not api_key.strip():
            raise ConfigurationError("Provider API key is required")
        self.api_url = api_url.strip().rstrip("/")
        self.api_key = api_key.strip()

    def build_params(self, action: ProviderAction, params: dict[str, Any] | None = None) -> dict[str, str]:
        fields: dict[str, str] = {"key": self.api_key, "action": action.value}
        for name, value in (params or {}).items():
            if value is None or name in fields:
                continue
            fields[name] = str(value)
        return fields

    @abstractmethod
    def call(self, action: ProviderAction, params: dict[str, Any] | None = None) -> Any:
        raise NotImplementedError
