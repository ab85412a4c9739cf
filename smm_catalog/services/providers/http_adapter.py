from __future__ import annotations

import json
from typing import Any

import httpx

from smm_catalog.core.config import LEGACY_USER_AGENT
from smm_catalog.core.logging import get_logger, mask_secret
from smm_catalog.domain.enums import AdapterMode, ProviderAction
from smm_catalog.services.providers.base import ProviderAdapter
from smm_catalog.services.providers.registry import registry
from smm_catalog.services.providers.errors import (
    EmptyResponseError,
    MalformedResponseError,
    ProtocolError,
    ProviderError,
    TransportError,
)

logger = get_logger("smm_catalog.adapter")

SNIPPET_LENGTH = 100
_HTML_PREFIXES = ("<!doctype", "<html")


def decode_response(status_code: int, body: str) -> Any:
    """Classify a raw panel response and return its parsed JSON document."""
    if not 200 <= status_code < 300:
        raise TransportError(f"Provider responded with HTTP {status_code}", status_code=status_code)

    stripped = body.strip() if body else ""
    if not stripped:
        raise EmptyResponseError("Empty response from provider")

    if stripped[:16].lower().startswith(_HTML_PREFIXES):
        raise ProtocolError("Provider returned HTML instead of JSON")

    try:
        payload = json.loads(stripped)
    except ValueError as exc:
        snippet = stripped[:SNIPPET_LENGTH]
        raise MalformedResponseError(f"Invalid JSON response: {snippet}", snippet=snippet, cause=exc) from exc

    if isinstance(payload, dict) and payload.get("error"):
        raise ProviderError(str(payload["error"]))
    return payload


class HttpProviderAdapter(ProviderAdapter):
    mode = AdapterMode.LIVE

    def __init__(
        self,
        api_url: str,
        api_key: str,
        *,
        timeout: float = 30.0,
        user_agent: str = LEGACY_USER_AGENT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(api_url, api_key)
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport

    def call(self, action: ProviderAction, params: dict[str, Any] | None = None) -> Any:
        fields = self.build_params(action, params)
        logger.info("Calling provider %s action=%s key_prefix=%s", self.api_url, action.value, mask_secret(self.api_key))
        try:
            with httpx.Client(
                timeout=self.timeout,
                follow_redirects=True,
                headers={"User-Agent": self.user_agent},
                transport=self._transport,
            ) as client:
                response = client.post(self.api_url, data=fields)
        except httpx.HTTPError as exc:
            logger.warning("Provider %s unreachable for action=%s: %s", self.api_url, action.value, type(exc).__name__)
            raise TransportError(f"Provider request failed: {exc}") from exc

        logger.info(
            "Provider %s action=%s status=%s bytes=%s",
            self.api_url,
            action.value,
            response.status_code,
            len(response.content),
        )
        return decode_response(response.status_code, response.text)


registry.register(AdapterMode.LIVE, HttpProviderAdapter)
