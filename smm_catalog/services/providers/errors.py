from __future__ import annotations


class SmmApiError(Exception):
    """Base class for failures talking to a reseller panel."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(SmmApiError):
    pass


class TransportError(SmmApiError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EmptyResponseError(SmmApiError):
    pass


class ProtocolError(SmmApiError):
    pass


class MalformedResponseError(SmmApiError):
    def __init__(self, message: str, snippet: str = "", cause: Exception | None = None) -> None:
        super().__init__(message)
        self.snippet = snippet
        self.cause = cause


class ProviderError(SmmApiError):
    pass
