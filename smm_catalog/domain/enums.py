from __future__ import annotations

from enum import StrEnum


class AdapterMode(StrEnum):
    LIVE = "live"
    MOCK = "mock"


class ProviderAction(StrEnum):
    SERVICES = "services"
    BALANCE = "balance"
    ADD = "add"
    STATUS = "status"
    REFILL = "refill"


class ImportStatus(StrEnum):
    IMPORTED = "imported"
    UPDATED = "updated"
    SKIPPED = "skipped"
    ERROR = "error"


class ServiceCategory(StrEnum):
    FOLLOWERS = "followers"
    LIKES = "likes"
    VIEWS = "views"
    COMMENTS = "comments"
    SUBSCRIBERS = "subscribers"
    OTHER = "other"
