from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

LEGACY_USER_AGENT = "Mozilla/4.0 (compatible; MSIE 5.01; Windows NT 5.0)"


@dataclass(slots=True)
class Settings:
    app_name: str = "SMM Catalog Sync"
    host: str = field(default_factory=lambda: os.getenv("SMM_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("SMM_PORT", "8780")))
    localhost_only: bool = field(default_factory=lambda: os.getenv("SMM_LOCALHOST_ONLY", "1") == "1")
    allow_lan: bool = field(default_factory=lambda: os.getenv("SMM_ALLOW_LAN", "0") == "1")
    data_dir: Path = field(default_factory=lambda: Path(os.getenv("SMM_DATA_DIR", str(Path.home() / ".smm_catalog"))))
    db_name: str = "smm_catalog.db"
    db_url_override: str | None = field(default_factory=lambda: os.getenv("SMM_DB_URL") or None)
    http_timeout_seconds: float = field(default_factory=lambda: float(os.getenv("SMM_HTTP_TIMEOUT", "30")))
    user_agent: str = field(default_factory=lambda: os.getenv("SMM_USER_AGENT", LEGACY_USER_AGENT))
    force_mock: bool = field(default_factory=lambda: os.getenv("SMM_FORCE_MOCK", "0") == "1")
    environment: str = field(default_factory=lambda: os.getenv("SMM_ENV", "dev"))

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name

    @property
    def db_url(self) -> str:
        if self.db_url_override:
            return self.db_url_override
        return f"sqlite+pysqlite:///{self.db_path}"


def get_settings() -> Settings:
    settings = Settings()
    local_hosts = {"127.0.0.1", "localhost"}

    if settings.allow_lan:
        settings.localhost_only = False

    if settings.localhost_only and settings.host not in local_hosts:
        raise ValueError("Refusing non-localhost bind while SMM_LOCALHOST_ONLY=1.")

    if not settings.localhost_only and settings.host not in local_hosts and not settings.allow_lan:
        raise ValueError("Refusing LAN bind unless SMM_ALLOW_LAN=1.")

    if settings.http_timeout_seconds <= 0:
        raise ValueError("SMM_HTTP_TIMEOUT must be positive.")

    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings
