from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

TEST_DATA_DIR = Path(tempfile.mkdtemp(prefix="smm_catalog_tests_"))
os.environ["SMM_DATA_DIR"] = str(TEST_DATA_DIR)
os.environ["SMM_LOCALHOST_ONLY"] = "1"
os.environ.pop("SMM_DB_URL", None)
os.environ.pop("SMM_FORCE_MOCK", None)


@pytest.fixture()
def client() -> TestClient:
    from smm_catalog.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture()
def session(tmp_path) -> Session:
    from smm_catalog.db import models  # noqa: F401
    from smm_catalog.db.base import Base
    from smm_catalog.services.catalog.operations import ensure_default_platforms

    engine = create_engine(f"sqlite+pysqlite:///{tmp_path / 'catalog.db'}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    with Session(engine, autoflush=False) as db:
        ensure_default_platforms(db)
        yield db
    engine.dispose()
