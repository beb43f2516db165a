from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from secreport.core.config import Settings
from secreport.main import create_app
from secreport.models.database import ReportStore
from secreport.services.report_service import ReportService


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "reports.db"


@pytest.fixture
def store(db_path):
    with ReportStore(db_path) as s:
        yield s


@pytest.fixture
def service(store) -> ReportService:
    return ReportService(store)


@pytest.fixture
def settings(db_path, tmp_path) -> Settings:
    return Settings(sqlite_path=str(db_path), static_dir=str(tmp_path / "dist"))


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c
