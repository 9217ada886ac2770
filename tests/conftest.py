"""Shared test fixtures: throwaway DuckDB file per test, FastAPI test client."""

import pytest
from fastapi.testclient import TestClient

import config
from db import init_db
from services.forecast_cache import clear_forecast_cache


@pytest.fixture(autouse=True)
def fresh_forecast_cache():
    clear_forecast_cache()
    yield
    clear_forecast_cache()


@pytest.fixture
def store(tmp_path, monkeypatch):
    """Point the app at an empty database file and create the schema."""
    monkeypatch.setattr(config, "DB_FILE", str(tmp_path / "test.duckdb"))
    init_db()
    yield


@pytest.fixture
def client(store):
    from main import app

    with TestClient(app) as c:
        yield c
