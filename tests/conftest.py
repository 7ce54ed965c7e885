from pathlib import Path

import httpx
import pytest
from httpx import ASGITransport

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@pytest.fixture
def mock_env(monkeypatch):
    monkeypatch.setenv("RATES_FILE", str(DATA_DIR / "rates.json"))
    monkeypatch.setenv("OFFERS_FILE", str(DATA_DIR / "offers.json"))
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")


@pytest.fixture
async def client(mock_env):
    from app.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c
