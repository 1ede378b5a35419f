"""API fixtures — ASGI client with the Oracle swapped for a FakeOracle."""

import pytest
from httpx import ASGITransport, AsyncClient

from argument_forge.api.dependencies import get_oracle
from argument_forge.main import app
from tests.fake_oracle import FakeOracle


@pytest.fixture
def fake_oracle():
    oracle = FakeOracle()
    app.dependency_overrides[get_oracle] = lambda: oracle
    yield oracle
    app.dependency_overrides.clear()


@pytest.fixture
async def client(fake_oracle):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
