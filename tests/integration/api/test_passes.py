import pytest
from httpx import AsyncClient

from tests.fixtures.fakes import OWNER


@pytest.mark.asyncio
async def test_mint_and_get_pass(client: AsyncClient):
    minted = await client.post("/api/passes/mint", json={"ownerAddress": OWNER})

    assert minted.status_code == 201
    info = minted.json()["pass"]
    assert info == {"id": 1, "name": "FlowPass #1", "owner": OWNER}

    fetched = await client.get("/api/passes/1")
    assert fetched.json() == info


@pytest.mark.asyncio
async def test_get_unknown_pass(client: AsyncClient):
    response = await client.get("/api/passes/77")

    assert response.status_code == 404
    assert response.json()["code"] == "PASS_NOT_FOUND"


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
