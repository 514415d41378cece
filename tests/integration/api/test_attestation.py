"""
Integration tests for Attestation API
"""

import pytest
from datetime import timedelta
from httpx import AsyncClient

from src.domain.base import to_epoch
from tests.fixtures.fakes import DELEGATE


def verify_payload(signals, attestation_type="human"):
    return {
        "proof": "groth16-proof",
        "publicSignals": signals,
        "attestationType": attestation_type,
        "userAddress": DELEGATE,
    }


@pytest.mark.asyncio
async def test_verify_and_list_attestation(client: AsyncClient):
    response = await client.post("/api/zk/verify", json=verify_payload(["human"]))

    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is True
    attestation = data["attestation"]
    assert attestation["attestationType"] == "human"
    assert attestation["userAddress"] == DELEGATE
    assert attestation["proofCommitment"].startswith("0x")
    assert attestation["expiresAt"] == "2026-01-01T12:00:00Z"

    listing = await client.get(f"/api/zk/attestations/{DELEGATE}")
    assert listing.json()["count"] == 1
    assert listing.json()["attestations"][0]["attestationId"] == attestation["attestationId"]


@pytest.mark.asyncio
async def test_verify_invalid_proof(client: AsyncClient):
    response = await client.post("/api/zk/verify", json=verify_payload(["robot"]))

    assert response.status_code == 400
    assert response.json()["valid"] is False
    assert response.json()["code"] == "PROOF_INVALID"


@pytest.mark.asyncio
async def test_verify_empty_signals(client: AsyncClient):
    response = await client.post("/api/zk/verify", json=verify_payload([]))

    assert response.status_code == 400
    assert response.json()["valid"] is False


@pytest.mark.asyncio
async def test_verify_unknown_attestation_type(client: AsyncClient):
    response = await client.post("/api/zk/verify", json=verify_payload(["human"], "robot"))

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_anchor_client_attestation(client: AsyncClient, clock):
    """Test anchoring the same record twice yields one attestation"""
    payload = {
        "userAddress": DELEGATE,
        "proofHash": "0x" + "ab" * 32,
        "signature": "cd" * 64,
        "attestationType": "age18",
        "expiry": to_epoch(clock.now() + timedelta(days=30)),
    }

    first = await client.post("/api/zk/anchor", json=payload)
    second = await client.post("/api/zk/anchor", json=payload)

    assert first.status_code == 200
    assert first.json()["anchored"] is True
    assert first.json()["attestationId"] == second.json()["attestationId"]

    listing = await client.get(f"/api/zk/attestations/{DELEGATE}")
    assert listing.json()["count"] == 1


@pytest.mark.asyncio
async def test_anchor_with_past_expiry(client: AsyncClient, clock):
    response = await client.post(
        "/api/zk/anchor",
        json={
            "userAddress": DELEGATE,
            "proofHash": "0x" + "ab" * 32,
            "signature": "cd" * 64,
            "attestationType": "human",
            "expiry": to_epoch(clock.now() - timedelta(seconds=1)),
        },
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_anchor_with_expiry_beyond_calendar(client: AsyncClient):
    """Test an expiry no datetime can represent is a 400, not a crash"""
    response = await client.post(
        "/api/zk/anchor",
        json={
            "userAddress": DELEGATE,
            "proofHash": "0x" + "ab" * 32,
            "signature": "cd" * 64,
            "attestationType": "human",
            "expiry": 10**12,
        },
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert "expiry" in response.json()["details"]
