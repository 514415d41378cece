"""
Unit tests for Create Delegation Use Case
"""

import pytest
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

from src.app.services.resilience import CollaboratorTimeout
from src.app.use_cases.delegations import CreateDelegationCommand, CreateDelegationUseCase
from tests.fixtures.fakes import DELEGATE, OTHER, OWNER


def stub_create(mock_uow, delegation_id=1):
    async def assign_id(delegation):
        delegation.id = delegation_id
        return delegation

    mock_uow.delegations.create = AsyncMock(side_effect=assign_id)


@pytest.mark.asyncio
async def test_create_delegation_success(mock_uow, ledger, clock):
    """Test owner delegating a pass for one day"""
    pass_id = await ledger.mint(OWNER)
    stub_create(mock_uow)

    use_case = CreateDelegationUseCase(mock_uow, ledger, clock)
    result = await use_case.execute(
        CreateDelegationCommand(
            pass_id=pass_id,
            creator_address=OWNER,
            delegate_address=DELEGATE,
            duration_seconds=86400,
        )
    )

    assert result.is_ok()
    delegation = result.value.delegation
    assert delegation.id == 1
    assert delegation.is_active is True
    assert delegation.revoked_at is None
    assert delegation.access_url.endswith("?delegation=1")

    created = mock_uow.delegations.create.call_args[0][0]
    assert created.expires_at - created.created_at == timedelta(seconds=86400)
    assert created.created_at == clock.now()

    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "delegation_created"
    assert audit.event_metadata["delegation_id"] == 1
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_create_delegation_normalizes_addresses(mock_uow, ledger, clock):
    """Test mixed-case addresses are stored lowercase"""
    pass_id = await ledger.mint(OWNER)
    stub_create(mock_uow)

    use_case = CreateDelegationUseCase(mock_uow, ledger, clock)
    result = await use_case.execute(
        CreateDelegationCommand(
            pass_id=pass_id,
            creator_address=OWNER.upper().replace("0X", "0x"),
            delegate_address=DELEGATE.upper().replace("0X", "0x"),
            duration_seconds=3600,
        )
    )

    assert result.is_ok()
    assert result.value.delegation.creator_address == OWNER
    assert result.value.delegation.delegate_address == DELEGATE


@pytest.mark.asyncio
@pytest.mark.parametrize("duration", [0, 3599, 2592001])
async def test_create_delegation_duration_out_of_range(mock_uow, ledger, clock, duration):
    """Test durations outside one hour to thirty days are rejected"""
    pass_id = await ledger.mint(OWNER)
    mock_uow.delegations.create = AsyncMock()

    use_case = CreateDelegationUseCase(mock_uow, ledger, clock)
    result = await use_case.execute(
        CreateDelegationCommand(
            pass_id=pass_id,
            creator_address=OWNER,
            delegate_address=DELEGATE,
            duration_seconds=duration,
        )
    )

    assert result.is_err()
    assert result.error.code == "DURATION_OUT_OF_RANGE"
    mock_uow.delegations.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("duration", [3600, 2592000])
async def test_create_delegation_duration_bounds_inclusive(mock_uow, ledger, clock, duration):
    pass_id = await ledger.mint(OWNER)
    stub_create(mock_uow)

    use_case = CreateDelegationUseCase(mock_uow, ledger, clock)
    result = await use_case.execute(
        CreateDelegationCommand(
            pass_id=pass_id,
            creator_address=OWNER,
            delegate_address=DELEGATE,
            duration_seconds=duration,
        )
    )

    assert result.is_ok()


@pytest.mark.asyncio
async def test_create_delegation_self_delegation_forbidden(mock_uow, ledger, clock):
    pass_id = await ledger.mint(OWNER)
    mock_uow.delegations.create = AsyncMock()

    use_case = CreateDelegationUseCase(mock_uow, ledger, clock)
    result = await use_case.execute(
        CreateDelegationCommand(
            pass_id=pass_id,
            creator_address=OWNER,
            delegate_address=OWNER,
            duration_seconds=3600,
        )
    )

    assert result.is_err()
    assert result.error.code == "SELF_DELEGATION_FORBIDDEN"
    mock_uow.delegations.create.assert_not_called()


@pytest.mark.asyncio
async def test_create_delegation_not_owner(mock_uow, ledger, clock):
    """Test delegating a pass someone else owns"""
    pass_id = await ledger.mint(OTHER)
    mock_uow.delegations.create = AsyncMock()

    use_case = CreateDelegationUseCase(mock_uow, ledger, clock)
    result = await use_case.execute(
        CreateDelegationCommand(
            pass_id=pass_id,
            creator_address=OWNER,
            delegate_address=DELEGATE,
            duration_seconds=3600,
        )
    )

    assert result.is_err()
    assert result.error.code == "NOT_OWNER"
    mock_uow.delegations.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_create_delegation_oracle_unavailable(mock_uow, clock):
    oracle = MagicMock()
    oracle.owns_asset = AsyncMock(side_effect=CollaboratorTimeout("ownership oracle timed out"))
    mock_uow.delegations.create = AsyncMock()

    use_case = CreateDelegationUseCase(mock_uow, oracle, clock)
    result = await use_case.execute(
        CreateDelegationCommand(
            pass_id=1,
            creator_address=OWNER,
            delegate_address=DELEGATE,
            duration_seconds=3600,
        )
    )

    assert result.is_err()
    assert result.error.code == "OWNERSHIP_ORACLE_UNAVAILABLE"
    mock_uow.delegations.create.assert_not_called()
