"""
Unit tests for access verification and delegation listing
"""

import pytest
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

from src.app.services.resilience import CollaboratorTimeout
from src.app.use_cases.access import CheckAccessUseCase
from src.app.use_cases.delegations import GetDelegationUseCase, ListActiveDelegationsUseCase
from src.domain.entities import AccessType, Delegation
from tests.fixtures.fakes import DELEGATE, OTHER, OWNER


def make_delegation(clock, delegation_id=1, pass_id=1, **overrides):
    fields = dict(
        id=delegation_id,
        pass_id=pass_id,
        creator_address=OWNER,
        delegate_address=DELEGATE,
        is_active=True,
        created_at=clock.now(),
        expires_at=clock.now() + timedelta(days=1),
    )
    fields.update(overrides)
    return Delegation(**fields)


@pytest.mark.asyncio
async def test_check_access_delegated(mock_uow, ledger, clock):
    pass_id = await ledger.mint(OWNER)
    mock_uow.delegations.get_by_delegate = AsyncMock(
        return_value=[make_delegation(clock, pass_id=pass_id)]
    )

    use_case = CheckAccessUseCase(mock_uow, ledger, clock)
    result = await use_case.execute(DELEGATE, pass_id)

    assert result.is_ok()
    assert result.value.has_access is True
    assert result.value.owns_nft is False
    assert result.value.has_active_delegation is True
    assert result.value.access_type == AccessType.delegated


@pytest.mark.asyncio
async def test_check_access_direct_takes_precedence(mock_uow, ledger, clock):
    """Test an owner who is also a delegate is reported as direct"""
    pass_id = await ledger.mint(DELEGATE)
    mock_uow.delegations.get_by_delegate = AsyncMock(
        return_value=[make_delegation(clock, pass_id=pass_id, creator_address=OTHER)]
    )

    use_case = CheckAccessUseCase(mock_uow, ledger, clock)
    result = await use_case.execute(DELEGATE, pass_id)

    assert result.value.access_type == AccessType.direct
    assert result.value.owns_nft is True
    assert result.value.has_active_delegation is True


@pytest.mark.asyncio
async def test_check_access_expires_with_delegation(mock_uow, ledger, clock):
    """Test delegated access at t0+1h and none at t0+25h"""
    pass_id = await ledger.mint(OWNER)
    mock_uow.delegations.get_by_delegate = AsyncMock(
        return_value=[make_delegation(clock, pass_id=pass_id)]
    )
    use_case = CheckAccessUseCase(mock_uow, ledger, clock)

    clock.advance(hours=1)
    later = await use_case.execute(DELEGATE, pass_id)
    clock.advance(hours=24)
    expired = await use_case.execute(DELEGATE, pass_id)

    assert later.value.access_type == AccessType.delegated
    assert expired.value.access_type == AccessType.none
    assert expired.value.has_access is False


@pytest.mark.asyncio
async def test_check_access_exact_expiry_is_not_granting(mock_uow, ledger, clock):
    pass_id = await ledger.mint(OWNER)
    delegation = make_delegation(clock, pass_id=pass_id)
    mock_uow.delegations.get_by_delegate = AsyncMock(return_value=[delegation])

    clock.current = delegation.expires_at
    use_case = CheckAccessUseCase(mock_uow, ledger, clock)
    result = await use_case.execute(DELEGATE, pass_id)

    assert result.value.access_type == AccessType.none


@pytest.mark.asyncio
async def test_check_access_ignores_revoked_and_other_passes(mock_uow, ledger, clock):
    pass_id = await ledger.mint(OWNER)
    mock_uow.delegations.get_by_delegate = AsyncMock(
        return_value=[
            make_delegation(clock, 1, pass_id=pass_id, is_active=False, revoked_at=clock.now()),
            make_delegation(clock, 2, pass_id=pass_id + 1),
        ]
    )

    use_case = CheckAccessUseCase(mock_uow, ledger, clock)
    result = await use_case.execute(DELEGATE, pass_id)

    assert result.value.has_access is False
    assert result.value.access_type == AccessType.none


@pytest.mark.asyncio
async def test_check_access_oracle_unavailable(mock_uow, clock):
    oracle = MagicMock()
    oracle.owns_asset = AsyncMock(side_effect=CollaboratorTimeout("ownership oracle timed out"))

    use_case = CheckAccessUseCase(mock_uow, oracle, clock)
    result = await use_case.execute(DELEGATE, 1)

    assert result.is_err()
    assert result.error.code == "OWNERSHIP_ORACLE_UNAVAILABLE"


@pytest.mark.asyncio
async def test_list_active_delegations(mock_uow, clock):
    """Test only granting delegations are listed but all are counted"""
    mock_uow.delegations.get_by_delegate = AsyncMock(
        return_value=[
            make_delegation(clock, 1),
            make_delegation(clock, 2, is_active=False, revoked_at=clock.now()),
            make_delegation(clock, 3, expires_at=clock.now() - timedelta(seconds=1)),
        ]
    )

    use_case = ListActiveDelegationsUseCase(mock_uow, clock)
    result = await use_case.execute(DELEGATE.upper().replace("0X", "0x"))

    assert result.is_ok()
    assert result.value.address == DELEGATE
    assert [d.id for d in result.value.delegations] == [1]
    assert result.value.active_count == 1
    assert result.value.total_count == 3
    mock_uow.delegations.get_by_delegate.assert_called_once_with(DELEGATE)


@pytest.mark.asyncio
async def test_get_delegation(mock_uow, clock):
    mock_uow.delegations.get_by_id = AsyncMock(return_value=make_delegation(clock, 4))
    clock.advance(hours=2)

    use_case = GetDelegationUseCase(mock_uow, clock)
    result = await use_case.execute(4)

    assert result.is_ok()
    assert result.value.is_granting is True
    assert result.value.remaining_seconds == 22 * 3600


@pytest.mark.asyncio
async def test_get_delegation_not_found(mock_uow, clock):
    mock_uow.delegations.get_by_id = AsyncMock(return_value=None)

    use_case = GetDelegationUseCase(mock_uow, clock)
    result = await use_case.execute(4)

    assert result.is_err()
    assert result.error.code == "DELEGATION_NOT_FOUND"
