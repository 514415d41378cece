import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.locks import KeyedLock
from tests.fixtures.fakes import FrozenClock, InspectableAllocator, TransferableLedger


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.audit_events.create = AsyncMock()
    return uow


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def locks():
    return KeyedLock()


@pytest.fixture
def allocator():
    return InspectableAllocator(slots_per_pass=1)


@pytest.fixture
def ledger():
    return TransferableLedger()
