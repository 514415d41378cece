import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.proof_verifier import DemoProofVerifier
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.app import create_app
from src.app.services.locks import KeyedLock
from src.depends import (
    get_clock,
    get_locks,
    get_pass_ledger,
    get_profile_allocator,
    get_proof_verifier,
    get_unit_of_work,
)
from tests.fixtures.fakes import FrozenClock, InspectableAllocator, TransferableLedger


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def ledger():
    return TransferableLedger()


@pytest.fixture
def allocator():
    return InspectableAllocator(slots_per_pass=1)


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def locks():
    return KeyedLock()


@pytest_asyncio.fixture
async def client(db_session, ledger, allocator, clock, locks):
    app = create_app(ApplicationConfig)
    verifier = DemoProofVerifier()

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_pass_ledger] = lambda: ledger
    app.dependency_overrides[get_profile_allocator] = lambda: allocator
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_locks] = lambda: locks
    app.dependency_overrides[get_proof_verifier] = lambda: verifier

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
