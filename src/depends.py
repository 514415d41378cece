from fastapi import Depends
from nacl.signing import SigningKey
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.profile_allocator import InMemoryProfileAllocator
from src.adapter.services.proof_verifier import DemoProofVerifier
from src.adapter.services.simulated_ledger import SimulatedFlowLedger
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.clock import Clock, SystemClock
from src.app.services.ledger_anchor import LedgerAnchor
from src.app.services.locks import KeyedLock
from src.app.services.ownership_oracle import OwnershipOracle, PassLedger
from src.app.services.profile_allocator import ProfileAllocator
from src.app.services.proof_verifier import ProofVerifier
from src.domain.hashing import load_signing_key

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# Process-wide collaborators; tests replace them through dependency_overrides
ledger = SimulatedFlowLedger(latency=ApplicationConfig.LEDGER_LATENCY_SECONDS)
profile_allocator = InMemoryProfileAllocator(
    slots_per_pass=ApplicationConfig.PROFILE_SLOTS_PER_PASS
)
proof_verifier = DemoProofVerifier()
keyed_lock = KeyedLock()
system_clock = SystemClock()
issuer_signing_key = load_signing_key(ApplicationConfig.ISSUER_SIGNING_KEY)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_pass_ledger() -> PassLedger:
    return ledger


def get_ownership_oracle(pass_ledger: PassLedger = Depends(get_pass_ledger)) -> OwnershipOracle:
    return pass_ledger


def get_ledger_anchor(pass_ledger: PassLedger = Depends(get_pass_ledger)) -> LedgerAnchor:
    return pass_ledger


def get_profile_allocator() -> ProfileAllocator:
    return profile_allocator


def get_proof_verifier() -> ProofVerifier:
    return proof_verifier


def get_locks() -> KeyedLock:
    return keyed_lock


def get_clock() -> Clock:
    return system_clock


def get_signing_key() -> SigningKey:
    return issuer_signing_key
