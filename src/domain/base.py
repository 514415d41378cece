import secrets
from datetime import UTC, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{16}$"


def normalize_address(address: str) -> str:
    """Addresses compare case-insensitively; store them lowercase."""
    return address.lower()


def generate_session_id() -> str:
    return secrets.token_urlsafe(32)


# 9999-12-31T23:59:59Z, the last instant a datetime can hold
MAX_EPOCH_SECONDS = 253402300799


def to_epoch(value: datetime) -> int:
    """Seconds since the epoch for a naive UTC datetime."""
    return int(value.replace(tzinfo=UTC).timestamp())


def from_epoch(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, UTC).replace(tzinfo=None)


class ApiModel(BaseModel):
    """Pydantic model exchanged over the API - camelCase on the wire"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def isoformat(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat() + "Z"
