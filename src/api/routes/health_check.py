from datetime import UTC, datetime

from fastapi import APIRouter

from src.domain.base import isoformat

router = APIRouter()


@router.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": "subshare-access",
        "timestamp": isoformat(datetime.now(UTC).replace(tzinfo=None)),
    }
