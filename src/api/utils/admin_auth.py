"""
Operator access for the /admin routes (sweeps, audit log).
"""

import hmac
from typing import Optional

from fastapi import Header, status
from libs.result import Error
from src.api.error import ClientError
from config import ApplicationConfig


async def verify_admin_api_key(
    api_key: Optional[str] = Header(None, alias="X-Admin-API-Key"),
) -> None:
    """Reject the request with 401 unless X-Admin-API-Key matches the configured key."""
    if not api_key:
        raise ClientError(
            Error("UNAUTHORIZED", "X-Admin-API-Key header is required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if not hmac.compare_digest(api_key.encode(), ApplicationConfig.ADMIN_API_KEY.encode()):
        raise ClientError(
            Error("INVALID_API_KEY", "Admin API key does not match"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
