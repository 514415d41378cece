from datetime import UTC, datetime
from typing import Optional

from jose import JWTError, jwt

from config import ApplicationConfig

ACCESS_TOKEN_AUDIENCE = "subshare-access"


def generate_access_token(session_id: str, grantee_address: str, expires_at: datetime) -> str:
    """
    Generate the token embedded in a session's access URL

    Args:
        session_id: Access session ID
        grantee_address: Address the session was issued to
        expires_at: Session expiry (naive UTC)

    Returns:
        JWT token string (HS256) that expires with the session
    """
    payload = {
        "sid": session_id,
        "sub": grantee_address,
        "aud": ACCESS_TOKEN_AUDIENCE,
        "exp": expires_at.replace(tzinfo=UTC),
        "iat": datetime.now(UTC),
    }
    return jwt.encode(payload, ApplicationConfig.ACCESS_TOKEN_SECRET, algorithm="HS256")


def verify_access_token(token: str, verify_exp: bool = True) -> Optional[dict]:
    """
    Verify and decode an access URL token

    Args:
        token: JWT token string
        verify_exp: Reject tokens past their exp claim

    Returns:
        Decoded payload dict or None if invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            ApplicationConfig.ACCESS_TOKEN_SECRET,
            algorithms=["HS256"],
            audience=ACCESS_TOKEN_AUDIENCE,
            options={"verify_exp": verify_exp},
        )
        return payload
    except JWTError:
        return None


def build_session_access_url(access_token: str) -> str:
    return f"{ApplicationConfig.ACCESS_BASE_URL}?token={access_token}"


def build_delegation_access_url(delegation_id: int) -> str:
    return f"{ApplicationConfig.ACCESS_BASE_URL}?delegation={delegation_id}"
