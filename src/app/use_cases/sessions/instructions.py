from typing import List

from src.domain.base import isoformat
from src.domain.entities import AccessSession


def issue_instructions(access_session: AccessSession) -> List[str]:
    """Steps shown to the grantee when a session is issued."""
    return [
        "1. Open the access link below",
        "2. The shared account signs in for you",
        f'3. Select the "{access_session.profile_name}" profile',
        "4. Enjoy your access period",
        f"5. Access ends automatically at {isoformat(access_session.expires_at)}",
    ]


def redeem_instructions(access_session: AccessSession) -> List[str]:
    return [
        f'Use profile: "{access_session.profile_name}"',
        f"Access expires: {isoformat(access_session.expires_at)}",
        "Your access is temporary and the account credentials are never shared",
    ]
