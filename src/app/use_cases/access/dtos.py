"""
Access Verification DTOs
"""

from pydantic import Field

from src.domain.base import ApiModel
from src.domain.entities import AccessType


class AccessCheckResponse(ApiModel):
    """Derived answer to "can this address use this pass right now" """

    address: str
    pass_id: int
    has_access: bool
    owns_nft: bool = Field(alias="ownsNFT")
    has_active_delegation: bool
    access_type: AccessType
