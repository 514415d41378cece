"""
Pass Use Case DTOs
"""

from pydantic import Field

from src.domain.base import ApiModel


class PassInfo(ApiModel):
    """Pass NFT as reported by the ledger"""

    id: int
    name: str
    owner: str


class MintPassResponse(ApiModel):
    """Response for mint pass use case"""

    success: bool = True
    pass_info: PassInfo = Field(alias="pass")
