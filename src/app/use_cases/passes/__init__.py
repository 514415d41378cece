"""
Pass Use Cases

Minting and describing subscription passes on the ledger.
"""

from .mint_pass_use_case import MintPassUseCase
from .get_pass_use_case import GetPassUseCase
from .dtos import MintPassResponse, PassInfo

__all__ = [
    "MintPassUseCase",
    "GetPassUseCase",
    "MintPassResponse",
    "PassInfo",
]
