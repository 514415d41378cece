"""
Access Verification Use Cases
"""

from .check_access_use_case import CheckAccessUseCase
from .dtos import AccessCheckResponse

__all__ = [
    "CheckAccessUseCase",
    "AccessCheckResponse",
]
