"""
Security utilities for bearer-token authentication.
"""

from .tokens import TokenPayload, TokenService

__all__ = [
    "TokenService",
    "TokenPayload",
]
