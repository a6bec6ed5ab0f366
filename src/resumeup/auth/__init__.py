"""
Auth module for resumeup.

Handles OAuth2 credentials:
- Loading and persisting the .env credential file
- Refreshing the access/refresh token pair
"""

from .credentials import CredentialStore, Credentials, ClientIdentity, TokenPair
from .tokens import TokenManager

__all__ = [
    "CredentialStore",
    "Credentials",
    "ClientIdentity",
    "TokenPair",
    "TokenManager",
]
