"""
OAuth2 token lifecycle for resumeup.

TokenManager owns the access/refresh token pair. It never refreshes on
its own: the caller asks for a refresh after seeing a failed API call,
because hh.ru does not tell us when an access token expires.
"""

import logging
from typing import Optional

import requests

from ..errors import AuthError, PersistenceError, SchemaError, TransportError
from .credentials import ClientIdentity, Credentials, CredentialStore, TokenPair


logger = logging.getLogger(__name__)


class TokenManager:
    """
    Holds the current token pair and runs the refresh-token grant.

    A successful refresh is persisted through the CredentialStore before
    the in-memory pair is swapped, so a newly issued refresh token is on
    disk before anything else uses it.
    """

    def __init__(
        self,
        store: CredentialStore,
        api_url: str = "https://api.hh.ru",
        session: Optional[requests.Session] = None,
        timeout: float = 30,
        credentials: Optional[Credentials] = None,
    ):
        """
        Initialize the token manager.

        Args:
            store: Credential store to load from and persist to
            api_url: Base URL of the hh.ru API (token endpoint lives at /token)
            session: Optional requests session (for testing)
            timeout: Per-request timeout in seconds
            credentials: Already loaded credentials (loaded from store if None)
        """
        self.store = store
        self.token_url = api_url.rstrip("/") + "/token"
        self.session = session or requests.Session()
        self.timeout = timeout

        if credentials is None:
            credentials = store.load()
        self.identity: ClientIdentity = credentials.identity
        self._tokens: TokenPair = credentials.tokens

    @property
    def tokens(self) -> TokenPair:
        return self._tokens

    def ensure_valid(self) -> str:
        """Return the current access token. No network I/O."""
        return self._tokens.access_token

    def refresh(self) -> TokenPair:
        """
        Exchange the stored refresh token for a new token pair.

        Returns:
            The new TokenPair, already persisted

        Raises:
            AuthError: If the token endpoint answers with a non-200 status
            SchemaError: If the response lacks access_token/refresh_token
            TransportError: If the request fails at the network level
            PersistenceError: If the new pair could not be written; the
                pair in memory is left unchanged
        """
        data = {
            "grant_type": "refresh_token",
            "refresh_token": self._tokens.refresh_token,
        }

        try:
            resp = self.session.post(self.token_url, data=data, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Error sending refresh request: %s", e)
            raise TransportError(f"Refresh request failed: {e}") from e

        if resp.status_code != 200:
            logger.error("Refresh status code error %s: %s", resp.status_code, resp.text)
            raise AuthError(resp.status_code, resp.text)

        try:
            payload = resp.json()
        except ValueError as e:
            raise SchemaError(f"Refresh response is not JSON: {resp.text}") from e

        if not isinstance(payload, dict):
            raise SchemaError("Refresh response is not a JSON object")

        access_token = payload.get("access_token")
        refresh_token = payload.get("refresh_token")
        if not isinstance(access_token, str) or not access_token:
            raise SchemaError("Refresh response is missing 'access_token'")
        if not isinstance(refresh_token, str) or not refresh_token:
            raise SchemaError("Refresh response is missing 'refresh_token'")

        new_tokens = TokenPair(access_token=access_token, refresh_token=refresh_token)
        try:
            self.store.save(new_tokens)
        except OSError as e:
            logger.error("Failed to persist refreshed tokens: %s", e)
            raise PersistenceError(f"Failed to persist refreshed tokens: {e}") from e
        self._tokens = new_tokens

        logger.info("Access token refreshed")
        return new_tokens
