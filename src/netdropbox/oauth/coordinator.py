"""
OAuth coordinator for high-level OAuth operations.

This module provides the main interface for the Dropbox OAuth handshake.
It holds the configuration and the token pairs as the flow advances:

    unauthenticated → request token (login) → access token (auth)

Tokens are kept in memory only. Persisting the access token between
processes is left to the caller (see ``access_token`` and ``TokenPair.to_dict``).
"""

import logging
from typing import Optional

import requests

from .config import DropboxOAuthConfig
from .exceptions import AuthorizationError
from .handshake import begin_handshake, complete_handshake
from .tokens import HandshakeResult, TokenPair

logger = logging.getLogger(__name__)


class OAuthCoordinator:
    """
    High-level coordinator for the Dropbox OAuth 1.0a flow.

    Example:
        coordinator = OAuthCoordinator(DropboxOAuthConfig("KEY", "SECRET"))
        result = coordinator.login()
        if result.success:
            print(f"Visit {result.authorization_url}")
        ...
        if coordinator.auth().success:
            client = DropboxClient(coordinator)
    """

    def __init__(
        self,
        config: DropboxOAuthConfig,
        access_token: Optional[TokenPair] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize OAuth coordinator.

        Args:
            config: OAuth configuration
            access_token: Previously obtained access token (skips the handshake)
            session: requests session for the token requests (optional)
        """
        self.config = config
        self.session = session
        self.request_token: Optional[TokenPair] = None
        self.access_token: Optional[TokenPair] = access_token
        self.login_link: Optional[str] = None
        self.error: Optional[str] = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    def login(self) -> HandshakeResult:
        """
        Start the handshake: obtain a request token and the login link.

        The user must open ``result.authorization_url`` and accept the
        application. Dropbox then redirects to the configured callback URL;
        if the user accepted before, the redirect may happen immediately.

        Returns:
            HandshakeResult; on failure ``error`` holds the status line
        """
        result = begin_handshake(self.config, session=self.session)

        if result.success:
            self.request_token = result.token_pair
            self.login_link = result.authorization_url
            self.error = None
        else:
            self.error = result.error
            logger.error(f"Login failed: {result.error}")

        return result

    def auth(self, request_token: Optional[TokenPair] = None) -> HandshakeResult:
        """
        Finish the handshake: exchange the request token for an access token.

        Only needs to be called once after login; the access token stays
        valid until the user revokes it.

        Args:
            request_token: Request token to exchange (default: the one from login())

        Returns:
            HandshakeResult; on failure ``error`` holds the status line

        Raises:
            AuthorizationError: If no request token is available
        """
        token = request_token or self.request_token
        if token is None:
            raise AuthorizationError("No request token available. Call login() first.")

        result = complete_handshake(self.config, token, session=self.session)

        if result.success:
            self.access_token = result.token_pair
            # request token is single use
            self.request_token = None
            self.login_link = None
            self.error = None
        else:
            self.error = result.error
            logger.error(f"Token exchange failed: {result.error}")

        return result

    def is_authorized(self) -> bool:
        """
        Check if an access token is held.

        Returns:
            True if authorized, False otherwise
        """
        return self.access_token is not None

    def get_status(self) -> dict:
        """
        Get current handshake status for diagnostics.

        Returns:
            Dictionary with keys authorized, pending_authorization,
            context and last_error
        """
        return {
            "authorized": self.is_authorized(),
            "pending_authorization": self.request_token is not None,
            "context": self.config.context,
            "last_error": self.error,
        }

    def revoke(self) -> None:
        """
        Forget all tokens held in memory.

        This does NOT revoke the access token on Dropbox's servers.
        """
        self.request_token = None
        self.access_token = None
        self.login_link = None
        logger.info("Tokens discarded (local). Re-authorization required.")
