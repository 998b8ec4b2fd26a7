"""
OAuth 1.0a module for Dropbox API integration.

This module implements the three-legged flow used by Dropbox's version 0
API: request token, user authorization redirect, access token.

Public API:
    DropboxOAuthConfig: OAuth configuration
    TokenPair: Token and secret
    HandshakeResult: Outcome of one handshake leg
    begin_handshake / complete_handshake: The two token exchanges
    OAuthCoordinator: Stateful interface holding the tokens
    PendingTokenStore: Per-session request tokens for web front-ends
    create_app: Demo Flask front-end

Exceptions:
    DropboxOAuthError: Base exception
    ConfigurationError: Configuration error
    AuthorizationError: Authorization flow misuse
"""

from .auth_server import config_from_env, create_app
from .config import ROOT_DROPBOX, ROOT_SANDBOX, DropboxOAuthConfig
from .coordinator import OAuthCoordinator
from .exceptions import AuthorizationError, ConfigurationError, DropboxOAuthError
from .handshake import begin_handshake, build_authorization_url, complete_handshake
from .session_store import PendingTokenStore
from .signing import generate_nonce, sign_url
from .tokens import HandshakeResult, TokenPair

__all__ = [
    # Configuration
    "DropboxOAuthConfig",
    "ROOT_DROPBOX",
    "ROOT_SANDBOX",
    # Tokens
    "TokenPair",
    "HandshakeResult",
    # Handshake
    "begin_handshake",
    "complete_handshake",
    "build_authorization_url",
    "generate_nonce",
    "sign_url",
    # Coordinator
    "OAuthCoordinator",
    # Web front-end
    "PendingTokenStore",
    "create_app",
    "config_from_env",
    # Exceptions
    "DropboxOAuthError",
    "ConfigurationError",
    "AuthorizationError",
]
