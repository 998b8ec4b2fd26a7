"""
OAuth exception classes for the Dropbox API client.

Remote failures during the handshake are reported as data
(see ``HandshakeResult``); these exceptions cover misuse and
misconfiguration only.
"""


class DropboxOAuthError(Exception):
    """Base exception for all Dropbox OAuth errors."""

    pass


class ConfigurationError(DropboxOAuthError):
    """OAuth configuration error (missing or invalid configuration)."""

    pass


class AuthorizationError(DropboxOAuthError):
    """OAuth authorization flow error (e.g. callback without a pending session)."""

    pass
