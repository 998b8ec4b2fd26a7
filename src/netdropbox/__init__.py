"""Client library for the legacy Dropbox (version 0) API with OAuth 1.0a."""

from .dropbox import DropboxClient, not_modified_classifier
from .oauth import DropboxOAuthConfig, HandshakeResult, OAuthCoordinator, TokenPair

__version__ = "1.5.0"

__all__ = [
    "DropboxClient",
    "DropboxOAuthConfig",
    "HandshakeResult",
    "OAuthCoordinator",
    "TokenPair",
    "not_modified_classifier",
]
