"""
OAuth configuration for the Dropbox API client.

This module provides configuration management for OAuth 1.0a authentication
with Dropbox's version 0 API. Configuration is provided programmatically;
the library itself does not read environment variables.
"""

from dataclasses import dataclass

from .exceptions import ConfigurationError

# Root namespaces an operation can address
ROOT_DROPBOX = "dropbox"
ROOT_SANDBOX = "sandbox"
VALID_ROOTS = (ROOT_DROPBOX, ROOT_SANDBOX)


@dataclass
class DropboxOAuthConfig:
    """
    Configuration for Dropbox OAuth 1.0a.

    Attributes:
        consumer_key: Application key from the Dropbox developer console
        consumer_secret: Application secret from the Dropbox developer console
        callback_url: Where Dropbox redirects the user after authorization
        context: Root namespace for file operations ("sandbox" or "dropbox")
        debug: Log received tokens and response bodies at DEBUG level
        request_token_url: OAuth request-token endpoint
        access_token_url: OAuth access-token endpoint
        authorize_url: User-facing authorization page
        api_host: Host serving metadata and file operations
        content_host: Host serving file uploads and downloads
        api_version: Version prefix of every API path
    """

    # Required - from the Dropbox developer console
    consumer_key: str
    consumer_secret: str

    callback_url: str = "http://localhost:3000/callback"
    context: str = ROOT_SANDBOX
    debug: bool = False

    # Dropbox OAuth endpoints
    request_token_url: str = "https://api.dropbox.com/0/oauth/request_token"
    access_token_url: str = "https://api.dropbox.com/0/oauth/access_token"
    authorize_url: str = "https://www.dropbox.com/0/oauth/authorize"

    # API hosts
    api_host: str = "api.dropbox.com"
    content_host: str = "api-content.dropbox.com"
    api_version: str = "0"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.consumer_key:
            raise ConfigurationError("consumer_key cannot be empty")

        if not self.consumer_secret:
            raise ConfigurationError("consumer_secret cannot be empty")

        validate_context(self.context)

    def api_url(self, command: str, host: str = "api") -> str:
        """
        Full URL for an API command.

        Args:
            command: Path below the version prefix (e.g. "account/info")
            host: "api" for the API host, "api-content" for the content host

        Returns:
            Complete HTTPS URL (e.g. https://api.dropbox.com/0/account/info)
        """
        if host == "api":
            hostname = self.api_host
        elif host == "api-content":
            hostname = self.content_host
        else:
            raise ConfigurationError(f"Unknown API host: {host}")

        return f"https://{hostname}/{self.api_version}/{command.lstrip('/')}"


def validate_context(context: str) -> str:
    """Raise ConfigurationError unless context is a known root namespace."""
    if context not in VALID_ROOTS:
        raise ConfigurationError(
            f"context must be one of {', '.join(VALID_ROOTS)}, got {context!r}"
        )
    return context
