"""Exceptions for the Dropbox API client."""


class DropboxAPIError(Exception):
    """Base exception for Dropbox API client errors."""

    pass


class DropboxArgumentError(DropboxAPIError):
    """
    Invalid arguments passed to an API wrapper.

    Remote failures never raise; they come back as
    ``{"error": ..., "http_response_code": ...}`` dictionaries.
    This error is only raised before a request is built.
    """

    pass
