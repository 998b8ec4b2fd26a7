"""
Dropbox API client module.

This module provides the signed resource client for Dropbox's version 0 API:

- DropboxClient: account info, listing, file operations, upload, download
- Response classifiers: map non-2xx responses to result dictionaries

Authentication is handled by the OAuth module.
"""

from .classifiers import ResponseClassifier, default_error_classifier, not_modified_classifier
from .client import DropboxClient, FilePart
from .exceptions import DropboxAPIError, DropboxArgumentError

__all__ = [
    "DropboxClient",
    "FilePart",
    "ResponseClassifier",
    "default_error_classifier",
    "not_modified_classifier",
    "DropboxAPIError",
    "DropboxArgumentError",
]
