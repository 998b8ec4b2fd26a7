"""
Response classifiers for non-2xx API responses.

A classifier turns a failed ``requests.Response`` into the result
dictionary returned to the caller. ``DropboxClient.invoke`` uses
``default_error_classifier`` unless a call site injects another one.
"""

import logging
from typing import Any, Callable, Dict

import requests

from ..http_status import status_line

logger = logging.getLogger(__name__)

HTTP_NOT_MODIFIED = 304

ResponseClassifier = Callable[[requests.Response], Dict[str, Any]]


def default_error_classifier(response: requests.Response) -> Dict[str, Any]:
    """Wrap the status line and code into an error result."""
    line = status_line(response)
    logger.warning(f"Something went wrong: {line}")
    return {"error": line, "http_response_code": response.status_code}


def not_modified_classifier(response: requests.Response) -> Dict[str, Any]:
    """
    Treat 304 Not Modified as an "unchanged" result.

    Used for conditional directory listings: the caller sends the hash
    of the previous listing and gets ``{"http_response_code": 304}``
    back when nothing changed beneath the folder.
    """
    if response.status_code == HTTP_NOT_MODIFIED:
        return {"http_response_code": HTTP_NOT_MODIFIED}
    return default_error_classifier(response)
