"""
OAuth 1.0a request signing.

Every request this package sends, handshake or API call, goes through
``sign_url``: HMAC-SHA1 over the consumer secret and (optionally) a token
secret, with the oauth parameters carried in the query string.
"""

import logging
import time
from typing import Dict, Optional, Tuple

from oauthlib.common import UNICODE_ASCII_CHARACTER_SET, generate_token
from oauthlib.oauth1 import SIGNATURE_HMAC_SHA1, SIGNATURE_TYPE_QUERY, Client

from .config import DropboxOAuthConfig
from .tokens import TokenPair

logger = logging.getLogger(__name__)

NONCE_LENGTH = 16


def generate_nonce(length: int = NONCE_LENGTH) -> str:
    """
    Generate a fresh alphanumeric nonce.

    Drawn from a system random source, so values do not repeat in practice
    for the same credentials.

    Args:
        length: Number of characters (default: 16)

    Returns:
        Random string of ASCII letters and digits
    """
    return generate_token(length, UNICODE_ASCII_CHARACTER_SET)


def sign_url(
    config: DropboxOAuthConfig,
    url: str,
    http_method: str = "GET",
    token: Optional[TokenPair] = None,
    body: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
    callback_uri: Optional[str] = None,
) -> Tuple[str, Dict[str, str], Optional[str]]:
    """
    Sign a request, placing the oauth parameters in the URL.

    Query parameters already present in ``url`` and a form-encoded ``body``
    (when headers declare application/x-www-form-urlencoded) are covered
    by the signature.

    Args:
        config: Consumer credentials
        url: Target URL, possibly with query parameters
        http_method: Method the signature is computed for
        token: Request or access token pair (None for the request-token leg)
        body: URL-encoded form body, if any
        headers: Request headers (Content-Type decides whether body is signed)
        callback_uri: oauth_callback value (request-token leg only)

    Returns:
        Tuple of (signed_url, headers, body)
    """
    client = Client(
        config.consumer_key,
        client_secret=config.consumer_secret,
        resource_owner_key=token.token if token else None,
        resource_owner_secret=token.secret if token else None,
        callback_uri=callback_uri,
        signature_method=SIGNATURE_HMAC_SHA1,
        signature_type=SIGNATURE_TYPE_QUERY,
        nonce=generate_nonce(),
        timestamp=str(int(time.time())),
    )

    signed_url, signed_headers, signed_body = client.sign(
        url, http_method=http_method, body=body, headers=headers
    )
    logger.debug(f"Signed {http_method} {url}")
    return signed_url, signed_headers, signed_body
