"""
OAuth 1.0a three-legged handshake for Dropbox.

This module implements the two token exchanges of the flow:
- Request token (consumer credentials → request token + authorization URL)
- Access token (request token → access token, after the user authorized)

Both legs sign a POST-intent request and send the signed URL as a GET,
which is what the version 0 endpoints accept. Failures are returned as
``HandshakeResult(success=False, ...)`` rather than raised.
"""

import logging
from typing import Optional
from urllib.parse import urlencode

import requests

from ..http_status import TRANSPORT_ERROR_CODE, is_success, status_line, transport_error_line
from .config import DropboxOAuthConfig
from .signing import sign_url
from .tokens import HandshakeResult, TokenPair

logger = logging.getLogger(__name__)

# Method the token requests are signed for (they are sent as GET)
SIGNED_METHOD = "POST"


def build_authorization_url(config: DropboxOAuthConfig, request_token: TokenPair) -> str:
    """
    Build the URL the user must visit to authorize the application.

    Args:
        config: OAuth configuration (authorize_url, callback_url)
        request_token: Request token from begin_handshake

    Returns:
        Authorization URL with oauth_token and oauth_callback query parameters
    """
    params = {"oauth_token": request_token.token}
    if config.callback_url:
        params["oauth_callback"] = config.callback_url
    return f"{config.authorize_url}?{urlencode(params)}"


def begin_handshake(
    config: DropboxOAuthConfig, session: Optional[requests.Session] = None
) -> HandshakeResult:
    """
    Obtain a request token and the user authorization URL.

    Args:
        config: OAuth configuration
        session: Optional requests session to send the request with

    Returns:
        HandshakeResult with token_pair (request token) and authorization_url
        on success; error and http_response_code on failure
    """
    logger.info("Requesting OAuth request token")

    result = _exchange(
        config,
        config.request_token_url,
        token=None,
        callback_uri=config.callback_url or None,
        session=session,
    )
    if not result.success:
        return result

    result.authorization_url = build_authorization_url(config, result.token_pair)
    logger.info("Obtained request token; user authorization required")
    return result


def complete_handshake(
    config: DropboxOAuthConfig,
    request_token: TokenPair,
    session: Optional[requests.Session] = None,
) -> HandshakeResult:
    """
    Exchange an authorized request token for an access token.

    Call this once after the user accepted the application on the
    authorization page.

    Args:
        config: OAuth configuration
        request_token: Request token pair from begin_handshake
        session: Optional requests session to send the request with

    Returns:
        HandshakeResult with token_pair (access token) on success;
        error and http_response_code on failure
    """
    logger.info("Exchanging request token for access token")

    result = _exchange(
        config,
        config.access_token_url,
        token=request_token,
        callback_uri=None,
        session=session,
    )
    if result.success:
        logger.info("Obtained access token")
    return result


def _exchange(
    config: DropboxOAuthConfig,
    url: str,
    token: Optional[TokenPair],
    callback_uri: Optional[str],
    session: Optional[requests.Session],
) -> HandshakeResult:
    """Sign and send one token request, parsing the token pair from the body."""
    signed_url, headers, _ = sign_url(
        config, url, http_method=SIGNED_METHOD, token=token, callback_uri=callback_uri
    )

    try:
        if session is not None:
            response = session.get(signed_url, headers=headers)
        else:
            response = requests.get(signed_url, headers=headers)
    except requests.RequestException as e:
        logger.warning(f"Something went wrong: {e}")
        return HandshakeResult(
            success=False,
            error=transport_error_line(e),
            http_response_code=TRANSPORT_ERROR_CODE,
        )

    if not is_success(response):
        line = status_line(response)
        logger.warning(f"Something went wrong: {line}")
        return HandshakeResult(
            success=False, error=line, http_response_code=response.status_code
        )

    token_pair = TokenPair.from_response_body(response.text)
    if token_pair is None:
        logger.warning("Token response did not contain oauth_token/oauth_token_secret")
        return HandshakeResult(
            success=False,
            error="Invalid token response from server",
            http_response_code=response.status_code,
        )

    if config.debug:
        logger.debug(f"Got token {token_pair.token}")
        logger.debug(f"Got token secret {token_pair.secret}")

    return HandshakeResult(
        success=True, token_pair=token_pair, http_response_code=response.status_code
    )
