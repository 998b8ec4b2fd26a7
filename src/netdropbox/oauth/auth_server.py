"""
Demo web front-end for the Dropbox login flow.

A small Flask application showing the redirect-based handshake:

1. ``GET /`` fetches a request token, remembers it under a new session
   cookie and redirects the browser to Dropbox
2. Dropbox sends the user back to ``GET /callback``
3. The pending request token is exchanged for an access token and the
   user's account info is shown

Pending request tokens live in a ``PendingTokenStore`` keyed by the
session cookie, so several users can log in at the same time.
"""

import logging
import os
from typing import Optional

from flask import Flask, Response, jsonify, redirect, request

from .config import ROOT_SANDBOX, DropboxOAuthConfig
from .exceptions import ConfigurationError
from .handshake import begin_handshake, complete_handshake
from .session_store import PendingTokenStore

logger = logging.getLogger(__name__)

SESSION_COOKIE = "netdropbox_session"


def config_from_env() -> DropboxOAuthConfig:
    """
    Load demo configuration from environment variables.

    Required environment variables:
        DROPBOX_CONSUMER_KEY: Application key
        DROPBOX_CONSUMER_SECRET: Application secret

    Optional environment variables:
        DROPBOX_CALLBACK_URL: Callback URL (default: http://localhost:3000/callback)
        DROPBOX_CONTEXT: Root namespace, sandbox or dropbox (default: sandbox)

    Returns:
        DropboxOAuthConfig instance

    Raises:
        ConfigurationError: If required environment variables are missing
    """
    consumer_key = os.environ.get("DROPBOX_CONSUMER_KEY")
    consumer_secret = os.environ.get("DROPBOX_CONSUMER_SECRET")

    if not consumer_key or not consumer_secret:
        raise ConfigurationError(
            "Missing Dropbox OAuth credentials. Set environment variables:\n"
            "  DROPBOX_CONSUMER_KEY=your_app_key\n"
            "  DROPBOX_CONSUMER_SECRET=your_app_secret"
        )

    return DropboxOAuthConfig(
        consumer_key=consumer_key,
        consumer_secret=consumer_secret,
        callback_url=os.environ.get(
            "DROPBOX_CALLBACK_URL", "http://localhost:3000/callback"
        ),
        context=os.environ.get("DROPBOX_CONTEXT", ROOT_SANDBOX),
    )


def create_app(
    config: DropboxOAuthConfig, store: Optional[PendingTokenStore] = None
) -> Flask:
    """
    Build the demo Flask application.

    Args:
        config: OAuth configuration; callback_url should point at /callback
        store: Pending-token store (creates one if not provided)

    Returns:
        Flask app with routes /, /callback and /status
    """
    # imported here: the client module depends on the oauth package
    from ..dropbox.client import DropboxClient
    from .coordinator import OAuthCoordinator

    app = Flask(__name__)
    app.logger.setLevel(logging.WARNING)
    pending = store if store is not None else PendingTokenStore()
    app.config["PENDING_TOKENS"] = pending

    @app.route("/", methods=["GET"])
    def login():
        result = begin_handshake(config)
        if not result.success:
            logger.error(f"Login failed: {result.error}")
            return Response(
                f"Could not reach Dropbox: {result.error}",
                status=502,
                content_type="text/plain",
            )

        session_id = pending.issue_session_id()
        pending.put(session_id, result.token_pair)

        response = redirect(result.authorization_url)
        response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="Lax")
        return response

    @app.route("/callback", methods=["GET"])
    def callback():
        session_id = request.cookies.get(SESSION_COOKIE)
        request_token = pending.pop(session_id)
        if request_token is None:
            logger.warning("Callback without a pending login")
            return Response(
                "No login in progress for this browser. Start again at /.",
                status=400,
                content_type="text/plain",
            )

        returned_token = request.args.get("oauth_token")
        if returned_token and returned_token != request_token.token:
            logger.warning("Callback token does not match the pending request token")
            return Response(
                "Request token does not match.", status=400, content_type="text/plain"
            )

        result = complete_handshake(config, request_token)
        if not result.success:
            logger.error(f"Token exchange failed: {result.error}")
            return Response(
                f"Could not obtain access token: {result.error}",
                status=502,
                content_type="text/plain",
            )

        oauth = OAuthCoordinator(config, access_token=result.token_pair)
        info = DropboxClient(oauth).account_info()

        response = jsonify(info)
        response.delete_cookie(SESSION_COOKIE)
        return response

    @app.route("/status", methods=["GET"])
    def status():
        return jsonify({"status": "running", "pending_sessions": len(pending)})

    return app
