"""Pytest fixtures shared by the OAuth and Dropbox client tests."""

import json
from typing import Callable, Optional

import pytest
import requests

from netdropbox.oauth.config import DropboxOAuthConfig
from netdropbox.oauth.tokens import TokenPair

REASONS = {
    200: "OK",
    304: "Not Modified",
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


@pytest.fixture
def config() -> DropboxOAuthConfig:
    """Create test OAuth config."""
    return DropboxOAuthConfig(
        consumer_key="test_consumer_key",
        consumer_secret="test_consumer_secret",
        callback_url="http://localhost:3000/callback",
    )


@pytest.fixture
def request_token() -> TokenPair:
    return TokenPair(token="request_token_123", secret="request_secret_456")


@pytest.fixture
def access_token() -> TokenPair:
    return TokenPair(token="access_token_789", secret="access_secret_abc")


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    """
    Factory building real (already consumed) requests.Response objects.

    Example:
        response = make_response(200, json_body={"uid": 1})
        response = make_response(404)
        response = make_response(200, body=b"not json")
    """

    def _make(
        status_code: int = 200,
        body: bytes = b"",
        json_body: Optional[object] = None,
        headers: Optional[dict] = None,
    ) -> requests.Response:
        response = requests.Response()
        response.status_code = status_code
        response.reason = REASONS.get(status_code, "")
        response._content = json.dumps(json_body).encode() if json_body is not None else body
        response._content_consumed = True
        response.encoding = "utf-8"
        response.headers.update(headers or {})
        return response

    return _make
