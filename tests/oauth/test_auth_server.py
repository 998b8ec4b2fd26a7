"""Tests for the demo web front-end."""

from unittest import mock

import pytest

from netdropbox.oauth.auth_server import SESSION_COOKIE, config_from_env, create_app
from netdropbox.oauth.exceptions import ConfigurationError
from netdropbox.oauth.session_store import PendingTokenStore
from netdropbox.oauth.tokens import HandshakeResult, TokenPair


def login_result(token):
    pair = TokenPair(token=token, secret=f"{token}_secret")
    return HandshakeResult(
        success=True,
        token_pair=pair,
        authorization_url=f"https://www.dropbox.com/0/oauth/authorize?oauth_token={token}",
        http_response_code=200,
    )


class TestConfigFromEnv:
    """Tests for config_from_env."""

    @mock.patch.dict(
        "os.environ",
        {"DROPBOX_CONSUMER_KEY": "env_key", "DROPBOX_CONSUMER_SECRET": "env_secret"},
        clear=True,
    )
    def test_loads_credentials(self):
        config = config_from_env()

        assert config.consumer_key == "env_key"
        assert config.consumer_secret == "env_secret"
        assert config.callback_url == "http://localhost:3000/callback"
        assert config.context == "sandbox"

    @mock.patch.dict(
        "os.environ",
        {
            "DROPBOX_CONSUMER_KEY": "env_key",
            "DROPBOX_CONSUMER_SECRET": "env_secret",
            "DROPBOX_CALLBACK_URL": "https://example.com/cb",
            "DROPBOX_CONTEXT": "dropbox",
        },
        clear=True,
    )
    def test_loads_optional_settings(self):
        config = config_from_env()

        assert config.callback_url == "https://example.com/cb"
        assert config.context == "dropbox"

    @mock.patch.dict("os.environ", {}, clear=True)
    def test_missing_credentials_raise(self):
        with pytest.raises(ConfigurationError, match="Missing Dropbox OAuth credentials"):
            config_from_env()


class TestDemoApp:
    """Tests for the Flask demo app."""

    @pytest.fixture
    def store(self):
        return PendingTokenStore()

    @pytest.fixture
    def app(self, config, store):
        app = create_app(config, store=store)
        app.testing = True
        return app

    @mock.patch("netdropbox.oauth.auth_server.begin_handshake")
    def test_login_redirects_and_stores_token(self, mock_begin, app, store):
        mock_begin.return_value = login_result("req_a")

        response = app.test_client().get("/")

        assert response.status_code == 302
        assert response.headers["Location"] == login_result("req_a").authorization_url
        assert f"{SESSION_COOKIE}=" in response.headers["Set-Cookie"]
        assert len(store) == 1

    @mock.patch("netdropbox.oauth.auth_server.begin_handshake")
    def test_login_failure_returns_502(self, mock_begin, app, store):
        mock_begin.return_value = HandshakeResult(
            success=False, error="401 Unauthorized", http_response_code=401
        )

        response = app.test_client().get("/")

        assert response.status_code == 502
        assert b"401 Unauthorized" in response.data
        assert len(store) == 0

    @mock.patch("netdropbox.dropbox.client.DropboxClient.account_info")
    @mock.patch("netdropbox.oauth.auth_server.complete_handshake")
    @mock.patch("netdropbox.oauth.auth_server.begin_handshake")
    def test_callback_exchanges_token_and_shows_account(
        self, mock_begin, mock_complete, mock_account_info, app, config, store, access_token
    ):
        mock_begin.return_value = login_result("req_a")
        mock_complete.return_value = HandshakeResult(
            success=True, token_pair=access_token, http_response_code=200
        )
        mock_account_info.return_value = {"display_name": "Alice", "http_response_code": 200}
        client = app.test_client()

        client.get("/")
        response = client.get("/callback?oauth_token=req_a&uid=1")

        assert response.status_code == 200
        assert response.get_json() == {"display_name": "Alice", "http_response_code": 200}
        mock_complete.assert_called_once_with(config, login_result("req_a").token_pair)
        assert len(store) == 0

    @mock.patch("netdropbox.dropbox.client.DropboxClient.account_info")
    @mock.patch("netdropbox.oauth.auth_server.complete_handshake")
    @mock.patch("netdropbox.oauth.auth_server.begin_handshake")
    def test_concurrent_users_keep_their_own_tokens(
        self, mock_begin, mock_complete, mock_account_info, app, config, access_token
    ):
        """Two browsers logging in at once each finish with their own request token."""
        mock_begin.side_effect = [login_result("req_alice"), login_result("req_bob")]
        mock_complete.return_value = HandshakeResult(
            success=True, token_pair=access_token, http_response_code=200
        )
        mock_account_info.return_value = {"http_response_code": 200}
        alice = app.test_client()
        bob = app.test_client()

        alice.get("/")
        bob.get("/")
        bob.get("/callback?oauth_token=req_bob")
        alice.get("/callback?oauth_token=req_alice")

        exchanged = [c.args[1].token for c in mock_complete.call_args_list]
        assert exchanged == ["req_bob", "req_alice"]

    def test_callback_without_pending_login_returns_400(self, app):
        response = app.test_client().get("/callback?oauth_token=whatever")

        assert response.status_code == 400
        assert b"No login in progress" in response.data

    @mock.patch("netdropbox.oauth.auth_server.complete_handshake")
    @mock.patch("netdropbox.oauth.auth_server.begin_handshake")
    def test_callback_with_mismatched_token_returns_400(self, mock_begin, mock_complete, app):
        mock_begin.return_value = login_result("req_a")
        client = app.test_client()

        client.get("/")
        response = client.get("/callback?oauth_token=someone_else")

        assert response.status_code == 400
        mock_complete.assert_not_called()

    @mock.patch("netdropbox.oauth.auth_server.complete_handshake")
    @mock.patch("netdropbox.oauth.auth_server.begin_handshake")
    def test_callback_exchange_failure_returns_502(self, mock_begin, mock_complete, app):
        mock_begin.return_value = login_result("req_a")
        mock_complete.return_value = HandshakeResult(
            success=False, error="403 Forbidden", http_response_code=403
        )
        client = app.test_client()

        client.get("/")
        response = client.get("/callback?oauth_token=req_a")

        assert response.status_code == 502
        assert b"403 Forbidden" in response.data

    def test_status(self, app, store, request_token):
        store.put("session", request_token)

        response = app.test_client().get("/status")

        assert response.get_json() == {"status": "running", "pending_sessions": 1}
