"""Tests for OAuth and API client exceptions."""

import pytest

from netdropbox.dropbox.exceptions import DropboxAPIError, DropboxArgumentError
from netdropbox.oauth.exceptions import (
    AuthorizationError,
    ConfigurationError,
    DropboxOAuthError,
)


class TestOAuthExceptions:
    """Tests for OAuth exception hierarchy."""

    def test_dropbox_oauth_error_is_base_exception(self):
        """DropboxOAuthError is base for all OAuth errors."""
        error = DropboxOAuthError("test error")
        assert isinstance(error, Exception)
        assert str(error) == "test error"

    def test_configuration_error_inherits_from_base(self):
        """ConfigurationError inherits from DropboxOAuthError."""
        error = ConfigurationError("config error")
        assert isinstance(error, DropboxOAuthError)
        assert str(error) == "config error"

    def test_authorization_error_inherits_from_base(self):
        """AuthorizationError inherits from DropboxOAuthError."""
        error = AuthorizationError("auth error")
        assert isinstance(error, DropboxOAuthError)
        assert str(error) == "auth error"

    def test_can_catch_all_oauth_errors_with_base(self):
        """All OAuth errors can be caught with DropboxOAuthError."""
        for error_class in (ConfigurationError, AuthorizationError):
            with pytest.raises(DropboxOAuthError):
                raise error_class("test")


class TestAPIExceptions:
    """Tests for API client exception hierarchy."""

    def test_argument_error_inherits_from_api_error(self):
        error = DropboxArgumentError("bad filename")
        assert isinstance(error, DropboxAPIError)
        assert str(error) == "bad filename"

    def test_api_errors_are_separate_from_oauth_errors(self):
        assert not issubclass(DropboxAPIError, DropboxOAuthError)
