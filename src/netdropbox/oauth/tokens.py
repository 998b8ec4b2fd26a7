"""
Token data structures for the Dropbox OAuth handshake.

A ``TokenPair`` holds either the short-lived request token (valid only
while the user authorizes the application) or the long-lived access token
used for API calls. Pairs live in memory only; persisting the access pair
is up to the caller.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs


@dataclass(frozen=True)
class TokenPair:
    """
    OAuth token and its secret.

    Attributes:
        token: Public token value (oauth_token)
        secret: Token secret used for signing (oauth_token_secret)
    """

    token: str
    secret: str

    def __repr__(self) -> str:
        # keep secrets out of logs and tracebacks
        return f"TokenPair(token={self.token!r}, secret='***')"

    def to_dict(self) -> dict:
        return {"token": self.token, "secret": self.secret}

    @classmethod
    def from_dict(cls, data: dict) -> "TokenPair":
        return cls(token=data["token"], secret=data["secret"])

    @classmethod
    def from_response_body(cls, body: str) -> Optional["TokenPair"]:
        """
        Parse a token pair from a URL-encoded response body.

        Args:
            body: Body such as "oauth_token_secret=xyz&oauth_token=abc"

        Returns:
            TokenPair, or None if either field is missing
        """
        fields = parse_qs(body, keep_blank_values=True)
        token = fields.get("oauth_token", [None])[0]
        secret = fields.get("oauth_token_secret", [None])[0]

        if not token or secret is None:
            return None

        return cls(token=token, secret=secret)


@dataclass
class HandshakeResult:
    """
    Result of one leg of the OAuth handshake.

    Attributes:
        success: Whether the token exchange succeeded
        token_pair: Request or access token pair (if successful)
        authorization_url: URL the user must visit (request-token leg only)
        error: Status line or failure description (if failed)
        http_response_code: Transport status code (None if no response arrived)
    """

    success: bool
    token_pair: Optional[TokenPair] = None
    authorization_url: Optional[str] = None
    error: Optional[str] = None
    http_response_code: Optional[int] = None
