"""
Per-session storage of pending request tokens.

Between the redirect to Dropbox and the callback, a web front-end must
remember which request token belongs to which browser. Tokens are kept
under a server-issued session identifier so concurrent users never see
each other's tokens.
"""

import logging
import secrets
import threading
from typing import Dict, Optional

from .tokens import TokenPair

logger = logging.getLogger(__name__)


class PendingTokenStore:
    """In-memory map of session id → request token pair, safe across threads."""

    def __init__(self):
        self._tokens: Dict[str, TokenPair] = {}
        self._lock = threading.Lock()

    @staticmethod
    def issue_session_id() -> str:
        """Create a new unguessable session identifier."""
        return secrets.token_urlsafe(32)

    def put(self, session_id: str, token_pair: TokenPair) -> None:
        """Remember the request token for a session, replacing any earlier one."""
        with self._lock:
            self._tokens[session_id] = token_pair
        logger.debug(f"Stored pending request token for session {session_id[:8]}...")

    def pop(self, session_id: Optional[str]) -> Optional[TokenPair]:
        """
        Remove and return the request token for a session.

        Returns:
            TokenPair, or None if the session has no pending token
        """
        if not session_id:
            return None
        with self._lock:
            return self._tokens.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)
