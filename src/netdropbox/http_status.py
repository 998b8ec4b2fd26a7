"""Helpers for describing HTTP responses the way the API results report them."""

import requests

# Status reported when no response arrived at all (connection refused, DNS, timeout)
TRANSPORT_ERROR_CODE = 500


def is_success(response: requests.Response) -> bool:
    """True for 2xx responses only; redirects and 304 are not success."""
    return 200 <= response.status_code < 300


def status_line(response: requests.Response) -> str:
    """Status code and reason phrase, e.g. "404 Not Found"."""
    reason = response.reason or ""
    return f"{response.status_code} {reason}".strip()


def transport_error_line(error: Exception) -> str:
    """Status line for a request that never got a response."""
    return f"{TRANSPORT_ERROR_CODE} {error}"
