"""Environment-driven settings shared by the clients and the server."""

import os

DEFAULT_SERVER_URL = 'http://localhost:3000'
DEFAULT_HTTP_TIMEOUT = 10.0


def get_server_url() -> str:
    """Get the base URL of the search log server."""
    return os.getenv('SEARCH_SERVER_URL', DEFAULT_SERVER_URL).rstrip('/')


def get_http_timeout() -> float:
    """Get the timeout in seconds applied to every outbound request."""
    raw = os.getenv('HTTP_TIMEOUT')
    if not raw:
        return DEFAULT_HTTP_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        return DEFAULT_HTTP_TIMEOUT


def tracing_enabled() -> bool:
    return os.getenv('TRACING_ENABLED', '').lower() in ('1', 'true', 'yes')
