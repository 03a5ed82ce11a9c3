"""Constants for pdp-client.

Defaults target a co-located PDP (for example an Open Policy Agent sidecar
listening on 8181). Every tunable has a matching environment variable read
once when the client configuration is resolved.
"""

from __future__ import annotations

__all__ = [
    "APP_NAME",
    # Defaults
    "DEFAULT_PORT",
    "DEFAULT_HOSTNAME",
    "DEFAULT_SCHEME",
    "DEFAULT_POLICY_PATH",
    "DEFAULT_READ_TIMEOUT_MILLISECONDS",
    "DEFAULT_CONNECTION_TIMEOUT_MILLISECONDS",
    "DEFAULT_RETRY_MAX_ATTEMPTS",
    "DEFAULT_RETRY_BACKOFF_MILLISECONDS",
    # Environment variables
    "ENV_PORT",
    "ENV_HOSTNAME",
    "ENV_SCHEME",
    "ENV_POLICY_PATH",
    "ENV_READ_TIMEOUT_MILLISECONDS",
    "ENV_CONNECTION_TIMEOUT_MILLISECONDS",
    "ENV_RETRY_MAX_ATTEMPTS",
    "ENV_RETRY_BACKOFF_MILLISECONDS",
    # Wire format
    "JSON_CONTENT_TYPE",
    "SUPPORTED_SCHEMES",
]

APP_NAME: str = "pdp-client"

# ============================================================================
# Defaults
# ============================================================================

DEFAULT_PORT: int = 8181
DEFAULT_HOSTNAME: str = "localhost"
DEFAULT_SCHEME: str = "http"
DEFAULT_POLICY_PATH: str = "/authz"

# Per-phase HTTP timeouts (milliseconds). 0 disables the timeout.
DEFAULT_READ_TIMEOUT_MILLISECONDS: int = 5000
DEFAULT_CONNECTION_TIMEOUT_MILLISECONDS: int = 5000

# Retry on transport failures only. Attempts include the first try.
DEFAULT_RETRY_MAX_ATTEMPTS: int = 2
DEFAULT_RETRY_BACKOFF_MILLISECONDS: int = 250

# ============================================================================
# Environment Variables
# ============================================================================

ENV_PORT: str = "PDP_PORT"
ENV_HOSTNAME: str = "PDP_HOSTNAME"
# Historical spelling, kept for compatibility with existing deployments.
ENV_SCHEME: str = "PDP_SCHEMA"
ENV_POLICY_PATH: str = "PDP_POLICY_PATH"
ENV_READ_TIMEOUT_MILLISECONDS: str = "PDP_READ_TIMEOUT_MILLISECONDS"
ENV_CONNECTION_TIMEOUT_MILLISECONDS: str = "PDP_CONNECTION_TIMEOUT_MILLISECONDS"
ENV_RETRY_MAX_ATTEMPTS: str = "PDP_RETRY_MAX_ATTEMPTS"
ENV_RETRY_BACKOFF_MILLISECONDS: str = "PDP_RETRY_BACKOFF_MILLISECONDS"

# ============================================================================
# Wire Format
# ============================================================================

JSON_CONTENT_TYPE: str = "application/json; charset=utf-8"

# The HTTP executor only speaks HTTP(S)
SUPPORTED_SCHEMES: frozenset[str] = frozenset({"http", "https"})
