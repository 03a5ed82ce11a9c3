"""Endpoint construction for the PDP.

Builds {scheme}://{host}:{port}{path} from a PdpClientConfig, percent-encoding
host and path per RFC 3986. The port is always explicit, even when it equals
the scheme default.
"""

from __future__ import annotations

__all__ = ["build_endpoint"]

import re
from urllib.parse import quote

import httpx

from pdp_client.config import PdpClientConfig
from pdp_client.constants import SUPPORTED_SCHEMES
from pdp_client.exceptions import ConfigurationError

# RFC 3986 section 3.1: ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")

# RFC 3986 sub-delims. Unreserved characters are never quoted.
_SUB_DELIMS = "!$&'()*+,;="
# pchar = unreserved / pct-encoded / sub-delims / ":" / "@", plus "/" between segments
_PATH_SAFE = _SUB_DELIMS + ":@/"
_IPV6_SAFE = ":."


def _encode_host(hostname: str) -> str:
    """Percent-encode a hostname as an RFC 3986 reg-name or IP literal."""
    if hostname.startswith("[") and hostname.endswith("]"):
        return "[" + quote(hostname[1:-1], safe=_IPV6_SAFE) + "]"
    if ":" in hostname:
        # Bare IPv6 literal
        return "[" + quote(hostname, safe=_IPV6_SAFE) + "]"
    if not hostname.isascii():
        try:
            hostname = hostname.encode("idna").decode("ascii")
        except UnicodeError as e:
            raise ConfigurationError(f"invalid hostname {hostname!r}: {e}") from e
    return quote(hostname, safe=_SUB_DELIMS)


def build_endpoint(config: PdpClientConfig) -> str:
    """Build the PDP endpoint URL.

    Args:
        config: Resolved client configuration.

    Returns:
        Absolute URL string, e.g. "http://localhost:8181/authz".

    Raises:
        ConfigurationError: If the scheme or hostname is invalid, or the
            assembled URL does not parse.
    """
    scheme = config.scheme
    if not _SCHEME_RE.fullmatch(scheme):
        raise ConfigurationError(f"invalid URL scheme {scheme!r}")
    scheme = scheme.lower()
    if scheme not in SUPPORTED_SCHEMES:
        raise ConfigurationError(
            f"unsupported URL scheme {scheme!r} (expected one of: {', '.join(sorted(SUPPORTED_SCHEMES))})"
        )

    if not config.hostname:
        raise ConfigurationError("hostname must not be empty")

    host = _encode_host(config.hostname)
    path = quote(config.policy_path, safe=_PATH_SAFE)
    url = f"{scheme}://{host}:{config.port}{path}"

    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"invalid PDP endpoint {url!r}: {e}") from e

    # httpx reports default ports (80/443) as None
    if parsed.port not in (config.port, None) or not parsed.host or parsed.query or parsed.fragment:
        raise ConfigurationError(f"invalid PDP endpoint {url!r}")

    return url
