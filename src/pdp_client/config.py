"""Client configuration for pdp-client.

Holds the eight tunables of a PDP client and resolves their final values by
layering, per field:

    1. A value set programmatically (builder setter or explicit override)
    2. The field's environment variable (see constants.ENV_*)
    3. The built-in default

Example usage:
    # Defaults + environment
    config = PdpClientConfig.from_environment()

    # Explicit values win over the environment
    config = resolve_config({"hostname": "pdp.internal", "port": 9000})
"""

from __future__ import annotations

__all__ = [
    "ENV_VARS",
    "EnvReader",
    "PdpClientConfig",
    "parse_env_int",
    "resolve_config",
]

import logging
import os
import re
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from pdp_client.constants import (
    DEFAULT_CONNECTION_TIMEOUT_MILLISECONDS,
    DEFAULT_HOSTNAME,
    DEFAULT_POLICY_PATH,
    DEFAULT_PORT,
    DEFAULT_READ_TIMEOUT_MILLISECONDS,
    DEFAULT_RETRY_BACKOFF_MILLISECONDS,
    DEFAULT_RETRY_MAX_ATTEMPTS,
    DEFAULT_SCHEME,
    ENV_CONNECTION_TIMEOUT_MILLISECONDS,
    ENV_HOSTNAME,
    ENV_POLICY_PATH,
    ENV_PORT,
    ENV_READ_TIMEOUT_MILLISECONDS,
    ENV_RETRY_BACKOFF_MILLISECONDS,
    ENV_RETRY_MAX_ATTEMPTS,
    ENV_SCHEME,
)
from pdp_client.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Returns the value of a named environment variable, or None when unset
EnvReader = Callable[[str], str | None]

# Field name -> environment variable
ENV_VARS: dict[str, str] = {
    "scheme": ENV_SCHEME,
    "hostname": ENV_HOSTNAME,
    "port": ENV_PORT,
    "policy_path": ENV_POLICY_PATH,
    "read_timeout_ms": ENV_READ_TIMEOUT_MILLISECONDS,
    "connection_timeout_ms": ENV_CONNECTION_TIMEOUT_MILLISECONDS,
    "retry_max_attempts": ENV_RETRY_MAX_ATTEMPTS,
    "retry_backoff_ms": ENV_RETRY_BACKOFF_MILLISECONDS,
}

_INT_FIELDS = frozenset(
    {"port", "read_timeout_ms", "connection_timeout_ms", "retry_max_attempts", "retry_backoff_ms"}
)

# Plain decimal integer: optional sign, ASCII digits, nothing else
_DECIMAL_INT = re.compile(r"[+-]?[0-9]+")

# Values outside the signed 32-bit range count as malformed
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class PdpClientConfig(BaseModel):
    """Resolved PDP client configuration.

    Immutable once created. Retry values are stored as given; the retry
    policy normalizes zero and negative values when it is built.

    Attributes:
        scheme: URL scheme ("http" or "https").
        hostname: PDP host name or IP literal.
        port: PDP port (1-65535).
        policy_path: HTTP path of the policy, must start with "/".
        read_timeout_ms: Read phase timeout in milliseconds (0 = no timeout).
        connection_timeout_ms: Connect phase timeout in milliseconds (0 = no timeout).
        retry_max_attempts: Maximum attempts per evaluation, first try included.
        retry_backoff_ms: Base delay of the exponential backoff in milliseconds.
    """

    scheme: str = DEFAULT_SCHEME
    hostname: str = DEFAULT_HOSTNAME
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    policy_path: str = DEFAULT_POLICY_PATH
    read_timeout_ms: int = Field(default=DEFAULT_READ_TIMEOUT_MILLISECONDS, ge=0)
    connection_timeout_ms: int = Field(default=DEFAULT_CONNECTION_TIMEOUT_MILLISECONDS, ge=0)
    retry_max_attempts: int = DEFAULT_RETRY_MAX_ATTEMPTS
    retry_backoff_ms: int = DEFAULT_RETRY_BACKOFF_MILLISECONDS

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("policy_path")
    @classmethod
    def require_absolute_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"policy_path must start with '/', got {value!r}")
        return value

    @classmethod
    def from_environment(cls, getenv: EnvReader | None = None) -> PdpClientConfig:
        """Build a configuration from defaults and environment variables only.

        Args:
            getenv: Environment reader (default: os.environ.get).

        Returns:
            Resolved PdpClientConfig.

        Raises:
            ConfigurationError: If an environment value violates a field constraint.
        """
        return resolve_config(None, getenv)


def parse_env_int(name: str, raw: str) -> int | None:
    """Parse an integer environment value.

    Malformed values are ignored (logged at DEBUG) so the caller keeps the
    previous layer's value.

    Args:
        name: Environment variable name, for logging.
        raw: Raw string value.

    Returns:
        Parsed integer, or None if the value is not a plain decimal integer
        within the signed 32-bit range.
    """
    if _DECIMAL_INT.fullmatch(raw) is None:
        logger.debug(f"Ignoring malformed integer in {name}: {raw!r}")
        return None
    value = int(raw)
    if not _INT_MIN <= value <= _INT_MAX:
        logger.debug(f"Ignoring out-of-range integer in {name}: {raw!r}")
        return None
    return value


def _read_environment(getenv: EnvReader, skip: frozenset[str] | set[str]) -> dict[str, Any]:
    """Collect environment values for every field not in skip."""
    values: dict[str, Any] = {}
    for field_name, env_name in ENV_VARS.items():
        if field_name in skip:
            continue
        raw = getenv(env_name)
        if raw is None:
            continue
        if field_name in _INT_FIELDS:
            parsed = parse_env_int(env_name, raw)
            if parsed is not None:
                values[field_name] = parsed
        else:
            values[field_name] = raw
    return values


def resolve_config(
    overrides: Mapping[str, Any] | None = None,
    getenv: EnvReader | None = None,
) -> PdpClientConfig:
    """Resolve configuration: overrides > environment > defaults.

    The environment is read once, here. Fields present in overrides are
    never looked up in the environment.

    Args:
        overrides: Programmatically set field values, keyed by field name.
        getenv: Environment reader (default: os.environ.get).

    Returns:
        Resolved, validated PdpClientConfig.

    Raises:
        ConfigurationError: If an override names an unknown field or any
            resolved value violates a field constraint.
    """
    explicit = dict(overrides or {})
    reader = getenv if getenv is not None else os.environ.get

    unknown = set(explicit) - set(ENV_VARS)
    if unknown:
        raise ConfigurationError(f"unknown configuration field(s): {', '.join(sorted(unknown))}")

    values = _read_environment(reader, set(explicit))
    values.update(explicit)

    try:
        return PdpClientConfig(**values)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            errors.append(f"{loc}: {error['msg']}")
        raise ConfigurationError("; ".join(errors)) from e
