"""Fluent builder for PdpClient.

Unset fields fall back to environment variables, then defaults. Environment
is read once, in build().

Example:
    client = (
        PdpClientBuilder()
        .hostname("pdp.internal")
        .port(9000)
        .retry_max_attempts(3)
        .build()
    )
"""

from __future__ import annotations

__all__ = ["PdpClientBuilder"]

from typing import Any

import httpx

from pdp_client.client import PdpClient
from pdp_client.config import EnvReader, resolve_config


class PdpClientBuilder:
    """Chainable construction of a PdpClient."""

    def __init__(self) -> None:
        self._overrides: dict[str, Any] = {}
        self._transport: httpx.BaseTransport | None = None
        self._getenv: EnvReader | None = None
        self._raise_for_status = False

    def _set(self, field_name: str, value: Any) -> PdpClientBuilder:
        self._overrides[field_name] = value
        return self

    def scheme(self, scheme: str) -> PdpClientBuilder:
        return self._set("scheme", scheme)

    def hostname(self, hostname: str) -> PdpClientBuilder:
        return self._set("hostname", hostname)

    def port(self, port: int) -> PdpClientBuilder:
        return self._set("port", port)

    def policy_path(self, policy_path: str) -> PdpClientBuilder:
        return self._set("policy_path", policy_path)

    def read_timeout_ms(self, milliseconds: int) -> PdpClientBuilder:
        return self._set("read_timeout_ms", milliseconds)

    def connection_timeout_ms(self, milliseconds: int) -> PdpClientBuilder:
        return self._set("connection_timeout_ms", milliseconds)

    def retry_max_attempts(self, attempts: int) -> PdpClientBuilder:
        return self._set("retry_max_attempts", attempts)

    def retry_backoff_ms(self, milliseconds: int) -> PdpClientBuilder:
        return self._set("retry_backoff_ms", milliseconds)

    def transport(self, transport: httpx.BaseTransport) -> PdpClientBuilder:
        """Use a custom httpx transport (e.g. httpx.MockTransport)."""
        self._transport = transport
        return self

    def environment(self, getenv: EnvReader) -> PdpClientBuilder:
        """Read environment overrides through getenv instead of os.environ."""
        self._getenv = getenv
        return self

    def raise_for_status(self, enabled: bool = True) -> PdpClientBuilder:
        """Raise PdpStatusError for status >= 400 instead of decoding the body."""
        self._raise_for_status = enabled
        return self

    def build(self) -> PdpClient:
        """Resolve configuration and create the client.

        Raises:
            ConfigurationError: If the resolved configuration is invalid.
        """
        config = resolve_config(self._overrides, self._getenv)
        return PdpClient(config, transport=self._transport, raise_for_status=self._raise_for_status)
