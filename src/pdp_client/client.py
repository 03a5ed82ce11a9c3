"""PDP evaluation client.

The public surface: hand it an input document, get the PDP's JSON back.

Pipeline per evaluation:
    encode (serialization) -> POST with retries (retry + transport) -> decode

Example:
    from pdp_client import PdpClient

    with PdpClient.builder().hostname("opa").policy_path("/v1/data/authz").build() as pdp:
        result = pdp.get_mapped_response({"input": {"user": "alice", "action": "read"}})
        if result.get("result", {}).get("allow"):
            ...
"""

from __future__ import annotations

__all__ = ["PdpClient"]

import logging
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import JsonValue

from pdp_client.config import PdpClientConfig
from pdp_client.endpoint import build_endpoint
from pdp_client.exceptions import PdpStatusError
from pdp_client.models import PdpResponse
from pdp_client.retry import RetryPolicy
from pdp_client.serialization import decode_mapping, decode_tree, encode_request
from pdp_client.transport import HttpExecutor

if TYPE_CHECKING:
    from pdp_client.builder import PdpClientBuilder

logger = logging.getLogger(__name__)


class PdpClient:
    """Synchronous client for an external Policy Decision Point.

    One instance is meant to be created once and shared: it owns a connection
    pool and holds no per-evaluation state, so concurrent calls from several
    threads are safe.

    Args:
        config: Resolved configuration. If None, resolved from defaults and
            environment variables.
        transport: Optional httpx transport (e.g. httpx.MockTransport).
        raise_for_status: If True, responses with status >= 400 raise
            PdpStatusError instead of being decoded. Default False.

    Raises:
        ConfigurationError: If the configuration does not yield a valid endpoint.
    """

    def __init__(
        self,
        config: PdpClientConfig | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
        raise_for_status: bool = False,
    ) -> None:
        self._config = config if config is not None else PdpClientConfig.from_environment()
        self._endpoint = build_endpoint(self._config)
        self._retry_policy = RetryPolicy(
            max_attempts=self._config.retry_max_attempts,
            backoff_ms=self._config.retry_backoff_ms,
        )
        self._executor = HttpExecutor(self._config, transport)
        self._raise_for_status = raise_for_status

    @staticmethod
    def builder() -> PdpClientBuilder:
        """Start a fluent builder."""
        from pdp_client.builder import PdpClientBuilder

        return PdpClientBuilder()

    def __enter__(self) -> PdpClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release idle connections held by the transport."""
        self._executor.close()

    @property
    def config(self) -> PdpClientConfig:
        """Resolved configuration."""
        return self._config

    @property
    def endpoint(self) -> str:
        """PDP endpoint URL."""
        return self._endpoint

    @property
    def retry_policy(self) -> RetryPolicy:
        """Retry policy applied to every evaluation."""
        return self._retry_policy

    def evaluate(self, request: Any) -> PdpResponse:
        """Send request to the PDP and return the raw response.

        Args:
            request: JSON-serializable value or PdpRequest.

        Returns:
            PdpResponse with status code and body.

        Raises:
            SerializationError: Input cannot be encoded (PDP not contacted).
            TransportError: Every attempt failed with an I/O error.
            PdpStatusError: Status >= 400 and raise_for_status is enabled.
        """
        body = encode_request(request)
        logger.debug(f"Evaluating against {self._endpoint} ({len(body)} bytes)")
        response = self._retry_policy.call(lambda: self._executor.execute(self._endpoint, body))
        if self._raise_for_status and response.is_error:
            raise PdpStatusError(self._endpoint, response.status_code, response.content)
        return response

    def get_json_response(self, request: Any) -> JsonValue:
        """Evaluate request and decode the response into a generic JSON tree.

        The status code is not inspected unless raise_for_status is enabled.

        Raises:
            SerializationError, TransportError, PdpStatusError: See evaluate().
            DeserializationError: Response body is not valid JSON.
        """
        return decode_tree(self.evaluate(request).content)

    def get_mapped_response(self, request: Any) -> dict[str, JsonValue]:
        """Evaluate request and decode the response into a string-keyed mapping.

        Raises:
            SerializationError, TransportError, PdpStatusError: See evaluate().
            DeserializationError: Response body is not a JSON object.
        """
        return decode_mapping(self.evaluate(request).content)
