"""HTTP executor for PDP requests.

Performs a single POST per call over a pooled httpx.Client. Transport-level
reconnection is disabled (retries=0): attempt counting and backoff belong to
RetryPolicy alone.
"""

from __future__ import annotations

__all__ = [
    "HttpExecutor",
    "USER_AGENT",
    "build_timeout",
]

import logging

import httpx

from pdp_client import __version__
from pdp_client.config import PdpClientConfig
from pdp_client.constants import APP_NAME, JSON_CONTENT_TYPE
from pdp_client.exceptions import DeserializationError, TransportError
from pdp_client.models import PdpResponse

# User-Agent header for PDP requests (informational, not security)
USER_AGENT = f"{APP_NAME}/{__version__}"

logger = logging.getLogger(__name__)


def _ms_to_seconds(milliseconds: int) -> float | None:
    # 0 means "no timeout"
    if milliseconds <= 0:
        return None
    return milliseconds / 1000


def build_timeout(config: PdpClientConfig) -> httpx.Timeout:
    """Map configured millisecond timeouts onto httpx phases.

    Write shares the read budget and pool acquisition shares the connect
    budget.

    Args:
        config: Resolved client configuration.

    Returns:
        httpx.Timeout for the client.
    """
    connect = _ms_to_seconds(config.connection_timeout_ms)
    read = _ms_to_seconds(config.read_timeout_ms)
    return httpx.Timeout(connect=connect, read=read, write=read, pool=connect)


class HttpExecutor:
    """Sends JSON bodies to the PDP and returns raw responses.

    Safe for concurrent use: httpx.Client pools connections across threads.

    Args:
        config: Resolved client configuration (timeouts).
        transport: Optional httpx transport to use instead of the default
            HTTPTransport, e.g. httpx.MockTransport in tests.
    """

    def __init__(
        self,
        config: PdpClientConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if transport is None:
            transport = httpx.HTTPTransport(retries=0)
        self._client = httpx.Client(
            transport=transport,
            timeout=build_timeout(config),
            headers={"User-Agent": USER_AGENT},
        )

    @property
    def timeout(self) -> httpx.Timeout:
        """Timeouts applied to every request."""
        return self._client.timeout

    def execute(self, url: str, body: bytes) -> PdpResponse:
        """POST a JSON body and return the full response.

        Args:
            url: PDP endpoint.
            body: UTF-8 JSON request body.

        Returns:
            PdpResponse with status code and body. Error statuses are returned
            as-is.

        Raises:
            TransportError: On connect/read/write failure, timeout, DNS failure
                or connection reset.
            DeserializationError: If the body's content-encoding cannot be decoded.
        """
        try:
            response = self._client.post(
                url,
                content=body,
                headers={"Content-Type": JSON_CONTENT_TYPE},
            )
        except httpx.TransportError as e:
            raise TransportError(url, f"{type(e).__name__}: {e}") from e
        except httpx.DecodingError as e:
            raise DeserializationError(f"cannot decode response body from {url}: {e}") from e

        # post() reads the body and releases the connection before returning
        logger.debug(f"PDP responded with HTTP {response.status_code} ({len(response.content)} bytes): {url}")
        return PdpResponse(status_code=response.status_code, content=response.content)

    def close(self) -> None:
        """Close pooled connections."""
        self._client.close()
