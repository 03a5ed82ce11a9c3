"""pdp-client - HTTP client for an external Policy Decision Point.

Structure:
    config.py         - PdpClientConfig and environment resolution
    endpoint.py       - Endpoint URL construction
    serialization.py  - JSON encode/decode boundary
    transport.py      - HttpExecutor (single POST over httpx)
    retry.py          - RetryPolicy (exponential backoff on TransportError)
    client.py         - PdpClient evaluation facade
    builder.py        - PdpClientBuilder
"""

__version__ = "0.1.0"

from pdp_client.builder import PdpClientBuilder
from pdp_client.client import PdpClient
from pdp_client.config import PdpClientConfig, resolve_config
from pdp_client.exceptions import (
    ConfigurationError,
    DeserializationError,
    PdpClientError,
    PdpStatusError,
    SerializationError,
    TransportError,
)
from pdp_client.models import PdpRequest, PdpResponse
from pdp_client.retry import RetryPolicy

__all__ = [
    "__version__",
    # Client
    "PdpClient",
    "PdpClientBuilder",
    "PdpClientConfig",
    "RetryPolicy",
    "resolve_config",
    # Models
    "PdpRequest",
    "PdpResponse",
    # Errors
    "ConfigurationError",
    "DeserializationError",
    "PdpClientError",
    "PdpStatusError",
    "SerializationError",
    "TransportError",
]
