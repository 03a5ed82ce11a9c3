"""Custom exceptions for pdp-client.

Every evaluation either returns a decoded result or raises exactly one of
the errors below. All of them derive from PdpClientError and carry the
pipeline stage that failed, which is also the prefix of the message.

Terminal Errors (never retried):
    - ConfigurationError: URL components or config values are invalid
    - SerializationError: Input cannot be encoded to JSON
    - DeserializationError: Response body is not JSON of the requested shape
    - PdpStatusError: PDP answered with status >= 400 (opt-in only)

Retryable Errors:
    - TransportError: Connect/read/timeout/DNS/reset before a full response

Usage:
    from pdp_client.exceptions import TransportError, SerializationError
"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "DeserializationError",
    "PdpClientError",
    "PdpStatusError",
    "STAGE_CONFIGURATION",
    "STAGE_DECODING",
    "STAGE_DISPATCHING",
    "STAGE_ENCODING",
    "SerializationError",
    "TransportError",
]

STAGE_CONFIGURATION = "configuration"
STAGE_ENCODING = "encoding request"
STAGE_DISPATCHING = "dispatching"
STAGE_DECODING = "decoding response"


class PdpClientError(Exception):
    """Base exception for all pdp-client failures.

    Attributes:
        stage: Pipeline stage that failed (e.g. "encoding request").
        message: Human-readable description, prefixed with the stage.
    """

    stage: str = "unknown"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigurationError(PdpClientError):
    """Configuration is invalid.

    Raised when:
    - A field violates its constraint (port out of range, relative policy path)
    - The scheme is not a valid URL scheme or not http/https
    - The hostname is empty
    - The assembled endpoint URL does not parse

    Raised at client construction; never retried.
    """

    stage = STAGE_CONFIGURATION

    def __init__(self, detail: str) -> None:
        super().__init__(f"{STAGE_CONFIGURATION}: {detail}")
        self.detail = detail


class SerializationError(PdpClientError):
    """Input value cannot be encoded to JSON.

    Raised before any HTTP request is made, so the PDP is never contacted.
    """

    stage = STAGE_ENCODING

    def __init__(self, detail: str) -> None:
        super().__init__(f"{STAGE_ENCODING}: {detail}")
        self.detail = detail


class TransportError(PdpClientError):
    """I/O failure before a complete HTTP response was received.

    Covers connect failure, read/write failure, timeouts, DNS failure and
    connection resets. This is the only retryable error kind; the instance
    raised to the caller is the one from the final attempt.

    Attributes:
        url: Endpoint that was being contacted.
    """

    stage = STAGE_DISPATCHING

    def __init__(self, url: str, detail: str) -> None:
        super().__init__(f"{STAGE_DISPATCHING} to {url}: {detail}")
        self.url = url
        self.detail = detail


class PdpStatusError(PdpClientError):
    """PDP returned an HTTP status >= 400.

    Only raised when the client is built with raise_for_status enabled.
    By default error statuses are decoded like any other response.

    Attributes:
        url: Endpoint that answered.
        status_code: HTTP status code.
        content: Raw response body.
    """

    stage = STAGE_DISPATCHING

    def __init__(self, url: str, status_code: int, content: bytes = b"") -> None:
        super().__init__(f"{STAGE_DISPATCHING} to {url}: PDP returned HTTP {status_code}")
        self.url = url
        self.status_code = status_code
        self.content = content

    def __repr__(self) -> str:
        return f"PdpStatusError(url={self.url!r}, status_code={self.status_code!r})"


class DeserializationError(PdpClientError):
    """Response body is not valid JSON of the requested shape.

    Raised after a successful HTTP exchange; never retried.
    """

    stage = STAGE_DECODING

    def __init__(self, detail: str) -> None:
        super().__init__(f"{STAGE_DECODING}: {detail}")
        self.detail = detail
