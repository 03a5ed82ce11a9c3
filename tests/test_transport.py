"""Tests for the HTTP executor.

Tests use the AAA pattern (Arrange-Act-Assert) for clarity.
"""

import json
from unittest.mock import patch

import httpx
import pytest

from pdp_client.config import PdpClientConfig
from pdp_client.exceptions import TransportError
from pdp_client.transport import USER_AGENT, HttpExecutor, build_timeout

URL = "http://localhost:8181/authz"


class TestTimeouts:
    """Configured milliseconds map onto httpx phases."""

    def test_default_timeouts(self):
        timeout = build_timeout(PdpClientConfig())

        assert timeout.connect == 5.0
        assert timeout.read == 5.0

    def test_separate_phases(self):
        # Act
        timeout = build_timeout(PdpClientConfig(connection_timeout_ms=250, read_timeout_ms=1500))

        # Assert
        assert timeout.connect == 0.25
        assert timeout.pool == 0.25
        assert timeout.read == 1.5
        assert timeout.write == 1.5

    def test_zero_disables_timeout(self):
        timeout = build_timeout(PdpClientConfig(connection_timeout_ms=0, read_timeout_ms=0))

        assert timeout.connect is None
        assert timeout.read is None

    def test_executor_applies_timeouts(self, fake_pdp):
        executor = HttpExecutor(PdpClientConfig(read_timeout_ms=100), transport=fake_pdp().transport)

        assert executor.timeout.read == 0.1


class TestDefaultTransport:
    """Without an injected transport, httpx's own retries are disabled."""

    def test_builds_http_transport_without_retries(self):
        with patch("pdp_client.transport.httpx.HTTPTransport") as mock_transport:
            HttpExecutor(PdpClientConfig())

        mock_transport.assert_called_once_with(retries=0)


class TestExecute:
    """execute() sends one POST and returns status + body."""

    def test_posts_json(self, fake_pdp):
        # Arrange
        pdp = fake_pdp({"result": True})
        executor = HttpExecutor(PdpClientConfig(), transport=pdp.transport)

        # Act
        response = executor.execute(URL, b'{"user":"alice"}')

        # Assert
        request = pdp.requests[0]
        assert request.method == "POST"
        assert str(request.url) == URL
        assert request.headers["Content-Type"] == "application/json; charset=utf-8"
        assert request.headers["User-Agent"] == USER_AGENT
        assert request.headers["Content-Length"] == "16"
        assert request.content == b'{"user":"alice"}'
        assert response.status_code == 200
        assert json.loads(response.content) == {"result": True}

    def test_no_credentials_sent(self, fake_pdp):
        pdp = fake_pdp()
        HttpExecutor(PdpClientConfig(), transport=pdp.transport).execute(URL, b"{}")

        assert "Authorization" not in pdp.requests[0].headers

    @pytest.mark.parametrize("status", [400, 404, 500, 503])
    def test_error_status_returned_as_is(self, fake_pdp, status: int):
        # Arrange
        pdp = fake_pdp(httpx.Response(status, content=b"oops"))

        # Act
        response = HttpExecutor(PdpClientConfig(), transport=pdp.transport).execute(URL, b"{}")

        # Assert
        assert response.status_code == status
        assert response.content == b"oops"
        assert response.is_error

    @pytest.mark.parametrize(
        "failure",
        [httpx.ConnectError, httpx.ConnectTimeout, httpx.ReadTimeout, httpx.ReadError, httpx.RemoteProtocolError],
    )
    def test_io_failures_become_transport_error(self, fake_pdp, failure: type[httpx.TransportError]):
        # Arrange
        executor = HttpExecutor(PdpClientConfig(), transport=fake_pdp(failure).transport)

        # Act
        with pytest.raises(TransportError) as exc_info:
            executor.execute(URL, b"{}")

        # Assert
        assert exc_info.value.url == URL
        assert str(exc_info.value).startswith(f"dispatching to {URL}")
        assert isinstance(exc_info.value.__cause__, failure)

    def test_close_closes_client(self, fake_pdp):
        executor = HttpExecutor(PdpClientConfig(), transport=fake_pdp().transport)

        executor.close()

        with pytest.raises(RuntimeError):
            executor.execute(URL, b"{}")
