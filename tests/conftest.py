"""Shared fixtures for pdp-client tests.

Provides a scripted fake PDP built on httpx.MockTransport and an empty
environment reader so tests never depend on the real process environment.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest


# ---------------------------------------------------------------------------
# Fake PDP
# ---------------------------------------------------------------------------


class FakePdp:
    """Scripted PDP behind an httpx.MockTransport.

    Each entry in the script is consumed by one request: an httpx exception
    instance or class is raised, an httpx.Response is returned as-is, anything
    else is returned as a 200 JSON body. Once the script is exhausted the
    last entry repeats.
    """

    def __init__(self, *script: Any) -> None:
        self.script = list(script) or [{"result": True}]
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def urls(self) -> list[str]:
        return [str(request.url) for request in self.requests]

    def body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        step = self.script[min(len(self.requests), len(self.script)) - 1]
        if isinstance(step, type) and issubclass(step, httpx.RequestError):
            raise step("simulated failure", request=request)
        if isinstance(step, httpx.RequestError):
            raise step
        if isinstance(step, httpx.Response):
            # Fresh copy so a repeated step is never replayed from a consumed response
            return httpx.Response(step.status_code, content=step.content, headers=step.headers)
        return httpx.Response(200, json=step)


def _echo(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, content=request.content, headers={"Content-Type": "application/json"})


@pytest.fixture
def fake_pdp() -> Callable[..., FakePdp]:
    """Factory for scripted fake PDPs."""
    return FakePdp


@pytest.fixture
def echo_transport() -> httpx.MockTransport:
    """PDP that answers with the request body verbatim."""
    return httpx.MockTransport(_echo)


@pytest.fixture
def no_env() -> Callable[[str], str | None]:
    """Environment reader that sees no variables."""
    return lambda name: None


@pytest.fixture
def env_from() -> Callable[[dict[str, str]], Callable[[str], str | None]]:
    """Build an environment reader from a dict."""
    return lambda values: values.get
