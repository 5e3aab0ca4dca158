from __future__ import annotations

from typing import Any, Mapping

import httpx
import pytest

from core.config import AppSettings
from core.domain.operations import Operation


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        base_url="https://wallet.test",
        simulator_delay_seconds=0,
        http_timeout_seconds=5,
    )


def unreachable_transport(calls: list[httpx.Request] | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)


class RecordingBackend:
    """Backend stub: returns canned envelopes or raises a queued error."""

    def __init__(self, response: dict[str, Any] | None = None, error: Exception | None = None) -> None:
        self.response = response if response is not None else {"status": "success"}
        self.error = error
        self.calls: list[tuple[Operation, dict[str, Any], str | None]] = []

    async def perform(
        self,
        operation: Operation,
        payload: Mapping[str, Any],
        auth_token: str | None = None,
    ) -> dict[str, Any]:
        self.calls.append((operation, dict(payload), auth_token))
        if self.error is not None:
            raise self.error
        return self.response
