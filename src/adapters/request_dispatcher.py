"""Dispatcher HTTP contra el backend real.

Responsabilidad:
- Construir y enviar una única request JSON (con bearer opcional).
- Clasificar el resultado en `NetworkError`, `HttpError` o `DecodeError`.

No guarda estado ni reintenta: la política de fallback vive en el `ModeController`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import httpx

from adapters.http_client import bearer_header, build_async_client
from core.config import AppSettings
from core.domain.errors import DecodeError, HttpError, NetworkError
from core.domain.operations import Operation
from core.interfaces.backend import WalletBackend

logger = logging.getLogger(__name__)


def _http_error_message(response: httpx.Response) -> str:
    fallback = f"HTTP {response.status_code}: {response.reason_phrase}"
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return fallback
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return fallback


class RequestDispatcher(WalletBackend):
    """Envía operaciones lógicas al backend configurado en `AppSettings.base_url`."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def send(
        self,
        endpoint: str,
        method: str,
        body: Mapping[str, Any] | None = None,
        auth_token: str | None = None,
    ) -> dict[str, Any]:
        logger.debug("live request %s %s", method, endpoint)
        try:
            async with build_async_client(
                self._settings,
                extra_headers=bearer_header(auth_token),
                transport=self._transport,
                # A 3xx is a server answer: it surfaces as HttpError with its own status.
                follow_redirects=False,
            ) as client:
                response = await client.request(
                    method,
                    endpoint,
                    json=dict(body) if body is not None else None,
                )
        except httpx.TransportError as exc:
            raise NetworkError(
                f"Network error reaching {self._settings.base_url}: {type(exc).__name__}: {exc}"
            ) from exc
        except httpx.DecodingError as exc:
            raise DecodeError(f"Response from {endpoint} has an undecodable body: {exc}") from exc

        if not response.is_success:
            message = _http_error_message(response)
            logger.info("live request %s %s rejected: %s", method, endpoint, response.status_code)
            raise HttpError(response.status_code, message)

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise DecodeError(f"Response from {endpoint} is not valid JSON") from exc
        if not isinstance(payload, dict):
            raise DecodeError(f"Response from {endpoint} is not a JSON object")
        return payload

    async def perform(
        self,
        operation: Operation,
        payload: Mapping[str, Any],
        auth_token: str | None = None,
    ) -> dict[str, Any]:
        endpoint = operation.endpoint
        body = payload if endpoint.method != "GET" else None
        return await self.send(endpoint.path, endpoint.method, body, auth_token)
