"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza base URL, timeouts y headers JSON para todas las llamadas.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings

JSON_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    follow_redirects: bool = True,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` apuntando al backend configurado.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las operaciones se comporten igual.
    - Sin reintentos: el cambio a modo demo lo decide el `ModeController`.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {"User-Agent": settings.user_agent, **JSON_HEADERS}
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        base_url=settings.base_url.rstrip("/"),
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=follow_redirects,
        headers=headers,
        transport=transport,
    )


def bearer_header(auth_token: str | None) -> dict[str, str]:
    if not auth_token:
        return {}
    return {"Authorization": f"Bearer {auth_token}"}
