"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y headers para issuer, storage y resolvers.
- Facilita testeo: se inyecta un `httpx.MockTransport` sin tocar los adaptadores.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todos los colaboradores se comporten igual.
    - Sin reintentos: cualquier política de backoff pertenece al transporte.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def response_reason(response: httpx.Response) -> str:
    """Status text for error messages (`Internal Server Error`, ...)."""

    return response.reason_phrase or httpx.codes.get_reason_phrase(response.status_code)
