"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y el chequeo de status para todas las APIs.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import base64

import httpx

from core.config import AppSettings
from core.errors import UpstreamStatusError


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las fuentes se comporten igual.
    - `transport` permite sustituir la red por un stub en tests.
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


def basic_auth_token(api_key: str) -> str:
    """Token Basic estilo WakaTime: base64(api_key), sin componente usuario."""

    return base64.b64encode(api_key.encode("utf-8")).decode("ascii")


def basic_auth_headers(api_key: str) -> dict[str, str]:
    return {"Authorization": f"Basic {basic_auth_token(api_key)}"}


def is_success(response: httpx.Response) -> bool:
    return 200 <= response.status_code < 300


def ensure_ok(response: httpx.Response, *, label: str) -> httpx.Response:
    """Devuelve la respuesta si es 2xx; si no, lanza `UpstreamStatusError`."""

    if not is_success(response):
        raise UpstreamStatusError(label, response.status_code, response.reason_phrase)
    return response
