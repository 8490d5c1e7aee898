"""GraphQL sobre HTTP (POST JSON).

No usamos un cliente GraphQL completo: las dos fuentes (GitHub, LeetCode) solo
necesitan una consulta fija con variables, así que basta con httpx.
"""

from __future__ import annotations

from typing import Any

import httpx

from adapters.http_client import ensure_ok
from core.errors import GraphQLError


async def post_graphql(
    client: httpx.AsyncClient,
    url: str,
    *,
    query: str,
    variables: dict[str, Any] | None = None,
    label: str,
) -> dict[str, Any]:
    """Ejecuta `query` y devuelve el cuerpo completo (`{"data": ...}`).

    Lanza:
    - `UpstreamStatusError` si el status no es 2xx.
    - `GraphQLError` si el cuerpo trae `errors` o no trae `data`.
    """

    resp = await client.post(url, json={"query": query, "variables": variables or {}})
    ensure_ok(resp, label=label)

    body = resp.json()
    if not isinstance(body, dict):
        raise GraphQLError(label, ["response body is not a JSON object"])

    errors = body.get("errors")
    if errors:
        messages = [
            str(e.get("message", e)) if isinstance(e, dict) else str(e)
            for e in (errors if isinstance(errors, list) else [errors])
        ]
        raise GraphQLError(label, messages)

    if not isinstance(body.get("data"), dict):
        raise GraphQLError(label, ["response has no data"])
    return body
