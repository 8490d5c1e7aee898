"""Cliente WakaTime (tiempo de programación).

Dos operaciones, ambas sin excepciones hacia fuera:
- `fetch_all_time_stats`: total acumulado desde la creación de la cuenta.
- `fetch_week_stats`: ranking global + ranking por país + estadísticas de los
  últimos 7 días (incluido hoy), lanzados en paralelo y combinados en un
  único `WeekStats` normalizado.

Auth: `Authorization: Basic base64(api_key)` (esquema propio de WakaTime, sin
usuario). El token se construye una vez por invocación.
"""

from __future__ import annotations

from typing import Any

import httpx

from adapters.http_client import basic_auth_headers, build_async_client, ensure_ok
from core.config import AppSettings
from core.domain.fallbacks import fallback_all_time_stats, fallback_week_stats
from core.domain.models import AllTimeStats, LanguageTotal, WeekStats
from core.errors import UpstreamError
from core.services.resilience import gather_all_or_nothing, resilient_fetch

ALL_TIME_PATH = "/users/current/all_time_since_today"
LEADERS_PATH = "/leaders"
STATS_PATH = "/users/current/stats"


def _resolve_api_key(api_key: str | None, settings: AppSettings) -> str:
    if api_key:
        return api_key
    if settings.wakatime_api_key is not None:
        secret = settings.wakatime_api_key.get_secret_value()
        if secret:
            return secret
    raise UpstreamError("WakaTime API key not configured (WAKATIME_API_KEY)")


def _current_user_rank(payload: Any) -> int | None:
    if not isinstance(payload, dict):
        return None
    current_user = payload.get("current_user")
    if not isinstance(current_user, dict):
        return None
    rank = current_user.get("rank")
    # bool es subclase de int: `True` no es un ranking.
    return rank if isinstance(rank, int) and not isinstance(rank, bool) else None


def project_week_stats(leaders: Any, regional_leaders: Any, stats: Any) -> WeekStats:
    """Proyecta las tres respuestas en `WeekStats`.

    Campos ausentes no son un error: rankings -> None, numéricos -> 0,
    lenguajes -> [].
    """

    data = stats.get("data") if isinstance(stats, dict) else None
    if not isinstance(data, dict):
        data = {}

    languages: list[LanguageTotal] = []
    for lang in data.get("languages") or []:
        if not isinstance(lang, dict):
            continue
        name = lang.get("name")
        if not isinstance(name, str) or not name:
            continue
        text = lang.get("text")
        languages.append(LanguageTotal(name=name, total=text if isinstance(text, str) else ""))

    return WeekStats(
        world_rank=_current_user_rank(leaders),
        country_rank=_current_user_rank(regional_leaders),
        total_seconds=data.get("total_seconds_including_other_language") or 0,
        daily_average=data.get("daily_average_including_other_language") or 0,
        languages=languages,
    )


async def fetch_all_time_stats(
    api_key: str | None = None,
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AllTimeStats:
    """Total all-time; devuelve el payload upstream tal cual o su fallback."""

    settings = settings or AppSettings()

    async def operation() -> AllTimeStats:
        headers = basic_auth_headers(_resolve_api_key(api_key, settings))
        async with build_async_client(settings, extra_headers=headers, transport=transport) as client:
            resp = await client.get(f"{settings.wakatime_api}{ALL_TIME_PATH}")
        ensure_ok(resp, label="WakaTime")
        return AllTimeStats.model_validate(resp.json())

    return await resilient_fetch(operation, fallback_all_time_stats, label="WakaTime")


async def fetch_week_stats(
    api_key: str | None = None,
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> WeekStats:
    """Rankings + semana. Si cualquiera de los tres endpoints falla, fallback completo."""

    settings = settings or AppSettings()

    async def operation() -> WeekStats:
        headers = basic_auth_headers(_resolve_api_key(api_key, settings))
        base = settings.wakatime_api
        async with build_async_client(settings, extra_headers=headers, transport=transport) as client:
            responses = await gather_all_or_nothing(
                {
                    "Leaders": client.get(f"{base}{LEADERS_PATH}"),
                    "Regional Leaders": client.get(
                        f"{base}{LEADERS_PATH}",
                        params={"country_code": settings.wakatime_country_code},
                    ),
                    "Stats": client.get(f"{base}{STATS_PATH}", params={"including_today": "true"}),
                }
            )

        return project_week_stats(
            responses["Leaders"].json(),
            responses["Regional Leaders"].json(),
            responses["Stats"].json(),
        )

    return await resilient_fetch(operation, fallback_week_stats, label="WakaTime week")
