"""Fixtures compartidas: settings aislados del entorno y transportes httpx simulados."""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from core.config import AppSettings

WAKATIME_BASE = "https://waka.test/api/v1"
GITHUB_URL = "https://github.test/graphql"
LEETCODE_URL = "https://leetcode.test/graphql"
API_KEY = "waka_0123456789abcdef"


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        wakatime_api=WAKATIME_BASE,
        wakatime_api_key=API_KEY,
        wakatime_country_code="ID",
        github_api=GITHUB_URL,
        github_token="ghp_test",
        github_username="octocat",
        leetcode_api=LEETCODE_URL,
        leetcode_username="leet",
        http_timeout_seconds=5.0,
    )


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=payload)


def wakatime_route(request: httpx.Request) -> str:
    """Etiqueta el endpoint WakaTime pedido: all_time / leaders / regional / stats."""

    path = request.url.path
    if path.endswith("/users/current/all_time_since_today"):
        return "all_time"
    if path.endswith("/leaders"):
        return "regional" if request.url.params.get("country_code") else "leaders"
    if path.endswith("/users/current/stats"):
        return "stats"
    return "unknown"


class RecordingTransport(httpx.MockTransport):
    """MockTransport que guarda cada request para inspeccionarla después."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def all_time_payload() -> dict[str, Any]:
    return {
        "data": {
            "daily_average": 5400,
            "decimal": "1234.50",
            "digital": "1234:30",
            "is_up_to_date": True,
            "percent_calculated": 100,
            "range": {
                "end": "2026-10-18T23:59:59Z",
                "end_date": "2026-10-18",
                "end_text": "Today",
                "start": "2019-03-02T00:00:00Z",
                "start_date": "2019-03-02",
                "start_text": "Sat Mar 2nd 2019",
                "timezone": "Asia/Jakarta",
            },
            "text": "1,234 hrs 30 mins",
            "timeout": 15,
            "total_seconds": 4444200.0,
        }
    }
