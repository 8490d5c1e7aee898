"""Tests del cliente WakaTime (all-time + semana/rankings)."""

from __future__ import annotations

import asyncio
import base64
import logging

import httpx
import pytest

from adapters.wakatime import fetch_all_time_stats, fetch_week_stats, project_week_stats
from conftest import API_KEY, RecordingTransport, json_response, wakatime_route
from core.domain.fallbacks import fallback_all_time_stats, fallback_week_stats
from core.domain.models import LanguageTotal, WeekStats

LEADERS = {"current_user": {"rank": 42, "user": {"username": "me"}}}
REGIONAL = {"current_user": {}}
STATS = {
    "data": {
        "total_seconds_including_other_language": 7200,
        "daily_average_including_other_language": 1800,
        "languages": [{"name": "Go", "text": "2 hrs", "percent": 100.0}],
    }
}


def week_handler(overrides: dict[str, httpx.Response] | None = None):
    overrides = overrides or {}
    defaults = {
        "leaders": lambda: json_response(LEADERS),
        "regional": lambda: json_response(REGIONAL),
        "stats": lambda: json_response(STATS),
    }

    def handler(request: httpx.Request) -> httpx.Response:
        route = wakatime_route(request)
        if route in overrides:
            return overrides[route]
        return defaults[route]()

    return handler


class TestAllTimeClient:
    @pytest.mark.asyncio
    async def test_success_returns_payload_verbatim(self, settings, all_time_payload):
        transport = RecordingTransport(lambda request: json_response(all_time_payload))

        result = await fetch_all_time_stats(settings=settings, transport=transport)

        assert result.model_dump(mode="json") == all_time_payload
        assert result.data.total_seconds == 4444200.0
        assert len(transport.requests) == 1
        assert transport.requests[0].url.path == "/api/v1/users/current/all_time_since_today"

    @pytest.mark.asyncio
    async def test_sends_basic_token_without_username(self, settings, all_time_payload):
        transport = RecordingTransport(lambda request: json_response(all_time_payload))

        await fetch_all_time_stats(settings=settings, transport=transport)

        expected = base64.b64encode(API_KEY.encode()).decode()
        assert transport.requests[0].headers["Authorization"] == f"Basic {expected}"

    @pytest.mark.asyncio
    async def test_explicit_api_key_wins_over_settings(self, settings, all_time_payload):
        transport = RecordingTransport(lambda request: json_response(all_time_payload))

        await fetch_all_time_stats("other-key", settings=settings, transport=transport)

        expected = base64.b64encode(b"other-key").decode()
        assert transport.requests[0].headers["Authorization"] == f"Basic {expected}"

    @pytest.mark.asyncio
    async def test_403_returns_fallback(self, settings, caplog):
        transport = RecordingTransport(lambda request: json_response({"error": "nope"}, 403))

        with caplog.at_level(logging.ERROR):
            result = await fetch_all_time_stats(settings=settings, transport=transport)

        fallback = fallback_all_time_stats()
        assert result.data.total_seconds == 0
        assert result.data.text == "Data unavailable"
        assert result.data.range.start_text == "Today"
        assert result.model_dump(exclude={"data": {"range"}}) == fallback.model_dump(exclude={"data": {"range"}})
        assert "403 Forbidden" in caplog.text
        assert API_KEY not in caplog.text

    @pytest.mark.asyncio
    async def test_transport_error_returns_fallback(self, settings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection reset by peer", request=request)

        result = await fetch_all_time_stats(settings=settings, transport=httpx.MockTransport(handler))

        assert result.data.total_seconds == 0
        assert result.data.percent_calculated == 100
        assert result.data.is_up_to_date is True

    @pytest.mark.asyncio
    async def test_malformed_body_returns_fallback(self, settings):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

        result = await fetch_all_time_stats(settings=settings, transport=transport)

        assert result.data.text == "Data unavailable"

    @pytest.mark.asyncio
    async def test_wrong_shape_returns_fallback(self, settings):
        transport = httpx.MockTransport(lambda request: json_response({"data": {"text": 12}}))

        result = await fetch_all_time_stats(settings=settings, transport=transport)

        assert result.data.total_seconds == 0

    @pytest.mark.asyncio
    async def test_missing_api_key_skips_network(self, settings):
        settings.wakatime_api_key = None
        transport = RecordingTransport(lambda request: json_response({}))

        result = await fetch_all_time_stats(settings=settings, transport=transport)

        assert transport.requests == []
        assert result.data.text == "Data unavailable"

    @pytest.mark.asyncio
    async def test_identical_responses_give_identical_results(self, settings, all_time_payload):
        transport = httpx.MockTransport(lambda request: json_response(all_time_payload))

        first = await fetch_all_time_stats(settings=settings, transport=transport)
        second = await fetch_all_time_stats(settings=settings, transport=transport)

        assert first == second

    @pytest.mark.asyncio
    async def test_absent_fields_stay_absent(self, settings, all_time_payload):
        del all_time_payload["data"]["decimal"]
        del all_time_payload["data"]["timeout"]
        del all_time_payload["data"]["range"]["timezone"]
        all_time_payload["data"]["total_seconds"] = 10
        transport = httpx.MockTransport(lambda request: json_response(all_time_payload))

        result = await fetch_all_time_stats(settings=settings, transport=transport)

        assert result.model_dump(mode="json") == all_time_payload
        assert "decimal" not in result.model_dump_json()
        assert '"total_seconds":10,' in result.model_dump_json()

    def test_fallback_dumps_every_field(self):
        dumped = fallback_all_time_stats().model_dump()

        assert dumped["data"]["decimal"] == "0.00"
        assert dumped["data"]["timeout"] == 0
        assert dumped["data"]["range"]["timezone"] == "UTC"


class TestWeekClient:
    @pytest.mark.asyncio
    async def test_projects_three_responses(self, settings):
        transport = RecordingTransport(week_handler())

        result = await fetch_week_stats(settings=settings, transport=transport)

        assert result.model_dump(by_alias=True) == {
            "worldRank": 42,
            "countryRank": None,
            "totalSeconds": 7200,
            "dailyAverage": 1800,
            "languages": [{"name": "Go", "total": "2 hrs"}],
        }

    @pytest.mark.asyncio
    async def test_requests_expected_endpoints_with_shared_token(self, settings):
        transport = RecordingTransport(week_handler())

        await fetch_week_stats(settings=settings, transport=transport)

        urls = sorted(str(r.url) for r in transport.requests)
        assert urls == [
            "https://waka.test/api/v1/leaders",
            "https://waka.test/api/v1/leaders?country_code=ID",
            "https://waka.test/api/v1/users/current/stats?including_today=true",
        ]
        assert len({r.headers["Authorization"] for r in transport.requests}) == 1

    @pytest.mark.asyncio
    async def test_requests_are_in_flight_together(self, settings):
        arrived = 0
        all_arrived = asyncio.Event()
        handler = week_handler()

        async def concurrent_handler(request: httpx.Request) -> httpx.Response:
            nonlocal arrived
            arrived += 1
            if arrived == 3:
                all_arrived.set()
            # Si las requests fueran secuenciales, la primera nunca vería las otras dos.
            await asyncio.wait_for(all_arrived.wait(), timeout=2)
            return handler(request)

        result = await fetch_week_stats(settings=settings, transport=httpx.MockTransport(concurrent_handler))

        assert result.world_rank == 42

    @pytest.mark.asyncio
    @pytest.mark.parametrize("failing", ["leaders", "regional", "stats"])
    @pytest.mark.parametrize("status_code", [401, 403, 429, 500, 503])
    async def test_any_non_2xx_gives_full_fallback(self, settings, failing, status_code):
        transport = httpx.MockTransport(week_handler({failing: json_response({}, status_code)}))

        result = await fetch_week_stats(settings=settings, transport=transport)

        assert result == fallback_week_stats()

    @pytest.mark.asyncio
    async def test_stats_500_discards_successful_ranks(self, settings, caplog):
        transport = httpx.MockTransport(week_handler({"stats": json_response({}, 500)}))

        with caplog.at_level(logging.ERROR):
            result = await fetch_week_stats(settings=settings, transport=transport)

        assert result.model_dump(by_alias=True) == {
            "worldRank": None,
            "countryRank": None,
            "totalSeconds": 0,
            "dailyAverage": 0,
            "languages": [],
        }
        assert "Stats: 500 Internal Server Error" in caplog.text
        assert "Leaders:" not in caplog.text

    @pytest.mark.asyncio
    async def test_combined_error_lists_every_failure(self, settings, caplog):
        transport = httpx.MockTransport(
            week_handler(
                {
                    "leaders": json_response({}, 401),
                    "regional": json_response({}, 403),
                }
            )
        )

        with caplog.at_level(logging.ERROR):
            await fetch_week_stats(settings=settings, transport=transport)

        assert "Leaders: 401 Unauthorized, Regional Leaders: 403 Forbidden" in caplog.text
        assert "Stats:" not in caplog.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("failing", ["leaders", "regional", "stats"])
    async def test_transport_error_gives_fallback(self, settings, failing):
        handler = week_handler()

        def flaky(request: httpx.Request) -> httpx.Response:
            if wakatime_route(request) == failing:
                raise httpx.ReadError("connection reset", request=request)
            return handler(request)

        result = await fetch_week_stats(settings=settings, transport=httpx.MockTransport(flaky))

        assert result == fallback_week_stats()

    @pytest.mark.asyncio
    async def test_missing_rank_fields_are_none(self, settings):
        transport = httpx.MockTransport(
            week_handler(
                {
                    "leaders": json_response({"data": []}),
                    "regional": json_response({"current_user": None}),
                }
            )
        )

        result = await fetch_week_stats(settings=settings, transport=transport)

        assert result.world_rank is None
        assert result.country_rank is None
        assert result.total_seconds == 7200

    @pytest.mark.asyncio
    async def test_identical_responses_give_identical_results(self, settings):
        transport = httpx.MockTransport(week_handler())

        first = await fetch_week_stats(settings=settings, transport=transport)
        second = await fetch_week_stats(settings=settings, transport=transport)

        assert first == second


class TestProjection:
    def test_empty_stats_defaults(self):
        result = project_week_stats({}, {}, {})
        assert result == WeekStats()
        assert result.languages == []

    def test_languages_map_text_to_total(self):
        stats = {"data": {"languages": [{"name": "Python", "text": "3 hrs 2 mins"}, "junk"]}}
        result = project_week_stats({}, {}, stats)
        assert result.languages == [LanguageTotal(name="Python", total="3 hrs 2 mins")]

    def test_null_numbers_default_to_zero(self):
        stats = {
            "data": {
                "total_seconds_including_other_language": None,
                "daily_average_including_other_language": None,
            }
        }
        result = project_week_stats({"current_user": {"rank": 7}}, {"current_user": {"rank": 1}}, stats)
        assert result.total_seconds == 0
        assert result.daily_average == 0
        assert result.world_rank == 7
        assert result.country_rank == 1

    def test_null_language_fields_never_become_text(self):
        stats = {
            "data": {
                "languages": [
                    {"name": None, "text": None},
                    {"name": "Rust", "text": None},
                    {"text": "1 hr"},
                ]
            }
        }
        result = project_week_stats({}, {}, stats)
        assert result.languages == [LanguageTotal(name="Rust", total="")]

    @pytest.mark.parametrize("rank", [True, False, "3", 2.5, None])
    def test_non_integer_rank_is_none(self, rank):
        result = project_week_stats({"current_user": {"rank": rank}}, {}, {})
        assert result.world_rank is None

    def test_integer_totals_serialise_without_decimals(self):
        stats = {
            "data": {
                "total_seconds_including_other_language": 7200,
                "daily_average_including_other_language": 1800.5,
            }
        }
        dumped = project_week_stats({}, {}, stats).model_dump_json(by_alias=True)
        assert '"totalSeconds":7200,' in dumped
        assert '"dailyAverage":1800.5,' in dumped
