"""Estadísticas de LeetCode (endpoint GraphQL público).

Nota:
- No requiere auth; LeetCode sí exige un `Referer` de su propio dominio.
- `matchedUser` es null si el usuario no existe: eso cuenta como payload mal
  formado y cae al fallback.
"""

from __future__ import annotations

from datetime import datetime, timezone

import httpx

from adapters.graphql_client import post_graphql
from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.fallbacks import fallback_leetcode_stats
from core.domain.models import LeetCodeStats
from core.errors import UpstreamError
from core.services.resilience import resilient_fetch

GET_LEET_SOLVED_PROBLEMS = """
query GetSolvedProblems($username: String!, $year: Int) {
  allQuestionsCount {
    difficulty
    count
  }
  matchedUser(username: $username) {
    username
    submitStatsGlobal {
      acSubmissionNum {
        difficulty
        count
      }
    }
    problemsSolvedBeatsStats {
      difficulty
      percentage
    }
    userCalendar(year: $year) {
      totalActiveDays
      streak
    }
  }
}
"""


async def fetch_leetcode_stats(
    username: str | None = None,
    *,
    year: int | None = None,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> LeetCodeStats:
    settings = settings or AppSettings()
    user = username or settings.leetcode_username
    year = year or datetime.now(timezone.utc).year

    async def operation() -> LeetCodeStats:
        if not user:
            raise UpstreamError("LeetCode username not configured (LEETCODE_USERNAME)")

        headers = {"Referer": "https://leetcode.com/"}
        async with build_async_client(settings, extra_headers=headers, transport=transport) as client:
            body = await post_graphql(
                client,
                settings.leetcode_api,
                query=GET_LEET_SOLVED_PROBLEMS,
                variables={"username": user, "year": year},
                label="LeetCode",
            )
        return LeetCodeStats.model_validate(body)

    return await resilient_fetch(
        operation,
        lambda: fallback_leetcode_stats(user),
        label="LeetCode",
    )
