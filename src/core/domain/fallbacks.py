"""Payloads de fallback.

Funciones puras: sin I/O, sin estado y sin modos de fallo. Cada una devuelve un
registro con la misma forma que el éxito de su cliente, de modo que la capa de
presentación nunca distingue "dato real" de "dato no disponible" por estructura.
"""

from __future__ import annotations

from datetime import datetime, timezone

from core.domain.models import (
    AllTimeData,
    AllTimeStats,
    DifficultyCount,
    DifficultyPercentage,
    GitHubData,
    GitHubStats,
    GitHubUser,
    LeetCodeData,
    LeetCodeStats,
    LeetCodeUser,
    SubmitStats,
    TimeRange,
    WeekStats,
)

DIFFICULTIES: tuple[str, ...] = ("Easy", "Medium", "Hard")


def _iso_utc(now: datetime) -> str:
    # Mismo formato que Date.toISOString(): milisegundos y sufijo Z.
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def fallback_all_time_stats(now: datetime | None = None) -> AllTimeStats:
    """All-time vacío anclado en `now` (por defecto, el instante actual)."""

    today = _iso_utc(now or datetime.now(timezone.utc))
    today_date = today.split("T")[0]
    return AllTimeStats(
        data=AllTimeData(
            text="Data unavailable",
            total_seconds=0,
            decimal="0.00",
            digital="0:00",
            is_up_to_date=True,
            percent_calculated=100,
            range=TimeRange(
                start=today,
                start_date=today_date,
                start_text="Today",
                end=today,
                end_date=today_date,
                end_text="Today",
                timezone="UTC",
            ),
            timeout=0,
        )
    )


def fallback_week_stats() -> WeekStats:
    return WeekStats(
        world_rank=None,
        country_rank=None,
        total_seconds=0,
        daily_average=0,
        languages=[],
    )


def fallback_github_stats() -> GitHubStats:
    """Todos los contadores a 0 y sin repositorios."""

    return GitHubStats(data=GitHubData(user=GitHubUser()))


def fallback_leetcode_stats(username: str | None = None) -> LeetCodeStats:
    zero_counts = [DifficultyCount(difficulty=d, count=0) for d in DIFFICULTIES]
    return LeetCodeStats(
        data=LeetCodeData(
            matchedUser=LeetCodeUser(
                username=username or "user",
                submitStatsGlobal=SubmitStats(acSubmissionNum=zero_counts),
                problemsSolvedBeatsStats=[
                    DifficultyPercentage(difficulty=d, percentage=0) for d in DIFFICULTIES
                ],
            ),
            allQuestionsCount=[DifficultyCount(difficulty=d, count=0) for d in DIFFICULTIES],
        )
    )
