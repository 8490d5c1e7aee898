"""Agregación de estadísticas para la sección "Skill".

Este módulo es la superficie que consume la capa de presentación: invoca cada
cliente externo una vez y entrega un `SkillStats` completo. Cada cliente
absorbe sus propios fallos, así que aquí no hay manejo de errores.
"""

from __future__ import annotations

import asyncio

import httpx

from adapters.github_stats import fetch_github_stats
from adapters.leetcode_stats import fetch_leetcode_stats
from adapters.wakatime import fetch_all_time_stats, fetch_week_stats
from core.config import AppSettings
from core.domain.models import PortfolioPage, Section, SkillStats

PORTFOLIO_SECTIONS: tuple[Section, ...] = (
    Section(title="Home", slug="home"),
    Section(title="Skill", slug="skill"),
    Section(title="Project", slug="project"),
    Section(title="Blog", slug="blog"),
    Section(title="Contact", slug="contact"),
)


async def collect_skill_stats(
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> SkillStats:
    """Lanza las cuatro consultas en paralelo; nunca lanza por fallos externos."""

    settings = settings or AppSettings()
    wakatime, wakatime_week, github, leetcode = await asyncio.gather(
        fetch_all_time_stats(settings=settings, transport=transport),
        fetch_week_stats(settings=settings, transport=transport),
        fetch_github_stats(settings=settings, transport=transport),
        fetch_leetcode_stats(settings=settings, transport=transport),
    )
    return SkillStats(
        github=github,
        wakatime=wakatime,
        wakatime_week=wakatime_week,
        leetcode=leetcode,
    )


async def build_portfolio_page(
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PortfolioPage:
    skill = await collect_skill_stats(settings=settings, transport=transport)
    return PortfolioPage(sections=list(PORTFOLIO_SECTIONS), skill=skill)
