"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _reach_endpoints(settings: AppSettings) -> list[tuple[str, bool, str]]:
    """GET a cada API configurada, en paralelo; solo comprueba que responde."""

    endpoints = {
        "WakaTime": settings.wakatime_api,
        "GitHub": settings.github_api,
        "LeetCode": settings.leetcode_api,
    }

    async with build_async_client(settings) as client:

        async def reach(name: str, url: str) -> tuple[str, bool, str]:
            try:
                response = await client.get(url)
            except httpx.HTTPError as exc:
                return name, False, f"{type(exc).__name__}: {exc}"
            return name, True, f"HTTP {response.status_code} {url}"

        return list(await asyncio.gather(*(reach(n, u) for n, u in endpoints.items())))


def _configured(value: object) -> bool:
    if value is None:
        return False
    secret = getattr(value, "get_secret_value", None)
    return bool(secret() if callable(secret) else value)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show which sources will fall back."""

    settings = AppSettings()

    table = Table(title="portfolio-stats Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row(
        "WakaTime key",
        "OK" if _configured(settings.wakatime_api_key) else "MISSING",
        f"{settings.wakatime_api} (country {settings.wakatime_country_code})",
    )
    github_ok = _configured(settings.github_token) and _configured(settings.github_username)
    table.add_row(
        "GitHub",
        "OK" if github_ok else "MISSING",
        settings.github_username or "GITHUB_USERNAME / GITHUB_TOKEN not set -> fallback",
    )
    table.add_row(
        "LeetCode",
        "OK" if _configured(settings.leetcode_username) else "MISSING",
        settings.leetcode_username or "LEETCODE_USERNAME not set -> fallback",
    )

    # Connectivity (best-effort)
    for name, reachable, detail in asyncio.run(_reach_endpoints(settings)):
        table.add_row(f"{name} reachable", "OK" if reachable else "FAIL", detail)

    _console.print(table)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    api_key = typer.prompt("WakaTime API key", default="", hide_input=True, show_default=False).strip()
    country = typer.prompt(
        "WakaTime leaderboard country code",
        default=settings.wakatime_country_code,
        show_default=True,
    ).strip().upper()
    github_username = typer.prompt(
        "GitHub username",
        default=settings.github_username or "",
        show_default=True,
    ).strip()
    github_token = typer.prompt("GitHub token", default="", hide_input=True, show_default=False).strip()
    leetcode_username = typer.prompt(
        "LeetCode username",
        default=settings.leetcode_username or "",
        show_default=True,
    ).strip()

    if country and len(country) != 2:
        raise typer.BadParameter("country code must have 2 letters (ISO 3166-1 alpha-2)")

    env_path = write_user_env_vars(
        {
            "WAKATIME_API_KEY": api_key,
            "WAKATIME_COUNTRY_CODE": country,
            "GITHUB_USERNAME": github_username,
            "GITHUB_TOKEN": github_token,
            "LEETCODE_USERNAME": leetcode_username,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
