"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import AllTimeStats, GitHubStats, LeetCodeStats, WeekStats


def print_banner(console: Console, *, github_user: str | None = None, leetcode_user: str | None = None) -> None:
    """Cabecera de la salida en tablas con los perfiles consultados."""

    profiles = Text.assemble(
        ("GitHub ", "dim"),
        (github_user or "-", "green"),
        ("  LeetCode ", "dim"),
        (leetcode_user or "-", "green"),
    )
    body = Align.center(Text.assemble(Text("Skill stats", style="bold cyan"), "\n", profiles))
    console.print(Panel(body, border_style="cyan", padding=(0, 2)))


def format_duration(seconds: float) -> str:
    """`7260` -> `"2 hrs 1 min"`; siempre devuelve algo legible."""

    total_minutes = int(seconds or 0) // 60
    hours, minutes = divmod(total_minutes, 60)
    parts: list[str] = []
    if hours:
        parts.append(f"{hours} hr" if hours == 1 else f"{hours} hrs")
    if minutes or not parts:
        parts.append(f"{minutes} min" if minutes == 1 else f"{minutes} mins")
    return " ".join(parts)


def _rank(value: int | None) -> str:
    return f"#{value}" if value is not None else "-"


def build_wakatime_table(all_time: AllTimeStats, week: WeekStats) -> Table:
    table = Table(title="WakaTime")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("All time", all_time.data.text)
    table.add_row("Since", all_time.data.range.start_date)
    table.add_row("Last 7 days", format_duration(week.total_seconds))
    table.add_row("Daily average", format_duration(week.daily_average))
    table.add_row("World rank", _rank(week.world_rank))
    table.add_row("Country rank", _rank(week.country_rank))
    return table


def build_languages_table(week: WeekStats, *, limit: int = 10) -> Table:
    table = Table(title="Languages (last 7 days)")
    table.add_column("Language", style="magenta")
    table.add_column("Time", style="white")
    for lang in week.languages[:limit]:
        table.add_row(lang.name, lang.total)
    if not week.languages:
        table.add_row("-", "Data unavailable")
    return table


def build_github_table(github: GitHubStats) -> Table:
    user = github.data.user
    table = Table(title="GitHub")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Count", style="green", justify="right")
    table.add_row("Commits (this year)", str(user.contributionsCollection.totalCommitContributions))
    table.add_row("Pull requests", str(user.pullRequests.totalCount))
    table.add_row("Open issues", str(user.openIssues.totalCount))
    table.add_row("Closed issues", str(user.closedIssues.totalCount))
    table.add_row("Contributed to", str(user.repositoriesContributedTo.totalCount))
    table.add_row("Repositories", str(user.repositories.totalCount))
    stars = sum(node.stargazerCount for node in user.repositories.nodes)
    table.add_row("Stars", str(stars))
    return table


def build_leetcode_table(leetcode: LeetCodeStats) -> Table:
    """Resueltos / totales por dificultad, más el percentil "beats"."""

    data = leetcode.data
    totals = {q.difficulty: q.count for q in data.allQuestionsCount}
    beats = {b.difficulty: b.percentage for b in data.matchedUser.problemsSolvedBeatsStats}

    table = Table(title=f"LeetCode ({data.matchedUser.username})")
    table.add_column("Difficulty", style="cyan")
    table.add_column("Solved", style="green", justify="right")
    table.add_column("Beats", style="dim", justify="right")
    for solved in data.matchedUser.submitStatsGlobal.acSubmissionNum:
        if solved.difficulty == "All":
            continue
        total = totals.get(solved.difficulty)
        solved_text = f"{solved.count}/{total}" if total else str(solved.count)
        pct = beats.get(solved.difficulty)
        table.add_row(solved.difficulty, solved_text, f"{pct:.1f}%" if pct is not None else "-")
    return table
