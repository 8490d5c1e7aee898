"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Valida la forma de las respuestas externas en el borde: un payload mal formado
  se detecta como `ValidationError` y se sustituye por su fallback.
- Facilita la serialización estable (JSON/CLI) de datos de múltiples fuentes.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
- Los registros de WakaTime y de GraphQL conservan los nombres de campo de la
  API (snake_case o camelCase según la fuente); `WeekStats` es el único
  registro normalizado por nosotros y expone alias camelCase.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_serializer
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


class UpstreamRecord(BaseModel):
    """Registro devuelto tal cual por la API externa.

    Al serializar solo emite las claves que llegaron (o que se pasaron al
    construirlo): los campos opcionales ausentes no aparecen con un valor
    inventado, y las claves desconocidas se conservan.
    """

    model_config = ConfigDict(extra="allow")

    @model_serializer(mode="wrap")
    def _only_received(self, handler: Any) -> Any:
        dumped = handler(self)
        if not isinstance(dumped, dict):
            return dumped
        received = self.model_fields_set | set(self.model_extra or {})
        return {key: value for key, value in dumped.items() if key in received}


class TimeRange(UpstreamRecord):
    """Rango temporal cubierto por las estadísticas all-time."""

    start: str = Field(..., description="Inicio del rango (ISO-8601).")
    start_date: str = Field(..., description="Fecha de inicio (YYYY-MM-DD).")
    start_text: str | None = Field(default=None, description="Etiqueta legible del inicio.")
    end: str = Field(..., description="Fin del rango (ISO-8601).")
    end_date: str = Field(..., description="Fecha de fin (YYYY-MM-DD).")
    end_text: str | None = Field(default=None, description="Etiqueta legible del fin.")
    timezone: str | None = Field(default=None, description="Zona horaria del usuario.")


class AllTimeData(UpstreamRecord):
    text: str = Field(..., description="Total legible (p.ej. '1,234 hrs 5 mins').")
    total_seconds: int | float = Field(..., description="Total acumulado en segundos.")
    decimal: str | None = Field(default=None, description="Total en horas decimales.")
    digital: str | None = Field(default=None, description="Total en formato H:MM.")
    is_up_to_date: bool | None = None
    percent_calculated: int | None = Field(default=None, ge=0, le=100)
    range: TimeRange
    timeout: int | None = Field(default=None, ge=0, description="Minutos de keystroke timeout.")


class AllTimeStats(UpstreamRecord):
    """Respuesta de `/users/current/all_time_since_today` (tal cual llega)."""

    data: AllTimeData


class LanguageTotal(BaseModel):
    name: str = Field(..., description="Lenguaje de programación.")
    total: str = Field(..., description="Tiempo legible dedicado (campo `text` upstream).")


class WeekStats(BaseModel):
    """Registro normalizado de ranking + estadísticas semanales.

    Invariantes:
    - Los rankings son `None` cuando no están disponibles (no 0).
    - Los numéricos valen 0 y `languages` es `[]` por defecto; nunca faltan.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    world_rank: int | None = None
    country_rank: int | None = None
    total_seconds: int | float = 0
    daily_average: int | float = 0
    languages: list[LanguageTotal] = Field(default_factory=list)


class TotalCount(BaseModel):
    totalCount: int = 0


class ContributionsCollection(BaseModel):
    totalCommitContributions: int = 0


class PageInfo(BaseModel):
    hasNextPage: bool = False
    endCursor: str | None = None


class RepositoryNode(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    stargazerCount: int = 0


class RepositoryConnection(BaseModel):
    totalCount: int = 0
    nodes: list[RepositoryNode] = Field(default_factory=list)
    pageInfo: PageInfo = Field(default_factory=PageInfo)


class GitHubUser(BaseModel):
    contributionsCollection: ContributionsCollection = Field(default_factory=ContributionsCollection)
    repositoriesContributedTo: TotalCount = Field(default_factory=TotalCount)
    pullRequests: TotalCount = Field(default_factory=TotalCount)
    openIssues: TotalCount = Field(default_factory=TotalCount)
    closedIssues: TotalCount = Field(default_factory=TotalCount)
    repositories: RepositoryConnection = Field(default_factory=RepositoryConnection)


class GitHubData(BaseModel):
    user: GitHubUser


class GitHubStats(BaseModel):
    """Resultado de la consulta GraphQL de estadísticas de GitHub."""

    data: GitHubData


class DifficultyCount(BaseModel):
    difficulty: str
    count: int = 0


class DifficultyPercentage(BaseModel):
    difficulty: str
    percentage: float | None = 0


class SubmitStats(BaseModel):
    acSubmissionNum: list[DifficultyCount] = Field(default_factory=list)


class LeetCodeUser(BaseModel):
    username: str
    submitStatsGlobal: SubmitStats = Field(default_factory=SubmitStats)
    problemsSolvedBeatsStats: list[DifficultyPercentage] = Field(default_factory=list)


class LeetCodeData(BaseModel):
    matchedUser: LeetCodeUser
    allQuestionsCount: list[DifficultyCount] = Field(default_factory=list)


class LeetCodeStats(BaseModel):
    """Resultado de la consulta GraphQL de problemas resueltos en LeetCode."""

    data: LeetCodeData


class SkillStats(BaseModel):
    """Agregado que consume la sección "Skill" del portfolio.

    Por qué un agregado:
    - Es el único contrato entre la capa de datos y la capa de presentación.
    - Siempre está completo: cada campo es el dato real o su fallback.
    """

    model_config = ConfigDict(populate_by_name=True)

    github: GitHubStats
    wakatime: AllTimeStats = Field(..., alias="wakaTime")
    wakatime_week: WeekStats = Field(..., alias="wakaTimeWeek")
    leetcode: LeetCodeStats = Field(..., alias="leetCode")


class Section(BaseModel):
    title: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1, pattern=r"^[a-z0-9-]+$")


class PortfolioPage(BaseModel):
    """Props de la página: secciones navegables + estadísticas de Skill."""

    sections: list[Section] = Field(default_factory=list)
    skill: SkillStats
