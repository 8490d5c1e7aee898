"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (WakaTime/GitHub/LeetCode) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "portfolio-stats"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "portfolio-stats"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "portfolio-stats"
    return Path.home() / ".config" / "portfolio-stats"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves existentes se conservan; las vacías en `values` no pisan nada.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v})

    lines = ["# portfolio-stats user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Las credenciales viajan como `SecretStr`: nunca aparecen en repr ni en logs.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="portfolio-stats/0.1",
        min_length=1,
        description="User-Agent para las APIs externas.",
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Nivel de logging raíz que instala la CLI.",
    )

    # WakaTime
    wakatime_api: str = Field(
        default="https://wakatime.com/api/v1",
        min_length=8,
        description="Base URL de la API de WakaTime (sin barra final).",
    )
    wakatime_api_key: SecretStr | None = Field(
        default=None,
        description="API key de WakaTime (se envía como Basic base64(key)).",
    )
    wakatime_country_code: str = Field(
        default="ID",
        min_length=2,
        max_length=2,
        description="País del leaderboard regional.",
    )

    # GitHub GraphQL
    github_api: str = Field(
        default="https://api.github.com/graphql",
        min_length=8,
        description="Endpoint GraphQL de GitHub.",
    )
    github_token: SecretStr | None = Field(
        default=None,
        description="Token personal de GitHub (Bearer).",
    )
    github_username: str | None = Field(
        default=None,
        description="Login de GitHub cuyas estadísticas se muestran.",
    )

    # LeetCode GraphQL
    leetcode_api: str = Field(
        default="https://leetcode.com/graphql",
        min_length=8,
        description="Endpoint GraphQL de LeetCode.",
    )
    leetcode_username: str | None = Field(
        default=None,
        description="Usuario de LeetCode.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value
