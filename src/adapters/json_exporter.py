"""Exportación JSON del agregado.

Por qué JSON:
- Snapshot reproducible de lo que vería la página (útil para depurar fallbacks).
- Usa los alias de la API (`worldRank`, `wakaTime`, ...) para coincidir con el
  contrato que consume la capa de presentación.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel


def dump_json(model: BaseModel) -> str:
    """Serializa un modelo con formato estable (claves ordenadas, UTF-8)."""

    payload = model.model_dump(mode="json", by_alias=True)
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_skill_stats_json(*, stats: BaseModel, output_path: Path) -> Path:
    """Exporta `SkillStats` (o `PortfolioPage`) a JSON UTF-8."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dump_json(stats), encoding="utf-8")
    return output_path
