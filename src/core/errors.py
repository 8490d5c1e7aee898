"""Errores de integración con servicios externos.

Estos errores nunca llegan a la capa de presentación: `resilient_fetch` los
absorbe, los registra y los sustituye por un fallback.
"""

from __future__ import annotations

from typing import Sequence


class UpstreamError(Exception):
    """Base de los fallos atribuibles a un servicio externo."""


class UpstreamStatusError(UpstreamError):
    """Respuesta HTTP no-2xx de un endpoint etiquetado."""

    def __init__(self, label: str, status_code: int, reason: str = "") -> None:
        self.label = label
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"{label}: {status_code} {reason}".rstrip())


class UpstreamGroupError(UpstreamError):
    """Uno o más endpoints de un fan-out devolvieron no-2xx.

    El mensaje lista solo los fallidos, en el orden en que se lanzaron.
    """

    def __init__(self, errors: Sequence[UpstreamStatusError]) -> None:
        self.errors = list(errors)
        super().__init__(", ".join(str(e) for e in self.errors))


class GraphQLError(UpstreamError):
    """El endpoint GraphQL respondió 2xx pero con `errors` en el cuerpo."""

    def __init__(self, label: str, messages: Sequence[str]) -> None:
        self.label = label
        self.messages = list(messages)
        super().__init__(f"{label}: {'; '.join(self.messages) or 'unknown GraphQL error'}")
