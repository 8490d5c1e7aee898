"""Primitivas de resiliencia para integraciones externas.

Dos piezas reutilizables en lugar de try/except copiado en cada llamada:

- `resilient_fetch`: ejecuta una operación asíncrona y, ante cualquier fallo
  clasificado (status no-2xx, error de transporte, cuerpo mal formado o
  errores GraphQL), registra el motivo y devuelve el fallback.
- `gather_all_or_nothing`: lanza N requests independientes a la vez, espera a
  que todas terminen y solo devuelve las respuestas si todas fueron 2xx.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Mapping, TypeVar

import httpx

from adapters.http_client import is_success
from core.errors import UpstreamError, UpstreamGroupError, UpstreamStatusError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ValueError cubre json.JSONDecodeError y pydantic.ValidationError.
RECOVERABLE_ERRORS: tuple[type[BaseException], ...] = (
    UpstreamError,
    httpx.HTTPError,
    httpx.InvalidURL,
    ValueError,
)


async def resilient_fetch(
    operation: Callable[[], Awaitable[T]],
    fallback: Callable[[], T],
    *,
    label: str,
) -> T:
    """Ejecuta `operation`; ante un fallo recuperable devuelve `fallback()`.

    `fallback` es una factoría para que los payloads dependientes del tiempo se
    construyan en el momento del fallo. Las excepciones que no están en
    `RECOVERABLE_ERRORS` (bugs de programación, cancelación) se propagan.
    """

    try:
        return await operation()
    except UpstreamStatusError as exc:
        logger.error("%s API error: %s %s", label, exc.status_code, exc.reason)
    except UpstreamGroupError as exc:
        logger.error("%s API errors: %s", label, exc)
    except RECOVERABLE_ERRORS as exc:
        logger.error("Error fetching %s data: %s: %s", label, type(exc).__name__, exc)
    return fallback()


async def gather_all_or_nothing(
    calls: Mapping[str, Awaitable[httpx.Response]],
) -> dict[str, httpx.Response]:
    """Fan-out/fan-in con política todo-o-nada.

    Reglas:
    - Todas las llamadas se programan a la vez y se espera a que todas terminen
      (éxito o fallo) antes de decidir.
    - Si alguna lanzó una excepción de transporte, se relanza la primera.
    - Si alguna respondió no-2xx, se lanza `UpstreamGroupError` con todas las
      fallidas, aunque el resto haya ido bien.
    - Si no, devuelve `label -> response` en el orden de entrada.
    """

    labels = list(calls)
    results = await asyncio.gather(*calls.values(), return_exceptions=True)

    for result in results:
        if isinstance(result, BaseException):
            raise result

    responses: dict[str, httpx.Response] = dict(zip(labels, results))
    failures = [
        UpstreamStatusError(label, response.status_code, response.reason_phrase)
        for label, response in responses.items()
        if not is_success(response)
    ]
    if failures:
        raise UpstreamGroupError(failures)
    return responses
