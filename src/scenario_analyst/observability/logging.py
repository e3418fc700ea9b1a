"""Logging JSON do scenario_analyst.

Cada linha carrega `service` e o `session_id` da conversa ativa. Mensagens
são nomes de evento em snake_case; prompts e payloads do agente nunca entram
no log (apenas tamanhos, tipos de erro e ids truncados).
"""

from __future__ import annotations

import logging
from typing import IO

from pythonjsonlogger.json import JsonFormatter

from scenario_analyst.observability.context import get_session_id

_JSON_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "session_id",
    "service",
)
_RENAMED_FIELDS = {"levelname": "level", "name": "logger"}


class SessionIdFilter(logging.Filter):
    """Completa o record com `service` e, se ausente, o `session_id` do contexto."""

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self._service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        if not getattr(record, "session_id", None):
            record.session_id = get_session_id()
        record.service = self._service_name
        return True


def build_handler(
    level: str,
    service_name: str,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Handler de stream com formatter JSON e filtro de sessão."""
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(
        JsonFormatter(
            " ".join(f"%({name})s" for name in _JSON_FIELDS),
            rename_fields=_RENAMED_FIELDS,
        )
    )
    handler.addFilter(SessionIdFilter(service_name))
    return handler


def configure_logging(level: str, service_name: str) -> None:
    """Substitui os handlers do root por um único handler JSON."""
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [build_handler(level, service_name)]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_fallback(logger: logging.Logger, component: str, reason: str) -> None:
    """Registra o evento `<component>_fallback` com o motivo.

    Exemplo:
        log_fallback(logger, "response_normalizer", "not_an_object")
        # -> "response_normalizer_fallback", reason="not_an_object"
    """
    logger.info(
        f"{component}_fallback",
        extra={"fallback_used": True, "component": component, "reason": reason},
    )
