"""Rastreador de atividade do agente (por sessão).

Mantém status de conexão, log de eventos estruturados e a última mensagem
de "thinking". Não interpreta o conteúdo dos eventos; a FSM apenas liga e
desliga o processamento em volta de cada chamada.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import UTC, datetime

from scenario_analyst.config.settings import Settings, get_settings
from scenario_analyst.domain.protocols.activity import ActivityObserver
from scenario_analyst.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

THINKING_EVENT = "thinking"


@dataclass(frozen=True, slots=True)
class ActivityEvent:
    """Evento estruturado vindo do runtime do agente."""

    event_type: str
    message: str
    agent_id: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))


class ActivityTracker(ActivityObserver):
    """Estado observável do stream de atividade de uma sessão."""

    def __init__(self, session_id: str | None = None, max_events: int = 200) -> None:
        self._session_id = session_id
        self._events: deque[ActivityEvent] = deque(maxlen=max_events)
        self._is_connected = False
        self._is_processing = False
        self._last_thinking_message = ""
        self._active_agent_id: str | None = None

    @property
    def session_id(self) -> str | None:
        return self._session_id

    @property
    def is_connected(self) -> bool:
        return self._is_connected

    @property
    def is_processing(self) -> bool:
        return self._is_processing

    @property
    def last_thinking_message(self) -> str:
        return self._last_thinking_message

    @property
    def active_agent_id(self) -> str | None:
        return self._active_agent_id

    @property
    def events(self) -> tuple[ActivityEvent, ...]:
        return tuple(self._events)

    @property
    def thinking_events(self) -> tuple[ActivityEvent, ...]:
        return tuple(e for e in self._events if e.event_type == THINKING_EVENT)

    def connect(self, session_id: str) -> None:
        """Associa o rastreador a uma sessão e marca como conectado."""
        self._session_id = session_id
        self._is_connected = True
        logger.debug("activity_connected", extra={"session_id": session_id[:8]})

    def disconnect(self) -> None:
        self._is_connected = False

    def rebind(self, session_id: str) -> None:
        """Troca a sessão do stream, mantendo o estado de conexão."""
        previous = self._session_id
        self._session_id = session_id
        logger.debug(
            "activity_rebound",
            extra={
                "previous_session_id": (previous or "")[:8],
                "session_id": session_id[:8],
                "connected": self._is_connected,
            },
        )

    def record_event(
        self, event_type: str, message: str, agent_id: str | None = None
    ) -> ActivityEvent:
        """Registra evento; eventos de thinking atualizam a última mensagem."""
        event = ActivityEvent(event_type=event_type, message=message, agent_id=agent_id)
        self._events.append(event)
        if event_type == THINKING_EVENT:
            self._last_thinking_message = message
        if agent_id:
            self._active_agent_id = agent_id
        return event

    def set_processing(self, processing: bool, agent_id: str | None = None) -> None:
        """Liga/desliga o processamento; ao ligar, `agent_id` vira o agente ativo."""
        self._is_processing = processing
        if not processing:
            self._active_agent_id = None
        elif agent_id:
            self._active_agent_id = agent_id

    def reset(self) -> None:
        """Limpa eventos e estado de processamento."""
        self._events.clear()
        self._last_thinking_message = ""
        self._is_processing = False
        self._active_agent_id = None

    # ActivityObserver

    def on_processing_changed(self, processing: bool, agent_id: str | None = None) -> None:
        self.set_processing(processing, agent_id)

    def on_reset(self, session_id: str) -> None:
        self.reset()
        self.rebind(session_id)


def create_activity_tracker(
    settings: Settings | None = None,
    session_id: str | None = None,
) -> ActivityTracker:
    """Factory do rastreador com limite de eventos vindo de Settings.

    Args:
        settings: Configurações da aplicação. Se None, usa get_settings()
        session_id: Sessão inicial do stream (opcional)
    """
    settings = settings or get_settings()
    return ActivityTracker(session_id=session_id, max_events=settings.activity_max_events)
