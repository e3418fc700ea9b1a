"""Protocolo de domínio para o observador de atividade do agente."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ActivityObserver(ABC):
    """Ganchos chamados pela FSM em pontos fixos do ciclo de vida."""

    @abstractmethod
    def on_processing_changed(self, processing: bool, agent_id: str | None = None) -> None:
        """Chamada começou (True, com o agente invocado) ou terminou (False)."""

    @abstractmethod
    def on_reset(self, session_id: str) -> None:
        """Sessão substituída; o stream passa a pertencer a `session_id`."""


class NullActivityObserver(ActivityObserver):
    """Observador que ignora todos os eventos."""

    def on_processing_changed(self, processing: bool, agent_id: str | None = None) -> None:
        return None

    def on_reset(self, session_id: str) -> None:
        return None
