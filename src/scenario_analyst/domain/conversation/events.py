"""Eventos que disparam transições na FSM da conversa."""

from __future__ import annotations

from enum import StrEnum


class ConversationEvent(StrEnum):
    """Eventos canônicos do ciclo de requisição."""

    SUBMIT_ACCEPTED = "SUBMIT_ACCEPTED"
    """Pergunta não vazia aceita; chamada ao agente será emitida."""

    CALL_RESOLVED = "CALL_RESOLVED"
    """Chamada terminou (sucesso, falha ou exceção)."""

    RESET = "RESET"
    """Sessão descartada e substituída por uma nova."""
