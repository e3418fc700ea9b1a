"""Fases de uma sessão de conversa.

Não existe fase de erro: uma falha encerra o turno e volta para IDLE com
`last_error` preenchido.
"""

from __future__ import annotations

from enum import StrEnum


class ConversationPhase(StrEnum):
    """Fases canônicas do ciclo de requisição."""

    IDLE = "IDLE"
    """Pronta para aceitar nova pergunta."""

    SENDING = "SENDING"
    """Uma chamada ao agente está em andamento (no máximo uma por sessão)."""
