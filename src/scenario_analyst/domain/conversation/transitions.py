"""Tabela de transições da FSM da conversa.

- TRANSITIONS[(phase, event)] = next_phase
- Validação pura: sem side effects
"""

from __future__ import annotations

from scenario_analyst.domain.conversation.events import ConversationEvent
from scenario_analyst.domain.conversation.states import ConversationPhase

TRANSITIONS: dict[tuple[ConversationPhase, ConversationEvent], ConversationPhase] = {
    (ConversationPhase.IDLE, ConversationEvent.SUBMIT_ACCEPTED): ConversationPhase.SENDING,
    (ConversationPhase.SENDING, ConversationEvent.CALL_RESOLVED): ConversationPhase.IDLE,
    (ConversationPhase.IDLE, ConversationEvent.RESET): ConversationPhase.IDLE,
    (ConversationPhase.SENDING, ConversationEvent.RESET): ConversationPhase.IDLE,
    # SENDING + SUBMIT_ACCEPTED ausente: garante uma única chamada em voo
}


def validate_transition(
    current_phase: ConversationPhase, event: ConversationEvent
) -> tuple[bool, ConversationPhase | None, str]:
    """Valida se uma transição é permitida.

    Retorna:
    - (True, next_phase, ""): transição válida
    - (False, None, motivo): transição inválida

    Nunca lança exceção; apenas valida.
    """
    key = (current_phase, event)
    if key not in TRANSITIONS:
        return (
            False,
            None,
            f"No transition from {current_phase} on event {event}",
        )
    return True, TRANSITIONS[key], ""
