"""FSM da conversa: fases, eventos e tabela de transições."""

from scenario_analyst.domain.conversation.events import ConversationEvent
from scenario_analyst.domain.conversation.states import ConversationPhase
from scenario_analyst.domain.conversation.transitions import (
    TRANSITIONS,
    validate_transition,
)

__all__ = [
    "ConversationEvent",
    "ConversationPhase",
    "TRANSITIONS",
    "validate_transition",
]
