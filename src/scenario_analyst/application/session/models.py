"""Models de sessão (Session).

Session é a unidade atômica de uma conversa.
- Uma sessão = um session_id único
- Log de mensagens append-only, ordenado por criação
- Substituída por inteiro no reset (nunca reaproveitada)
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from scenario_analyst.domain.conversation.states import ConversationPhase
from scenario_analyst.domain.messages import ConversationMessage, UserMessage
from scenario_analyst.domain.overview import OverviewStats
from scenario_analyst.utils.ids import new_session_id


class Session(BaseModel):
    """Estado completo da sessão, de propriedade exclusiva da FSM.

    Leitores externos recebem apenas cópias (snapshots).
    """

    session_id: str = Field(default_factory=new_session_id)
    created_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))
    messages: list[ConversationMessage] = Field(default_factory=list)
    phase: ConversationPhase = ConversationPhase.IDLE
    last_error: str | None = None
    overview: OverviewStats = Field(default_factory=OverviewStats)

    @property
    def in_flight(self) -> bool:
        return self.phase is ConversationPhase.SENDING

    @property
    def query_count(self) -> int:
        """Quantidade de perguntas do usuário na sessão."""
        return sum(1 for msg in self.messages if isinstance(msg, UserMessage))

    def last_user_text(self) -> str | None:
        """Texto da última pergunta (alvo do retry)."""
        for msg in reversed(self.messages):
            if isinstance(msg, UserMessage):
                return msg.text
        return None
