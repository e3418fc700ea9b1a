"""Mensagens da conversa: variante etiquetada (usuário | agente).

Mensagens são imutáveis: erros entram como novas mensagens, nunca como
edição de uma mensagem existente.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from scenario_analyst.ai.contracts.analytical_result import AnalyticalResult
from scenario_analyst.utils.ids import new_message_id


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class ParsedPayload(BaseModel):
    """Resposta normalizada com sucesso."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["parsed"] = "parsed"
    result: AnalyticalResult


class RawPayload(BaseModel):
    """Resposta sem forma de objeto; exibida como texto."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["raw"] = "raw"
    text: str


class FailurePayload(BaseModel):
    """Falha de transporte/aplicação; acompanhada de ação de retry."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["failure"] = "failure"
    message: str


AgentPayload = Annotated[
    ParsedPayload | RawPayload | FailurePayload,
    Field(discriminator="kind"),
]


class UserMessage(BaseModel):
    """Pergunta enviada pelo usuário (texto já sem espaços nas bordas)."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user"] = "user"
    id: str = Field(default_factory=new_message_id)
    text: str
    timestamp: datetime = Field(default_factory=_utc_now)


class AgentMessage(BaseModel):
    """Resposta do agente (parseada, bruta ou falha)."""

    model_config = ConfigDict(frozen=True)

    role: Literal["agent"] = "agent"
    id: str = Field(default_factory=new_message_id)
    timestamp: datetime = Field(default_factory=_utc_now)
    payload: AgentPayload

    @property
    def is_failure(self) -> bool:
        return isinstance(self.payload, FailurePayload)


ConversationMessage = Annotated[
    UserMessage | AgentMessage,
    Field(discriminator="role"),
]
