"""Contratos Pydantic da chamada ao agente externo (fronteira de transporte)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict


class AgentInvocationContext(BaseModel):
    """Contexto enviado junto de cada prompt."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    session_id: str


class AgentResponseEnvelope(BaseModel):
    """Envelope `response` devolvido pelo agente."""

    result: Any = None
    """Payload bruto; entrada do ResponseNormalizer."""

    message: str | None = None
    """Mensagem textual auxiliar (usada como erro quando success=False)."""


class AgentCallResult(BaseModel):
    """Resultado de `invoke`: sucesso com envelope ou falha com erro."""

    success: bool
    response: AgentResponseEnvelope | None = None
    error: str | None = None

    @classmethod
    def from_payload(cls, body: Any) -> AgentCallResult:
        """Constrói resultado a partir de um corpo arbitrário.

        Nunca lança exceção. Corpos sem a chave `success` são tratados como
        sucesso cujo `result` é o próprio corpo.
        """
        if not isinstance(body, Mapping) or "success" not in body:
            return cls(success=True, response=AgentResponseEnvelope(result=body))

        response_raw = body.get("response")
        envelope: AgentResponseEnvelope | None = None
        if isinstance(response_raw, Mapping):
            message = response_raw.get("message")
            envelope = AgentResponseEnvelope(
                result=response_raw.get("result"),
                message=message if isinstance(message, str) else None,
            )
        elif response_raw is not None:
            envelope = AgentResponseEnvelope(result=response_raw)

        error = body.get("error")
        return cls(
            success=bool(body.get("success")),
            response=envelope,
            error=str(error) if error not in (None, "") else None,
        )

    def failure_text(self) -> str | None:
        """Texto de erro disponível (error, depois response.message)."""
        if self.error:
            return self.error
        if self.response is not None and self.response.message:
            return self.response.message
        return None
