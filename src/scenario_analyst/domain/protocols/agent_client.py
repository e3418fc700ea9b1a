"""Protocolo de domínio para o transporte de chamadas ao agente."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scenario_analyst.ai.contracts.agent_call import (
        AgentCallResult,
        AgentInvocationContext,
    )


class AgentClientProtocol(ABC):
    """Contrato mínimo assíncrono para invocar o agente externo.

    Implementações podem lançar exceção; o chamador trata como falha de
    transporte.
    """

    @abstractmethod
    async def invoke(
        self,
        prompt: str,
        agent_id: str,
        context: AgentInvocationContext,
    ) -> AgentCallResult: ...
