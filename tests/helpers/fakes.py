"""Dublês de teste para o transporte do agente e o observador de atividade."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

from scenario_analyst.ai.contracts.agent_call import (
    AgentCallResult,
    AgentInvocationContext,
    AgentResponseEnvelope,
)
from scenario_analyst.domain.protocols.activity import ActivityObserver
from scenario_analyst.domain.protocols.agent_client import AgentClientProtocol


def success(result: Any, message: str | None = None) -> AgentCallResult:
    """Atalho para resultado de sucesso."""
    return AgentCallResult(
        success=True,
        response=AgentResponseEnvelope(result=result, message=message),
    )


def failure(error: str | None = None, message: str | None = None) -> AgentCallResult:
    """Atalho para resultado de falha reportada pelo transporte."""
    response = AgentResponseEnvelope(message=message) if message is not None else None
    return AgentCallResult(success=False, response=response, error=error)


@dataclass
class InvokeCall:
    prompt: str
    agent_id: str
    context: AgentInvocationContext


class FakeAgentClient(AgentClientProtocol):
    """Devolve respostas roteirizadas em ordem; exceções são lançadas.

    Com `gate`, cada chamada espera o evento antes de responder (simula
    uma requisição em voo).
    """

    def __init__(self, *responses: Any, gate: asyncio.Event | None = None) -> None:
        self._responses = list(responses)
        self.calls: list[InvokeCall] = []
        self.gate = gate
        self.started = asyncio.Event()

    async def invoke(
        self,
        prompt: str,
        agent_id: str,
        context: AgentInvocationContext,
    ) -> AgentCallResult:
        self.calls.append(InvokeCall(prompt=prompt, agent_id=agent_id, context=context))
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        response = self._responses.pop(0) if self._responses else success({})
        if isinstance(response, BaseException):
            raise response
        return response


@dataclass
class RecordingObserver(ActivityObserver):
    """Registra a sequência de ganchos chamados pela FSM."""

    events: list[str] = field(default_factory=list)
    agent_ids: list[str | None] = field(default_factory=list)
    reset_session_ids: list[str] = field(default_factory=list)

    def on_processing_changed(self, processing: bool, agent_id: str | None = None) -> None:
        self.events.append(f"processing:{processing}")
        self.agent_ids.append(agent_id)

    def on_reset(self, session_id: str) -> None:
        self.events.append("reset")
        self.reset_session_ids.append(session_id)
