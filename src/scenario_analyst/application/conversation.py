"""ScenarioConversation: FSM da conversa com o agente.

Responsabilidades:
- Sequenciar perguntas (uma única chamada em voo por sessão)
- Converter o resultado do transporte em AgentMessage (parsed | raw | failure)
- Voltar sempre para IDLE ao resolver a chamada, mesmo com exceção
- Descartar respostas de sessões já substituídas por reset
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from scenario_analyst.ai.contracts.agent_call import AgentCallResult, AgentInvocationContext
from scenario_analyst.ai.response_normalizer import (
    coerce_text,
    extract_probability_headline,
    normalize_response,
)
from scenario_analyst.application.session.models import Session
from scenario_analyst.config.settings import Settings, get_settings
from scenario_analyst.domain.conversation.events import ConversationEvent
from scenario_analyst.domain.conversation.states import ConversationPhase
from scenario_analyst.domain.conversation.transitions import validate_transition
from scenario_analyst.domain.messages import (
    AgentMessage,
    FailurePayload,
    ParsedPayload,
    RawPayload,
    UserMessage,
)
from scenario_analyst.domain.protocols.activity import ActivityObserver, NullActivityObserver
from scenario_analyst.domain.protocols.agent_client import AgentClientProtocol
from scenario_analyst.observability.context import bind_session_id
from scenario_analyst.observability.logging import get_logger

DEFAULT_FAILURE_MESSAGE = "Failed to get analysis. Please try again."
DEFAULT_UNEXPECTED_ERROR = "An unexpected error occurred"
EMPTY_RESPONSE_MESSAGE = "The agent returned an empty response."

ResolvedPayload = ParsedPayload | RawPayload | FailurePayload


def _best_available_text(raw: Any, result: AgentCallResult) -> str | None:
    """Melhor texto exibível quando o payload não normaliza."""
    if isinstance(raw, str) and raw.strip():
        return raw
    if raw is not None and not isinstance(raw, Mapping):
        text = coerce_text(raw)
        if text.strip():
            return text
    if result.response is not None and result.response.message:
        return result.response.message
    return None


class ScenarioConversation:
    """Gerencia a sessão de conversa (submit, retry, reset).

    A sessão é de propriedade exclusiva desta classe; `session` devolve
    cópia profunda para leitura pela camada de exibição.
    """

    def __init__(
        self,
        agent_client: AgentClientProtocol,
        *,
        settings: Settings | None = None,
        observer: ActivityObserver | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._agent_client = agent_client
        self._settings = settings or get_settings()
        self._observer = observer or NullActivityObserver()
        self._logger = logger or get_logger(__name__)
        self._session = Session()

    @property
    def session(self) -> Session:
        """Snapshot da sessão ativa."""
        return self._session.model_copy(deep=True)

    @property
    def session_id(self) -> str:
        return self._session.session_id

    @property
    def phase(self) -> ConversationPhase:
        return self._session.phase

    @property
    def agent_name(self) -> str:
        return self._settings.agent_name

    def _transition(self, session: Session, event: ConversationEvent) -> None:
        ok, next_phase, reason = validate_transition(session.phase, event)
        if not ok or next_phase is None:
            self._logger.warning(
                "invalid_transition_ignored",
                extra={"phase": session.phase.value, "event": event.value, "reason": reason},
            )
            return
        session.phase = next_phase

    async def submit(self, text: str) -> AgentMessage | None:
        """Envia pergunta ao agente e anexa a resposta ao log.

        Returns:
            AgentMessage anexada, ou None se a pergunta foi ignorada (vazia,
            chamada já em voo) ou se a sessão foi resetada durante a chamada
        """
        prompt = (text or "").strip()
        if not prompt:
            self._logger.debug("submit_ignored", extra={"reason": "empty_input"})
            return None
        if self._session.in_flight:
            self._logger.debug("submit_ignored", extra={"reason": "in_flight"})
            return None

        session = self._session
        issued_session_id = session.session_id
        session.messages.append(UserMessage(text=prompt))
        self._transition(session, ConversationEvent.SUBMIT_ACCEPTED)
        session.last_error = None
        self._observer.on_processing_changed(True, self._settings.agent_id)

        with bind_session_id(issued_session_id):
            self._logger.info("agent_call_started", extra={"prompt_length": len(prompt)})
            try:
                payload = await self._resolve_call(prompt, issued_session_id)
            finally:
                is_current = self._session.session_id == issued_session_id
                if is_current:
                    self._transition(session, ConversationEvent.CALL_RESOLVED)
                    self._observer.on_processing_changed(False)

            if not is_current:
                self._logger.warning(
                    "stale_response_discarded",
                    extra={"active_session_id": self._session.session_id[:8]},
                )
                return None

            return self._append_agent_message(session, payload)

    async def retry(self, text: str) -> AgentMessage | None:
        """Limpa o erro e reenvia o texto (tipicamente a última pergunta)."""
        self._session.last_error = None
        return await self.submit(text)

    async def retry_last(self) -> AgentMessage | None:
        """Reenvia a última pergunta do usuário, se houver."""
        text = self._session.last_user_text()
        if text is None:
            return None
        return await self.retry(text)

    def reset(self) -> Session:
        """Descarta a sessão inteira e inicia uma nova.

        Chamadas em voo não são canceladas; sua resolução é descartada.
        """
        previous = self._session
        _, next_phase, _ = validate_transition(previous.phase, ConversationEvent.RESET)
        self._session = Session(phase=next_phase or ConversationPhase.IDLE)
        self._observer.on_reset(self._session.session_id)
        self._logger.info(
            "session_reset",
            extra={
                "previous_session_id": previous.session_id[:8],
                "session_id": self._session.session_id[:8],
                "abandoned_in_flight": previous.in_flight,
            },
        )
        return self.session

    async def _resolve_call(self, prompt: str, session_id: str) -> ResolvedPayload:
        """Executa a chamada e traduz o resultado; nunca lança Exception."""
        context = AgentInvocationContext(
            user_id=self._settings.agent_user_id,
            session_id=session_id,
        )
        try:
            result = await self._agent_client.invoke(prompt, self._settings.agent_id, context)
        except Exception as exc:  # noqa: BLE001
            self._logger.error(
                "agent_call_failed",
                extra={"error_type": type(exc).__name__},
            )
            return FailurePayload(message=str(exc) or DEFAULT_UNEXPECTED_ERROR)

        if not isinstance(result, AgentCallResult):
            result = AgentCallResult.from_payload(result)

        if not result.success:
            self._logger.warning(
                "agent_call_unsuccessful",
                extra={"has_error_text": result.failure_text() is not None},
            )
            return FailurePayload(message=result.failure_text() or DEFAULT_FAILURE_MESSAGE)

        raw = result.response.result if result.response is not None else None
        parsed = normalize_response(raw)
        if parsed is not None:
            return ParsedPayload(result=parsed)

        text = _best_available_text(raw, result)
        if text is not None:
            return RawPayload(text=text)
        return FailurePayload(message=EMPTY_RESPONSE_MESSAGE)

    def _append_agent_message(self, session: Session, payload: ResolvedPayload) -> AgentMessage:
        message = AgentMessage(payload=payload)
        session.messages.append(message)

        if isinstance(payload, FailurePayload):
            session.last_error = payload.message
        elif isinstance(payload, ParsedPayload):
            headline = extract_probability_headline(payload.result.qualification_probability)
            if headline is not None:
                session.overview = session.overview.with_probability(headline)

        self._logger.info(
            "agent_call_resolved",
            extra={"payload_kind": payload.kind, "message_count": len(session.messages)},
        )
        return message
