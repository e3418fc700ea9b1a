"""Testes para Session, mensagens e painel de visão geral."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from scenario_analyst.ai.contracts.analytical_result import AnalyticalResult
from scenario_analyst.application.session.models import Session
from scenario_analyst.domain.conversation.states import ConversationPhase
from scenario_analyst.domain.messages import (
    AgentMessage,
    ConversationMessage,
    FailurePayload,
    ParsedPayload,
    RawPayload,
    UserMessage,
)
from scenario_analyst.domain.overview import OverviewStats


class TestSession:
    def test_new_session_defaults(self) -> None:
        session = Session()

        assert session.session_id
        assert session.messages == []
        assert session.phase is ConversationPhase.IDLE
        assert session.in_flight is False
        assert session.last_error is None
        assert session.overview == OverviewStats()

    def test_session_ids_are_unique(self) -> None:
        assert Session().session_id != Session().session_id

    def test_last_user_text_and_query_count(self) -> None:
        session = Session(
            messages=[
                UserMessage(text="first"),
                AgentMessage(payload=RawPayload(text="r")),
                UserMessage(text="second"),
                AgentMessage(payload=FailurePayload(message="boom")),
            ]
        )

        assert session.last_user_text() == "second"
        assert session.query_count == 2

    def test_last_user_text_empty(self) -> None:
        assert Session().last_user_text() is None


class TestMessages:
    def test_messages_are_frozen(self) -> None:
        message = UserMessage(text="q")

        with pytest.raises(ValidationError):
            message.text = "other"  # type: ignore[misc]

    def test_agent_message_failure_flag(self) -> None:
        assert AgentMessage(payload=FailurePayload(message="x")).is_failure is True
        assert AgentMessage(payload=ParsedPayload(result=AnalyticalResult())).is_failure is False

    def test_union_discriminates_on_role_and_kind(self) -> None:
        adapter = TypeAdapter(ConversationMessage)

        message = adapter.validate_python(
            {"role": "agent", "payload": {"kind": "raw", "text": "hello"}}
        )

        assert isinstance(message, AgentMessage)
        assert message.payload == RawPayload(text="hello")

    def test_serialized_session_round_trips(self) -> None:
        session = Session(
            messages=[
                UserMessage(text="q"),
                AgentMessage(payload=ParsedPayload(result=AnalyticalResult(summary="s"))),
            ]
        )

        restored = Session.model_validate_json(session.model_dump_json())

        assert restored == session


class TestOverviewStats:
    def test_static_defaults(self) -> None:
        stats = OverviewStats()

        assert stats.position == "#2 in Group"
        assert stats.points == "8 pts"
        assert stats.nrr == "+1.245"
        assert stats.next_match == "vs Australia"
        assert stats.qualification_probability == "78%"

    def test_with_probability_returns_copy(self) -> None:
        stats = OverviewStats()

        updated = stats.with_probability("85%")

        assert updated.qualification_probability == "85%"
        assert stats.qualification_probability == "78%"
        assert updated.nrr == stats.nrr
