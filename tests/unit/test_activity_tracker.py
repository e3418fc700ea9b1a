"""Testes unitários para application/activity.py."""

from __future__ import annotations

import pytest

from scenario_analyst.application.activity import ActivityTracker, create_activity_tracker
from scenario_analyst.application.conversation import ScenarioConversation
from scenario_analyst.config.settings import Settings
from tests.helpers.fakes import FakeAgentClient, success


class TestActivityTracker:
    def test_initial_state(self) -> None:
        tracker = ActivityTracker()

        assert tracker.session_id is None
        assert tracker.is_connected is False
        assert tracker.is_processing is False
        assert tracker.last_thinking_message == ""
        assert tracker.events == ()

    def test_connect_and_disconnect(self) -> None:
        tracker = ActivityTracker()

        tracker.connect("session-abc")
        assert tracker.session_id == "session-abc"
        assert tracker.is_connected is True

        tracker.disconnect()
        assert tracker.is_connected is False

    def test_thinking_event_updates_last_message(self) -> None:
        tracker = ActivityTracker()

        tracker.record_event("thinking", "Evaluating NRR scenarios", agent_id="agent-1")
        tracker.record_event("tool_call", "Fetching fixtures")

        assert tracker.last_thinking_message == "Evaluating NRR scenarios"
        assert tracker.active_agent_id == "agent-1"
        assert len(tracker.events) == 2
        assert [e.message for e in tracker.thinking_events] == ["Evaluating NRR scenarios"]

    def test_event_log_is_bounded(self) -> None:
        tracker = ActivityTracker(max_events=3)

        for i in range(5):
            tracker.record_event("thinking", f"step {i}")

        assert [e.message for e in tracker.events] == ["step 2", "step 3", "step 4"]

    def test_processing_off_clears_active_agent(self) -> None:
        tracker = ActivityTracker()
        tracker.record_event("thinking", "x", agent_id="agent-1")

        tracker.set_processing(True)
        assert tracker.active_agent_id == "agent-1"

        tracker.set_processing(False)
        assert tracker.is_processing is False
        assert tracker.active_agent_id is None

    def test_processing_on_sets_invoked_agent(self) -> None:
        tracker = ActivityTracker()

        tracker.set_processing(True, agent_id="agent-9")

        assert tracker.active_agent_id == "agent-9"

    def test_rebind_keeps_connection(self) -> None:
        tracker = ActivityTracker()
        tracker.connect("old-session")

        tracker.rebind("new-session")

        assert tracker.session_id == "new-session"
        assert tracker.is_connected is True

    def test_reset_clears_events(self) -> None:
        tracker = ActivityTracker()
        tracker.connect("s")
        tracker.record_event("thinking", "x")
        tracker.set_processing(True)

        tracker.reset()

        assert tracker.events == ()
        assert tracker.last_thinking_message == ""
        assert tracker.is_processing is False
        assert tracker.is_connected is True


class TestTrackerAsObserver:
    """Integração com a FSM via ActivityObserver."""

    @pytest.mark.asyncio
    async def test_processing_toggles_around_call(self) -> None:
        tracker = ActivityTracker()
        seen: list[bool] = []

        class SpyClient(FakeAgentClient):
            async def invoke(self, prompt, agent_id, context):
                seen.append(tracker.is_processing)
                return await super().invoke(prompt, agent_id, context)

        conv = ScenarioConversation(
            SpyClient(success({"summary": "ok"})), settings=Settings(), observer=tracker
        )

        await conv.submit("q")

        assert seen == [True]
        assert tracker.is_processing is False

    def test_reset_clears_tracker(self) -> None:
        tracker = ActivityTracker()
        tracker.record_event("thinking", "x")
        conv = ScenarioConversation(FakeAgentClient(), settings=Settings(), observer=tracker)

        conv.reset()

        assert tracker.events == ()


class TestCreateActivityTracker:
    """Factory create_activity_tracker."""

    def test_event_limit_comes_from_settings(self) -> None:
        tracker = create_activity_tracker(Settings(activity_max_events=2), session_id="s-1")

        for i in range(4):
            tracker.record_event("thinking", f"step {i}")

        assert tracker.session_id == "s-1"
        assert [e.message for e in tracker.events] == ["step 2", "step 3"]

    def test_defaults_to_cached_settings(self, monkeypatch) -> None:
        monkeypatch.setenv("SCENARIO_ANALYST_ACTIVITY_MAX_EVENTS", "1")

        tracker = create_activity_tracker()
        tracker.record_event("status", "a")
        tracker.record_event("status", "b")

        assert [e.message for e in tracker.events] == ["b"]
