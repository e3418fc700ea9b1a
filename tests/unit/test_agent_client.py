"""Testes unitários para infra/agent_client.py (transporte HTTP do agente)."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from scenario_analyst.ai.contracts.agent_call import AgentInvocationContext
from scenario_analyst.config.settings import Settings
from scenario_analyst.infra.agent_client import AgentClientConfigError, HttpAgentClient
from scenario_analyst.infra.http import HttpClient, HttpError

URL = "https://agents.example.com/invoke"
CONTEXT = AgentInvocationContext(user_id="user_cricket_fan", session_id="session-1234abcd")


class FakeHttpClient(HttpClient):
    """HttpClient que devolve uma resposta fixa ou levanta HttpError."""

    def __init__(self, outcome: httpx.Response | HttpError) -> None:
        super().__init__()
        self.outcome = outcome
        self.posts: list[tuple[str, Any]] = []
        self.closed = False

    async def post(
        self,
        url: str,
        json: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        self.posts.append((url, json))
        if isinstance(self.outcome, HttpError):
            raise self.outcome
        return self.outcome

    async def close(self) -> None:
        self.closed = True


def _client(outcome: httpx.Response | HttpError) -> tuple[HttpAgentClient, FakeHttpClient]:
    http = FakeHttpClient(outcome)
    return HttpAgentClient(Settings(agent_api_url=URL), http_client=http), http


class TestConstruction:
    def test_missing_url_raises(self) -> None:
        with pytest.raises(AgentClientConfigError, match="AGENT_API_URL"):
            HttpAgentClient(Settings(), http_client=FakeHttpClient(httpx.Response(200)))


class TestInvoke:
    @pytest.mark.asyncio
    async def test_posts_prompt_and_identity(self) -> None:
        client, http = _client(httpx.Response(200, json={"success": True, "response": {}}))

        await client.invoke("Beat Australia", "agent-1", CONTEXT)

        assert http.posts == [
            (
                URL,
                {
                    "message": "Beat Australia",
                    "agent_id": "agent-1",
                    "user_id": "user_cricket_fan",
                    "session_id": "session-1234abcd",
                },
            )
        ]

    @pytest.mark.asyncio
    async def test_json_envelope_is_decoded(self) -> None:
        body = {"success": True, "response": {"result": {"summary": "ok"}, "message": None}}
        client, _ = _client(httpx.Response(200, json=body))

        result = await client.invoke("q", "agent-1", CONTEXT)

        assert result.success is True
        assert result.response is not None
        assert result.response.result == {"summary": "ok"}

    @pytest.mark.asyncio
    async def test_text_body_becomes_result(self) -> None:
        client, _ = _client(httpx.Response(200, text="India look strong."))

        result = await client.invoke("q", "agent-1", CONTEXT)

        assert result.success is True
        assert result.response is not None
        assert result.response.result == "India look strong."

    @pytest.mark.asyncio
    async def test_http_error_becomes_failure(self) -> None:
        client, _ = _client(HttpError("HTTP 503", status_code=503, is_retryable=True))

        result = await client.invoke("q", "agent-1", CONTEXT)

        assert result.success is False
        assert result.error == "Agent request failed: HTTP 503"

    @pytest.mark.asyncio
    async def test_context_manager_closes_http(self) -> None:
        client, http = _client(httpx.Response(200, json={}))

        async with client:
            pass

        assert http.closed is True
