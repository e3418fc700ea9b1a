"""Transporte HTTP para invocação do agente externo.

POST JSON `{message, agent_id, user_id, session_id}` em `agent_api_url`.
Falhas HTTP viram `AgentCallResult(success=False)`; nunca são relançadas.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from scenario_analyst.ai.contracts.agent_call import AgentCallResult, AgentInvocationContext
from scenario_analyst.config.settings import Settings, get_settings
from scenario_analyst.domain.protocols.agent_client import AgentClientProtocol
from scenario_analyst.infra.http import HttpClient, HttpError, create_http_client
from scenario_analyst.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)


class AgentClientConfigError(ValueError):
    """Configuração do transporte do agente inválida."""


def _decode_body(response: httpx.Response) -> Any:
    """JSON quando possível; texto bruto caso contrário."""
    try:
        return response.json()
    except ValueError:
        return response.text


class HttpAgentClient(AgentClientProtocol):
    """Implementação de AgentClientProtocol sobre HttpClient."""

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: HttpClient | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        errors = self._settings.validate_agent_config()
        if errors:
            raise AgentClientConfigError("; ".join(errors))
        self._url: str = self._settings.agent_api_url  # type: ignore[assignment]
        self._http = http_client or create_http_client(self._settings)

    async def invoke(
        self,
        prompt: str,
        agent_id: str,
        context: AgentInvocationContext,
    ) -> AgentCallResult:
        body = {
            "message": prompt,
            "agent_id": agent_id,
            "user_id": context.user_id,
            "session_id": context.session_id,
        }
        try:
            response = await self._http.post(self._url, json=body)
        except HttpError as exc:
            logger.warning(
                "agent_invoke_http_error",
                extra={
                    "status_code": exc.status_code,
                    "is_retryable": exc.is_retryable,
                    "session_id": context.session_id[:8],
                },
            )
            return AgentCallResult(success=False, error=f"Agent request failed: {exc}")

        result = AgentCallResult.from_payload(_decode_body(response))
        logger.debug(
            "agent_invoke_completed",
            extra={"success": result.success, "status_code": response.status_code},
        )
        return result

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> HttpAgentClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
