"""Adaptadores de infraestrutura (HTTP)."""

from scenario_analyst.infra.agent_client import AgentClientConfigError, HttpAgentClient
from scenario_analyst.infra.http import HttpClient, HttpClientConfig, HttpError

__all__ = [
    "AgentClientConfigError",
    "HttpAgentClient",
    "HttpClient",
    "HttpClientConfig",
    "HttpError",
]
