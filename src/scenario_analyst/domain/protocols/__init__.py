"""Re-exports dos Protocolos de domínio para uso por Application."""

from __future__ import annotations

from scenario_analyst.domain.protocols.activity import (
    ActivityObserver,
    NullActivityObserver,
)
from scenario_analyst.domain.protocols.agent_client import AgentClientProtocol

__all__ = [
    "ActivityObserver",
    "AgentClientProtocol",
    "NullActivityObserver",
]
