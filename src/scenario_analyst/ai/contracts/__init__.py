"""Contratos Pydantic do resultado analítico e da chamada ao agente."""

from scenario_analyst.ai.contracts.agent_call import (
    AgentCallResult,
    AgentInvocationContext,
    AgentResponseEnvelope,
)
from scenario_analyst.ai.contracts.analytical_result import (
    AnalyticalResult,
    SwotBlock,
)

__all__ = [
    "AgentCallResult",
    "AgentInvocationContext",
    "AgentResponseEnvelope",
    "AnalyticalResult",
    "SwotBlock",
]
