"""scenario_analyst: análise de cenários de torneio via agente externo."""

__version__ = "0.1.0"
