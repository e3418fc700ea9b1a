"""Configurações centralizadas do scenario_analyst.

Este módulo exporta:
- Settings: classe de configuração via variáveis de ambiente
- get_settings: função cacheada para obter instância única
- Identificadores padrão do agente

Uso típico:
    from scenario_analyst.config import get_settings
"""

from scenario_analyst.config.settings import (
    DEFAULT_AGENT_ID,
    DEFAULT_AGENT_NAME,
    DEFAULT_AGENT_USER_ID,
    Settings,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "DEFAULT_AGENT_ID",
    "DEFAULT_AGENT_NAME",
    "DEFAULT_AGENT_USER_ID",
]
