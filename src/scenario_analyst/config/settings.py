"""Configurações da aplicação via variáveis de ambiente.

Todas as configurações são carregadas de env vars (prefixo SCENARIO_ANALYST_).
Nunca hardcode secrets ou valores sensíveis.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict

from scenario_analyst.observability.logging import get_logger

# -----------------------------------------------------------------------------
# Identidade fixa do agente (vinculada em configuração, nunca derivada em runtime)
# -----------------------------------------------------------------------------
DEFAULT_AGENT_ID: str = "6996a33d1503e45bac70e455"
DEFAULT_AGENT_NAME: str = "India Victory Path Analyst"
DEFAULT_AGENT_USER_ID: str = "user_cricket_fan"


class Settings(BaseSettings):
    """Configurações lidas do ambiente."""

    model_config = SettingsConfigDict(
        env_prefix="SCENARIO_ANALYST_",
        case_sensitive=False,
    )

    # Aplicação
    service_name: str = "scenario_analyst"
    version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"

    # Agente externo
    agent_id: str = DEFAULT_AGENT_ID
    agent_name: str = DEFAULT_AGENT_NAME  # Nome exibido nas respostas
    agent_user_id: str = DEFAULT_AGENT_USER_ID  # Identidade fixa do chamador
    agent_api_url: str | None = None  # Endpoint HTTP de invocação
    agent_api_key: str | None = None  # Enviado em x-api-key (nunca logado)
    agent_timeout_seconds: float = 60.0
    agent_max_retries: int = 2
    agent_retry_backoff_seconds: float = 1.0
    agent_retry_backoff_max_seconds: float = 30.0  # Teto do backoff exponencial
    agent_verify_ssl: bool = True  # Desligar apenas em ambiente local

    # Stream de atividade
    activity_max_events: int = 200  # Eventos retidos por sessão

    @property
    def is_production(self) -> bool:
        """True se ambiente é produção."""
        return self.environment.lower() in ("production", "prod")

    @property
    def is_development(self) -> bool:
        """True se ambiente é desenvolvimento."""
        return self.environment.lower() in ("development", "dev", "local")

    def validate_agent_config(self) -> list[str]:
        """Valida configuração do transporte HTTP do agente.

        Returns:
            Lista de erros (vazia se configuração válida)
        """
        errors: list[str] = []
        if not self.agent_api_url:
            errors.append("SCENARIO_ANALYST_AGENT_API_URL não configurado")
        elif not self.agent_api_url.startswith(("http://", "https://")):
            errors.append("SCENARIO_ANALYST_AGENT_API_URL deve ser http(s)")
        if self.agent_timeout_seconds <= 0:
            errors.append("SCENARIO_ANALYST_AGENT_TIMEOUT_SECONDS deve ser positivo")
        if self.agent_max_retries < 0:
            errors.append("SCENARIO_ANALYST_AGENT_MAX_RETRIES não pode ser negativo")
        if not self.agent_id:
            errors.append("SCENARIO_ANALYST_AGENT_ID não configurado")
        if self.is_production and not self.agent_verify_ssl:
            errors.append("SCENARIO_ANALYST_AGENT_VERIFY_SSL não pode ser desligado em produção")
        return errors

    def model_post_init(self, __context: Any) -> None:
        """Emite aviso quando produção roda sem transporte configurado."""
        logger: logging.Logger = get_logger(__name__)
        if self.is_production and not self.agent_api_url:
            logger.warning(
                "agent_api_url_missing",
                extra={"environment": self.environment},
            )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retorna uma instância cacheada de Settings.

    A cache garante que mesmo múltiplas injeções não criam novos objetos.
    """
    return Settings()
