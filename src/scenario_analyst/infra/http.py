"""Cliente HTTP centralizado com retry, timeout e logging.

Usado pelo transporte do agente, com:
- Retry com backoff exponencial (429, 5xx, timeout, conexão)
- Timeouts configuráveis
- Logging estruturado (sem prompts nem payloads)
- Injeção de headers padrão
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from scenario_analyst.observability.logging import get_logger

if TYPE_CHECKING:
    from scenario_analyst.config.settings import Settings

logger: logging.Logger = get_logger(__name__)

_API_KEY_PATTERN = re.compile(r"([?&](?:api_key|apikey|key))=[^&]+", re.IGNORECASE)


def _sanitize_url(url: str) -> str:
    """Remove chaves da query string para logging seguro."""
    return _API_KEY_PATTERN.sub(r"\1=***", url)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP.

    Valores padrão são seguros e conservadores.
    """

    timeout_seconds: float = 30.0
    max_retries: int = 2
    backoff_base_seconds: float = 1.0
    backoff_max_seconds: float = 30.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpError(Exception):
    """Erro de requisição HTTP sem expor informações sensíveis."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable


def _is_retryable_status(status_code: int) -> bool:
    """Determina se status HTTP permite retry (429 ou 5xx)."""
    return status_code == 429 or 500 <= status_code < 600


def _calculate_backoff(
    attempt: int,
    base_seconds: float,
    max_seconds: float,
) -> float:
    """Calcula tempo de espera com backoff exponencial."""
    backoff = (2**attempt) * base_seconds
    return min(backoff, max_seconds)


def _handle_transient_exception(
    exc: Exception,
    method: str,
    url: str,
    attempt: int,
) -> HttpError:
    """Converte timeout/conexão em HttpError retentável; demais erros propagam."""
    if isinstance(exc, httpx.TimeoutException):
        logger.warning(
            "http_timeout",
            extra={"method": method, "url": _sanitize_url(url), "attempt": attempt + 1},
        )
        return HttpError("Timeout", is_retryable=True)

    if isinstance(exc, httpx.ConnectError):
        logger.warning(
            "http_connect_error",
            extra={"method": method, "url": _sanitize_url(url), "attempt": attempt + 1},
        )
        return HttpError("Erro de conexão", is_retryable=True)

    logger.error(
        "http_unexpected_error",
        extra={"method": method, "url": _sanitize_url(url), "error_type": type(exc).__name__},
    )
    raise HttpError(f"Erro inesperado: {type(exc).__name__}") from exc


class HttpClient:
    """Cliente HTTP assíncrono com retry e logging.

    Uso típico:
        async with HttpClient(config) as client:
            response = await client.post(url, json=payload)
    """

    def __init__(self, config: HttpClientConfig | None = None) -> None:
        self._config = config or HttpClientConfig()
        self._client: httpx.AsyncClient | None = None

    @property
    def config(self) -> HttpClientConfig:
        return self._config

    async def _get_client(self) -> httpx.AsyncClient:
        """Retorna cliente httpx (lazy loading)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._config.timeout_seconds),
                headers=self._config.default_headers,
                verify=self._config.verify_ssl,
            )
        return self._client

    async def close(self) -> None:
        """Fecha o cliente e libera recursos."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Executa requisição com retry automático.

        Raises:
            HttpError: Se a resposta não é retentável ou os retries acabaram
        """
        client = await self._get_client()
        last_error: HttpError | None = None
        cfg = self._config

        for attempt in range(cfg.max_retries + 1):
            logger.debug(
                "http_request_start",
                extra={"method": method, "url": _sanitize_url(url), "attempt": attempt + 1},
            )
            try:
                response = await client.request(method, url, **kwargs)
                result = self._process_response(response, method, url)
                if result is not None:
                    return result
                last_error = HttpError(
                    f"HTTP {response.status_code}",
                    status_code=response.status_code,
                    is_retryable=True,
                )
            except HttpError:
                raise
            except Exception as exc:
                last_error = _handle_transient_exception(exc, method, url, attempt)

            await self._wait_backoff_if_needed(attempt)

        logger.error(
            "http_retries_exhausted",
            extra={
                "method": method,
                "url": _sanitize_url(url),
                "total_attempts": cfg.max_retries + 1,
            },
        )
        raise last_error or HttpError("Falha após todos os retries")

    def _process_response(
        self,
        response: httpx.Response,
        method: str,
        url: str,
    ) -> httpx.Response | None:
        """Retorna a resposta se sucesso, None se retentável; levanta caso contrário."""
        if response.is_success:
            return response

        if not _is_retryable_status(response.status_code):
            logger.warning(
                "http_non_retryable_status",
                extra={
                    "method": method,
                    "url": _sanitize_url(url),
                    "status_code": response.status_code,
                },
            )
            raise HttpError(
                f"HTTP {response.status_code}",
                status_code=response.status_code,
                is_retryable=False,
            )
        return None

    async def _wait_backoff_if_needed(self, attempt: int) -> None:
        """Aguarda backoff se ainda há retries disponíveis."""
        cfg = self._config
        if attempt < cfg.max_retries:
            backoff = _calculate_backoff(
                attempt,
                cfg.backoff_base_seconds,
                cfg.backoff_max_seconds,
            )
            logger.info(
                "http_backoff",
                extra={"backoff_seconds": backoff, "next_attempt": attempt + 2},
            )
            await asyncio.sleep(backoff)

    async def post(
        self,
        url: str,
        json: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Executa POST com retry."""
        return await self._request("POST", url, json=json, **kwargs)


def create_http_client(settings: Settings | None = None) -> HttpClient:
    """Factory para criar cliente HTTP configurado para o agente.

    Args:
        settings: Configurações da aplicação. Se None, usa get_settings()
    """
    if settings is None:
        from scenario_analyst.config.settings import get_settings

        settings = get_settings()

    headers = {"User-Agent": f"{settings.service_name}/{settings.version}"}
    if settings.agent_api_key:
        headers["x-api-key"] = settings.agent_api_key

    config = HttpClientConfig(
        timeout_seconds=float(settings.agent_timeout_seconds),
        max_retries=settings.agent_max_retries,
        backoff_base_seconds=float(settings.agent_retry_backoff_seconds),
        backoff_max_seconds=float(settings.agent_retry_backoff_max_seconds),
        default_headers=headers,
        verify_ssl=settings.agent_verify_ssl,
    )

    logger.info(
        "http_client_created",
        extra={
            "timeout_seconds": config.timeout_seconds,
            "max_retries": config.max_retries,
            "verify_ssl": config.verify_ssl,
        },
    )
    return HttpClient(config)
