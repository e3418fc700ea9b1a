"""Normalização de payloads do agente para o schema analítico fixo.

Responsabilidade:
- Aceitar qualquer formato devolvido pelo agente (objeto, string JSON,
  JSON embutido em campo de texto, prosa pura)
- Produzir AnalyticalResult com todos os campos preenchidos (default vazio)
- Nunca lançar exceção; retornar None apenas quando o payload não tem forma
  de objeto

Ordem de fallback:
1. String → tenta JSON; se falhar, a prosa inteira vira `summary`
2. Não-objeto → None
3. Campos sonda (profundidade 1) com JSON embutido substituem o objeto
4. Extração campo a campo com coerção para texto
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any

from scenario_analyst.ai.contracts.analytical_result import AnalyticalResult, SwotBlock
from scenario_analyst.observability.logging import get_logger, log_fallback

logger: logging.Logger = get_logger(__name__)

COMPONENT = "response_normalizer"

# Ordem importa: o primeiro campo que casar vence.
WRAPPER_FIELDS: tuple[str, ...] = ("text", "response", "message", "content", "answer")

# Basta um destes no JSON embutido para considerá-lo o payload real.
MARKER_FIELDS: tuple[str, ...] = ("summary", "qualification_probability", "swot")

SWOT_FIELDS: tuple[str, ...] = ("strengths", "weaknesses", "opportunities", "threats")

_PROBABILITY_PATTERN = re.compile(r"(\d+)%")


def coerce_text(value: Any) -> str:
    """Converte qualquer valor em texto sem lançar exceção.

    None vira "", bool vira "true"/"false", float inteiro perde o ".0",
    dict/list viram JSON compacto.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, int | float):
        return str(value)
    if isinstance(value, Mapping | list | tuple):
        try:
            return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError):
            return _safe_str(value)
    return _safe_str(value)


def _safe_str(value: Any) -> str:
    """str() com recuo para repr() e, por fim, texto vazio."""
    for render in (str, repr):
        try:
            return render(value)
        except Exception:  # noqa: BLE001
            continue
    return ""


def _try_parse_json(text: str) -> tuple[bool, Any]:
    """Tenta decodificar JSON; retorna (ok, valor)."""
    try:
        return True, json.loads(text)
    except (ValueError, RecursionError):
        return False, None


def _is_present(value: Any) -> bool:
    # Objetos e listas contam mesmo vazios; escalares seguem bool().
    if isinstance(value, Mapping | list | tuple):
        return True
    return bool(value)


def _has_marker(candidate: Mapping[str, Any]) -> bool:
    return any(_is_present(candidate.get(key)) for key in MARKER_FIELDS)


def _unwrap_embedded_json(data: Mapping[str, Any]) -> Mapping[str, Any]:
    """Substitui o objeto pelo JSON embutido no primeiro campo sonda válido.

    Apenas campos de primeiro nível são inspecionados.
    """
    for field in WRAPPER_FIELDS:
        candidate = data.get(field)
        if not isinstance(candidate, str):
            continue
        ok, parsed = _try_parse_json(candidate)
        if ok and isinstance(parsed, Mapping) and _has_marker(parsed):
            logger.debug("nested_payload_unwrapped", extra={"wrapper_field": field})
            return parsed
    return data


def _extract_swot(value: Any) -> SwotBlock:
    if not isinstance(value, Mapping):
        return SwotBlock()
    return SwotBlock(**{name: coerce_text(value.get(name)) for name in SWOT_FIELDS})


def _extract_recommendations(value: Any) -> list[str]:
    if isinstance(value, list | tuple):
        return [coerce_text(item) for item in value]
    return []


def _normalize(raw: Any) -> AnalyticalResult | None:
    data = raw

    if isinstance(data, str):
        ok, parsed = _try_parse_json(data)
        if not ok:
            log_fallback(logger, COMPONENT, reason="prose_as_summary")
            return AnalyticalResult(summary=raw)
        data = parsed

    if not isinstance(data, Mapping):
        log_fallback(logger, COMPONENT, reason="not_an_object")
        return None

    data = _unwrap_embedded_json(data)

    return AnalyticalResult(
        qualification_probability=coerce_text(data.get("qualification_probability")),
        nrr_impact=coerce_text(data.get("nrr_impact")),
        swot=_extract_swot(data.get("swot")),
        strategy_recommendations=_extract_recommendations(
            data.get("strategy_recommendations")
        ),
        scenario_outlook=coerce_text(data.get("scenario_outlook")),
        summary=coerce_text(data.get("summary")),
    )


def normalize_response(raw: Any) -> AnalyticalResult | None:
    """Normaliza payload arbitrário do agente.

    Args:
        raw: `response.result` devolvido pelo transporte (qualquer tipo)

    Returns:
        AnalyticalResult, ou None se o payload não tem forma de objeto

    Contrato:
    - Nunca lança exceção
    - Prosa pura nunca é descartada (vai para `summary`)
    """
    try:
        return _normalize(raw)
    except Exception as exc:  # noqa: BLE001
        logger.error(
            "response_normalization_failed",
            extra={"error_type": type(exc).__name__},
        )
        return None


def extract_probability_headline(text: str | None) -> str | None:
    """Extrai a primeira porcentagem (`NN%`) de um texto livre.

    Extração secundária, best-effort: None quando não há porcentagem.
    """
    if not text:
        return None
    match = _PROBABILITY_PATTERN.search(text)
    if match is None:
        return None
    return f"{match.group(1)}%"
