"""Contrato Pydantic do resultado analítico normalizado."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SwotBlock(BaseModel):
    """Análise SWOT: quatro campos de texto livre, todos opcionais."""

    model_config = ConfigDict(frozen=True)

    strengths: str = ""
    weaknesses: str = ""
    opportunities: str = ""
    threats: str = ""

    def is_empty(self) -> bool:
        """True se nenhum dos quatro campos tem conteúdo."""
        return not (self.strengths or self.weaknesses or self.opportunities or self.threats)


class AnalyticalResult(BaseModel):
    """Schema fixo em que toda resposta do agente é normalizada.

    Ausência de campo nunca é erro: o campo fica vazio e simplesmente
    não é exibido.
    """

    model_config = ConfigDict(frozen=True)

    qualification_probability: str = ""
    """Texto livre; pode conter uma porcentagem (ex: "78% -- ...")."""

    nrr_impact: str = ""
    """Impacto no Net Run Rate."""

    swot: SwotBlock = Field(default_factory=SwotBlock)

    strategy_recommendations: list[str] = Field(default_factory=list)
    """Recomendações em ordem; pode ser vazia."""

    scenario_outlook: str = ""

    summary: str = ""
    """Resumo; recebe o texto integral quando o agente responde só em prosa."""
