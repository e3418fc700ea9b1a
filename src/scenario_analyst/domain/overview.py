"""Painel de visão geral do torneio (estado derivado das respostas)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class OverviewStats(BaseModel):
    """Números de destaque exibidos acima da conversa.

    Somente `qualification_probability` é atualizado a partir das respostas;
    os demais valores são fixos até o próximo reset.
    """

    model_config = ConfigDict(frozen=True)

    position: str = "#2 in Group"
    points: str = "8 pts"
    nrr: str = "+1.245"
    next_match: str = "vs Australia"
    qualification_probability: str = "78%"

    def with_probability(self, value: str) -> OverviewStats:
        """Retorna cópia com nova probabilidade de classificação."""
        return self.model_copy(update={"qualification_probability": value})
