"""Renderizador mínimo de markdown para blocos de exibição.

Responsabilidades:
- Converter texto livre dos campos analíticos em blocos (linha a linha)
- Aplicar negrito inline (`**...**`) sem parser genérico

Subconjunto suportado: títulos (#, ##, ###), itens com `- `/`* `,
itens numerados (`1. `), linhas em branco e parágrafos. Sem listas aninhadas,
links, código ou tabelas.

Puro e determinístico: mesma entrada = mesma saída, nenhuma entrada falha.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

BOLD_MARKER = "**"

_HEADING_PREFIXES: tuple[tuple[str, int], ...] = (("### ", 3), ("## ", 2), ("# ", 1))
_BULLET_PREFIXES: tuple[str, ...] = ("- ", "* ")
_NUMBERED_PREFIX = re.compile(r"^[0-9]+\.\s")


class ListKind(StrEnum):
    """Tipo de item de lista."""

    BULLET = "bullet"
    NUMBERED = "numbered"


@dataclass(frozen=True, slots=True)
class PlainRun:
    """Trecho de texto sem formatação."""

    text: str


@dataclass(frozen=True, slots=True)
class BoldRun:
    """Trecho entre um par de `**`."""

    text: str


InlineRun = PlainRun | BoldRun


@dataclass(frozen=True, slots=True)
class Heading:
    level: int
    runs: tuple[InlineRun, ...]


@dataclass(frozen=True, slots=True)
class ListItem:
    """Item de lista; a numeração literal não é preservada."""

    kind: ListKind
    runs: tuple[InlineRun, ...]


@dataclass(frozen=True, slots=True)
class BlankSpacer:
    """Espaçador para linha vazia."""


@dataclass(frozen=True, slots=True)
class Paragraph:
    runs: tuple[InlineRun, ...]


Block = Heading | ListItem | BlankSpacer | Paragraph


def format_inline(text: str) -> tuple[InlineRun, ...]:
    """Divide o texto em trechos normais e em negrito.

    Marcadores sem par (split com quantidade par de partes) degradam para
    um único PlainRun com a linha inteira. Trechos normais vazios são
    descartados; um par vazio (`****`) vira BoldRun("") e os marcadores,
    por serem marcação, não aparecem no texto.
    """
    parts = text.split(BOLD_MARKER)
    if len(parts) == 1 or len(parts) % 2 == 0:
        return (PlainRun(text),)

    runs: list[InlineRun] = []
    for index, part in enumerate(parts):
        if index % 2:
            runs.append(BoldRun(part))
        elif part:
            runs.append(PlainRun(part))
    return tuple(runs)


def render_line(line: str) -> Block:
    """Classifica uma linha isolada (sem olhar linhas vizinhas)."""
    for prefix, level in _HEADING_PREFIXES:
        if line.startswith(prefix):
            return Heading(level=level, runs=format_inline(line[len(prefix) :]))

    if line.startswith(_BULLET_PREFIXES):
        return ListItem(kind=ListKind.BULLET, runs=format_inline(line[2:]))

    numbered = _NUMBERED_PREFIX.match(line)
    if numbered:
        return ListItem(kind=ListKind.NUMBERED, runs=format_inline(line[numbered.end() :]))

    if not line.strip():
        return BlankSpacer()

    return Paragraph(runs=format_inline(line))


def render_markdown(text: str | None) -> list[Block]:
    """Converte texto em sequência ordenada de blocos.

    Args:
        text: Texto livre (pode ser vazio ou None)

    Returns:
        Lista de blocos; vazia para texto vazio
    """
    if not text:
        return []
    return [render_line(line.rstrip("\r")) for line in text.split("\n")]


def plain_text(runs: Iterable[InlineRun]) -> str:
    """Concatena o texto dos trechos, descartando a formatação."""
    return "".join(run.text for run in runs)
