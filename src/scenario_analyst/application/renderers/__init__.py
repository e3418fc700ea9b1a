"""Renderizadores de texto para exibição."""

from scenario_analyst.application.renderers.markdown_blocks import (
    BlankSpacer,
    Block,
    BoldRun,
    Heading,
    InlineRun,
    ListItem,
    ListKind,
    Paragraph,
    PlainRun,
    format_inline,
    plain_text,
    render_markdown,
)

__all__ = [
    "BlankSpacer",
    "Block",
    "BoldRun",
    "Heading",
    "InlineRun",
    "ListItem",
    "ListKind",
    "Paragraph",
    "PlainRun",
    "format_inline",
    "plain_text",
    "render_markdown",
]
