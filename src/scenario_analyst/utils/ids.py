"""Geradores de identificadores."""

from __future__ import annotations

import uuid


def new_session_id() -> str:
    """Gera um session_id único."""

    return str(uuid.uuid4())


def new_message_id() -> str:
    """Gera um id de mensagem único dentro da sessão."""

    return uuid.uuid4().hex
