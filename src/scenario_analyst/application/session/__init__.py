"""Pacote de sessão: modelo Session."""

from scenario_analyst.application.session.models import Session

__all__ = ["Session"]
