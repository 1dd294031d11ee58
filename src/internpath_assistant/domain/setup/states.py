"""Passos canônicos do setup guiado de alertas SMS.

Captura de telefone → verificação → preferências → concluído.
Transições são explícitas (ver transitions.py); não há pulos implícitos.
"""

from __future__ import annotations

from enum import StrEnum


class SetupStep(StrEnum):
    """4 passos do fluxo de setup."""

    PHONE_ENTRY = "PHONE_ENTRY"
    """Aguardando número de telefone válido."""

    VERIFICATION = "VERIFICATION"
    """Código enviado; aguardando confirmação."""

    PREFERENCES = "PREFERENCES"
    """Telefone verificado; usuário ajusta preferências."""

    COMPLETE = "COMPLETE"
    """Configurações salvas; serviço ativo."""


VERIFIED_STEPS = frozenset({SetupStep.PREFERENCES, SetupStep.COMPLETE})
"""Passos que exigem `verified == True`."""
