"""Eventos que disparam transições no setup guiado."""

from __future__ import annotations

from enum import StrEnum


class SetupEvent(StrEnum):
    """6 eventos do setup."""

    PHONE_SUBMITTED = "PHONE_SUBMITTED"
    """Telefone válido e código emitido."""

    CODE_RESENT = "CODE_RESENT"
    """Novo código emitido para o mesmo telefone."""

    CODE_ACCEPTED = "CODE_ACCEPTED"
    """Código conferido (ou bypass de debug)."""

    BACK = "BACK"
    """Usuário pediu para trocar o número."""

    SETUP_SAVED = "SETUP_SAVED"
    """Preferências persistidas com sucesso."""

    EDIT_REQUESTED = "EDIT_REQUESTED"
    """Reabrir preferências sem nova verificação."""
