"""Enums de domínio: intenções, remetentes e preferências de alerta."""

from __future__ import annotations

from enum import StrEnum


class IntentTag(StrEnum):
    """Intenções reconhecidas pelo classificador de frases."""

    PROFILE = "profile"
    RECOMMENDATIONS = "recommendations"
    SKILL_GAP = "skill_gap"
    RESUME = "resume"
    SMS = "sms"
    VOICE = "voice"
    NAVIGATION = "navigation"
    GENERAL_HELP = "general_help"
    APPLICATION = "application"
    UNKNOWN = "unknown"


class Sender(StrEnum):
    """Autor de uma mensagem no log da sessão."""

    USER = "user"
    SYSTEM = "system"


class Frequency(StrEnum):
    """Frequência de envio de recomendações por SMS."""

    IMMEDIATE = "immediate"
    DAILY = "daily"
    WEEKLY = "weekly"


class TimeSlot(StrEnum):
    """Janela preferida para receber o SMS."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class HelpTopic(StrEnum):
    """Tópicos de dicas estáticas oferecidos como ação sugerida."""

    PROFILE_TIPS = "profile_tips"
    RESUME_TIPS = "resume_tips"
    VOICE_TIPS = "voice_tips"
    VOICE_FEATURES = "voice_features"
    SMS_INFO = "sms_info"
    APPLICATION_PROCESS = "application_process"
