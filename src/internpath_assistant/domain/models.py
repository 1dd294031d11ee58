"""Modelos de domínio (contratos principais)."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from internpath_assistant.domain.enums import Frequency, TimeSlot

ALLOWED_MAX_ITEMS: frozenset[int] = frozenset({1, 3, 5})


class UserProfile(BaseModel):
    """Perfil do candidato exposto pelo colaborador de perfil."""

    name: str | None = None
    skills: list[str] = Field(default_factory=list)
    preferred_language: str = "en"
    location: str | None = None

    @property
    def is_complete(self) -> bool:
        """Perfil completo = nome preenchido e ao menos uma skill."""
        return bool(self.name) and len(self.skills) > 0


class RecommendationRecord(BaseModel):
    """Recomendação de estágio (entrada do builder de SMS)."""

    title: str
    company: str
    location: str | None = None
    skill_match: int | None = None
    match: int | None = None
    explanation: str | None = None
    stipend: str | None = None


class DomainContext(BaseModel):
    """Snapshot somente-leitura usado pelo gerador de respostas a cada turno."""

    model_config = ConfigDict(frozen=True)

    profile_complete: bool = False
    recommendation_count: int = 0
    skill_gap_count: int = 0
    voice_mode_enabled: bool = False
    offline_mode_enabled: bool = False


class PreferenceSet(BaseModel):
    """Preferências de alerta SMS (editadas campo a campo no passo PREFERENCES)."""

    model_config = ConfigDict(validate_assignment=True)

    frequency: Frequency = Frequency.DAILY
    max_items_per_message: int = 3
    language: str = "en"
    include_location: bool = True
    include_stipend: bool = False
    time_slot: TimeSlot = TimeSlot.MORNING

    @field_validator("max_items_per_message")
    @classmethod
    def _check_max_items(cls, value: int) -> int:
        if value not in ALLOWED_MAX_ITEMS:
            msg = f"max_items_per_message deve ser um de {sorted(ALLOWED_MAX_ITEMS)}"
            raise ValueError(msg)
        return value


class StoredSmsSettings(BaseModel):
    """Blob persistido no SettingsRepository ao concluir o setup."""

    phone_number: str
    country_code: str
    preferences: PreferenceSet
    verified: bool = False
    setup_complete: bool = False
    setup_date: datetime | None = None
