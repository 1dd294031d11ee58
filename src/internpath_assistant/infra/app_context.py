"""Contexto do app em memória: perfil, recomendações, modos e navegação.

Usado pela API (uma instância por sessão de chat) e pelos testes. Em um
cliente real estes dados vêm do app hospedeiro.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from internpath_assistant.domain.models import RecommendationRecord, UserProfile
from internpath_assistant.domain.protocols import (
    ModeSettings,
    Navigator,
    ProfileProvider,
    ResumeGenerator,
)
from internpath_assistant.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)


class ProfileIncompleteError(Exception):
    """Operação exige perfil completo (nome + skills)."""


class InMemoryAppContext(ProfileProvider, ResumeGenerator, ModeSettings):
    """Estado do app mantido em memória."""

    def __init__(
        self,
        profile: UserProfile | None = None,
        recommendations: Sequence[RecommendationRecord] = (),
        skill_gaps: dict[str, list[str]] | None = None,
        catalogue: Sequence[RecommendationRecord] = (),
        voice_mode: bool = False,
        offline_mode: bool = False,
    ) -> None:
        self._profile = profile or UserProfile()
        self._recommendations = list(recommendations)
        self._skill_gaps = dict(skill_gaps or {})
        self._catalogue = list(catalogue)
        self._voice_mode = voice_mode
        self._offline_mode = offline_mode
        self.resumes_generated = 0

    @property
    def profile(self) -> UserProfile:
        return self._profile

    @profile.setter
    def profile(self, value: UserProfile) -> None:
        self._profile = value

    @property
    def recommendations(self) -> list[RecommendationRecord]:
        return list(self._recommendations)

    @property
    def skill_gaps(self) -> dict[str, list[str]]:
        return {title: list(skills) for title, skills in self._skill_gaps.items()}

    @property
    def voice_mode(self) -> bool:
        return self._voice_mode

    @property
    def offline_mode(self) -> bool:
        return self._offline_mode

    def set_voice_mode(self, enabled: bool) -> None:
        self._voice_mode = enabled
        logger.info("voice_mode_changed", extra={"enabled": enabled})

    def set_offline_mode(self, enabled: bool) -> None:
        self._offline_mode = enabled

    async def generate_recommendations(self, profile: UserProfile) -> None:
        """Publica o catálogo como recomendações do perfil."""
        if not profile.is_complete:
            raise ProfileIncompleteError("Profile must have a name and skills")
        self._recommendations = list(self._catalogue)
        logger.info(
            "recommendations_generated",
            extra={"recommendations_count": len(self._recommendations)},
        )

    async def generate_resume(self, profile: UserProfile) -> None:
        if not profile.is_complete:
            raise ProfileIncompleteError("Profile must have a name and skills")
        self.resumes_generated += 1
        logger.info("resume_generated")


class NavigationRecorder(Navigator):
    """Registra rotas solicitadas; o cliente consome e navega."""

    def __init__(self) -> None:
        self.routes: list[str] = []

    def navigate_to(self, route: str) -> None:
        self.routes.append(route)
        logger.info("navigation_requested", extra={"route": route})

    @property
    def last_route(self) -> str | None:
        return self.routes[-1] if self.routes else None
