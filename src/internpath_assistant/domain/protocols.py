"""Contratos dos colaboradores externos do núcleo.

O núcleo nunca conhece UI, navegador, motor de fala ou provedor SMS;
depende apenas destes contratos, injetados na construção.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from internpath_assistant.domain.models import RecommendationRecord, UserProfile


class Navigator(ABC):
    """Navegação de páginas (fire-and-forget)."""

    @abstractmethod
    def navigate_to(self, route: str) -> None: ...


class ProfileProvider(ABC):
    """Acesso somente-leitura a perfil/recomendações + geração."""

    @property
    @abstractmethod
    def profile(self) -> UserProfile: ...

    @property
    @abstractmethod
    def recommendations(self) -> list[RecommendationRecord]: ...

    @property
    @abstractmethod
    def skill_gaps(self) -> dict[str, list[str]]:
        """Mapa recomendação → skills ausentes."""
        ...

    @abstractmethod
    async def generate_recommendations(self, profile: UserProfile) -> None: ...


class ResumeGenerator(ABC):
    """Geração de currículo; falha com exceção genérica."""

    @abstractmethod
    async def generate_resume(self, profile: UserProfile) -> None: ...


class ModeSettings(ABC):
    """Flags de modo (voz/offline) pertencentes ao app."""

    @property
    @abstractmethod
    def voice_mode(self) -> bool: ...

    @property
    @abstractmethod
    def offline_mode(self) -> bool: ...

    @abstractmethod
    def set_voice_mode(self, enabled: bool) -> None: ...


class NotificationSender(ABC):
    """Transporte opaco de notificação para um número de telefone."""

    @abstractmethod
    async def send(self, destination: str, body: str) -> None: ...


class SpeechOutput(ABC):
    """Síntese de fala (text-to-speech)."""

    available: bool = True

    @abstractmethod
    def speak(self, text: str, language_tag: str) -> None: ...


class SpeechInput(ABC):
    """Reconhecimento de fala: uma elocução por chamada."""

    available: bool = True

    @abstractmethod
    async def listen(self, language_tag: str) -> str: ...


class SettingsRepository(ABC):
    """Armazenamento chave-valor do blob de configurações SMS."""

    @abstractmethod
    async def load(self) -> dict[str, Any] | None: ...

    @abstractmethod
    async def save(self, blob: dict[str, Any]) -> None: ...


class SettingsStoreError(Exception):
    """Falha ao persistir ou recuperar configurações."""


class NotificationSendError(Exception):
    """Falha no envio de notificação."""


def speech_language_tag(language: str | None) -> str:
    """Converte idioma do perfil para a tag de locale da fala."""
    if language == "hi":
        return "hi-IN"
    if language == "ta":
        return "ta-IN"
    return "en-IN"
