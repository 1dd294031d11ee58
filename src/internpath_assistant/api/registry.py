"""Registro das sessões de chat e das máquinas de setup SMS ativas.

Mantido em `app.state.registry`; tudo em memória do processo, exceto as
configurações SMS persistidas pelo SettingsRepository.
"""

from __future__ import annotations

import asyncio
import logging
import random
import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from internpath_assistant.application.command_executor import CommandExecutor
from internpath_assistant.application.dialogue_session import DialogueSession
from internpath_assistant.application.notification_builder import NotificationContentBuilder
from internpath_assistant.application.sms_setup import SmsSetupStateMachine
from internpath_assistant.application.verification import VerificationCodeService
from internpath_assistant.config.settings import Settings
from internpath_assistant.domain.models import RecommendationRecord, UserProfile
from internpath_assistant.domain.protocols import (
    NotificationSender,
    SettingsRepository,
    SpeechOutput,
)
from internpath_assistant.infra.app_context import InMemoryAppContext, NavigationRecorder
from internpath_assistant.infra.settings_repository import create_settings_repository
from internpath_assistant.infra.speech import create_speech_input, create_speech_output
from internpath_assistant.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)


def new_session_id() -> str:
    """Gera um session_id único."""
    return str(uuid.uuid4())


@dataclass(slots=True)
class ChatHandle:
    """Sessão de chat + colaboradores em memória associados."""

    session: DialogueSession
    context: InMemoryAppContext
    navigator: NavigationRecorder


class AssistantRegistry:
    """Cria e localiza sessões de chat e setups SMS."""

    def __init__(
        self,
        settings: Settings,
        sender: NotificationSender,
        redis_client: Any | None = None,
        speech_output: SpeechOutput | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._settings = settings
        self._sender = sender
        self._redis_client = redis_client
        self._speech_output = speech_output or create_speech_output()
        self._rng = rng
        self._memory_storage: dict[str, dict[str, Any]] = {}
        self._chats: dict[str, ChatHandle] = {}
        self._setups: dict[str, SmsSetupStateMachine] = {}
        self._setup_locks: dict[str, asyncio.Lock] = {}
        self._setup_modes: dict[str, InMemoryAppContext] = {}

    @property
    def sender(self) -> NotificationSender:
        return self._sender

    def create_chat(
        self,
        profile: UserProfile | None = None,
        recommendations: Sequence[RecommendationRecord] = (),
        skill_gaps: dict[str, list[str]] | None = None,
        voice_mode: bool = False,
        offline_mode: bool = False,
    ) -> tuple[str, ChatHandle]:
        """Cria e abre uma sessão de chat (boas-vindas já no log)."""
        context = InMemoryAppContext(
            profile=profile,
            recommendations=recommendations,
            skill_gaps=skill_gaps,
            catalogue=recommendations,
            voice_mode=voice_mode,
            offline_mode=offline_mode,
        )
        navigator = NavigationRecorder()
        executor = CommandExecutor(
            navigator=navigator, profiles=context, resumes=context, modes=context
        )
        session = DialogueSession(
            profiles=context,
            modes=context,
            executor=executor,
            speech_output=self._speech_output,
            speech_input=create_speech_input(),
            delay_range=self._settings.response_delay_range,
            rng=self._rng,
        )
        session.open()

        session_id = new_session_id()
        handle = ChatHandle(session=session, context=context, navigator=navigator)
        self._chats[session_id] = handle
        logger.info("chat_session_created", extra={"session_id": session_id[:8] + "..."})
        return session_id, handle

    def get_chat(self, session_id: str) -> ChatHandle | None:
        return self._chats.get(session_id)

    def close_chat(self, session_id: str) -> bool:
        handle = self._chats.pop(session_id, None)
        if handle is None:
            return False
        handle.session.close()
        return True

    async def get_setup(self, user_id: str) -> SmsSetupStateMachine:
        """Máquina de setup do usuário (criada e reidratada no primeiro acesso).

        Acessos concorrentes ao mesmo usuário esperam a mesma reidratação.
        """
        machine = self._setups.get(user_id)
        if machine is not None:
            return machine

        lock = self._setup_locks.setdefault(user_id, asyncio.Lock())
        async with lock:
            machine = self._setups.get(user_id)
            if machine is None:
                machine = self._build_setup(user_id)
                await machine.load()
                self._setups[user_id] = machine
        return machine

    def setup_modes(self, user_id: str) -> InMemoryAppContext:
        """Modo voz/offline do setup SMS do usuário (anúncios falados)."""
        modes = self._setup_modes.get(user_id)
        if modes is None:
            modes = InMemoryAppContext()
            self._setup_modes[user_id] = modes
        return modes

    def _build_setup(self, user_id: str) -> SmsSetupStateMachine:
        settings = self._settings
        return SmsSetupStateMachine(
            repository=self._settings_repository_for(user_id),
            code_service=VerificationCodeService(
                sender=self._sender,
                code_length=settings.verification_code_length,
                ttl_seconds=settings.verification_code_ttl_seconds,
                bypass_code=settings.verification_debug_bypass_code,
            ),
            sender=self._sender,
            content_builder=NotificationContentBuilder(helpline=settings.sms_helpline),
            modes=self.setup_modes(user_id),
            speech_output=self._speech_output,
            language=settings.default_language,
            default_country_code=settings.default_country_code,
            min_phone_digits=settings.min_phone_digits,
        )

    def _settings_repository_for(self, user_id: str) -> SettingsRepository:
        return create_settings_repository(
            self._settings,
            user_id,
            redis_client=self._redis_client,
            storage=self._memory_storage,
        )

    def forget_setup(self, user_id: str) -> None:
        """Descarta a máquina em memória (configurações salvas permanecem)."""
        self._setups.pop(user_id, None)
        lock = self._setup_locks.get(user_id)
        if lock is not None and not lock.locked():
            del self._setup_locks[user_id]
