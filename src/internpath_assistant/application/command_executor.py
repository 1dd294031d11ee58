"""Executor dos comandos carregados pelas ações sugeridas.

Único ponto com side effects do fluxo de chat: navegação, modo voz,
geração de recomendações/currículo e mensagens de acompanhamento.
Falhas de colaboradores viram mensagens no chat, nunca exceções.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from internpath_assistant.application import chat_texts as texts
from internpath_assistant.application.context import build_domain_context
from internpath_assistant.application.response_generator import ResponseGenerator
from internpath_assistant.domain.commands import (
    Command,
    ExplainMatchesCommand,
    GenerateRecommendationsCommand,
    GenerateResumeCommand,
    InvokeIntentCommand,
    NavigateCommand,
    OpenSmsSetupCommand,
    ShowCoursesCommand,
    ShowTopicCommand,
    ToggleVoiceCommand,
)
from internpath_assistant.domain.conversation import ResponsePayload
from internpath_assistant.domain.protocols import (
    ModeSettings,
    Navigator,
    ProfileProvider,
    ResumeGenerator,
)
from internpath_assistant.observability.logging import get_logger

if TYPE_CHECKING:
    from internpath_assistant.application.dialogue_session import DialogueSession

logger: logging.Logger = get_logger(__name__)

SMS_SETUP_ROUTE = "/sms-setup"


class CommandExecutor:
    """Interpreta comandos contra os colaboradores injetados."""

    def __init__(
        self,
        navigator: Navigator,
        profiles: ProfileProvider,
        resumes: ResumeGenerator,
        modes: ModeSettings,
        generator: ResponseGenerator | None = None,
    ) -> None:
        self._navigator = navigator
        self._profiles = profiles
        self._resumes = resumes
        self._modes = modes
        self._generator = generator or ResponseGenerator()

    async def execute(self, command: Command, session: DialogueSession) -> None:
        """Executa um comando; mensagens de retorno vão para a sessão."""
        logger.info("command_executing", extra={"command": command.kind})

        match command:
            case NavigateCommand(route=route):
                self._navigator.navigate_to(route)
            case ToggleVoiceCommand(enabled=enabled):
                self._modes.set_voice_mode(enabled)
            case InvokeIntentCommand(intent=intent):
                context = build_domain_context(self._profiles, self._modes)
                session.post_system_message(self._generator.respond(intent, context))
            case GenerateRecommendationsCommand(then_navigate=then_navigate):
                await self._generate_recommendations(then_navigate, session)
            case GenerateResumeCommand():
                await self._generate_resume(session)
            case ShowCoursesCommand():
                session.post_system_message(ResponsePayload(body=self.courses_text()))
            case ExplainMatchesCommand():
                explanation = self.matches_text()
                if explanation:
                    session.post_system_message(ResponsePayload(body=explanation))
            case ShowTopicCommand(topic=topic):
                session.post_system_message(ResponsePayload(body=texts.TOPIC_TEXTS[topic]))
            case OpenSmsSetupCommand():
                self._navigator.navigate_to(SMS_SETUP_ROUTE)

    async def _generate_recommendations(
        self, then_navigate: str | None, session: DialogueSession
    ) -> None:
        try:
            await self._profiles.generate_recommendations(self._profiles.profile)
        except Exception as e:
            logger.warning(
                "recommendations_generation_failed",
                extra={"error_type": type(e).__name__},
            )
            session.post_system_message(ResponsePayload(body=texts.RECOMMENDATIONS_ERROR))
            return
        if then_navigate:
            self._navigator.navigate_to(then_navigate)

    async def _generate_resume(self, session: DialogueSession) -> None:
        try:
            await self._resumes.generate_resume(self._profiles.profile)
        except Exception as e:
            logger.warning(
                "resume_generation_failed",
                extra={"error_type": type(e).__name__},
            )
            session.post_system_message(ResponsePayload(body=texts.RESUME_ERROR))
            return
        session.post_system_message(ResponsePayload(body=texts.RESUME_GENERATED))

    def courses_text(self) -> str:
        """Lista cursos do catálogo para as skills ausentes (sem repetição)."""
        missing: list[str] = []
        for skills in (self._profiles.skill_gaps or {}).values():
            for skill in skills:
                if skill not in missing:
                    missing.append(skill)

        lines: list[str] = []
        for skill in missing:
            course = texts.SKILL_COURSES.get(skill)
            if course is None:
                continue
            title, provider = course
            lines.append(f"• {skill}: {title} ({provider})")
        if not lines:
            return texts.NO_COURSES
        return "\n".join([texts.COURSES_HEADER, *lines])

    def matches_text(self) -> str | None:
        """Explica cada recomendação; None quando não há recomendações."""
        records = self._profiles.recommendations
        if not records:
            return None
        lines = [
            f"• {record.title}: {record.explanation or texts.DEFAULT_MATCH_EXPLANATION}"
            for record in records
        ]
        return "\n".join([texts.EXPLAIN_MATCHES_HEADER, *lines])
