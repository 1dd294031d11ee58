"""Gerador de respostas: intenção + contexto → payload (texto + ações).

Puro: sem side effects. As ações carregam comandos adiados que só o
CommandExecutor executa.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from internpath_assistant.application import chat_texts as texts
from internpath_assistant.domain.commands import (
    Action,
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
from internpath_assistant.domain.enums import HelpTopic, IntentTag
from internpath_assistant.domain.models import DomainContext
from internpath_assistant.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

# palavra-chave → rota; ordem define prioridade
NAVIGATION_DESTINATIONS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("profile",), "/profile"),
    (("recommendation",), "/recommendations"),
    (("feedback",), "/feedback"),
    (("home", "start"), "/"),
)


def extract_destination(text: str) -> str | None:
    """Extrai a rota de destino do texto bruto (primeira palavra-chave)."""
    normalized = (text or "").lower()
    for keywords, route in NAVIGATION_DESTINATIONS:
        if any(keyword in normalized for keyword in keywords):
            return route
    return None


def destination_label(route: str) -> str:
    return "home" if route == "/" else route.lstrip("/")


def _navigate(label: str, route: str) -> Action:
    return Action(label=label, command=NavigateCommand(route=route))


def guidelines_payload() -> ResponsePayload:
    """Payload de instruções (boas-vindas e entrada não classificada)."""
    return ResponsePayload(body=texts.guidelines_text(), content=texts.GUIDELINES)


def navigation_options_payload() -> ResponsePayload:
    return ResponsePayload(
        body=texts.NAVIGATION_OPTIONS,
        actions=(
            _navigate("🏠 Home", "/"),
            _navigate("👤 Profile", "/profile"),
            _navigate("🎯 Recommendations", "/recommendations"),
            _navigate("💬 Feedback", "/feedback"),
        ),
    )


class ResponseGenerator:
    """Mapeia IntentTag + DomainContext para ResponsePayload."""

    def __init__(self) -> None:
        self._handlers: dict[IntentTag, Callable[[DomainContext, str], ResponsePayload]] = {
            IntentTag.PROFILE: self._profile,
            IntentTag.RECOMMENDATIONS: self._recommendations,
            IntentTag.SKILL_GAP: self._skill_gap,
            IntentTag.RESUME: self._resume,
            IntentTag.SMS: self._sms,
            IntentTag.VOICE: self._voice,
            IntentTag.NAVIGATION: self._navigation,
            IntentTag.GENERAL_HELP: self._general_help,
            IntentTag.APPLICATION: self._application,
            IntentTag.UNKNOWN: self._unknown,
        }

    def respond(self, intent: IntentTag, context: DomainContext, text: str = "") -> ResponsePayload:
        """Gera o payload de resposta.

        Args:
            intent: intenção classificada
            context: snapshot do domínio (não modificado)
            text: texto bruto do usuário (usado pela navegação)
        """
        payload = self._handlers[intent](context, text)
        logger.debug(
            "response_generated",
            extra={"intent": intent.value, "actions_count": len(payload.actions)},
        )
        return payload

    def _profile(self, context: DomainContext, text: str) -> ResponsePayload:
        if not context.profile_complete:
            return ResponsePayload(
                body=texts.PROFILE_INCOMPLETE,
                actions=(
                    _navigate("Go to Profile", "/profile"),
                    Action(
                        label="Profile Tips",
                        command=ShowTopicCommand(topic=HelpTopic.PROFILE_TIPS),
                    ),
                ),
            )
        return ResponsePayload(
            body=texts.PROFILE_COMPLETE,
            actions=(
                _navigate("Update Profile", "/profile"),
                _navigate("Get Recommendations", "/recommendations"),
            ),
        )

    def _recommendations(self, context: DomainContext, text: str) -> ResponsePayload:
        if context.recommendation_count == 0:
            return ResponsePayload(
                body=texts.NO_RECOMMENDATIONS,
                actions=(
                    _navigate("Complete Profile", "/profile"),
                    Action(label="Generate Now", command=GenerateRecommendationsCommand()),
                ),
            )
        return ResponsePayload(
            body=texts.RECOMMENDATIONS_AVAILABLE.format(count=context.recommendation_count),
            actions=(
                _navigate("View Recommendations", "/recommendations"),
                Action(label="Explain My Matches", command=ExplainMatchesCommand()),
            ),
        )

    def _skill_gap(self, context: DomainContext, text: str) -> ResponsePayload:
        if context.skill_gap_count > 0:
            return ResponsePayload(
                body=texts.SKILL_GAPS_FOUND.format(count=context.skill_gap_count),
                actions=(
                    Action(label="Show Courses", command=ShowCoursesCommand()),
                    _navigate("View in Recommendations", "/recommendations"),
                ),
            )
        return ResponsePayload(body=texts.NO_SKILL_GAPS)

    def _resume(self, context: DomainContext, text: str) -> ResponsePayload:
        return ResponsePayload(
            body=texts.RESUME_HELP,
            actions=(
                Action(label="Generate Resume", command=GenerateResumeCommand()),
                Action(
                    label="Resume Tips", command=ShowTopicCommand(topic=HelpTopic.RESUME_TIPS)
                ),
            ),
        )

    def _sms(self, context: DomainContext, text: str) -> ResponsePayload:
        if context.offline_mode_enabled:
            return ResponsePayload(
                body=texts.SMS_OFFLINE,
                actions=(
                    Action(label="Setup SMS", command=OpenSmsSetupCommand()),
                    Action(
                        label="How SMS Works", command=ShowTopicCommand(topic=HelpTopic.SMS_INFO)
                    ),
                ),
            )
        return ResponsePayload(body=texts.SMS_ONLINE)

    def _voice(self, context: DomainContext, text: str) -> ResponsePayload:
        if context.voice_mode_enabled:
            return ResponsePayload(
                body=texts.VOICE_ACTIVE,
                actions=(
                    Action(label="Disable Voice", command=ToggleVoiceCommand(enabled=False)),
                    Action(
                        label="Voice Tips", command=ShowTopicCommand(topic=HelpTopic.VOICE_TIPS)
                    ),
                ),
            )
        return ResponsePayload(
            body=texts.VOICE_INACTIVE,
            actions=(
                Action(label="Enable Voice", command=ToggleVoiceCommand(enabled=True)),
                Action(
                    label="Voice Features",
                    command=ShowTopicCommand(topic=HelpTopic.VOICE_FEATURES),
                ),
            ),
        )

    def _navigation(self, context: DomainContext, text: str) -> ResponsePayload:
        route = extract_destination(text)
        if route is None:
            return navigation_options_payload()
        return ResponsePayload(
            body=texts.NAVIGATION_TAKING_YOU.format(destination=destination_label(route)),
            actions=(_navigate("Go Now", route),),
        )

    def _general_help(self, context: DomainContext, text: str) -> ResponsePayload:
        menu = (
            ("👤 Profile Help", IntentTag.PROFILE),
            ("🎯 Find Internships", IntentTag.RECOMMENDATIONS),
            ("📄 Resume Generation", IntentTag.RESUME),
            ("🔊 Voice Features", IntentTag.VOICE),
            ("📱 SMS Setup", IntentTag.SMS),
            ("🧭 Navigation", IntentTag.NAVIGATION),
        )
        return ResponsePayload(
            body=texts.GENERAL_HELP,
            actions=tuple(
                Action(label=label, command=InvokeIntentCommand(intent=intent))
                for label, intent in menu
            ),
        )

    def _application(self, context: DomainContext, text: str) -> ResponsePayload:
        return ResponsePayload(
            body=texts.APPLICATION_HELP,
            actions=(
                Action(
                    label="Application Process",
                    command=ShowTopicCommand(topic=HelpTopic.APPLICATION_PROCESS),
                ),
                Action(label="Generate Resume", command=GenerateResumeCommand()),
            ),
        )

    def _unknown(self, context: DomainContext, text: str) -> ResponsePayload:
        # Entrada não classificada ensina o vocabulário de comandos
        return guidelines_payload()
