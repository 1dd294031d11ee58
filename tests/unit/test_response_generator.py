"""Testes do gerador de respostas (intenção + contexto → payload)."""

from __future__ import annotations

import pytest

from internpath_assistant.application import chat_texts as texts
from internpath_assistant.application.response_generator import (
    ResponseGenerator,
    destination_label,
    extract_destination,
)
from internpath_assistant.domain.commands import (
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
from internpath_assistant.domain.enums import HelpTopic, IntentTag
from internpath_assistant.domain.models import DomainContext


@pytest.fixture
def generator() -> ResponseGenerator:
    return ResponseGenerator()


def _commands(payload) -> list:
    return [action.command for action in payload.actions]


class TestProfileIntent:
    def test_incomplete_profile(self, generator: ResponseGenerator) -> None:
        payload = generator.respond(IntentTag.PROFILE, DomainContext(profile_complete=False))
        assert payload.body == texts.PROFILE_INCOMPLETE
        assert _commands(payload) == [
            NavigateCommand(route="/profile"),
            ShowTopicCommand(topic=HelpTopic.PROFILE_TIPS),
        ]

    def test_complete_profile(self, generator: ResponseGenerator) -> None:
        payload = generator.respond(IntentTag.PROFILE, DomainContext(profile_complete=True))
        assert payload.body == texts.PROFILE_COMPLETE
        assert [a.label for a in payload.actions] == ["Update Profile", "Get Recommendations"]


class TestRecommendationsIntent:
    def test_no_recommendations(self, generator: ResponseGenerator) -> None:
        payload = generator.respond(IntentTag.RECOMMENDATIONS, DomainContext())
        assert payload.body == texts.NO_RECOMMENDATIONS
        assert _commands(payload) == [
            NavigateCommand(route="/profile"),
            GenerateRecommendationsCommand(then_navigate="/recommendations"),
        ]

    def test_with_recommendations_mentions_count(self, generator: ResponseGenerator) -> None:
        payload = generator.respond(
            IntentTag.RECOMMENDATIONS, DomainContext(recommendation_count=4)
        )
        assert "4 recommendations" in payload.body
        assert _commands(payload) == [
            NavigateCommand(route="/recommendations"),
            ExplainMatchesCommand(),
        ]


class TestSkillGapIntent:
    def test_gaps_found(self, generator: ResponseGenerator) -> None:
        payload = generator.respond(IntentTag.SKILL_GAP, DomainContext(skill_gap_count=3))
        assert "3 skill gaps" in payload.body
        assert _commands(payload) == [
            ShowCoursesCommand(),
            NavigateCommand(route="/recommendations"),
        ]

    def test_no_gaps_has_no_actions(self, generator: ResponseGenerator) -> None:
        payload = generator.respond(IntentTag.SKILL_GAP, DomainContext(skill_gap_count=0))
        assert payload.body == texts.NO_SKILL_GAPS
        assert payload.actions == ()


class TestStaticIntents:
    def test_resume(self, generator: ResponseGenerator) -> None:
        payload = generator.respond(IntentTag.RESUME, DomainContext())
        assert _commands(payload) == [
            GenerateResumeCommand(),
            ShowTopicCommand(topic=HelpTopic.RESUME_TIPS),
        ]

    def test_application(self, generator: ResponseGenerator) -> None:
        payload = generator.respond(IntentTag.APPLICATION, DomainContext())
        assert payload.body == texts.APPLICATION_HELP
        assert _commands(payload) == [
            ShowTopicCommand(topic=HelpTopic.APPLICATION_PROCESS),
            GenerateResumeCommand(),
        ]

    def test_general_help_menu(self, generator: ResponseGenerator) -> None:
        payload = generator.respond(IntentTag.GENERAL_HELP, DomainContext())
        assert _commands(payload) == [
            InvokeIntentCommand(intent=IntentTag.PROFILE),
            InvokeIntentCommand(intent=IntentTag.RECOMMENDATIONS),
            InvokeIntentCommand(intent=IntentTag.RESUME),
            InvokeIntentCommand(intent=IntentTag.VOICE),
            InvokeIntentCommand(intent=IntentTag.SMS),
            InvokeIntentCommand(intent=IntentTag.NAVIGATION),
        ]

    def test_unknown_returns_guidelines(self, generator: ResponseGenerator) -> None:
        """Entrada não classificada recebe as instruções, nunca desculpas."""
        payload = generator.respond(IntentTag.UNKNOWN, DomainContext())
        assert payload.content == texts.GUIDELINES
        assert payload.body == texts.guidelines_text()
        assert "sorry" not in payload.body.lower()


class TestModeIntents:
    def test_sms_offline(self, generator: ResponseGenerator) -> None:
        payload = generator.respond(IntentTag.SMS, DomainContext(offline_mode_enabled=True))
        assert _commands(payload) == [
            OpenSmsSetupCommand(),
            ShowTopicCommand(topic=HelpTopic.SMS_INFO),
        ]

    def test_sms_online(self, generator: ResponseGenerator) -> None:
        payload = generator.respond(IntentTag.SMS, DomainContext(offline_mode_enabled=False))
        assert payload.body == texts.SMS_ONLINE
        assert payload.actions == ()

    def test_voice_enabled_offers_disable(self, generator: ResponseGenerator) -> None:
        payload = generator.respond(IntentTag.VOICE, DomainContext(voice_mode_enabled=True))
        assert _commands(payload)[0] == ToggleVoiceCommand(enabled=False)

    def test_voice_disabled_offers_enable(self, generator: ResponseGenerator) -> None:
        payload = generator.respond(IntentTag.VOICE, DomainContext(voice_mode_enabled=False))
        assert _commands(payload) == [
            ToggleVoiceCommand(enabled=True),
            ShowTopicCommand(topic=HelpTopic.VOICE_FEATURES),
        ]


class TestNavigationIntent:
    @pytest.mark.parametrize(
        ("text", "route"),
        [
            ("navigate to profile", "/profile"),
            ("go to recommendations page", "/recommendations"),
            ("feedback page", "/feedback"),
            ("go to home", "/"),
            ("back to start page", "/"),
        ],
    )
    def test_destination_found(
        self, generator: ResponseGenerator, text: str, route: str
    ) -> None:
        payload = generator.respond(IntentTag.NAVIGATION, DomainContext(), text)
        assert payload.body == f"Taking you to {destination_label(route)}!"
        assert _commands(payload) == [NavigateCommand(route=route)]
        assert payload.actions[0].label == "Go Now"

    def test_destination_priority(self) -> None:
        """profile vence recommendation quando ambos aparecem."""
        assert extract_destination("recommendation or profile") == "/profile"

    def test_home_label(self) -> None:
        assert destination_label("/") == "home"
        assert destination_label("/feedback") == "feedback"

    def test_no_destination_shows_chooser(self, generator: ResponseGenerator) -> None:
        payload = generator.respond(IntentTag.NAVIGATION, DomainContext(), "navigate")
        assert payload.body == texts.NAVIGATION_OPTIONS
        assert _commands(payload) == [
            NavigateCommand(route="/"),
            NavigateCommand(route="/profile"),
            NavigateCommand(route="/recommendations"),
            NavigateCommand(route="/feedback"),
        ]


class TestGeneratorPurity:
    def test_same_input_same_output(self, generator: ResponseGenerator) -> None:
        context = DomainContext(recommendation_count=2)
        first = generator.respond(IntentTag.RECOMMENDATIONS, context)
        second = generator.respond(IntentTag.RECOMMENDATIONS, context)
        assert first == second

    def test_actions_serialize_with_kind(self, generator: ResponseGenerator) -> None:
        payload = generator.respond(IntentTag.RESUME, DomainContext())
        dumped = payload.model_dump(mode="json")
        assert dumped["actions"][0]["command"] == {"kind": "generate_resume"}
