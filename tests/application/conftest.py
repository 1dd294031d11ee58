from __future__ import annotations

import random

import pytest

from internpath_assistant.application.command_executor import CommandExecutor
from internpath_assistant.application.dialogue_session import DialogueSession
from internpath_assistant.domain.models import RecommendationRecord, UserProfile
from internpath_assistant.infra.app_context import InMemoryAppContext, NavigationRecorder


@pytest.fixture()
def catalogue() -> list[RecommendationRecord]:
    return [
        RecommendationRecord(
            title="Frontend Intern",
            company="Tech Corp",
            location="Mumbai",
            skill_match=88,
            explanation="Strong React skills",
        ),
        RecommendationRecord(title="Data Intern", company="Acme", location="Pune", match=72),
    ]


@pytest.fixture()
def app_context(catalogue: list[RecommendationRecord]) -> InMemoryAppContext:
    return InMemoryAppContext(
        profile=UserProfile(name="Asha", skills=["React"], preferred_language="en"),
        catalogue=catalogue,
    )


@pytest.fixture()
def navigator() -> NavigationRecorder:
    return NavigationRecorder()


@pytest.fixture()
def executor(app_context: InMemoryAppContext, navigator: NavigationRecorder) -> CommandExecutor:
    return CommandExecutor(
        navigator=navigator, profiles=app_context, resumes=app_context, modes=app_context
    )


@pytest.fixture()
def session(app_context: InMemoryAppContext, executor: CommandExecutor) -> DialogueSession:
    """Sessão aberta e sem atraso de digitação."""
    chat = DialogueSession(
        profiles=app_context,
        modes=app_context,
        executor=executor,
        delay_range=(0.0, 0.0),
        rng=random.Random(7),
    )
    chat.open()
    return chat
