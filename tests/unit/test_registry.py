"""Testes do registro de sessões e setups SMS."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from internpath_assistant.api.registry import AssistantRegistry
from internpath_assistant.application.sms_setup import ANNOUNCE_CODE_SENT, ANNOUNCE_VERIFIED
from internpath_assistant.config.settings import Settings
from internpath_assistant.infra.sms_sender import InMemorySmsSender
from internpath_assistant.infra.speech import create_speech_output


def _slow_redis() -> AsyncMock:
    """Cliente redis cujo GET suspende antes de responder."""

    async def get(key: str) -> None:
        await asyncio.sleep(0.01)
        return None

    redis_client = AsyncMock()
    redis_client.get.side_effect = get
    return redis_client


class TestGetSetup:
    @pytest.mark.asyncio
    async def test_concurrent_first_access_shares_machine(self) -> None:
        settings = Settings(settings_store_backend="redis", redis_url="redis://localhost:6379/0")
        redis_client = _slow_redis()
        registry = AssistantRegistry(settings, InMemorySmsSender(), redis_client=redis_client)

        first, second = await asyncio.gather(
            registry.get_setup("user-1"), registry.get_setup("user-1")
        )

        assert first is second
        assert redis_client.get.await_count == 1
        assert await registry.get_setup("user-1") is first

    @pytest.mark.asyncio
    async def test_forget_setup_rebuilds(self) -> None:
        registry = AssistantRegistry(Settings(), InMemorySmsSender())
        first = await registry.get_setup("user-1")

        registry.forget_setup("user-1")

        assert await registry.get_setup("user-1") is not first


class TestSetupVoiceAnnouncements:
    @pytest.mark.asyncio
    async def test_announcements_follow_user_voice_mode(self) -> None:
        spoken: list[str] = []
        sender = InMemorySmsSender()
        registry = AssistantRegistry(
            Settings(verification_debug_bypass_code=None),
            sender,
            speech_output=create_speech_output(lambda text, tag: spoken.append(text)),
        )
        machine = await registry.get_setup("user-1")

        await machine.submit_phone("9876543210")
        assert spoken == []

        registry.setup_modes("user-1").set_voice_mode(True)
        assert machine.submit_code(sender.last.body.rsplit(" ", 1)[-1]) is True

        assert spoken == [ANNOUNCE_VERIFIED]
        assert ANNOUNCE_CODE_SENT not in spoken

    def test_modes_are_per_user(self) -> None:
        registry = AssistantRegistry(Settings(), InMemorySmsSender())
        registry.setup_modes("user-1").set_voice_mode(True)

        assert registry.setup_modes("user-1").voice_mode is True
        assert registry.setup_modes("user-2").voice_mode is False
