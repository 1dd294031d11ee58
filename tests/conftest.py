from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from internpath_assistant.api.app import create_app
from internpath_assistant.config.settings import Settings, get_settings
from internpath_assistant.infra.sms_sender import InMemorySmsSender


@pytest.fixture()
def settings() -> Settings:
    """Configuração de testes: sem atraso de digitação, bypass desligado."""
    return Settings(
        environment="development",
        response_delay_min_seconds=0.0,
        response_delay_max_seconds=0.0,
        verification_debug_bypass_code=None,
    )


@pytest.fixture()
def sms_sender() -> InMemorySmsSender:
    return InMemorySmsSender()


@pytest.fixture()
def client(settings: Settings, sms_sender: InMemorySmsSender):
    get_settings.cache_clear()
    app = create_app(settings, sender=sms_sender)
    with TestClient(app) as test_client:
        yield test_client
