"""Testes das validações de Settings."""

from __future__ import annotations

import pytest

from internpath_assistant.config.settings import Settings, get_settings


class TestSettingsDefaults:
    def test_defaults_are_valid_in_development(self) -> None:
        settings = Settings(environment="development")
        assert settings.validate_all() == []
        assert settings.is_development is True

    def test_response_delay_range(self) -> None:
        settings = Settings(response_delay_min_seconds=0.2, response_delay_max_seconds=0.4)
        assert settings.response_delay_range == (0.2, 0.4)

    def test_get_settings_is_cached(self, monkeypatch: pytest.MonkeyPatch) -> None:
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()

    def test_env_vars_are_read(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SMS_HELPLINE", "+1-555-0100")
        assert Settings().sms_helpline == "+1-555-0100"


class TestChatConfig:
    def test_min_greater_than_max(self) -> None:
        settings = Settings(response_delay_min_seconds=2, response_delay_max_seconds=1)
        assert settings.validate_chat_config()

    def test_zero_delay_is_valid(self) -> None:
        settings = Settings(response_delay_min_seconds=0, response_delay_max_seconds=0)
        assert settings.validate_chat_config() == []


class TestVerificationConfig:
    def test_bypass_forbidden_in_production(self) -> None:
        settings = Settings(environment="production", verification_debug_bypass_code="1234")
        errors = settings.validate_verification_config()
        assert any("proibido" in e for e in errors)

    def test_bypass_forbidden_in_staging(self) -> None:
        settings = Settings(environment="staging", verification_debug_bypass_code="1234")
        assert settings.validate_verification_config()

    def test_no_bypass_in_production_is_valid(self) -> None:
        settings = Settings(environment="production", verification_debug_bypass_code=None)
        assert settings.validate_verification_config() == []

    def test_bypass_must_match_code_length(self) -> None:
        settings = Settings(verification_debug_bypass_code="12")
        assert settings.validate_verification_config()

    def test_non_positive_ttl(self) -> None:
        settings = Settings(verification_code_ttl_seconds=0)
        assert settings.validate_verification_config()


class TestBackendsConfig:
    def test_memory_store_forbidden_in_production(self) -> None:
        settings = Settings(environment="production", settings_store_backend="memory")
        assert settings.validate_settings_store_config()

    def test_redis_requires_url(self) -> None:
        settings = Settings(settings_store_backend="redis", redis_url=None)
        errors = settings.validate_settings_store_config()
        assert any("REDIS_URL" in e for e in errors)

    def test_unknown_store_backend(self) -> None:
        assert Settings(settings_store_backend="sqlite").validate_settings_store_config()

    def test_http_sms_requires_url_and_token(self) -> None:
        errors = Settings(sms_backend="http").validate_sms_config()
        assert any("SMS_API_BASE_URL" in e for e in errors)
        assert any("SMS_API_TOKEN" in e for e in errors)

    def test_http_sms_valid(self) -> None:
        settings = Settings(
            sms_backend="http",
            sms_api_base_url="https://sms.example.test",
            sms_api_token="secret",
        )
        assert settings.validate_sms_config() == []

    def test_unsupported_default_country(self) -> None:
        assert Settings(default_country_code="+55").validate_sms_config()

    def test_production_fully_configured(self) -> None:
        settings = Settings(
            environment="production",
            verification_debug_bypass_code=None,
            settings_store_backend="redis",
            redis_url="redis://localhost:6379/0",
            sms_backend="http",
            sms_api_base_url="https://sms.example.test",
            sms_api_token="secret",
        )
        assert settings.validate_all() == []
