"""Configurações da aplicação via variáveis de ambiente.

Todas as configurações são carregadas de env vars (ou arquivo .env em dev).
Nunca hardcode tokens de provedores SMS.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

# Códigos de país aceitos no passo de captura de telefone
SUPPORTED_COUNTRY_CODES: tuple[str, ...] = ("+91", "+1", "+44", "+65")

# Idiomas com templates SMS próprios
SUPPORTED_LANGUAGES: tuple[str, ...] = ("en", "hi", "ta")


class Settings(BaseSettings):
    """Configurações lidas do ambiente."""

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    # Aplicação
    service_name: str = "internpath_assistant"
    version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"

    # Chat: atraso simulado de "digitando" (segundos)
    response_delay_min_seconds: float = 0.5
    response_delay_max_seconds: float = 1.5

    # Verificação de telefone
    min_phone_digits: int = 10
    verification_code_length: int = 4
    verification_code_ttl_seconds: int | None = 600  # None = sem expiração
    verification_debug_bypass_code: str | None = "1234"  # Apenas dev/testes

    # Defaults do setup SMS
    default_country_code: str = "+91"
    default_language: str = "en"
    sms_helpline: str = "+91-80-4567-8900"

    # Persistência das configurações SMS
    settings_store_backend: str = "memory"  # memory | redis
    redis_url: str | None = None
    settings_store_key_prefix: str = "sms_settings"

    # Envio SMS (outbound)
    sms_backend: str = "memory"  # memory | http
    sms_api_base_url: str | None = None
    sms_api_token: str | None = None
    sms_sender_id: str = "INTERN"
    sms_request_timeout_seconds: float = 10.0
    sms_max_retries: int = 2
    sms_retry_backoff_seconds: float = 1.0

    @property
    def response_delay_range(self) -> tuple[float, float]:
        """Intervalo (min, max) do atraso de resposta do chat."""
        return (self.response_delay_min_seconds, self.response_delay_max_seconds)

    @property
    def is_production(self) -> bool:
        """Retorna True se ambiente é produção."""
        return self.environment.lower() in ("production", "prod")

    @property
    def is_staging(self) -> bool:
        """Retorna True se ambiente é staging."""
        return self.environment.lower() in ("staging", "stage")

    @property
    def is_development(self) -> bool:
        """Retorna True se ambiente é desenvolvimento."""
        return self.environment.lower() in ("development", "dev", "local")

    def validate_chat_config(self) -> list[str]:
        """Valida o intervalo de atraso do chat."""
        errors: list[str] = []
        low, high = self.response_delay_range
        if low < 0 or high < 0:
            errors.append("RESPONSE_DELAY_*_SECONDS não pode ser negativo")
        if low > high:
            errors.append("RESPONSE_DELAY_MIN_SECONDS deve ser <= RESPONSE_DELAY_MAX_SECONDS")
        return errors

    def validate_verification_config(self) -> list[str]:
        """Valida regras de verificação de telefone.

        O código de bypass é andaime de debug: proibido em staging/production.
        """
        errors: list[str] = []
        if self.verification_code_length < 1:
            errors.append("VERIFICATION_CODE_LENGTH deve ser >= 1")
        if self.min_phone_digits < 1:
            errors.append("MIN_PHONE_DIGITS deve ser >= 1")
        ttl = self.verification_code_ttl_seconds
        if ttl is not None and ttl <= 0:
            errors.append("VERIFICATION_CODE_TTL_SECONDS deve ser positivo (ou vazio)")

        bypass = self.verification_debug_bypass_code
        if bypass is not None:
            if not (bypass.isdigit() and len(bypass) == self.verification_code_length):
                errors.append(
                    "VERIFICATION_DEBUG_BYPASS_CODE deve ter "
                    f"{self.verification_code_length} dígitos"
                )
            if self.is_staging or self.is_production:
                errors.append(
                    "VERIFICATION_DEBUG_BYPASS_CODE é proibido em staging/production"
                )
        return errors

    def validate_settings_store_config(self) -> list[str]:
        """Valida backend de persistência das configurações SMS."""
        errors: list[str] = []
        backend = self.settings_store_backend.lower()
        valid_backends = {"memory", "redis"}

        if backend not in valid_backends:
            errors.append(
                f"SETTINGS_STORE_BACKEND '{backend}' inválido. Valores válidos: {valid_backends}"
            )

        if backend == "memory" and (self.is_staging or self.is_production):
            errors.append(
                "SETTINGS_STORE_BACKEND=memory é proibido em staging/production. "
                "Configure Redis."
            )

        if backend == "redis" and not self.redis_url:
            errors.append("SETTINGS_STORE_BACKEND=redis requer REDIS_URL configurado")

        return errors

    def validate_sms_config(self) -> list[str]:
        """Valida backend de envio SMS."""
        errors: list[str] = []
        backend = self.sms_backend.lower()

        if backend not in {"memory", "http"}:
            errors.append("SMS_BACKEND inválido: use memory | http")

        if backend == "memory" and (self.is_staging or self.is_production):
            errors.append("SMS_BACKEND=memory é proibido em staging/production")

        if backend == "http":
            if not self.sms_api_base_url:
                errors.append("SMS_BACKEND=http requer SMS_API_BASE_URL configurado")
            if not self.sms_api_token:
                errors.append("SMS_BACKEND=http requer SMS_API_TOKEN configurado")

        if self.sms_max_retries < 0:
            errors.append("SMS_MAX_RETRIES não pode ser negativo")

        if self.default_country_code not in SUPPORTED_COUNTRY_CODES:
            errors.append(
                f"DEFAULT_COUNTRY_CODE inválido. Valores válidos: {SUPPORTED_COUNTRY_CODES}"
            )
        if self.default_language not in SUPPORTED_LANGUAGES:
            errors.append(f"DEFAULT_LANGUAGE inválido. Valores válidos: {SUPPORTED_LANGUAGES}")

        return errors

    def validate_all(self) -> list[str]:
        """Agrega todas as validações (vazia = OK)."""
        errors: list[str] = []
        errors.extend(self.validate_chat_config())
        errors.extend(self.validate_verification_config())
        errors.extend(self.validate_settings_store_config())
        errors.extend(self.validate_sms_config())
        return errors


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retorna uma instância cacheada de Settings.

    A cache garante que mesmo múltiplas injeções não criam novos objetos.
    """
    return Settings()
