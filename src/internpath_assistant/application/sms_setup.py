"""Máquina de estados do setup guiado de alertas SMS.

Fluxo: PHONE_ENTRY → VERIFICATION → PREFERENCES → COMPLETE
(com BACK para a captura de telefone e EDIT_REQUESTED para reeditar).

Contrato:
- Operações retornam bool e nunca lançam por regra de negócio
- Violação de guarda → `error` preenchido, passo inalterado
- Operação no passo errado → False + log `invalid_setup_transition`
- Edição de campo com envio ou gravação em andamento → idem
- Sucesso em transição ou edição de campo limpa `error`
- O código de verificação vive só no VerificationCodeService
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from internpath_assistant.application.notification_builder import NotificationContentBuilder
from internpath_assistant.application.verification import VerificationCodeService
from internpath_assistant.config.settings import SUPPORTED_COUNTRY_CODES
from internpath_assistant.domain.models import (
    PreferenceSet,
    RecommendationRecord,
    StoredSmsSettings,
)
from internpath_assistant.domain.protocols import (
    ModeSettings,
    NotificationSender,
    SettingsRepository,
    SettingsStoreError,
    SpeechOutput,
    speech_language_tag,
)
from internpath_assistant.domain.setup import SetupEvent, SetupStep, validate_transition
from internpath_assistant.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

ERROR_INVALID_PHONE = "Please enter a valid phone number"
ERROR_CODE_DELIVERY = "Failed to send verification code"
ERROR_INVALID_CODE = "Please enter a valid {length}-digit code"
ERROR_WRONG_CODE = "Incorrect verification code"
ERROR_SETUP_FAILED = "Setup failed. Please try again."
ERROR_TEST_FAILED = "Failed to send test SMS"
ERROR_UNSUPPORTED_COUNTRY = "Unsupported country code"
ERROR_INVALID_PREFERENCES = "Invalid preferences"

ANNOUNCE_CODE_SENT = "Verification code sent to your phone"
ANNOUNCE_VERIFIED = "Phone number verified successfully"
ANNOUNCE_ACTIVATED = "SMS service activated successfully"
ANNOUNCE_TEST_SENT = "Test SMS sent successfully"

SAMPLE_RECORD = RecommendationRecord(
    title="Sample Frontend Internship",
    company="Tech Corp",
    location="Mumbai",
    skill_match=85,
)

# fragmento de localização → código de país
_LOCATION_COUNTRY_CODES: tuple[tuple[str, str], ...] = (
    ("india", "+91"),
    ("mumbai", "+91"),
    ("delhi", "+91"),
)

_NON_DIGITS = re.compile(r"\D")


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def digits_only(value: str | None) -> str:
    return _NON_DIGITS.sub("", value or "")


def detect_country_code(location: str | None) -> str | None:
    """Sugere código de país a partir da localização do perfil."""
    normalized = (location or "").lower()
    for fragment, code in _LOCATION_COUNTRY_CODES:
        if fragment in normalized:
            return code
    return None


class SetupState(BaseModel):
    """Estado observável do setup (sem o código transitório)."""

    step: SetupStep = SetupStep.PHONE_ENTRY
    country_code: str = "+91"
    phone_number: str = ""
    submitted_code: str = ""
    verified: bool = False
    preferences: PreferenceSet = Field(default_factory=PreferenceSet)
    error: str | None = None
    test_sent: bool = False
    is_verifying: bool = False
    is_setting_up: bool = False
    setup_date: datetime | None = None

    @property
    def destination(self) -> str:
        return f"{self.country_code}{self.phone_number}"


class SmsSetupStateMachine:
    """Setup guiado: captura, verificação, preferências e conclusão."""

    def __init__(
        self,
        repository: SettingsRepository,
        code_service: VerificationCodeService,
        sender: NotificationSender,
        content_builder: NotificationContentBuilder,
        modes: ModeSettings | None = None,
        speech_output: SpeechOutput | None = None,
        language: str = "en",
        default_country_code: str = "+91",
        min_phone_digits: int = 10,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._repository = repository
        self._codes = code_service
        self._sender = sender
        self._builder = content_builder
        self._modes = modes
        self._speech_output = speech_output
        self._min_phone_digits = min_phone_digits
        self._clock = clock
        self._state = SetupState(
            country_code=default_country_code,
            preferences=PreferenceSet(language=language),
        )

    @property
    def state(self) -> SetupState:
        return self._state

    @property
    def step(self) -> SetupStep:
        return self._state.step

    @property
    def is_busy(self) -> bool:
        """Envio de código ou gravação em andamento: edições ficam bloqueadas."""
        return self._state.is_verifying or self._state.is_setting_up

    # ------------------------------------------------------------------
    # Persistência
    # ------------------------------------------------------------------

    async def load(self) -> bool:
        """Reidrata a partir do repositório.

        COMPLETE se verificado e concluído; PREFERENCES se só verificado;
        senão PHONE_ENTRY com o telefone preenchido.
        """
        try:
            blob = await self._repository.load()
        except SettingsStoreError as e:
            logger.warning("sms_settings_load_failed", extra={"error": str(e)})
            return False
        if not blob:
            return False

        try:
            stored = StoredSmsSettings.model_validate(blob)
        except ValidationError as e:
            logger.warning("sms_settings_invalid", extra={"error_count": e.error_count()})
            return False

        state = self._state
        state.phone_number = digits_only(stored.phone_number)
        state.country_code = stored.country_code or state.country_code
        state.preferences = stored.preferences
        state.verified = stored.verified
        state.setup_date = stored.setup_date
        if stored.verified and stored.setup_complete:
            state.step = SetupStep.COMPLETE
        elif stored.verified:
            state.step = SetupStep.PREFERENCES
        else:
            state.step = SetupStep.PHONE_ENTRY
        state.error = None

        logger.info("sms_settings_loaded", extra={"step": state.step})
        return True

    # ------------------------------------------------------------------
    # PHONE_ENTRY
    # ------------------------------------------------------------------

    def set_phone_number(self, phone: str) -> bool:
        if self._state.step != SetupStep.PHONE_ENTRY or self.is_busy:
            return self._reject("set_phone_number")
        self._state.phone_number = digits_only(phone)
        self._state.error = None
        return True

    def set_country_code(self, country_code: str) -> bool:
        if self._state.step != SetupStep.PHONE_ENTRY or self.is_busy:
            return self._reject("set_country_code")
        if country_code not in SUPPORTED_COUNTRY_CODES:
            self._state.error = ERROR_UNSUPPORTED_COUNTRY
            return False
        self._state.country_code = country_code
        self._state.error = None
        return True

    def suggest_country_code(self, location: str | None) -> str | None:
        """Aplica o código sugerido pela localização (apenas em PHONE_ENTRY)."""
        suggestion = detect_country_code(location)
        if (
            suggestion is not None
            and self._state.step == SetupStep.PHONE_ENTRY
            and not self.is_busy
        ):
            self._state.country_code = suggestion
        return suggestion

    async def submit_phone(self, phone: str | None = None) -> bool:
        """Valida o telefone, emite o código e avança para VERIFICATION."""
        if not self._allowed(SetupEvent.PHONE_SUBMITTED) or self._state.is_verifying:
            return self._reject("submit_phone")
        if phone is not None:
            self._state.phone_number = digits_only(phone)

        if len(self._state.phone_number) < self._min_phone_digits:
            self._state.error = ERROR_INVALID_PHONE
            return False

        if not await self._issue_code():
            return False

        if not self._apply(SetupEvent.PHONE_SUBMITTED):
            return False
        self._announce(ANNOUNCE_CODE_SENT)
        return True

    # ------------------------------------------------------------------
    # VERIFICATION
    # ------------------------------------------------------------------

    async def resend_code(self) -> bool:
        """Reemite o código (o anterior deixa de valer)."""
        if not self._allowed(SetupEvent.CODE_RESENT) or self._state.is_verifying:
            return self._reject("resend_code")
        if not await self._issue_code():
            return False

        self._state.submitted_code = ""
        if not self._apply(SetupEvent.CODE_RESENT):
            return False
        self._announce(ANNOUNCE_CODE_SENT)
        return True

    def submit_code(self, code: str) -> bool:
        """Confere o código; sucesso marca verified e avança para PREFERENCES."""
        if not self._allowed(SetupEvent.CODE_ACCEPTED):
            return self._reject("submit_code")

        code = (code or "").strip()
        self._state.submitted_code = code
        length = self._codes.code_length
        if not (code.isdigit() and len(code) == length):
            self._state.error = ERROR_INVALID_CODE.format(length=length)
            return False

        if not self._codes.verify(code):
            self._state.error = ERROR_WRONG_CODE
            logger.info("verification_code_rejected")
            return False

        self._state.verified = True
        self._state.submitted_code = ""
        if not self._apply(SetupEvent.CODE_ACCEPTED):
            return False
        self._announce(ANNOUNCE_VERIFIED)
        return True

    def go_back(self) -> bool:
        """Volta para a captura de telefone descartando o código pendente."""
        if not self._allowed(SetupEvent.BACK):
            return self._reject("go_back")
        self._codes.clear()
        self._state.submitted_code = ""
        if not self._apply(SetupEvent.BACK):
            return False
        return True

    # ------------------------------------------------------------------
    # PREFERENCES
    # ------------------------------------------------------------------

    def update_preferences(self, **fields: Any) -> bool:
        """Atualiza preferências campo a campo (validação atômica)."""
        if self._state.step != SetupStep.PREFERENCES or self.is_busy:
            return self._reject("update_preferences")

        unknown = set(fields) - set(PreferenceSet.model_fields)
        if unknown:
            self._state.error = f"{ERROR_INVALID_PREFERENCES}: {', '.join(sorted(unknown))}"
            return False

        try:
            updated = PreferenceSet.model_validate(
                {**self._state.preferences.model_dump(), **fields}
            )
        except ValidationError as e:
            fields_in_error = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            self._state.error = f"{ERROR_INVALID_PREFERENCES}: {', '.join(fields_in_error)}"
            return False

        self._state.preferences = updated
        self._state.error = None
        return True

    async def complete_setup(self) -> bool:
        """Persiste as configurações; só conclui após salvar com sucesso."""
        if (
            not self._allowed(SetupEvent.SETUP_SAVED)
            or not self._state.verified
            or self._state.is_setting_up
        ):
            return self._reject("complete_setup")

        setup_date = self._clock()
        stored = StoredSmsSettings(
            phone_number=self._state.phone_number,
            country_code=self._state.country_code,
            preferences=self._state.preferences,
            verified=True,
            setup_complete=True,
            setup_date=setup_date,
        )

        self._state.is_setting_up = True
        self._state.error = None
        try:
            await self._repository.save(stored.model_dump(mode="json"))
        except SettingsStoreError as e:
            logger.warning("sms_settings_save_failed", extra={"error": str(e)})
            self._state.error = ERROR_SETUP_FAILED
            return False
        finally:
            self._state.is_setting_up = False

        self._state.setup_date = setup_date
        if not self._apply(SetupEvent.SETUP_SAVED):
            return False
        self._announce(ANNOUNCE_ACTIVATED)
        return True

    # ------------------------------------------------------------------
    # COMPLETE
    # ------------------------------------------------------------------

    def edit_settings(self) -> bool:
        """Reabre as preferências sem exigir nova verificação."""
        if not self._allowed(SetupEvent.EDIT_REQUESTED):
            return self._reject("edit_settings")
        self._state.test_sent = False
        if not self._apply(SetupEvent.EDIT_REQUESTED):
            return False
        return True

    async def send_test(self, user_name: str | None = None) -> bool:
        """Envia SMS de teste com um registro de exemplo.

        Depois de um envio bem-sucedido, novas chamadas não reenviam até
        `edit_settings()` zerar `test_sent`.
        """
        if self._state.step != SetupStep.COMPLETE:
            return self._reject("send_test")
        if self._state.test_sent:
            return True

        body = self._builder.build(
            [SAMPLE_RECORD], self._state.preferences, is_test=True, user_name=user_name
        )
        try:
            await self._sender.send(self._state.destination, body)
        except Exception as e:
            logger.warning("test_sms_failed", extra={"error_type": type(e).__name__})
            self._state.error = ERROR_TEST_FAILED
            return False

        self._state.test_sent = True
        self._state.error = None
        self._announce(ANNOUNCE_TEST_SENT)
        return True

    def confirmation_message(self) -> str | None:
        """Texto de confirmação (apenas com o serviço ativo)."""
        if self._state.step != SetupStep.COMPLETE:
            return None
        return self._builder.confirmation(self._state.preferences.language)

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------

    async def _issue_code(self) -> bool:
        self._state.is_verifying = True
        self._state.error = None
        try:
            delivered = await self._codes.issue(
                self._state.destination, self._state.preferences.language
            )
        finally:
            self._state.is_verifying = False

        if not delivered:
            self._state.error = ERROR_CODE_DELIVERY
        return delivered

    def _allowed(self, event: SetupEvent) -> bool:
        is_valid, _, _ = validate_transition(self._state.step, event)
        return is_valid

    def _apply(self, event: SetupEvent) -> bool:
        from_step = self._state.step
        is_valid, next_step, reason = validate_transition(from_step, event)
        if not is_valid or next_step is None:
            logger.warning(
                "invalid_setup_transition",
                extra={"from_step": from_step, "event": event, "reason": reason},
            )
            return False
        self._state.step = next_step
        self._state.error = None
        logger.info(
            "setup_transition",
            extra={"from_step": from_step, "event": event, "to_step": next_step},
        )
        return True

    def _reject(self, operation: str) -> bool:
        logger.warning(
            "invalid_setup_transition",
            extra={
                "operation": operation,
                "step": self._state.step,
                "is_verifying": self._state.is_verifying,
                "is_setting_up": self._state.is_setting_up,
            },
        )
        return False

    def _announce(self, text: str) -> None:
        if self._speech_output is None or not self._speech_output.available:
            return
        if self._modes is None or not self._modes.voice_mode:
            return
        try:
            self._speech_output.speak(text, speech_language_tag(self._state.preferences.language))
        except Exception as e:
            logger.warning("speech_output_failed", extra={"error_type": type(e).__name__})
