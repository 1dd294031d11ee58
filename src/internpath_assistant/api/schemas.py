"""Modelos de request/response da API HTTP."""

from __future__ import annotations

from pydantic import BaseModel, Field

from internpath_assistant.application.sms_setup import SetupState
from internpath_assistant.domain.conversation import Message
from internpath_assistant.domain.enums import Frequency, TimeSlot
from internpath_assistant.domain.models import RecommendationRecord, UserProfile


class CreateChatSessionRequest(BaseModel):
    profile: UserProfile | None = None
    recommendations: list[RecommendationRecord] = Field(default_factory=list)
    skill_gaps: dict[str, list[str]] = Field(default_factory=dict)
    voice_mode: bool = False
    offline_mode: bool = False


class ChatSessionResponse(BaseModel):
    session_id: str
    messages: list[Message]
    is_typing: bool = False
    voice_mode: bool = False
    navigation: list[str] = Field(default_factory=list)


class PostMessageRequest(BaseModel):
    text: str
    wait: bool = True
    """Aguarda a resposta do assistente antes de responder."""


class PhoneRequest(BaseModel):
    phone_number: str
    country_code: str | None = None


class CodeRequest(BaseModel):
    code: str


class PreferencesRequest(BaseModel):
    """Campos enviados são aplicados; ausentes ficam como estão."""

    frequency: Frequency | None = None
    max_items_per_message: int | None = None
    language: str | None = None
    include_location: bool | None = None
    include_stipend: bool | None = None
    time_slot: TimeSlot | None = None


class SendTestRequest(BaseModel):
    user_name: str | None = None


class VoiceModeRequest(BaseModel):
    """Liga/desliga os anúncios falados do setup."""

    enabled: bool


class SetupResponse(BaseModel):
    ok: bool = True
    state: SetupState
    confirmation: str | None = None
