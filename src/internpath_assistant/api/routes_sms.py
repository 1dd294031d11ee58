"""Rotas HTTP do setup guiado de alertas SMS.

Regras de negócio nunca viram erro HTTP: a resposta traz `ok` e o
estado (com `error` preenchido quando a operação foi recusada).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from internpath_assistant.api.dependencies import get_registry
from internpath_assistant.api.registry import AssistantRegistry
from internpath_assistant.api.schemas import (
    CodeRequest,
    PhoneRequest,
    PreferencesRequest,
    SendTestRequest,
    SetupResponse,
    VoiceModeRequest,
)
from internpath_assistant.application.sms_setup import SmsSetupStateMachine

router = APIRouter(prefix="/sms-setup", tags=["sms-setup"])


def _to_response(machine: SmsSetupStateMachine, ok: bool = True) -> SetupResponse:
    return SetupResponse(
        ok=ok,
        state=machine.state.model_copy(deep=True),
        confirmation=machine.confirmation_message(),
    )


@router.get("/{user_id}")
async def get_setup(
    user_id: str,
    registry: AssistantRegistry = Depends(get_registry),
) -> SetupResponse:
    return _to_response(await registry.get_setup(user_id))


@router.post("/{user_id}/phone")
async def submit_phone(
    user_id: str,
    body: PhoneRequest,
    registry: AssistantRegistry = Depends(get_registry),
) -> SetupResponse:
    machine = await registry.get_setup(user_id)
    if machine.is_busy:
        return _to_response(machine, ok=False)
    if body.country_code is not None and not machine.set_country_code(body.country_code):
        return _to_response(machine, ok=False)
    return _to_response(machine, ok=await machine.submit_phone(body.phone_number))


@router.post("/{user_id}/code")
async def submit_code(
    user_id: str,
    body: CodeRequest,
    registry: AssistantRegistry = Depends(get_registry),
) -> SetupResponse:
    machine = await registry.get_setup(user_id)
    return _to_response(machine, ok=machine.submit_code(body.code))


@router.post("/{user_id}/resend")
async def resend_code(
    user_id: str,
    registry: AssistantRegistry = Depends(get_registry),
) -> SetupResponse:
    machine = await registry.get_setup(user_id)
    return _to_response(machine, ok=await machine.resend_code())


@router.post("/{user_id}/back")
async def go_back(
    user_id: str,
    registry: AssistantRegistry = Depends(get_registry),
) -> SetupResponse:
    machine = await registry.get_setup(user_id)
    return _to_response(machine, ok=machine.go_back())


@router.patch("/{user_id}/preferences")
async def update_preferences(
    user_id: str,
    body: PreferencesRequest,
    registry: AssistantRegistry = Depends(get_registry),
) -> SetupResponse:
    machine = await registry.get_setup(user_id)
    fields = body.model_dump(exclude_unset=True, exclude_none=True)
    return _to_response(machine, ok=machine.update_preferences(**fields))


@router.post("/{user_id}/complete")
async def complete_setup(
    user_id: str,
    registry: AssistantRegistry = Depends(get_registry),
) -> SetupResponse:
    machine = await registry.get_setup(user_id)
    return _to_response(machine, ok=await machine.complete_setup())


@router.post("/{user_id}/edit")
async def edit_settings(
    user_id: str,
    registry: AssistantRegistry = Depends(get_registry),
) -> SetupResponse:
    machine = await registry.get_setup(user_id)
    return _to_response(machine, ok=machine.edit_settings())


@router.post("/{user_id}/test")
async def send_test(
    user_id: str,
    body: SendTestRequest | None = None,
    registry: AssistantRegistry = Depends(get_registry),
) -> SetupResponse:
    machine = await registry.get_setup(user_id)
    user_name = body.user_name if body else None
    return _to_response(machine, ok=await machine.send_test(user_name))


@router.put("/{user_id}/voice")
async def set_voice_mode(
    user_id: str,
    body: VoiceModeRequest,
    registry: AssistantRegistry = Depends(get_registry),
) -> SetupResponse:
    """Anúncios falados do setup (código enviado, verificado, ativado)."""
    machine = await registry.get_setup(user_id)
    registry.setup_modes(user_id).set_voice_mode(body.enabled)
    return _to_response(machine)
