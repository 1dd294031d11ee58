"""Rotas HTTP do chat do assistente."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status

from internpath_assistant.api.dependencies import get_registry
from internpath_assistant.api.registry import AssistantRegistry, ChatHandle
from internpath_assistant.api.schemas import (
    ChatSessionResponse,
    CreateChatSessionRequest,
    PostMessageRequest,
)
from internpath_assistant.application.dialogue_session import ActionNotFoundError
from internpath_assistant.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/chat/sessions", tags=["chat"])


def _require_chat(registry: AssistantRegistry, session_id: str) -> ChatHandle:
    handle = registry.get_chat(session_id)
    if handle is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="session_not_found")
    return handle


def _to_response(session_id: str, handle: ChatHandle) -> ChatSessionResponse:
    return ChatSessionResponse(
        session_id=session_id,
        messages=list(handle.session.messages),
        is_typing=handle.session.is_typing,
        voice_mode=handle.context.voice_mode,
        navigation=list(handle.navigator.routes),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_session(
    body: CreateChatSessionRequest | None = None,
    registry: AssistantRegistry = Depends(get_registry),
) -> ChatSessionResponse:
    """Abre uma sessão; o log já contém a mensagem de boas-vindas."""
    body = body or CreateChatSessionRequest()
    session_id, handle = registry.create_chat(
        profile=body.profile,
        recommendations=body.recommendations,
        skill_gaps=body.skill_gaps,
        voice_mode=body.voice_mode,
        offline_mode=body.offline_mode,
    )
    return _to_response(session_id, handle)


@router.get("/{session_id}/messages")
async def list_messages(
    session_id: str,
    registry: AssistantRegistry = Depends(get_registry),
) -> ChatSessionResponse:
    return _to_response(session_id, _require_chat(registry, session_id))


@router.post("/{session_id}/messages")
async def post_message(
    session_id: str,
    body: PostMessageRequest,
    registry: AssistantRegistry = Depends(get_registry),
) -> ChatSessionResponse:
    """Registra a fala do usuário; com `wait` devolve já com a resposta."""
    handle = _require_chat(registry, session_id)
    handle.session.post_user_message(body.text)
    if body.wait:
        await handle.session.wait_idle()
    return _to_response(session_id, handle)


@router.post("/{session_id}/messages/{message_id}/actions/{index}")
async def execute_action(
    session_id: str,
    message_id: int,
    index: int,
    registry: AssistantRegistry = Depends(get_registry),
) -> ChatSessionResponse:
    """Executa uma ação sugerida e aguarda mensagens de retorno."""
    handle = _require_chat(registry, session_id)
    try:
        await handle.session.execute_action(message_id, index)
    except ActionNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="action_not_found"
        ) from e
    await handle.session.wait_idle()
    return _to_response(session_id, handle)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_session(
    session_id: str,
    registry: AssistantRegistry = Depends(get_registry),
) -> Response:
    if not registry.close_chat(session_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="session_not_found")
    logger.info("chat_session_deleted", extra={"session_id": session_id[:8] + "..."})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
