"""Mensagens do log de diálogo e payloads de resposta."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from internpath_assistant.domain.commands import Action
from internpath_assistant.domain.enums import Sender


class CommandExample(BaseModel):
    """Exemplo de comando exibido nas instruções de uso."""

    model_config = ConfigDict(frozen=True)

    icon: str
    label: str
    example: str


class GuidelinesContent(BaseModel):
    """Conteúdo rico de boas-vindas/instruções (renderizado pelo cliente)."""

    model_config = ConfigDict(frozen=True)

    title: str
    intro: str
    how_to_use: tuple[str, ...]
    examples: tuple[CommandExample, ...]
    tips: tuple[str, ...] = ()


class ResponsePayload(BaseModel):
    """Saída do gerador de respostas."""

    model_config = ConfigDict(frozen=True)

    body: str
    content: GuidelinesContent | None = None
    actions: tuple[Action, ...] = ()


class Message(BaseModel):
    """Mensagem imutável do log (append-only)."""

    model_config = ConfigDict(frozen=True)

    id: int
    sender: Sender
    body: str
    content: GuidelinesContent | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))
    actions: tuple[Action, ...] = ()
