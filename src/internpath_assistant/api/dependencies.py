"""Dependências injetadas nas rotas."""

from __future__ import annotations

from fastapi import Request

from internpath_assistant.api.registry import AssistantRegistry
from internpath_assistant.config.settings import Settings


def get_settings(request: Request) -> Settings:
    """Retorna settings da aplicação."""

    return request.app.state.settings


def get_registry(request: Request) -> AssistantRegistry:
    """Retorna o registro de sessões de chat e setups SMS."""

    return request.app.state.registry
