"""Fábrica da aplicação FastAPI."""

from __future__ import annotations

from typing import Any

import redis.asyncio as redis
from fastapi import APIRouter, Depends, FastAPI

from internpath_assistant.api.dependencies import get_settings
from internpath_assistant.api.registry import AssistantRegistry
from internpath_assistant.api.routes_chat import router as chat_router
from internpath_assistant.api.routes_sms import router as sms_router
from internpath_assistant.config.settings import Settings
from internpath_assistant.config.settings import get_settings as load_settings
from internpath_assistant.domain.protocols import NotificationSender
from internpath_assistant.infra.sms_sender import create_notification_sender
from internpath_assistant.observability.logging import configure_logging, get_logger
from internpath_assistant.observability.middleware import CorrelationIdMiddleware

logger = get_logger(__name__)

health_router = APIRouter()


@health_router.get("/health")
def health(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    """Healthcheck simples."""
    return {"status": "ok", "service": settings.service_name, "version": settings.version}


def _create_redis_client(settings: Settings) -> Any | None:
    """Cliente redis.asyncio quando o backend de configurações é redis."""
    if settings.settings_store_backend.lower() != "redis" or not settings.redis_url:
        return None
    return redis.from_url(settings.redis_url, decode_responses=True)


def create_app(
    settings: Settings | None = None,
    sender: NotificationSender | None = None,
    redis_client: Any | None = None,
) -> FastAPI:
    """Cria a aplicação FastAPI.

    Falha rápido se qualquer validação de configuração falhar.
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level, settings.service_name)

    validation_errors = settings.validate_all()
    if validation_errors:
        error_msg = "; ".join(validation_errors)
        raise ValueError(f"Configuração inválida: {error_msg}")

    app = FastAPI(title=settings.service_name, version=settings.version)
    app.add_middleware(CorrelationIdMiddleware)
    app.include_router(health_router)
    app.include_router(chat_router)
    app.include_router(sms_router)

    app.state.settings = settings
    app.state.notification_sender = sender or create_notification_sender(settings)
    app.state.registry = AssistantRegistry(
        settings,
        sender=app.state.notification_sender,
        redis_client=redis_client or _create_redis_client(settings),
    )

    logger.info(
        "app_created",
        extra={
            "environment": settings.environment,
            "settings_store_backend": settings.settings_store_backend,
            "sms_backend": settings.sms_backend,
        },
    )
    return app
