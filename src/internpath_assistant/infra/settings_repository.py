"""Persistência das configurações SMS: implementação em memória + factory."""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any

from internpath_assistant.domain.protocols import SettingsRepository
from internpath_assistant.infra.settings_repository_redis import RedisSettingsRepository
from internpath_assistant.observability.logging import get_logger

if TYPE_CHECKING:
    from internpath_assistant.config.settings import Settings

logger: logging.Logger = get_logger(__name__)


class InMemorySettingsRepository(SettingsRepository):
    """Armazenamento em memória (não usar em produção).

    Vários repositórios podem compartilhar o mesmo `storage`, um por chave.
    """

    def __init__(self, key: str, storage: dict[str, dict[str, Any]] | None = None) -> None:
        self._key = key
        self._storage = storage if storage is not None else {}

    @property
    def key(self) -> str:
        return self._key

    async def load(self) -> dict[str, Any] | None:
        blob = self._storage.get(self._key)
        logger.debug("sms_settings_read", extra={"backend": "memory", "found": blob is not None})
        return copy.deepcopy(blob) if blob is not None else None

    async def save(self, blob: dict[str, Any]) -> None:
        self._storage[self._key] = copy.deepcopy(blob)
        logger.debug("sms_settings_written", extra={"backend": "memory"})


def settings_key(prefix: str, user_id: str) -> str:
    return f"{prefix}:{user_id}"


def create_settings_repository(
    settings: Settings,
    user_id: str,
    redis_client: Any | None = None,
    storage: dict[str, dict[str, Any]] | None = None,
) -> SettingsRepository:
    """Factory do repositório de configurações de um usuário.

    Args:
        settings: configurações (backend e prefixo de chave)
        user_id: dono das configurações
        redis_client: cliente redis.asyncio (obrigatório se backend=redis)
        storage: dicionário compartilhado (backend=memory)

    Raises:
        ValueError: backend desconhecido ou redis sem cliente
    """
    backend = settings.settings_store_backend.lower()
    key = settings_key(settings.settings_store_key_prefix, user_id)

    if backend == "redis":
        if redis_client is None:
            msg = "redis_client required for redis backend"
            raise ValueError(msg)
        return RedisSettingsRepository(redis_client, key)

    if backend == "memory":
        return InMemorySettingsRepository(key, storage)

    msg = f"Unknown settings store backend: {backend}"
    raise ValueError(msg)
