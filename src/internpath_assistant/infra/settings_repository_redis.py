"""Implementação de SettingsRepository usando Redis (produção)."""

from __future__ import annotations

import json
import logging
from typing import Any

from internpath_assistant.domain.protocols import SettingsRepository, SettingsStoreError
from internpath_assistant.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)


class RedisSettingsRepository(SettingsRepository):
    """Blob JSON por usuário em Redis (cliente `redis.asyncio`)."""

    def __init__(self, redis_client: Any, key: str, ttl_seconds: int | None = None) -> None:
        self._redis = redis_client
        self._key = key
        self._ttl_seconds = ttl_seconds

    @property
    def key(self) -> str:
        return self._key

    async def load(self) -> dict[str, Any] | None:
        try:
            payload = await self._redis.get(self._key)
        except Exception as e:
            logger.error(
                "sms_settings_read_failed",
                extra={"backend": "redis", "error_type": type(e).__name__},
            )
            raise SettingsStoreError(f"Redis load failed: {e}") from e

        if not payload:
            logger.debug("sms_settings_read", extra={"backend": "redis", "found": False})
            return None

        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")

        try:
            blob = json.loads(payload)
        except json.JSONDecodeError as e:
            raise SettingsStoreError("Stored SMS settings are not valid JSON") from e

        logger.debug("sms_settings_read", extra={"backend": "redis", "found": True})
        return blob

    async def save(self, blob: dict[str, Any]) -> None:
        payload = json.dumps(blob)
        try:
            if self._ttl_seconds:
                await self._redis.set(self._key, payload, ex=self._ttl_seconds)
            else:
                await self._redis.set(self._key, payload)
        except Exception as e:
            logger.error(
                "sms_settings_write_failed",
                extra={"backend": "redis", "error_type": type(e).__name__},
            )
            raise SettingsStoreError(f"Redis save failed: {e}") from e

        logger.debug("sms_settings_written", extra={"backend": "redis"})
