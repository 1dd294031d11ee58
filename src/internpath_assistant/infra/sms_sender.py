"""Envio de SMS: provedor HTTP, implementação em memória e factory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from internpath_assistant.domain.protocols import NotificationSendError, NotificationSender
from internpath_assistant.infra.http import HttpClient, HttpError, create_http_client
from internpath_assistant.observability.logging import get_logger, mask_phone

if TYPE_CHECKING:
    import httpx

    from internpath_assistant.config.settings import Settings

logger: logging.Logger = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class SentSms:
    """Registro de um SMS enviado (InMemorySmsSender)."""

    destination: str
    body: str
    sent_at: datetime


class InMemorySmsSender(NotificationSender):
    """Guarda os envios em memória (dev/testes). Não entrega nada."""

    def __init__(self, fail: bool = False) -> None:
        self.sent: list[SentSms] = []
        self.fail = fail

    async def send(self, destination: str, body: str) -> None:
        if self.fail:
            raise NotificationSendError("In-memory sender configured to fail")
        self.sent.append(SentSms(destination=destination, body=body, sent_at=datetime.now(tz=UTC)))
        logger.info(
            "sms_recorded",
            extra={"destination": mask_phone(destination), "body_length": len(body)},
        )

    @property
    def last(self) -> SentSms | None:
        return self.sent[-1] if self.sent else None


class HttpSmsSender(NotificationSender):
    """Envia via API HTTP do provedor (POST JSON em `/messages`)."""

    def __init__(self, client: HttpClient, base_url: str, sender_id: str) -> None:
        self._client = client
        self._url = base_url.rstrip("/") + "/messages"
        self._sender_id = sender_id

    async def send(self, destination: str, body: str) -> None:
        payload = {"to": destination, "from": self._sender_id, "body": body}
        try:
            await self._client.post(self._url, json=payload)
        except HttpError as e:
            logger.warning(
                "sms_send_failed",
                extra={
                    "destination": mask_phone(destination),
                    "status_code": e.status_code,
                    "is_retryable": e.is_retryable,
                },
            )
            raise NotificationSendError(f"SMS provider error: {e}") from e

        logger.info("sms_sent", extra={"destination": mask_phone(destination)})

    async def close(self) -> None:
        await self._client.close()


def create_notification_sender(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> NotificationSender:
    """Factory do transporte SMS conforme `sms_backend`.

    Raises:
        ValueError: backend desconhecido ou http sem URL base
    """
    backend = settings.sms_backend.lower()

    if backend == "memory":
        return InMemorySmsSender()

    if backend == "http":
        if not settings.sms_api_base_url:
            msg = "SMS_API_BASE_URL required for http backend"
            raise ValueError(msg)
        return HttpSmsSender(
            create_http_client(settings, transport=transport),
            base_url=settings.sms_api_base_url,
            sender_id=settings.sms_sender_id,
        )

    msg = f"Unknown SMS backend: {backend}"
    raise ValueError(msg)
