"""Serviço de código de verificação de telefone.

- Gera código numérico (padrão 4 dígitos), guarda apenas em memória
- Entrega via NotificationSender; falha de entrega descarta o código
- Código aceito é consumido (uso único) e expira após TTL
- Código de bypass (debug) aceito quando configurado

O código nunca sai deste serviço nem aparece em logs.
"""

from __future__ import annotations

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from internpath_assistant.domain.protocols import NotificationSender
from internpath_assistant.domain.templates import render_template
from internpath_assistant.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(slots=True)
class _IssuedCode:
    value: str
    issued_at: datetime


class VerificationCodeService:
    """Emite e confere códigos de verificação."""

    def __init__(
        self,
        sender: NotificationSender,
        code_length: int = 4,
        ttl_seconds: int | None = 600,
        bypass_code: str | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._sender = sender
        self._code_length = code_length
        self._ttl = timedelta(seconds=ttl_seconds) if ttl_seconds is not None else None
        self._bypass_code = bypass_code
        self._clock = clock
        self._issued: _IssuedCode | None = None

    @property
    def code_length(self) -> int:
        return self._code_length

    @property
    def has_pending_code(self) -> bool:
        """True se há código emitido e ainda válido."""
        return self._issued is not None and not self._is_expired(self._issued)

    def generate_code(self) -> str:
        """Gera código sem zero à esquerda (ex.: 1000–9999 para 4 dígitos)."""
        low = 10 ** (self._code_length - 1)
        return str(low + secrets.randbelow(9 * low))

    async def issue(self, destination: str, language: str | None = None) -> bool:
        """Emite e entrega um novo código (substitui o anterior).

        Returns:
            True se entregue; False se o envio falhou (código descartado).
        """
        code = self.generate_code()
        self._issued = _IssuedCode(value=code, issued_at=self._clock())
        body = render_template(language, "verification", code=code)

        try:
            await self._sender.send(destination, body)
        except Exception as e:
            self._issued = None
            logger.warning(
                "verification_code_delivery_failed",
                extra={"error_type": type(e).__name__},
            )
            return False

        logger.info("verification_code_issued")
        return True

    def verify(self, submitted: str) -> bool:
        """Confere o código; o código emitido é consumido quando aceito."""
        if self._bypass_code is not None and submitted == self._bypass_code:
            logger.warning("verification_bypass_code_used")
            self._issued = None
            return True

        issued = self._issued
        if issued is None:
            return False
        if self._is_expired(issued):
            self._issued = None
            logger.info("verification_code_expired")
            return False
        if not secrets.compare_digest(issued.value, submitted):
            return False

        self._issued = None
        return True

    def clear(self) -> None:
        self._issued = None

    def _is_expired(self, issued: _IssuedCode) -> bool:
        if self._ttl is None:
            return False
        return self._clock() - issued.issued_at > self._ttl
