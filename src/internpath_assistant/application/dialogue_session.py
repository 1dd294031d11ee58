"""Sessão de diálogo: log append-only + resposta com atraso simulado.

Responsabilidades:
- Registrar mensagens do usuário e do sistema (ids monotônicos)
- Classificar → gerar resposta → agendar com indicador "digitando"
- Uma resposta em voo por vez; as demais esperam em fila FIFO
- close() cancela a resposta em voo e descarta a fila (guarda de época)
- Falar respostas quando o modo voz está ligado

Modelo de concorrência: asyncio single-thread, sem locks. O worker de
respostas é o único ponto de suspensão.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import random
from collections import deque
from collections.abc import Callable

from internpath_assistant.application.command_executor import CommandExecutor
from internpath_assistant.application.context import build_domain_context
from internpath_assistant.application.response_generator import (
    ResponseGenerator,
    guidelines_payload,
)
from internpath_assistant.domain.conversation import Message, ResponsePayload
from internpath_assistant.domain.enums import IntentTag, Sender
from internpath_assistant.domain.intent_classifier import classify
from internpath_assistant.domain.protocols import (
    ModeSettings,
    ProfileProvider,
    SpeechInput,
    SpeechOutput,
    speech_language_tag,
)
from internpath_assistant.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

DEFAULT_DELAY_RANGE: tuple[float, float] = (0.5, 1.5)


class ActionNotFoundError(LookupError):
    """Mensagem ou índice de ação inexistente no log."""


class DialogueSession:
    """Sessão de chat de um usuário."""

    def __init__(
        self,
        profiles: ProfileProvider,
        modes: ModeSettings,
        executor: CommandExecutor,
        generator: ResponseGenerator | None = None,
        speech_output: SpeechOutput | None = None,
        speech_input: SpeechInput | None = None,
        delay_range: tuple[float, float] = DEFAULT_DELAY_RANGE,
        rng: random.Random | None = None,
        classifier: Callable[[str], IntentTag] = classify,
    ) -> None:
        low, high = delay_range
        if low < 0 or high < low:
            raise ValueError(f"delay_range inválido: {delay_range}")

        self._profiles = profiles
        self._modes = modes
        self._executor = executor
        self._generator = generator or ResponseGenerator()
        self._speech_output = speech_output
        self._speech_input = speech_input
        self._delay_range = delay_range
        self._rng = rng or random.Random()
        self._classify = classifier

        self._messages: list[Message] = []
        self._ids = itertools.count(1)
        self._pending: deque[ResponsePayload] = deque()
        self._worker: asyncio.Task[None] | None = None
        self._epoch = 0
        self._open = False
        self._typing = False
        self._listening = False

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def is_typing(self) -> bool:
        return self._typing

    @property
    def is_listening(self) -> bool:
        return self._listening

    @property
    def pending_replies(self) -> int:
        """Respostas agendadas ainda não anexadas (inclui a em voo)."""
        return len(self._pending) + (1 if self._typing else 0)

    def open(self) -> None:
        """Abre a sessão; log vazio recebe a mensagem de boas-vindas na hora."""
        self._open = True
        if not self._messages:
            self._append(Sender.SYSTEM, guidelines_payload())
        logger.info("dialogue_session_opened", extra={"messages_count": len(self._messages)})

    def close(self) -> None:
        """Fecha a sessão: cancela resposta em voo e descarta a fila."""
        self._open = False
        self._epoch += 1
        dropped = len(self._pending)
        self._pending.clear()
        if self._worker is not None and not self._worker.done():
            self._worker.cancel()
        self._worker = None
        self._typing = False
        logger.info("dialogue_session_closed", extra={"dropped_replies": dropped})

    def post_user_message(self, text: str) -> Message | None:
        """Registra a fala do usuário e agenda a resposta.

        Requer event loop em execução (a resposta é agendada como task).
        Texto vazio (após trim) é ignorado e retorna None.
        """
        cleaned = (text or "").strip()
        if not cleaned:
            return None
        if not self._open:
            logger.warning("dialogue_session_not_open")
            return None

        message = self._append(Sender.USER, ResponsePayload(body=cleaned))
        intent = self._classify(cleaned)
        context = build_domain_context(self._profiles, self._modes)
        logger.info("intent_classified", extra={"intent": intent.value})
        self.post_system_message(self._generator.respond(intent, context, cleaned))
        return message

    def post_system_message(self, payload: ResponsePayload) -> None:
        """Agenda uma mensagem do sistema atrás das já pendentes."""
        if not self._open:
            return
        self._pending.append(payload)
        if self._worker is None or self._worker.done():
            self._worker = asyncio.get_running_loop().create_task(self._drain(self._epoch))

    async def wait_idle(self) -> None:
        """Aguarda até não haver respostas pendentes."""
        while self._worker is not None and not self._worker.done():
            await asyncio.wait({self._worker})

    async def execute_action(self, message_id: int, index: int) -> None:
        """Executa a ação `index` da mensagem `message_id`."""
        message = next((m for m in self._messages if m.id == message_id), None)
        if message is None or not 0 <= index < len(message.actions):
            raise ActionNotFoundError(f"Ação {index} não encontrada na mensagem {message_id}")
        await self._executor.execute(message.actions[index].command, self)

    async def capture_voice_input(self) -> str | None:
        """Captura uma elocução; None se a fala não está disponível ou falha."""
        if self._speech_input is None or not self._speech_input.available:
            return None

        self._listening = True
        try:
            transcript = await self._speech_input.listen(self._language_tag())
        except Exception as e:
            logger.warning("speech_input_failed", extra={"error_type": type(e).__name__})
            return None
        finally:
            self._listening = False

        return transcript.strip() or None

    async def _drain(self, epoch: int) -> None:
        try:
            while self._pending and epoch == self._epoch:
                payload = self._pending.popleft()
                self._typing = True
                await asyncio.sleep(self._rng.uniform(*self._delay_range))
                if epoch != self._epoch or not self._open:
                    return
                message = self._append(Sender.SYSTEM, payload)
                self._typing = False
                self._speak(message.body)
        finally:
            if epoch == self._epoch:
                self._typing = False

    def _append(self, sender: Sender, payload: ResponsePayload) -> Message:
        message = Message(
            id=next(self._ids),
            sender=sender,
            body=payload.body,
            content=payload.content,
            actions=payload.actions,
        )
        self._messages.append(message)
        return message

    def _speak(self, text: str) -> None:
        if self._speech_output is None or not self._speech_output.available:
            return
        if not self._modes.voice_mode:
            return
        try:
            self._speech_output.speak(text, self._language_tag())
        except Exception as e:
            logger.warning("speech_output_failed", extra={"error_type": type(e).__name__})

    def _language_tag(self) -> str:
        return speech_language_tag(self._profiles.profile.preferred_language)
