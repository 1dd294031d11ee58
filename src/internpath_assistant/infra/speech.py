"""Capacidade de fala: implementações disponível (callback) e indisponível.

O motor real (navegador, serviço de TTS/STT) é externo; aqui só há o
adaptador que recebe a função de fala/escuta na construção.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from internpath_assistant.domain.protocols import SpeechInput, SpeechOutput
from internpath_assistant.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)


class UnavailableSpeechOutput(SpeechOutput):
    """Sem síntese de fala: chamadas são ignoradas."""

    available = False

    def speak(self, text: str, language_tag: str) -> None:
        logger.debug("speech_output_unavailable")


class CallbackSpeechOutput(SpeechOutput):
    """Delega a fala para um callable `(texto, tag_de_idioma)`."""

    def __init__(self, speak_fn: Callable[[str, str], None]) -> None:
        self._speak_fn = speak_fn

    def speak(self, text: str, language_tag: str) -> None:
        self._speak_fn(text, language_tag)
        logger.debug("speech_output_spoken", extra={"language_tag": language_tag})


class UnavailableSpeechInput(SpeechInput):
    """Sem reconhecimento de fala."""

    available = False

    async def listen(self, language_tag: str) -> str:
        return ""


class CallbackSpeechInput(SpeechInput):
    """Delega a escuta para uma coroutine `(tag_de_idioma) -> transcrição`."""

    def __init__(self, listen_fn: Callable[[str], Awaitable[str]]) -> None:
        self._listen_fn = listen_fn

    async def listen(self, language_tag: str) -> str:
        transcript = await self._listen_fn(language_tag)
        logger.debug("speech_input_captured", extra={"language_tag": language_tag})
        return transcript


def create_speech_output(speak_fn: Callable[[str, str], None] | None = None) -> SpeechOutput:
    """Escolhe a implementação conforme a capacidade existir."""
    if speak_fn is None:
        return UnavailableSpeechOutput()
    return CallbackSpeechOutput(speak_fn)


def create_speech_input(
    listen_fn: Callable[[str], Awaitable[str]] | None = None,
) -> SpeechInput:
    """Escolhe a implementação conforme a capacidade existir."""
    if listen_fn is None:
        return UnavailableSpeechInput()
    return CallbackSpeechInput(listen_fn)
