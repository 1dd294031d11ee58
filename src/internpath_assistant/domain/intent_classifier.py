"""Classificador de intenções por palavras-chave.

Regras avaliadas em ordem fixa de prioridade; a primeira que casa vence.
Casamento por substring, case-insensitive. Sem scoring, sem tokenização.
"""

from __future__ import annotations

from dataclasses import dataclass

from internpath_assistant.domain.enums import IntentTag


@dataclass(frozen=True, slots=True)
class IntentRule:
    """Regra de gatilho.

    - any_of: casa se qualquer frase estiver contida no texto
    - all_of: casa apenas se todas as frases estiverem contidas
    """

    intent: IntentTag
    any_of: tuple[str, ...] = ()
    all_of: tuple[str, ...] = ()

    def matches(self, normalized: str) -> bool:
        if self.all_of and not all(phrase in normalized for phrase in self.all_of):
            return False
        if self.any_of:
            return any(phrase in normalized for phrase in self.any_of)
        return bool(self.all_of)


# Ordem importa: regras anteriores sombreiam as seguintes em vocabulário comum
DEFAULT_RULES: tuple[IntentRule, ...] = (
    IntentRule(IntentTag.PROFILE, any_of=("profile",)),
    IntentRule(IntentTag.RECOMMENDATIONS, any_of=("recommendation", "internship", "match")),
    IntentRule(IntentTag.SKILL_GAP, all_of=("skill", "gap")),
    IntentRule(IntentTag.RESUME, any_of=("resume", "cv")),
    IntentRule(IntentTag.SMS, any_of=("sms", "offline")),
    IntentRule(IntentTag.VOICE, any_of=("voice", "speak")),
    IntentRule(IntentTag.NAVIGATION, any_of=("navigate", "go to", "page")),
    IntentRule(IntentTag.GENERAL_HELP, any_of=("help", "how")),
    IntentRule(IntentTag.APPLICATION, any_of=("apply", "application")),
)


def classify(text: str, rules: tuple[IntentRule, ...] = DEFAULT_RULES) -> IntentTag:
    """Retorna a primeira intenção cujas regras casam, ou UNKNOWN."""
    normalized = (text or "").lower()
    for rule in rules:
        if rule.matches(normalized):
            return rule.intent
    return IntentTag.UNKNOWN
