"""Montagem do texto de SMS de recomendações.

Formato:
    saudação
    [linha em branco + aviso de teste]
    linha em branco
    itens (no máximo max_items_per_message, na ordem recebida)
    linha em branco
    rodapé com helpline
"""

from __future__ import annotations

from collections.abc import Sequence

from internpath_assistant.domain.models import PreferenceSet, RecommendationRecord
from internpath_assistant.domain.templates import render_template

DEFAULT_USER_NAME = "Dear User"
DEFAULT_MATCH_SCORE = 85
TEST_DISCLAIMER = "This is a test message."


def match_score(record: RecommendationRecord) -> int:
    """skill_match → match → 85."""
    if record.skill_match is not None:
        return record.skill_match
    if record.match is not None:
        return record.match
    return DEFAULT_MATCH_SCORE


class NotificationContentBuilder:
    """Gera conteúdo SMS a partir de recomendações + preferências."""

    def __init__(
        self,
        helpline: str,
        default_user_name: str = DEFAULT_USER_NAME,
        test_disclaimer: str = TEST_DISCLAIMER,
    ) -> None:
        self._helpline = helpline
        self._default_user_name = default_user_name
        self._test_disclaimer = test_disclaimer

    def build(
        self,
        records: Sequence[RecommendationRecord],
        preferences: PreferenceSet,
        is_test: bool = False,
        user_name: str | None = None,
    ) -> str:
        language = preferences.language
        message = render_template(language, "greeting", name=user_name or self._default_user_name)
        if is_test:
            message += "\n\n" + self._test_disclaimer
        message += "\n\n"

        for index, record in enumerate(records[: preferences.max_items_per_message], start=1):
            line = render_template(
                language,
                "internship",
                index=index,
                title=record.title,
                company=record.company,
                match=match_score(record),
                location=record.location if preferences.include_location else "",
            )
            if preferences.include_stipend and record.stipend:
                line += render_template(language, "stipend", stipend=record.stipend)
            message += line + "\n"

        message += "\n" + render_template(language, "footer", helpline=self._helpline)
        return message

    def confirmation(self, language: str | None) -> str:
        """Texto de confirmação de ativação do serviço."""
        return render_template(language, "confirmation")
