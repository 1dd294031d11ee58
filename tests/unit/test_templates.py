"""Testes do motor de templates SMS."""

from __future__ import annotations

import pytest

from internpath_assistant.domain.templates import (
    SMS_TEMPLATES,
    TemplateNotFoundError,
    get_template,
    render_template,
    supported_languages,
)


class TestGetTemplate:
    """Busca com fallback para inglês."""

    def test_supported_languages(self) -> None:
        assert supported_languages() == ("en", "hi", "ta")

    def test_language_specific_template(self) -> None:
        assert get_template("hi", "greeting") == SMS_TEMPLATES["hi"]["greeting"]

    def test_unknown_language_falls_back_to_english(self) -> None:
        assert get_template("fr", "greeting") == SMS_TEMPLATES["en"]["greeting"]

    def test_none_language_falls_back_to_english(self) -> None:
        assert get_template(None, "footer") == SMS_TEMPLATES["en"]["footer"]

    def test_missing_key_falls_back_to_english(self) -> None:
        """Tamil não tem template de stipend nem de verificação."""
        assert get_template("ta", "stipend") == SMS_TEMPLATES["en"]["stipend"]
        assert get_template("ta", "verification") == SMS_TEMPLATES["en"]["verification"]

    def test_unknown_template_raises(self) -> None:
        with pytest.raises(TemplateNotFoundError):
            get_template("en", "does_not_exist")


class TestRenderTemplate:
    """Substituição de placeholders."""

    def test_greeting_english(self) -> None:
        text = render_template("en", "greeting", name="Asha")
        assert text == "Hi Asha! Here are your top internship matches from InternPath:"

    def test_internship_line(self) -> None:
        text = render_template(
            "en",
            "internship",
            index=1,
            title="Data Intern",
            company="Acme",
            match=90,
            location="Pune",
        )
        assert text == "1. Data Intern at Acme (90% match) - Pune"

    def test_none_value_becomes_empty(self) -> None:
        text = render_template("en", "internship", location=None)
        assert text.endswith(" - ")

    def test_missing_values_keep_placeholders(self) -> None:
        assert "{name}" in render_template("en", "greeting")

    def test_footer_helpline(self) -> None:
        text = render_template("hi", "footer", helpline="+91-80-4567-8900")
        assert "+91-80-4567-8900" in text
        assert "{helpline}" not in text

    def test_verification_code(self) -> None:
        assert render_template("en", "verification", code="4321").endswith("4321")
