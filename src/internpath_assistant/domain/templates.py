"""Motor de templates SMS multi-idioma (substituição simples de placeholders).

Idioma sem template, ou template ausente num idioma, cai silenciosamente
no idioma padrão. Nome de template inexistente é erro de programação.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

DEFAULT_LANGUAGE = "en"

SMS_TEMPLATES: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "en": {
        "greeting": "Hi {name}! Here are your top internship matches from InternPath:",
        "internship": "{index}. {title} at {company} ({match}% match) - {location}",
        "stipend": " | Stipend: {stipend}",
        "footer": "Apply online at internpath.com or call {helpline}",
        "confirmation": (
            "SMS alerts activated! You'll receive internship matches even when offline."
        ),
        "verification": "Your InternPath verification code is {code}",
    },
    "hi": {
        "greeting": "नमस्ते {name}! InternPath से आपके टॉप इंटर्नशिप मैच:",
        "internship": "{index}. {title} - {company} ({match}% मैच) - {location}",
        "stipend": " | स्टाइपेंड: {stipend}",
        "footer": "ऑनलाइन अप्लाई करें internpath.com या कॉल करें {helpline}",
        "confirmation": "SMS अलर्ट एक्टिवेट! ऑफलाइन होने पर भी आपको इंटर्नशिप मैच मिलेंगे।",
    },
    "ta": {
        "greeting": "வணக்கம் {name}! InternPath-ல் இருந்து உங்களின் சிறந்த internship matches:",
        "internship": "{index}. {title} - {company} ({match}% match) - {location}",
        "footer": "internpath.com-ல் apply செய்யுங்கள் அல்லது {helpline}-க்கு அழைக்கவும்",
        "confirmation": (
            "SMS alerts செயல்படுத்தப்பட்டது! Offline-ல் இருந்தாலும் matches கிடைக்கும்."
        ),
    },
})


class TemplateNotFoundError(KeyError):
    """Template inexistente inclusive no idioma padrão."""


def supported_languages() -> tuple[str, ...]:
    """Idiomas com conjunto próprio de templates."""
    return tuple(SMS_TEMPLATES)


def get_template(language: str | None, name: str) -> str:
    """Busca template com fallback para o idioma padrão."""
    templates = SMS_TEMPLATES.get(language or DEFAULT_LANGUAGE, SMS_TEMPLATES[DEFAULT_LANGUAGE])
    template = templates.get(name)
    if template is None:
        template = SMS_TEMPLATES[DEFAULT_LANGUAGE].get(name)
    if template is None:
        raise TemplateNotFoundError(f"Template não encontrado: {name}")
    return template


def render_template(language: str | None, name: str, /, **values: object) -> str:
    """Substitui `{chave}` por cada valor fornecido.

    Placeholders sem valor permanecem no texto; None vira string vazia.
    """
    text = get_template(language, name)
    for key, value in values.items():
        text = text.replace("{" + key + "}", "" if value is None else str(value))
    return text
