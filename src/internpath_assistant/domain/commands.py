"""Comandos tipados das ações sugeridas.

Cada ação carrega um comando serializável (união discriminada por `kind`)
em vez de uma closure sobre estado de UI. O CommandExecutor interpreta.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from internpath_assistant.domain.enums import HelpTopic, IntentTag


class _Command(BaseModel):
    model_config = ConfigDict(frozen=True)


class NavigateCommand(_Command):
    """Navega para uma rota da aplicação."""

    kind: Literal["navigate"] = "navigate"
    route: str


class ToggleVoiceCommand(_Command):
    """Liga/desliga o modo voz."""

    kind: Literal["toggle_voice"] = "toggle_voice"
    enabled: bool


class InvokeIntentCommand(_Command):
    """Reexecuta o handler de outra intenção."""

    kind: Literal["invoke_intent"] = "invoke_intent"
    intent: IntentTag


class GenerateRecommendationsCommand(_Command):
    """Gera recomendações e depois navega (opcional)."""

    kind: Literal["generate_recommendations"] = "generate_recommendations"
    then_navigate: str | None = "/recommendations"


class GenerateResumeCommand(_Command):
    kind: Literal["generate_resume"] = "generate_resume"


class ShowCoursesCommand(_Command):
    kind: Literal["show_courses"] = "show_courses"


class ExplainMatchesCommand(_Command):
    kind: Literal["explain_matches"] = "explain_matches"


class ShowTopicCommand(_Command):
    """Exibe um texto de dicas estático."""

    kind: Literal["show_topic"] = "show_topic"
    topic: HelpTopic


class OpenSmsSetupCommand(_Command):
    kind: Literal["open_sms_setup"] = "open_sms_setup"


Command = Annotated[
    NavigateCommand
    | ToggleVoiceCommand
    | InvokeIntentCommand
    | GenerateRecommendationsCommand
    | GenerateResumeCommand
    | ShowCoursesCommand
    | ExplainMatchesCommand
    | ShowTopicCommand
    | OpenSmsSetupCommand,
    Field(discriminator="kind"),
]


class Action(BaseModel):
    """Ação sugerida: rótulo + comando adiado."""

    model_config = ConfigDict(frozen=True)

    label: str
    command: Command
