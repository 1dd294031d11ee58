"""Tabela de transições do setup guiado.

- TRANSITIONS[(current_step, event)] = next_step
- Validação pura: sem side effects
"""

from __future__ import annotations

from internpath_assistant.domain.setup.events import SetupEvent
from internpath_assistant.domain.setup.states import SetupStep

TRANSITIONS: dict[tuple[SetupStep, SetupEvent], SetupStep] = {
    (SetupStep.PHONE_ENTRY, SetupEvent.PHONE_SUBMITTED): SetupStep.VERIFICATION,
    (SetupStep.VERIFICATION, SetupEvent.CODE_RESENT): SetupStep.VERIFICATION,
    (SetupStep.VERIFICATION, SetupEvent.CODE_ACCEPTED): SetupStep.PREFERENCES,
    (SetupStep.VERIFICATION, SetupEvent.BACK): SetupStep.PHONE_ENTRY,
    (SetupStep.PREFERENCES, SetupEvent.SETUP_SAVED): SetupStep.COMPLETE,
    (SetupStep.COMPLETE, SetupEvent.EDIT_REQUESTED): SetupStep.PREFERENCES,
}


def validate_transition(
    current_step: SetupStep, event: SetupEvent
) -> tuple[bool, SetupStep | None, str]:
    """Valida se uma transição é permitida.

    Retorna:
    - (True, next_step, ""): transição válida
    - (False, None, motivo): transição inválida

    Nunca lança exceção; apenas valida.
    """
    next_step = TRANSITIONS.get((current_step, event))
    if next_step is None:
        return False, None, f"No transition from {current_step} on event {event}"
    return True, next_step, ""
