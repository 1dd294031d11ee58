"""Setup guiado: passos, eventos e transições.

Exporta:
- SetupStep: 4 passos canônicos
- SetupEvent: 6 eventos
- validate_transition: validador puro
"""

from internpath_assistant.domain.setup.events import SetupEvent
from internpath_assistant.domain.setup.states import VERIFIED_STEPS, SetupStep
from internpath_assistant.domain.setup.transitions import TRANSITIONS, validate_transition

__all__ = [
    "SetupStep",
    "SetupEvent",
    "TRANSITIONS",
    "VERIFIED_STEPS",
    "validate_transition",
]
