"""Montagem do DomainContext a partir dos colaboradores."""

from __future__ import annotations

from internpath_assistant.domain.models import DomainContext
from internpath_assistant.domain.protocols import ModeSettings, ProfileProvider


def build_domain_context(profiles: ProfileProvider, modes: ModeSettings) -> DomainContext:
    """Snapshot do turno atual.

    skill_gap_count conta todas as skills ausentes somadas entre recomendações.
    """
    gaps = profiles.skill_gaps or {}
    return DomainContext(
        profile_complete=profiles.profile.is_complete,
        recommendation_count=len(profiles.recommendations),
        skill_gap_count=sum(len(skills) for skills in gaps.values()),
        voice_mode_enabled=modes.voice_mode,
        offline_mode_enabled=modes.offline_mode,
    )
