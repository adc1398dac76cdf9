"""DPCM endpoint bindings."""

from verify_privacy.integrations.dpcm.dpcmService import (
    APPROVAL_PATH,
    CONSENTS_CONFIG_PATH,
    CONSENTS_PATH,
    PRESENTATION_PATH,
    DPCMService,
    parse_assessment,
    parse_consents,
    parse_presentation,
)

__all__ = [
    "APPROVAL_PATH",
    "CONSENTS_CONFIG_PATH",
    "CONSENTS_PATH",
    "PRESENTATION_PATH",
    "DPCMService",
    "parse_assessment",
    "parse_consents",
    "parse_presentation",
]
