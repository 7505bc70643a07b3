"""
Prompt Module

System prompts used by the language-model collaborator.
"""

from medichat.core.prompts.medical import MEDICAL_SYSTEM_PROMPT, MEDICAL_APOLOGY

__all__ = [
    "MEDICAL_SYSTEM_PROMPT",
    "MEDICAL_APOLOGY",
]
