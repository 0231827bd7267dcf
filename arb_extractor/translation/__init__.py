"""
Translation module - translation fan-out to target languages

This module provides:
- TranslationManager: per-language translation coordinator
- TranslationProgress: Progress tracking dataclass
- Result records for each target language
"""

from arb_extractor.translation.progress import TranslationProgress
from arb_extractor.translation.manager import (
    TranslationManager,
    TranslationResult,
    LanguageOutcome,
)
