"""
AI Module

This module provides the AI translation service and related utilities.
"""

from arb_extractor.ai.exceptions import TranslationError
from arb_extractor.ai.service import AIService, validate_ai_config

__all__ = ['TranslationError', 'AIService', 'validate_ai_config']
