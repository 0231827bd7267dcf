"""
AI Translation Service Module

This module provides the AI service used for translating extracted strings:
- AIService class for building prompts and cleaning responses
- Configuration validation

For the provider-specific API implementation, see ai/providers.py
"""

from typing import Optional

import httpx

from arb_extractor.config import ExtractorConfig, SUPPORTED_PROVIDERS, get_prompt
from arb_extractor.logger import get_logger
from arb_extractor import language_codes as lc
from arb_extractor.ai.exceptions import (
    TranslationError,
    NOT_CONFIGURED,
    NO_CANDIDATE_FAILURE,
    UNSUPPORTED_PROVIDER,
)

logger = get_logger(__name__)

QUOTE_CHARACTERS = ('"', "'")


def validate_ai_config(config: ExtractorConfig) -> None:
    """
    Validate that AI provider configuration is properly set up.

    Raises:
        TranslationError: If configuration is invalid or missing, with code and details.
    """
    if config.ai_provider not in SUPPORTED_PROVIDERS:
        raise TranslationError(
            f"Unsupported AI provider: {config.ai_provider}",
            code=UNSUPPORTED_PROVIDER,
            details={"provider": config.ai_provider}
        )

    if not config.api_key:
        raise TranslationError(
            f"{config.ai_provider.capitalize()} API key not configured",
            code=NOT_CONFIGURED,
            details={"provider": config.ai_provider, "missing_field": "api_key"}
        )

    if not config.model:
        raise TranslationError(
            f"{config.ai_provider.capitalize()} model not configured",
            code=NOT_CONFIGURED,
            details={"provider": config.ai_provider, "missing_field": "models"}
        )


def clean_translation(text: str) -> str:
    """
    Trim the response and strip one layer of surrounding quotes.

    Examples:
        >>> clean_translation('  "Hola {name}"\\n')
        'Hola {name}'
        >>> clean_translation('"')
        '"'
    """
    cleaned = text.strip()
    if len(cleaned) > 1 and cleaned[0] == cleaned[-1] and cleaned[0] in QUOTE_CHARACTERS:
        cleaned = cleaned[1:-1]
    return cleaned


class AIService:
    """AI service for translation."""

    def __init__(self, config: ExtractorConfig, transport: Optional[httpx.BaseTransport] = None):
        self.config = config
        self.provider = config.ai_provider
        # Injected transport (httpx.MockTransport in tests); None uses the network
        self.transport = transport
        logger.info(f"Initialized AI service with provider: {self.provider}, model: {config.model}")

    def translate_text(self, text: str, source_language: str, target_language: str) -> str:
        """
        Translate one placeholder-normalized string.

        Args:
            text: Source text with '{name}' placeholders
            source_language: Source language code
            target_language: Target language code

        Returns:
            Translated text

        Raises:
            TranslationError: On transport failure, non-success status or an empty result
        """
        logger.debug(f"Translating from {source_language} to {target_language}: {text}")

        prompt = self._build_prompt(text, source_language, target_language)
        logger.debug(f"  Input to AI (prompt):\n{prompt}")

        response_text = self._call_ai_api_text(prompt)
        logger.debug(f"  Output from AI (response):\n{response_text}")

        translation = clean_translation(response_text)
        if not translation:
            raise TranslationError(
                f"Empty translation returned for {target_language}",
                code=NO_CANDIDATE_FAILURE,
            )
        return translation

    def _build_prompt(self, text: str, source_language: str, target_language: str) -> str:
        """Build the single-string translation prompt using the configured template."""
        prompt_template = get_prompt('single_translation_prompt')['prompt']
        return prompt_template.format(
            source_language_name=lc.get_display_name(source_language),
            target_language_name=lc.get_display_name(target_language),
            text=text,
        )

    def _call_ai_api_text(self, prompt: str) -> str:
        """Call the configured provider and return its raw text response."""
        from arb_extractor.ai.providers import call_gemini_api

        if self.provider == 'gemini':
            return call_gemini_api(self, prompt)
        raise TranslationError(f"Unsupported AI provider: {self.provider}", code=UNSUPPORTED_PROVIDER)
