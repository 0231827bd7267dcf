"""
Translation Manager Module

Main TranslationManager class that fans one extracted string out to every
target language:
- Resolve target languages (discovery, then the add-language fallback)
- Translate sequentially, one isolated unit of work per language
- Update each language's resource file
- Report progress per language
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import arb_extractor.language_codes as lc
from arb_extractor.config import ExtractorConfig
from arb_extractor.core.arb import read_or_create_arb_file, write_arb_file
from arb_extractor.core.placeholders import find_arb_placeholders
from arb_extractor.ai.service import AIService
from arb_extractor.logger import get_logger
from arb_extractor.project.scanner import LanguageScanResult, discover_target_languages
from arb_extractor.prompts import Prompter

from arb_extractor.translation.progress import TranslationProgress

logger = get_logger(__name__)

ProgressCallback = Callable[[TranslationProgress], None]


class LanguageSkipped(Exception):
    """The user declined to reset an unparseable target file."""
    pass


@dataclass
class LanguageOutcome:
    """Result of translating the key into one target language."""
    language_code: str
    language_name: str
    file_path: Path
    success: bool
    translated_text: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "language_code": self.language_code,
            "language_name": self.language_name,
            "file_path": str(self.file_path),
            "success": self.success,
            "translated_text": self.translated_text,
            "error": self.error,
        }


@dataclass
class TranslationResult:
    """Result of one translation fan-out."""
    key: str
    outcomes: List[LanguageOutcome] = field(default_factory=list)
    scan_warning: Optional[str] = None

    @property
    def success_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)

    @property
    def failure_count(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.success)

    @property
    def languages(self) -> List[str]:
        return [outcome.language_code for outcome in self.outcomes]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "languages": self.languages,
            "success_count": self.success_count,
            "failure_count": self.failure_count,
            "scan_warning": self.scan_warning,
            "outcomes": [outcome.to_dict() for outcome in self.outcomes],
        }


class TranslationManager:
    """
    Manages the translation of one extracted key into all target languages.

    Languages are processed sequentially. A failure for one language is
    recorded against that language and never stops the others.
    """

    def __init__(
        self,
        config: ExtractorConfig,
        ai_service: Optional[AIService] = None,
        prompter: Optional[Prompter] = None,
    ):
        self.config = config
        self.ai_service = ai_service or AIService(config)
        self.prompter = prompter or Prompter()

    def resolve_target_languages(self) -> LanguageScanResult:
        """Discover target languages, offering to add one when none exist."""
        return discover_target_languages(self.config, self.prompter)

    def translate_key(
        self,
        key: str,
        source_text: str,
        target_languages: Optional[List[str]] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> TranslationResult:
        """
        Translate source_text into every target language and store it under key.

        Args:
            key: Resource key written in the source file
            source_text: Placeholder-normalized source value
            target_languages: Explicit targets; discovered when None
            progress_callback: Optional callback receiving TranslationProgress updates

        Returns:
            TranslationResult with one outcome per target language
        """
        result = TranslationResult(key=key)

        if target_languages is None:
            scan = self.resolve_target_languages()
            target_languages = scan.languages
            result.scan_warning = scan.warning

        if not target_languages:
            logger.info(f"No target languages found or added. Skipping translation of \"{key}\".")
            return result

        placeholders = find_arb_placeholders(source_text)
        total = len(target_languages)
        logger.info(f"Translating \"{key}\" into {total} languages: {target_languages}")

        for lang_code in target_languages:
            lang_name = lc.get_display_name(lang_code)
            self._report(progress_callback, result, key, lang_code, lang_name, total, "translating")

            outcome = self._translate_for_language(key, source_text, placeholders, lang_code, lang_name)
            result.outcomes.append(outcome)

            self._report(
                progress_callback, result, key, lang_code, lang_name, total, "language_done",
                error=outcome.error,
            )

        self._report(progress_callback, result, key, "", "", total, "completed")
        logger.info(
            f"Translation completed for \"{key}\": {result.success_count} succeeded, "
            f"{result.failure_count} failed"
        )
        return result

    def _translate_for_language(
        self,
        key: str,
        source_text: str,
        placeholders: List[str],
        lang_code: str,
        lang_name: str,
    ) -> LanguageOutcome:
        """Read, translate, update and write one target file; never raises."""
        file_path = self.config.file_path_for(lang_code)
        outcome = LanguageOutcome(
            language_code=lang_code,
            language_name=lang_name,
            file_path=file_path,
            success=False,
        )

        try:
            document = read_or_create_arb_file(file_path, on_parse_error=self.prompter.confirm_reset)
            if document is None:
                raise LanguageSkipped(f"{file_path.name} is not valid JSON and was left unchanged")

            sentinel = document.detach_sentinel()

            translation = self.ai_service.translate_text(
                source_text,
                source_language=self.config.source_language,
                target_language=lang_code,
            )
            document.set_translation(key, translation, placeholders)

            document.attach_sentinel(sentinel)
            write_arb_file(file_path, document)

            outcome.success = True
            outcome.translated_text = translation
            logger.info(f"✓ Translated \"{key}\" to {lang_name} ({lang_code}) in {file_path.name}")

        except Exception as e:
            outcome.error = f"Failed translating \"{key}\" to {lang_code}: {e}"
            logger.error(f"✗ {outcome.error}")

        return outcome

    @staticmethod
    def _report(
        progress_callback: Optional[ProgressCallback],
        result: TranslationResult,
        key: str,
        lang_code: str,
        lang_name: str,
        total: int,
        phase: str,
        error: Optional[str] = None,
    ):
        if not progress_callback:
            return
        progress = TranslationProgress(
            key=key,
            current_language=lang_code,
            current_language_name=lang_name,
            total_languages=total,
            completed_languages=len(result.outcomes),
            success_count=result.success_count,
            failure_count=result.failure_count,
            phase=phase,
            error=error,
        )
        try:
            progress_callback(progress)
        except Exception as e:
            # Observer errors do not stop the fan-out
            logger.warning(f"Progress callback failed: {e}")
