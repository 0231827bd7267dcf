"""
Extraction workflow.

One extraction is two separable units of work:
1. extract(): selection -> placeholders -> key -> conflict resolution ->
   single write of the source resource file -> replacement text.
2. finish(): translation into the target languages, then the optional
   post-extraction command.
A failure or cancellation in the second unit never rolls back the first.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from arb_extractor.ai.exceptions import TranslationError
from arb_extractor.ai.service import validate_ai_config
from arb_extractor.config import ExtractorConfig
from arb_extractor.core.arb import ArbFileError, read_or_create_arb_file, write_arb_file
from arb_extractor.core.conflicts import Cancelled, Proceed, ReuseExisting, resolve_conflicts
from arb_extractor.core.keys import generate_suggested_key, validate_key
from arb_extractor.core.placeholders import build_replacement, detect_and_convert_placeholders
from arb_extractor.commands import CommandResult, run_post_extraction_command
from arb_extractor.editing import ensure_import, replace_range, strip_literal_quotes
from arb_extractor.logger import get_logger
from arb_extractor.prompts import Prompter
from arb_extractor.translation.manager import TranslationManager, TranslationResult

logger = get_logger(__name__)

STATUS_EXTRACTED = "extracted"
STATUS_REUSED = "reused"
STATUS_CANCELLED = "cancelled"
STATUS_FAILED = "failed"


class ExtractionInputError(Exception):
    """The selection or the key cannot be used."""
    pass


@dataclass
class Notice:
    """A user-facing message produced by an operation."""
    level: str  # "info", "warning", "error"
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"level": self.level, "message": self.message}


@dataclass
class ExtractionResult:
    status: str
    text: str = ""
    arb_text: str = ""
    original_placeholders: List[str] = field(default_factory=list)
    arb_placeholders: List[str] = field(default_factory=list)
    suggested_key: Optional[str] = None
    key: Optional[str] = None
    replacement: Optional[str] = None
    updated_source: Optional[str] = None
    file_path: Optional[str] = None
    notices: List[Notice] = field(default_factory=list)
    translation: Optional[TranslationResult] = None
    command: Optional[CommandResult] = None

    @property
    def written(self) -> bool:
        """True when the value was added to the source file."""
        return self.status == STATUS_EXTRACTED

    def notify(self, level: str, message: str):
        self.notices.append(Notice(level, message))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "text": self.text,
            "arb_text": self.arb_text,
            "original_placeholders": self.original_placeholders,
            "arb_placeholders": self.arb_placeholders,
            "suggested_key": self.suggested_key,
            "key": self.key,
            "replacement": self.replacement,
            "updated_source": self.updated_source,
            "file_path": self.file_path,
            "notices": [notice.to_dict() for notice in self.notices],
            "translation": self.translation.to_dict() if self.translation else None,
            "command": self.command.to_dict() if self.command else None,
        }


class ExtractionService:
    """Runs extractions against one resolved configuration."""

    def __init__(self, config: ExtractorConfig, prompter: Optional[Prompter] = None, ai_service=None):
        self.config = config
        self.prompter = prompter or Prompter()
        self.ai_service = ai_service

    def extract(
        self,
        selected_text: str,
        source: Optional[str] = None,
        selection: Optional[Tuple[int, int]] = None,
    ) -> ExtractionResult:
        """
        Extract a selected string literal into the source resource file.

        Args:
            selected_text: Raw selection, optionally still quoted
            source: Full text of the Dart file (optional)
            selection: (start, end) offsets of the selection in source

        Returns:
            ExtractionResult; status tells whether a value was written, an
            existing key reused, or the operation cancelled/failed

        Raises:
            ExtractionInputError: If the selection or the key is unusable
            DecisionRequired: If a non-interactive prompter lacks an answer
        """
        text = strip_literal_quotes(selected_text or '')
        if not text:
            raise ExtractionInputError("Please select a string to extract.")

        info = detect_and_convert_placeholders(text)
        result = ExtractionResult(
            status=STATUS_CANCELLED,
            text=text,
            arb_text=info.arb_text,
            original_placeholders=list(info.original_placeholders),
            arb_placeholders=list(info.arb_placeholders),
            suggested_key=generate_suggested_key(info.arb_text),
        )

        key = self.prompter.ask_key(result.suggested_key)
        if key is None:
            result.notify("info", "Extraction cancelled: no key entered.")
            return result
        error = validate_key(key)
        if error:
            raise ExtractionInputError(error)
        key = key.strip()

        file_path = self.config.source_file_path
        result.file_path = str(file_path)

        try:
            document = read_or_create_arb_file(file_path, on_parse_error=self.prompter.confirm_reset)
        except ArbFileError as e:
            logger.error(str(e))
            result.status = STATUS_FAILED
            result.notify("error", str(e))
            return result
        if document is None:
            result.notify("info", f"Extraction cancelled: {file_path.name} is not valid JSON and was left unchanged.")
            return result

        outcome = resolve_conflicts(
            key,
            info.arb_text,
            info.original_placeholders,
            document,
            self.config.prefix,
            self.prompter.resolve_conflict,
        )

        if isinstance(outcome, Cancelled):
            result.key = key
            result.notify("info", "Extraction cancelled.")
            return result

        if isinstance(outcome, ReuseExisting):
            result.status = STATUS_REUSED
            result.key = outcome.key
            result.replacement = outcome.replacement
            result.notify("info", f"Reused existing key \"{outcome.key}\" from {file_path.name}.")
        elif isinstance(outcome, Proceed):
            key_to_use = outcome.key_to_use
            if outcome.renamed_from:
                result.notify("info", f"Using new key: \"{key_to_use}\"")
            document.set_translation(key_to_use, info.arb_text, info.arb_placeholders)
            try:
                write_arb_file(file_path, document)
            except ArbFileError as e:
                logger.error(str(e))
                result.status = STATUS_FAILED
                result.key = key_to_use
                result.notify("error", str(e))
                return result

            logger.info(f"String added to {file_path.name} as \"{key_to_use}\"")
            result.status = STATUS_EXTRACTED
            result.key = key_to_use
            result.replacement = build_replacement(self.config.prefix, key_to_use, info.original_placeholders)
            result.notify("info", f"String added to {file_path.name} as \"{key_to_use}\"")

        if source is not None and selection is not None:
            self._apply_to_source(result, source, selection)

        return result

    def _apply_to_source(self, result: ExtractionResult, source: str, selection: Tuple[int, int]):
        try:
            updated = replace_range(source, selection, result.replacement)
        except ValueError as e:
            result.notify("error", f"Failed to replace text in editor: {e}")
            return
        updated, _ = ensure_import(updated, self.config.import_statement)
        result.updated_source = updated

    def finish(self, result: ExtractionResult, progress_callback=None) -> ExtractionResult:
        """
        Run the translation fan-out and the post-extraction command for a written value.

        Failures are added to result.notices; nothing written earlier is rolled back.
        """
        if not result.written:
            return result

        if self.config.auto_translate:
            self._translate(result, progress_callback)

        if self.config.post_extraction_command:
            command_result = run_post_extraction_command(
                self.config.post_extraction_command, self.config.workspace_root
            )
            result.command = command_result
            if command_result.success:
                result.notify("info", f"Command executed: {command_result.command}")
            else:
                result.notify("error", command_result.error or f"Command \"{command_result.command}\" failed")

        return result

    def _translate(self, result: ExtractionResult, progress_callback=None):
        try:
            validate_ai_config(self.config)
        except TranslationError as e:
            logger.warning(f"Skipping translation of \"{result.key}\": {e}")
            result.notify("warning", f"Auto-translate is enabled but translation is not configured ({e}). Skipping translation.")
            return

        manager = TranslationManager(self.config, ai_service=self.ai_service, prompter=self.prompter)
        translation = manager.translate_key(result.key, result.arb_text, progress_callback=progress_callback)
        result.translation = translation

        if translation.scan_warning:
            result.notify("warning", translation.scan_warning)
        if not translation.outcomes:
            result.notify("info", "No target languages found or added. Skipping translation.")
            return
        for outcome in translation.outcomes:
            if not outcome.success:
                result.notify("error", outcome.error)
        result.notify("info", f"Finished translation attempts for \"{result.key}\".")

    def run(
        self,
        selected_text: str,
        source: Optional[str] = None,
        selection: Optional[Tuple[int, int]] = None,
        progress_callback=None,
    ) -> ExtractionResult:
        """Extract, then translate and run the post-extraction command when a value was written."""
        result = self.extract(selected_text, source=source, selection=selection)
        return self.finish(result, progress_callback=progress_callback)
