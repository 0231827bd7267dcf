"""
Target language discovery for a resource folder.

This module provides utilities to:
- Scan a folder for resource files and infer their language codes
- Offer to add a first target language when none exist
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import arb_extractor.language_codes as lc
from arb_extractor.config import ExtractorConfig
from arb_extractor.logger import get_logger

logger = get_logger(__name__)


@dataclass
class LanguageScanResult:
    """Result of scanning a resource folder for target languages."""
    folder: Path
    languages: List[str] = field(default_factory=list)  # insertion ordered, unique
    warning: Optional[str] = None
    created_language: Optional[str] = None


def find_target_languages(
    folder: Path,
    file_name_pattern: str,
    source_language: str,
) -> LanguageScanResult:
    """
    Scan a folder and detect the target languages of its resource files.

    The configured pattern is tried first for every file; the generic
    '<name>_<code>.<ext>' fallback is used only when it does not match. The
    source language file and any file resolving to the source language are
    excluded. A missing folder yields no languages; an unreadable folder
    yields no languages and a warning.

    Args:
        folder: Resource folder
        file_name_pattern: Pattern with '{lang}' (e.g. 'intl_{lang}.arb')
        source_language: Source language code

    Returns:
        LanguageScanResult with the codes in filename order
    """
    folder = Path(folder)
    result = LanguageScanResult(folder=folder)
    logger.debug(f"Scanning resource folder: {folder}")

    if not folder.exists():
        logger.info(f"Resource folder not found: {folder}. It might be created later.")
        return result

    try:
        file_names = sorted(entry.name for entry in folder.iterdir() if entry.is_file())
    except OSError as e:
        result.warning = f"Failed to read resource folder {folder} to detect languages: {e}"
        logger.warning(result.warning)
        return result

    extension = lc.get_file_extension(file_name_pattern)
    source_file_name = lc.get_language_file_name(file_name_pattern, source_language)
    specific_regex = lc.build_file_name_regex(file_name_pattern)
    generic_regex = lc.build_generic_regex(extension)

    for file_name in file_names:
        if not file_name.endswith(extension) or file_name == source_file_name:
            continue

        language_code = lc.extract_language_from_filename(
            file_name,
            file_name_pattern,
            specific_regex=specific_regex,
            generic_regex=generic_regex,
        )
        if not language_code:
            logger.debug(f"Skipping file (no language code recognised): {file_name}")
            continue
        if language_code == source_language:
            continue
        if language_code not in result.languages:
            result.languages.append(language_code)

    logger.info(f"Detected {len(result.languages)} target languages in {folder}: {result.languages}")
    return result


def create_language_file(config: ExtractorConfig, language_code: str) -> Path:
    """
    Create an empty resource file for a language (and its folder) if absent.

    Raises:
        OSError: If the folder or file cannot be created
    """
    config.arb_folder.mkdir(parents=True, exist_ok=True)
    file_path = config.file_path_for(language_code)
    if not file_path.exists():
        file_path.write_text('{}', encoding='utf-8')
        logger.info(f"Created new resource file for language {language_code}: {file_path}")
    else:
        logger.info(f"Resource file for {language_code} already exists: {file_path}")
    return file_path


def validate_new_language(code: Optional[str], source_language: str) -> Optional[str]:
    """Return an error message for an unusable new target language, or None."""
    if code is None or not code.strip():
        return "Language code cannot be empty"
    if code.strip() == source_language:
        return "Target language cannot be the same as the source language."
    return None


def discover_target_languages(config: ExtractorConfig, prompter) -> LanguageScanResult:
    """
    Find target languages, offering to add one when the folder has none.

    Args:
        config: Resolved extractor configuration
        prompter: Decision strategy; its ask_new_language answer is validated here

    Returns:
        LanguageScanResult; when a language was added, languages holds exactly that code
    """
    result = find_target_languages(config.arb_folder, config.file_name_pattern, config.source_language)
    if result.languages:
        return result

    new_language = prompter.ask_new_language(config.arb_folder, config.source_language)
    if new_language is None:
        logger.info("No target languages found or added")
        return result

    error = validate_new_language(new_language, config.source_language)
    if error:
        result.warning = error
        logger.warning(f"Rejected new target language {new_language!r}: {error}")
        return result

    language_code = new_language.strip()
    try:
        create_language_file(config, language_code)
    except OSError as e:
        result.warning = f"Failed to create resource file for {language_code}: {e}"
        logger.error(result.warning)
        return result

    result.languages = [language_code]
    result.created_language = language_code
    return result
