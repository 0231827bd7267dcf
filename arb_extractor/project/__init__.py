"""
Project module - resource folder inspection

This module provides:
- Target language discovery from resource filenames
- Creation of a first target language file
"""

from arb_extractor.project.scanner import (
    LanguageScanResult,
    find_target_languages,
    discover_target_languages,
    create_language_file,
    validate_new_language,
)
