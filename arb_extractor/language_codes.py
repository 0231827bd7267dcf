"""
Language code mappings and resource filename utilities.

Standards:
- ISO 639-1: 2-letter language codes (en, zh, es)
- BCP 47: Language + Region codes (en-US, zh-CN, pt-BR)

Resource File Naming Convention:
A filename pattern such as 'intl_{lang}.arb' maps a language code to the
resource filename. For example, with that pattern:
- Language code 'en' maps to 'intl_en.arb'
- Language code 'fr-CA' maps to 'intl_fr-CA.arb'
Recognising the code in an existing filename tries the configured pattern
first and falls back to a generic '<anything>_<code>.<ext>' shape.
"""

import re
from pathlib import Path
from typing import Optional, Pattern

from arb_extractor.config import LANG_TOKEN, DEFAULT_FILE_EXTENSION

# ISO 639-1 language codes (2-letter) most often shipped with Flutter apps
ISO_639_1 = {
    'af': 'Afrikaans',
    'am': 'Amharic',
    'ar': 'Arabic',
    'az': 'Azerbaijani',
    'be': 'Belarusian',
    'bg': 'Bulgarian',
    'bn': 'Bengali',
    'bs': 'Bosnian',
    'ca': 'Catalan',
    'cs': 'Czech',
    'cy': 'Welsh',
    'da': 'Danish',
    'de': 'German',
    'el': 'Greek',
    'en': 'English',
    'es': 'Spanish',
    'et': 'Estonian',
    'eu': 'Basque',
    'fa': 'Persian',
    'fi': 'Finnish',
    'fil': 'Filipino',
    'fr': 'French',
    'ga': 'Irish',
    'gl': 'Galician',
    'gu': 'Gujarati',
    'he': 'Hebrew',
    'hi': 'Hindi',
    'hr': 'Croatian',
    'hu': 'Hungarian',
    'hy': 'Armenian',
    'id': 'Indonesian',
    'is': 'Icelandic',
    'it': 'Italian',
    'ja': 'Japanese',
    'ka': 'Georgian',
    'kk': 'Kazakh',
    'km': 'Khmer',
    'kn': 'Kannada',
    'ko': 'Korean',
    'lo': 'Lao',
    'lt': 'Lithuanian',
    'lv': 'Latvian',
    'mk': 'Macedonian',
    'ml': 'Malayalam',
    'mn': 'Mongolian',
    'mr': 'Marathi',
    'ms': 'Malay',
    'my': 'Burmese',
    'nb': 'Norwegian Bokmal',
    'ne': 'Nepali',
    'nl': 'Dutch',
    'no': 'Norwegian',
    'pa': 'Punjabi',
    'pl': 'Polish',
    'pt': 'Portuguese',
    'ro': 'Romanian',
    'ru': 'Russian',
    'si': 'Sinhala',
    'sk': 'Slovak',
    'sl': 'Slovenian',
    'sq': 'Albanian',
    'sr': 'Serbian',
    'sv': 'Swedish',
    'sw': 'Swahili',
    'ta': 'Tamil',
    'te': 'Telugu',
    'th': 'Thai',
    'tr': 'Turkish',
    'uk': 'Ukrainian',
    'ur': 'Urdu',
    'uz': 'Uzbek',
    'vi': 'Vietnamese',
    'zh': 'Chinese',
    'zu': 'Zulu',
}

# BCP 47 language-region codes (common variants)
BCP_47_VARIANTS = {
    'en-US': 'English (United States)',
    'en-GB': 'English (United Kingdom)',
    'en-AU': 'English (Australia)',
    'es-ES': 'Spanish (Spain)',
    'es-MX': 'Spanish (Mexico)',
    'es-419': 'Spanish (Latin America)',
    'fr-CA': 'French (Canada)',
    'fr-FR': 'French (France)',
    'pt-BR': 'Portuguese (Brazil)',
    'pt-PT': 'Portuguese (Portugal)',
    'zh-CN': 'Chinese (Simplified, China)',
    'zh-TW': 'Chinese (Traditional, Taiwan)',
    'zh-Hans': 'Chinese (Simplified)',
    'zh-Hant': 'Chinese (Traditional)',
}

# Combined mapping
ALL_LANGUAGE_CODES = {**ISO_639_1, **BCP_47_VARIANTS}

# Language-code-like suffix right before the extension: app_en.arb, intl_pt_BR.arb, l10n-zh-Hans.arb
GENERIC_CODE_PATTERN = r'[_\-](?P<lang>[a-zA-Z]{2,3}(?:[_\-][a-zA-Z0-9]{2,4})?)'


def normalize_language_code(code: str) -> str:
    """
    Normalize separators so 'pt_BR' and 'pt-BR' look up the same entry.

    Examples:
        >>> normalize_language_code('pt_BR')
        'pt-BR'
    """
    return code.strip().replace('_', '-')


def get_language_name(code: str) -> Optional[str]:
    """
    Get the full language name from code.

    Examples:
        >>> get_language_name('en')
        'English'
        >>> get_language_name('zh_CN')
        'Chinese (Simplified, China)'
    """
    return ALL_LANGUAGE_CODES.get(normalize_language_code(code))


def get_display_name(code: str) -> str:
    """
    Human readable language name used in prompts and progress messages.

    Falls back to '<base name> (<REGION>)' for unknown regions and to the
    upper-cased code when the language itself is unknown.

    Examples:
        >>> get_display_name('de')
        'German'
        >>> get_display_name('de-AT')
        'German (AT)'
        >>> get_display_name('xx')
        'XX'
    """
    name = get_language_name(code)
    if name:
        return name

    normalized = normalize_language_code(code)
    base, _, region = normalized.partition('-')
    base_name = ISO_639_1.get(base.lower())
    if base_name and region:
        return f"{base_name} ({region})"
    return code.upper()


def get_language_file_name(pattern: str, language_code: str) -> str:
    """
    Get the filename for a language according to the filename pattern.

    Examples:
        >>> get_language_file_name('intl_{lang}.arb', 'en')
        'intl_en.arb'
        >>> get_language_file_name('{lang}.arb', 'zh-CN')
        'zh-CN.arb'
    """
    return pattern.replace(LANG_TOKEN, language_code)


def get_file_extension(pattern: str) -> str:
    """Resource file extension taken from the pattern ('.arb' when it has none)."""
    return Path(pattern).suffix or DEFAULT_FILE_EXTENSION


def build_file_name_regex(pattern: str) -> Pattern:
    """
    Build a regex that matches the whole filename and captures the code at the token position.

    Examples:
        >>> build_file_name_regex('intl_{lang}.arb').match('intl_fr-CA.arb').group('lang')
        'fr-CA'
    """
    escaped = re.escape(pattern)
    regex = escaped.replace(re.escape(LANG_TOKEN), r'(?P<lang>[a-zA-Z0-9_\-]+)', 1)
    return re.compile(f'^{regex}$')


def build_generic_regex(extension: str = DEFAULT_FILE_EXTENSION) -> Pattern:
    """Fallback regex recognising a language-code suffix immediately before the extension."""
    return re.compile(f'{GENERIC_CODE_PATTERN}{re.escape(extension)}$', re.IGNORECASE)


def extract_language_from_filename(
    filename: str,
    pattern: str,
    specific_regex: Optional[Pattern] = None,
    generic_regex: Optional[Pattern] = None,
) -> Optional[str]:
    """
    Extract a language code from a resource filename.

    The configured pattern takes precedence: whenever it matches the whole
    filename its capture is returned, even if the generic fallback would
    capture a different code. The generic fallback is only consulted when
    the configured pattern does not match.

    Args:
        filename: Filename or path (only the name is used)
        pattern: Configured filename pattern containing '{lang}'
        specific_regex: Precompiled pattern regex (built when omitted)
        generic_regex: Precompiled fallback regex (built when omitted)

    Returns:
        Language code or None if none can be recognised

    Examples:
        >>> extract_language_from_filename('intl_es.arb', 'intl_{lang}.arb')
        'es'
        >>> extract_language_from_filename('app_de.arb', 'intl_{lang}.arb')
        'de'
        >>> extract_language_from_filename('notes.txt', 'intl_{lang}.arb')
    """
    name = Path(filename).name
    extension = get_file_extension(pattern)
    if not name.endswith(extension):
        return None

    specific_regex = specific_regex or build_file_name_regex(pattern)
    specific_match = specific_regex.match(name)
    if specific_match and specific_match.group('lang'):
        return specific_match.group('lang')

    generic_regex = generic_regex or build_generic_regex(extension)
    generic_match = generic_regex.search(name)
    if generic_match:
        return generic_match.group('lang')

    return None

