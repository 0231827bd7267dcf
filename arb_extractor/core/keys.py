"""Key suggestion and validation for extracted strings."""

import re
from typing import Optional

from arb_extractor.config import DEFAULT_KEY, MAX_KEY_LENGTH


def generate_suggested_key(text: str) -> str:
    """
    Suggest a camelCase key for a placeholder-normalized string.

    Placeholders are dropped, everything but ASCII letters, digits and
    whitespace is removed, and the words are joined in camelCase. Leading
    digits are skipped so the key always starts with a letter. The result is
    cut to MAX_KEY_LENGTH characters; DEFAULT_KEY is returned when nothing
    usable is left.

    Examples:
        >>> generate_suggested_key('Order not found {code}')
        'orderNotFound'
        >>> generate_suggested_key('3 items left!')
        'itemsLeft'
        >>> generate_suggested_key('{count}')
        'myString'
    """
    clean_text = re.sub(r'\{[^}]+\}', '', text)
    clean_text = re.sub(r'[^a-zA-Z0-9\s]', '', clean_text)
    words = clean_text.strip().lower().split()

    # Drop leading digits so the key reads as an identifier
    while words:
        words[0] = words[0].lstrip('0123456789')
        if words[0]:
            break
        words.pop(0)

    key = ''.join(
        word if index == 0 else word[:1].upper() + word[1:]
        for index, word in enumerate(words)
    )
    key = key[:MAX_KEY_LENGTH]
    return key or DEFAULT_KEY


def validate_key(key: Optional[str]) -> Optional[str]:
    """
    Return an error message for an unusable key, or None when the key is fine.

    Keys starting with '@' are reserved for metadata entries.
    """
    if key is None or not key.strip():
        return "Key cannot be empty"
    if key.strip().startswith('@'):
        return f"Key \"{key.strip()}\" cannot start with '@' (reserved for metadata)"
    return None
