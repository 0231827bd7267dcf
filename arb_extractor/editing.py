"""
Plain-text editing helpers for Dart source.

- Strip one layer of string-literal quoting from a selection
- Replace the selected range with the localization call
- Add the localization import when it is missing
"""

import re
from typing import Optional, Tuple

from arb_extractor.logger import get_logger

logger = get_logger(__name__)

QUOTES = ("'''", '"""', "'", '"')


def strip_literal_quotes(selected_text: str) -> str:
    """
    Trim a selection and remove one layer of Dart string-literal quoting.

    Handles '...', "...", triple-quoted strings and raw strings (r'...').
    Escaped quotes inside the literal are kept as they are.

    Examples:
        >>> strip_literal_quotes("  'Hello $name'  ")
        'Hello $name'
        >>> strip_literal_quotes('r"C:\\\\path"')
        'C:\\\\path'
        >>> strip_literal_quotes('plain text')
        'plain text'
    """
    text = selected_text.strip()
    if text[:1] in ('r', 'R') and len(text) > 1 and text[1] in ('"', "'"):
        body = _strip_quotes(text[1:])
        if body is not None:
            return body
    body = _strip_quotes(text)
    return text if body is None else body


def _strip_quotes(text: str) -> Optional[str]:
    for quote in QUOTES:
        if len(text) >= 2 * len(quote) and text.startswith(quote) and text.endswith(quote):
            return text[len(quote):-len(quote)]
    return None


def replace_range(source: str, selection: Tuple[int, int], replacement: str) -> str:
    """
    Replace source[start:end] with replacement.

    Raises:
        ValueError: If the selection is outside the source
    """
    start, end = selection
    if start < 0 or end < start or end > len(source):
        raise ValueError(f"Selection {start}-{end} is outside the document (length {len(source)})")
    return source[:start] + replacement + source[end:]


def _import_target(import_statement: str) -> str:
    """The URI of an import statement: "import 'package:a/b.dart';" -> 'package:a/b.dart'."""
    target = re.sub(r'^import\s+', '', import_statement.strip())
    target = re.sub(r';\s*$', '', target).strip()
    return target.strip('\'"')


def has_import(source: str, import_statement: str) -> bool:
    """True when source already imports the same URI (quote style and spacing ignored)."""
    target = re.escape(_import_target(import_statement))
    import_regex = re.compile(rf'^\s*import\s+[\'"]{target}[\'"][^;\n]*;?\s*$', re.MULTILINE)
    return bool(import_regex.search(source))


def ensure_import(source: str, import_statement: Optional[str]) -> Tuple[str, Optional[int]]:
    """
    Insert import_statement after the last import of the header, unless present.

    Args:
        source: Dart source text
        import_statement: Full statement, e.g. "import 'package:app/l10n.dart';"

    Returns:
        (updated source, character offset where the import was inserted or None)
    """
    if not import_statement or not import_statement.strip():
        return source, None
    if has_import(source, import_statement):
        return source, None

    statement = import_statement.strip()
    if not statement.endswith(';'):
        statement += ';'

    lines = source.split('\n')
    last_import_index = -1
    for index, line in enumerate(lines):
        stripped = line.strip()
        if stripped.startswith('import '):
            last_import_index = index
        elif stripped.startswith('library ') or stripped.startswith('part of '):
            break
        elif last_import_index != -1 and stripped != '':
            # First code line after the import block
            break

    insert_line = last_import_index + 1
    offset = sum(len(line) + 1 for line in lines[:insert_line])
    logger.debug(f"Adding import at line {insert_line}: {statement}")
    if offset > len(source):
        # Last import is the final line and has no trailing newline
        return source + '\n' + statement + '\n', len(source) + 1
    return source[:offset] + statement + '\n' + source[offset:], offset
