"""
Placeholder conversion between Dart string interpolation and ARB placeholders.

Dart strings interpolate with '${expression}' or '$identifier'; ARB values
use named placeholders such as '{name}'. Conversion is idempotent: running
it on its own output yields the same text and the same placeholder names.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List

# One left-to-right scan over braced interpolation, bare interpolation and
# already-converted ARB placeholders.
PLACEHOLDER_PATTERN = re.compile(
    r'\$\{(?P<braced>[^}]+)\}'
    r'|\$(?P<bare>\w+)'
    r'|\{(?P<named>\w+)\}'
)

# A named ARB placeholder, not preceded by the interpolation sigil
ARB_PLACEHOLDER_PATTERN = re.compile(r'(?<!\$)\{(\w+)\}')

# Trailing arithmetic such as ' + 1' in '${items.length + 1}'
TRAILING_OPERATION_PATTERN = re.compile(r'\s*[+\-*/]\s*.+$')

FALLBACK_PLACEHOLDER_NAME = 'variable'


@dataclass
class PlaceholderInfo:
    """Result of converting one selection."""
    original_placeholders: List[str] = field(default_factory=list)  # 'data.order.code'
    arb_placeholders: List[str] = field(default_factory=list)       # 'code'
    arb_text: str = ""                                              # 'Order {code}'

    @property
    def has_placeholders(self) -> bool:
        return bool(self.arb_placeholders)


def derive_placeholder_name(expression: str) -> str:
    """
    Derive a placeholder name from an interpolated expression.

    Examples:
        >>> derive_placeholder_name('data.order.code')
        'code'
        >>> derive_placeholder_name('user.name!')
        'name'
        >>> derive_placeholder_name('items.length + 1')
        'length'
        >>> derive_placeholder_name('+')
        'variable'
    """
    cleaned = TRAILING_OPERATION_PATTERN.sub('', expression)
    cleaned = cleaned.strip()
    if cleaned.endswith('!'):
        cleaned = cleaned[:-1]
    last_segment = cleaned.strip().split('.')[-1]
    # ARB placeholder names must be plain identifiers: 'foo()' -> 'foo', 'a?' -> 'a'
    name = re.sub(r'\W', '', last_segment)
    return name or FALLBACK_PLACEHOLDER_NAME


def _unique_name(base: str, expression: str, name_owner: Dict[str, str]) -> str:
    """Return base, or base2, base3... when base already stands for another expression."""
    name = base
    counter = 2
    while name in name_owner and name_owner[name] != expression:
        name = f"{base}{counter}"
        counter += 1
    return name


def detect_and_convert_placeholders(text: str) -> PlaceholderInfo:
    """
    Convert Dart interpolations in text to ARB placeholders.

    Every interpolation occurrence is replaced by '{name}'. A repeated
    expression reuses the name recorded for its first occurrence and is not
    recorded again. Two different expressions that derive the same name get
    distinct names ('name', 'name2'). ARB placeholders already present in the
    input are recorded with the name as their own original expression, so the
    function is idempotent under re-application. Malformed interpolations do
    not match and pass through unchanged.

    Args:
        text: Selected string contents, without the surrounding quotes

    Returns:
        PlaceholderInfo with parallel original/ARB placeholder lists and converted text

    Example:
        >>> info = detect_and_convert_placeholders('Order not found ${data.order.code}')
        >>> info.arb_text, info.arb_placeholders, info.original_placeholders
        ('Order not found {code}', ['code'], ['data.order.code'])
    """
    info = PlaceholderInfo()
    expression_names: Dict[str, str] = {}  # original expression -> placeholder name
    name_owner: Dict[str, str] = {}        # placeholder name -> original expression

    def record(expression: str, name: str):
        expression_names[expression] = name
        name_owner[name] = expression
        info.original_placeholders.append(expression)
        info.arb_placeholders.append(name)

    def convert(match: 're.Match') -> str:
        named = match.group('named')
        if named is not None:
            # Already an ARB placeholder; a name in use keeps its first owner
            if named not in name_owner:
                record(named, named)
            return match.group(0)

        expression = match.group('braced')
        if expression is None:
            expression = match.group('bare')

        if expression in expression_names:
            return '{' + expression_names[expression] + '}'

        name = _unique_name(derive_placeholder_name(expression), expression, name_owner)
        record(expression, name)
        return '{' + name + '}'

    info.arb_text = PLACEHOLDER_PATTERN.sub(convert, text)
    return info


def find_arb_placeholders(text: str) -> List[str]:
    """
    List the distinct ARB placeholder names of a value in order of appearance.

    Examples:
        >>> find_arb_placeholders('Hi {name}, you have {count} new {count}')
        ['name', 'count']
    """
    names: List[str] = []
    for name in ARB_PLACEHOLDER_PATTERN.findall(text):
        if name not in names:
            names.append(name)
    return names


def build_replacement(prefix: str, key: str, original_placeholders: List[str]) -> str:
    """
    Build the code that replaces the selected string literal.

    Examples:
        >>> build_replacement('S.current', 'orderNotFound', ['data.order.code'])
        'S.current.orderNotFound(data.order.code)'
        >>> build_replacement('S.current', 'hello', [])
        'S.current.hello'
    """
    if original_placeholders:
        return f"{prefix}.{key}({', '.join(original_placeholders)})"
    return f"{prefix}.{key}"
