"""
Key and value conflict resolution against the source resource document.

Two checks run in order, each able to end resolution early:
1. Key collision: the candidate key already has an entry.
2. Value collision: another translatable entry already holds the same text.

The key check comes first because renaming the key changes which value
collision is meaningful; the value check compares against the final key.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Union

from arb_extractor.core.arb import ArbDocument
from arb_extractor.core.placeholders import build_replacement
from arb_extractor.logger import get_logger

logger = get_logger(__name__)


class ConflictKind(str, Enum):
    KEY_EXISTS = "key_exists"
    VALUE_EXISTS = "value_exists"


class ConflictChoice(str, Enum):
    REUSE = "reuse"      # use the existing key
    ADD_NEW = "add_new"  # create a suffixed key / add the value anyway


@dataclass
class ConflictQuestion:
    """A decision the caller has to make about a conflict."""
    kind: ConflictKind
    candidate_key: str
    existing_key: str
    existing_value: str

    @property
    def message(self) -> str:
        if self.kind == ConflictKind.KEY_EXISTS:
            return (f"Key \"{self.candidate_key}\" already exists with value: "
                    f"\"{self.existing_value}\". What to do?")
        return (f"String \"{self.existing_value}\" already exists as key "
                f"\"{self.existing_key}\". What to do?")

    @property
    def options(self) -> List[str]:
        if self.kind == ConflictKind.KEY_EXISTS:
            return [
                f"Use existing key (\"{self.existing_key}\")",
                f"Create new key (e.g., \"{self.candidate_key}_1\")",
            ]
        return [
            f"Use existing key (\"{self.existing_key}\")",
            f"Add as new key (\"{self.candidate_key}\") anyway",
        ]

    def to_dict(self):
        return {
            "kind": self.kind.value,
            "candidate_key": self.candidate_key,
            "existing_key": self.existing_key,
            "existing_value": self.existing_value,
            "message": self.message,
            "options": self.options,
        }


@dataclass(frozen=True)
class Proceed:
    """Insert the value under key_to_use."""
    key_to_use: str
    renamed_from: Optional[str] = None


@dataclass(frozen=True)
class ReuseExisting:
    """Do not write; reference the existing key instead."""
    key: str
    replacement: str


@dataclass(frozen=True)
class Cancelled:
    """The caller dismissed a decision."""
    reason: str = "cancelled"


ConflictResult = Union[Proceed, ReuseExisting, Cancelled]

ConflictDecider = Callable[[ConflictQuestion], Optional[ConflictChoice]]


def generate_unique_key(base_key: str, document: ArbDocument) -> str:
    """
    Append _1, _2, ... to base_key until the document has no entry under it.

    Examples:
        >>> generate_unique_key('greeting', ArbDocument.from_json({'greeting': 'Hi', 'greeting_1': 'Hey'}))
        'greeting_2'
    """
    counter = 1
    new_key = f"{base_key}_{counter}"
    while new_key in document:
        counter += 1
        new_key = f"{base_key}_{counter}"
    return new_key


def resolve_conflicts(
    candidate_key: str,
    arb_text: str,
    original_placeholders: List[str],
    document: ArbDocument,
    prefix: str,
    decide: ConflictDecider,
) -> ConflictResult:
    """
    Decide whether to insert, reuse an existing entry, or stop.

    Args:
        candidate_key: Key confirmed by the user
        arb_text: Placeholder-converted value to insert
        original_placeholders: Original interpolation expressions, for the replacement call
        document: Current source document (not modified)
        prefix: Replacement prefix such as 'S.current'
        decide: Decision callback; None means the user cancelled

    Returns:
        Proceed, ReuseExisting or Cancelled
    """
    key_to_use = candidate_key
    renamed_from = None

    # 1. Key collision
    if candidate_key in document:
        entry = document.get(candidate_key)
        existing_value = document.get_text(candidate_key)
        if existing_value is None:
            existing_value = str(getattr(entry, 'data', ''))
        question = ConflictQuestion(
            kind=ConflictKind.KEY_EXISTS,
            candidate_key=candidate_key,
            existing_key=candidate_key,
            existing_value=existing_value,
        )
        choice = decide(question)
        if choice is None:
            logger.info(f"Key conflict for \"{candidate_key}\" cancelled")
            return Cancelled()
        if choice == ConflictChoice.REUSE:
            logger.info(f"Reusing existing key \"{candidate_key}\"")
            return ReuseExisting(
                key=candidate_key,
                replacement=build_replacement(prefix, candidate_key, original_placeholders),
            )
        key_to_use = generate_unique_key(candidate_key, document)
        renamed_from = candidate_key
        logger.info(f"Using new key \"{key_to_use}\" instead of \"{candidate_key}\"")

    # 2. Value collision, checked against the final key
    existing_key_for_value = document.find_key_for_value(arb_text, exclude_key=key_to_use)
    if existing_key_for_value is not None:
        question = ConflictQuestion(
            kind=ConflictKind.VALUE_EXISTS,
            candidate_key=key_to_use,
            existing_key=existing_key_for_value,
            existing_value=arb_text,
        )
        choice = decide(question)
        if choice is None:
            logger.info(f"Value conflict with \"{existing_key_for_value}\" cancelled")
            return Cancelled()
        if choice == ConflictChoice.REUSE:
            logger.info(f"Reusing key \"{existing_key_for_value}\" that already holds the value")
            return ReuseExisting(
                key=existing_key_for_value,
                replacement=build_replacement(prefix, existing_key_for_value, original_placeholders),
            )

    return Proceed(key_to_use=key_to_use, renamed_from=renamed_from)
