"""
Decision points of an extraction, as a pluggable strategy.

The extractor never calls UI code directly. Each decision it needs is a
method on a Prompter; an editor integration implements them interactively,
the HTTP surface and the tests answer them from pre-supplied values.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from arb_extractor.core.conflicts import ConflictChoice, ConflictQuestion
from arb_extractor.logger import get_logger

logger = get_logger(__name__)

_CHOICE_ALIASES = {
    "reuse": ConflictChoice.REUSE,
    "use_existing": ConflictChoice.REUSE,
    "new": ConflictChoice.ADD_NEW,
    "add": ConflictChoice.ADD_NEW,
    "add_new": ConflictChoice.ADD_NEW,
}


class DecisionRequired(Exception):
    """A decision point was reached without an answer."""

    def __init__(self, question: ConflictQuestion):
        super().__init__(question.message)
        self.question = question


class Prompter:
    """Base strategy: accepts the suggested key and declines everything else."""

    def ask_key(self, suggested_key: str) -> Optional[str]:
        """Return the key to use, or None to cancel."""
        return suggested_key

    def resolve_conflict(self, question: ConflictQuestion) -> Optional[ConflictChoice]:
        """Return a choice for a key/value conflict, or None to cancel."""
        return None

    def confirm_reset(self, path: Path, error: Exception) -> bool:
        """Return True to reset an unparseable resource file to an empty document."""
        return False

    def ask_new_language(self, folder: Path, source_language: str) -> Optional[str]:
        """Return a language code to add when no target files exist, or None to skip."""
        return None


def parse_choice(value: Any) -> Optional[ConflictChoice]:
    """Map a user-supplied answer ('reuse', 'new', 'add', ...) to a ConflictChoice."""
    if isinstance(value, ConflictChoice):
        return value
    if not isinstance(value, str):
        return None
    return _CHOICE_ALIASES.get(value.strip().lower())


class ScriptedPrompter(Prompter):
    """
    Answers decisions from a dictionary.

    Recognised answers: 'key', 'key_conflict', 'value_conflict',
    'reset_invalid_files', 'new_language'. With strict=True a conflict
    without an answer raises DecisionRequired instead of cancelling.
    """

    def __init__(self, answers: Optional[Dict[str, Any]] = None, strict: bool = False):
        self.answers = dict(answers or {})
        self.strict = strict

    def ask_key(self, suggested_key: str) -> Optional[str]:
        key = self.answers.get('key')
        if key is None:
            return suggested_key
        return key

    def resolve_conflict(self, question: ConflictQuestion) -> Optional[ConflictChoice]:
        answer_name = 'key_conflict' if question.kind.value == 'key_exists' else 'value_conflict'
        if answer_name not in self.answers:
            if self.strict:
                raise DecisionRequired(question)
            return None
        choice = parse_choice(self.answers[answer_name])
        if choice is None:
            logger.debug(f"Unrecognised answer for {answer_name}: {self.answers[answer_name]!r}")
        return choice

    def confirm_reset(self, path: Path, error: Exception) -> bool:
        return bool(self.answers.get('reset_invalid_files', False))

    def ask_new_language(self, folder: Path, source_language: str) -> Optional[str]:
        new_language = self.answers.get('new_language')
        return new_language if isinstance(new_language, str) else None
