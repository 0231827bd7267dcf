"""
Translation Progress Data Class

Contains the TranslationProgress dataclass for tracking translation progress.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass
class TranslationProgress:
    """Progress information for an ongoing translation fan-out."""
    key: str
    current_language: str
    current_language_name: str
    total_languages: int
    completed_languages: int
    success_count: int
    failure_count: int
    phase: str = "translating"  # "translating", "language_done", "completed"
    error: Optional[str] = None  # Failure of the language just finished

    @property
    def message(self) -> str:
        if self.phase == "translating":
            return f"to {self.current_language_name}"
        if self.phase == "completed":
            return f"Finished translation attempts for \"{self.key}\"."
        return (f"({self.completed_languages}/{self.total_languages}) "
                f"{self.current_language_name} done.")

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["message"] = self.message
        return payload
