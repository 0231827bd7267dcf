"""
ARB resource documents and file store.

This module handles one language's resource file:
- Typed, order-preserving document model (strings, metadata, end-of-file marker)
- Reading with explicit parse-failure recovery
- Atomic writing with the end-of-file marker kept last
"""

import json
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from arb_extractor.config import END_OF_FILE_MARKER_KEY
from arb_extractor.logger import get_logger

logger = get_logger(__name__)

PLACEHOLDER_TYPE = "String"


class ArbFileError(Exception):
    """Reading, creating or writing a resource file failed."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


@dataclass(frozen=True)
class StringValue:
    """A translatable entry."""
    text: str


@dataclass(frozen=True)
class MetadataValue:
    """An '@'-prefixed entry ('@key' metadata or file-level '@@locale' style data)."""
    data: Any

    @property
    def placeholders(self) -> Dict[str, Any]:
        if isinstance(self.data, dict) and isinstance(self.data.get('placeholders'), dict):
            return self.data['placeholders']
        return {}


@dataclass(frozen=True)
class SentinelValue:
    """The reserved end-of-file marker."""
    data: Any


ArbValue = Union[StringValue, MetadataValue, SentinelValue]


def classify_entry(key: str, value: Any) -> ArbValue:
    """Wrap a raw JSON value in its entry type."""
    if key == END_OF_FILE_MARKER_KEY:
        return SentinelValue(value)
    if key.startswith('@') or not isinstance(value, str):
        return MetadataValue(value)
    return StringValue(value)


def metadata_key(key: str) -> str:
    return f"@{key}"


class ArbDocument:
    """Ordered resource document for one language."""

    def __init__(self, entries: Optional[Dict[str, ArbValue]] = None):
        self._entries: Dict[str, ArbValue] = dict(entries or {})

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> 'ArbDocument':
        return cls({key: classify_entry(key, value) for key, value in data.items()})

    def to_json(self) -> Dict[str, Any]:
        """Plain dict in serialized order; the end-of-file marker, if any, comes last."""
        result: Dict[str, Any] = {}
        sentinel = None
        for key, entry in self._entries.items():
            if isinstance(entry, SentinelValue):
                sentinel = entry
                continue
            result[key] = entry.text if isinstance(entry, StringValue) else entry.data
        if sentinel is not None:
            result[END_OF_FILE_MARKER_KEY] = sentinel.data
        return result

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> List[str]:
        return list(self._entries.keys())

    def get(self, key: str) -> Optional[ArbValue]:
        return self._entries.get(key)

    def get_text(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        return entry.text if isinstance(entry, StringValue) else None

    def translatable_items(self) -> Iterator[Tuple[str, str]]:
        for key, entry in self._entries.items():
            if isinstance(entry, StringValue):
                yield key, entry.text

    def find_key_for_value(self, text: str, exclude_key: Optional[str] = None) -> Optional[str]:
        """First translatable key whose value equals text, skipping exclude_key."""
        for key, value in self.translatable_items():
            if value == text and key != exclude_key:
                return key
        return None

    @property
    def has_sentinel(self) -> bool:
        return END_OF_FILE_MARKER_KEY in self._entries

    def detach_sentinel(self) -> Optional[SentinelValue]:
        """Remove the end-of-file marker and return it (None when absent)."""
        entry = self._entries.pop(END_OF_FILE_MARKER_KEY, None)
        return entry if isinstance(entry, SentinelValue) else None

    def attach_sentinel(self, sentinel: Optional[SentinelValue]):
        """Re-append a detached end-of-file marker as the last entry."""
        if sentinel is None:
            return
        self._entries.pop(END_OF_FILE_MARKER_KEY, None)
        self._entries[END_OF_FILE_MARKER_KEY] = sentinel

    def set_translation(self, key: str, text: str, placeholders: Sequence[str] = ()):
        """
        Set the value for key and, when placeholders exist, its metadata entry.

        A new key is appended (before the end-of-file marker). The metadata
        entry keeps any existing fields such as 'description' and has its
        'placeholders' field replaced; a new metadata entry is placed right
        after its key.
        """
        sentinel = self.detach_sentinel()
        self._entries[key] = StringValue(text)

        if placeholders:
            meta_key = metadata_key(key)
            existing = self._entries.get(meta_key)
            data = dict(existing.data) if isinstance(existing, MetadataValue) and isinstance(existing.data, dict) else {}
            data['placeholders'] = {name: {"type": PLACEHOLDER_TYPE} for name in placeholders}
            if meta_key in self._entries:
                self._entries[meta_key] = MetadataValue(data)
            else:
                self._insert_after(key, meta_key, MetadataValue(data))

        self.attach_sentinel(sentinel)

    def _insert_after(self, anchor: str, key: str, value: ArbValue):
        reordered: Dict[str, ArbValue] = {}
        for existing_key, existing_value in self._entries.items():
            reordered[existing_key] = existing_value
            if existing_key == anchor:
                reordered[key] = value
        if key not in reordered:
            reordered[key] = value
        self._entries = reordered


def read_or_create_arb_file(
    file_path: Path,
    on_parse_error: Optional[Callable[[Path, Exception], bool]] = None,
) -> Optional[ArbDocument]:
    """
    Read a resource file, creating it (and its folder) when missing.

    Args:
        file_path: Resource file path
        on_parse_error: Decision callback for unparseable content; returning
            True resets the file to an empty document, False aborts

    Returns:
        The document, or None when the caller chose to abort

    Raises:
        ArbFileError: If the file or folder cannot be read or created
    """
    file_path = Path(file_path)

    if not file_path.exists():
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text('{}', encoding='utf-8')
        except OSError as e:
            raise ArbFileError(f"Failed to create {file_path.name}: {e}", file_path)
        logger.info(f"Created empty resource file: {file_path}")
        return ArbDocument()

    try:
        raw = file_path.read_bytes()
    except OSError as e:
        raise ArbFileError(f"Error accessing resource file {file_path.name}: {e}", file_path)

    try:
        content = raw.decode('utf-8')
        data = json.loads(content) if content.strip() else {}
        if not isinstance(data, dict):
            raise ValueError("top-level value is not an object")
    except (UnicodeDecodeError, ValueError) as e:
        logger.warning(f"Failed to parse {file_path.name}: {e}")
        reset = on_parse_error(file_path, e) if on_parse_error else False
        if not reset:
            logger.info(f"Left unparseable file untouched: {file_path}")
            return None
        try:
            file_path.write_text('{}', encoding='utf-8')
        except OSError as write_error:
            raise ArbFileError(f"Failed to reset {file_path.name}: {write_error}", file_path)
        logger.info(f"Reset unparseable file to an empty document: {file_path}")
        return ArbDocument()

    return ArbDocument.from_json(data)


def write_arb_file(file_path: Path, document: ArbDocument):
    """
    Write a document atomically.

    The JSON is written to a temporary file in the same directory and then
    renamed over the target, so a failed write leaves the original file
    unchanged. The end-of-file marker is serialized last.

    Raises:
        ArbFileError: If the write fails
    """
    file_path = Path(file_path)

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        temp_fd, temp_path = tempfile.mkstemp(
            dir=file_path.parent,
            prefix=f".{file_path.stem}_",
            suffix=".arb.tmp"
        )
    except OSError as e:
        raise ArbFileError(f"Failed to write to {file_path.name}: {e}", file_path)

    temp_path = Path(temp_path)

    try:
        with open(temp_fd, 'w', encoding='utf-8') as f:
            json.dump(document.to_json(), f, ensure_ascii=False, indent=2)
            f.write('\n')

        temp_path.replace(file_path)
        logger.debug(f"Atomic write successful: {file_path}")

    except (OSError, TypeError, ValueError) as e:
        if temp_path.exists():
            temp_path.unlink()
        raise ArbFileError(f"Failed to write to {file_path.name}: {e}", file_path)
