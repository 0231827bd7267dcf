"""
Core module - resource document model and extraction building blocks

This module provides:
- placeholders: Dart interpolation to ARB placeholder conversion
- keys: key suggestion and validation
- arb: resource document model, reading and atomic writing
- conflicts: key/value conflict resolution

The extraction workflow lives in arb_extractor.core.extraction.
"""

from arb_extractor.core.placeholders import (
    PlaceholderInfo,
    detect_and_convert_placeholders,
    find_arb_placeholders,
    build_replacement,
)
from arb_extractor.core.keys import generate_suggested_key, validate_key
from arb_extractor.core.arb import (
    ArbDocument,
    ArbFileError,
    MetadataValue,
    SentinelValue,
    StringValue,
    read_or_create_arb_file,
    write_arb_file,
)
from arb_extractor.core.conflicts import (
    Cancelled,
    ConflictChoice,
    ConflictKind,
    ConflictQuestion,
    Proceed,
    ReuseExisting,
    resolve_conflicts,
)
