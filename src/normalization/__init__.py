"""Response-shape reconciliation: tags, search records, and transcription metadata."""

from src.normalization.metadata import (
    aggregate_meeting_metadata,
    aggregate_presentation_metadata,
    normalize_presentation_transcription,
    normalize_transcription,
    with_meeting_minutes,
)
from src.normalization.records import (
    match_record_shape,
    match_records,
    normalize_record,
    resolve_records,
)
from src.normalization.tags import is_valid_tags, normalize_tags

__all__ = [
    "aggregate_meeting_metadata",
    "aggregate_presentation_metadata",
    "is_valid_tags",
    "match_record_shape",
    "match_records",
    "normalize_presentation_transcription",
    "normalize_record",
    "normalize_tags",
    "normalize_transcription",
    "resolve_records",
    "with_meeting_minutes",
]
