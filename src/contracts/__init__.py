"""Dashboard contract v1: canonical value objects produced by the normalization layer."""

from src.contracts.dashboard_v1 import (
    Domain,
    MeetingMetadata,
    PresentationMetadata,
    PresentationSearchResponse,
    PresentationSearchResult,
    PresentationTranscriptionResponse,
    SearchQuery,
    SearchResponse,
    SearchResult,
    TranscriptionResponse,
    TranscriptionSegment,
)

__all__ = [
    "Domain",
    "MeetingMetadata",
    "PresentationMetadata",
    "PresentationSearchResponse",
    "PresentationSearchResult",
    "PresentationTranscriptionResponse",
    "SearchQuery",
    "SearchResponse",
    "SearchResult",
    "TranscriptionResponse",
    "TranscriptionSegment",
]
