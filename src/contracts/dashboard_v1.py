"""Dashboard Contract v1.

Defines the canonical types the dashboard UI consumes:
  - Search request and result payload (SearchQuery, SearchResult, SearchResponse)
  - Transcription detail (TranscriptionResponse, MeetingMetadata, segments)
  - Presentation detail (PresentationTranscriptionResponse, PresentationMetadata, slides)
  - Small backend envelopes (datasets, health, statistics, analysis)

Every model is frozen: a changed field produces a new value via model_copy().
The backends' raw JSON never reaches the UI directly; the normalization layer
builds these models from whatever shape the backends returned.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

# ---------------------------------------------------------------------------
# Domains
# ---------------------------------------------------------------------------


class Domain(StrEnum):
    AUDIO = "audio"
    PRESENTATION = "presentation"


class TranscriptionStatus(StrEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class _ValueObject(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


class SearchQuery(_ValueObject):
    """Request body for a backend's knowledge-base search endpoint."""

    query: str
    dataset_id: str | None = Field(default=None)
    limit: int = Field(default=10, ge=1)
    similarity_threshold: float = Field(default=0.7, ge=0.0, le=1.0)


class SearchResult(_ValueObject):
    """One normalized hit-record."""

    id: str = Field(min_length=1, description="Never empty; synthesized when the provider omits it")
    text: str = Field(default="")
    score: float = Field(default=0.0, description="Provider-native similarity score")
    metadata: dict[str, Any] = Field(default_factory=dict)
    transcription_id: str = Field(
        default="",
        description="Source document id; empty when unresolvable",
    )


class PresentationSearchResult(SearchResult):
    """Hit-record from the presentation domain, with slide provenance."""

    slide_number: int | str | None = Field(default=None)
    element_id: str | None = Field(default=None)


class SearchResponse(_ValueObject):
    """Domain-agnostic search response rendered by the UI."""

    results: list[SearchResult] = Field(default_factory=list, description="Provider order")
    query: str = Field(description="Original query, echoed verbatim")
    execution_time_ms: float = Field(
        default=0.0,
        description="Client-observed wall-clock duration, including network transit",
    )

    @computed_field
    @property
    def total_found(self) -> int:
        return len(self.results)


class PresentationSearchResponse(SearchResponse):
    results: list[PresentationSearchResult] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Audio transcription detail
# ---------------------------------------------------------------------------


class TranscriptionSegment(_ValueObject):
    start_time: float
    end_time: float
    text: str = Field(default="")
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    speaker_tag: str | None = Field(default=None)


class MeetingMetadata(_ValueObject):
    meeting_id: str | None = None
    meeting_date: str | None = None
    participants: list[str] = Field(default_factory=list)
    meeting_type: str | None = None
    topics: list[str] = Field(default_factory=list)
    action_items: list[str] = Field(default_factory=list)
    decisions: list[str] = Field(default_factory=list)
    key_points: list[str] = Field(default_factory=list)
    sentiment: str | None = None
    urgency_level: str | None = None
    follow_up_required: bool | None = None
    segments: list[TranscriptionSegment] | None = None
    project: str | None = None
    workstream: str | None = None
    bpml_l1: list[str] | None = Field(default=None, description="Process-taxonomy level 1 tags")
    bpml_l2: list[str] | None = Field(default=None, description="Process-taxonomy level 2 tags")
    raw: dict[str, Any] = Field(
        default_factory=dict,
        repr=False,
        description="The metadata mapping as received, kept alongside the normalized view",
    )


class TranscriptionResponse(_ValueObject):
    id: str = Field(default="")
    status: str = Field(default=TranscriptionStatus.PENDING.value)
    file_name: str = Field(default="")
    duration_seconds: float | None = None
    segments: list[TranscriptionSegment] | None = None
    full_text: str | None = None
    created_at: str | None = None
    completed_at: str | None = None
    error_message: str | None = None
    metadata: MeetingMetadata | None = None
    summary: str | None = None
    meeting_minutes: str | None = None


class MeetingMinutesResponse(_ValueObject):
    success: bool = False
    meeting_minutes: str | None = None
    transcription_id: str | None = None
    workflow_run_id: str | None = None
    task_id: str | None = None
    message: str = ""
    error: str | None = None


# ---------------------------------------------------------------------------
# Presentation transcription detail
# ---------------------------------------------------------------------------


class SlideElement(_ValueObject):
    element_id: str = Field(default="")
    element_type: str = Field(default="")
    raw_content: str | None = None
    semantic_analysis: dict[str, Any] = Field(default_factory=dict)
    position: dict[str, float] | None = None
    relationships_to_other_elements: list[dict[str, Any]] = Field(default_factory=list)


class SlideData(_ValueObject):
    slide_number: int
    slide_title: str | None = None
    slide_summary: str = Field(default="")
    elements: list[SlideElement] = Field(default_factory=list)


class PresentationMetadata(_ValueObject):
    title: str | None = None
    author: str | None = None
    date: str | None = None
    source_filename: str = Field(default="")
    total_slides: int = Field(default=0, ge=0)
    presentation_type: str | None = None
    language: str | None = None
    overall_summary: str = Field(default="")
    key_concepts: list[str] = Field(default_factory=list)
    narrative_flow_analysis: str = Field(default="")
    slides: list[SlideData] = Field(default_factory=list)
    meeting_id: str | None = None
    workstream: str | None = None
    bpml_l1: list[str] | None = None
    bpml_l2: list[str] | None = None
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)


class PresentationTranscriptionResponse(_ValueObject):
    id: str = Field(default="")
    status: str = Field(default=TranscriptionStatus.PENDING.value)
    file_name: str = Field(default="")
    slides_count: int | None = None
    transcription: PresentationMetadata | None = None
    created_at: str | None = None
    completed_at: str | None = None
    error_message: str | None = None
    processing_time_seconds: float | None = None


class TranscriptionList(_ValueObject):
    transcriptions: list[TranscriptionResponse | PresentationTranscriptionResponse] = Field(
        default_factory=list
    )
    total: int = Field(default=0, ge=0)


# ---------------------------------------------------------------------------
# Backend envelopes
# ---------------------------------------------------------------------------


class AnalysisRequest(_ValueObject):
    analysis_type: Literal["functional_requirements", "mind_map", "custom"]
    custom_prompt: str | None = None


class AnalysisResponse(_ValueObject):
    analysis: str = ""


class Dataset(_ValueObject):
    id: str
    name: str = ""
    description: str | None = None
    permission: str = ""
    document_count: int = 0
    word_count: int = 0
    created_at: str | int | None = None


class HealthCheck(_ValueObject):
    status: str = "unknown"
    timestamp: str | None = None
    version: str | None = None


class Statistics(_ValueObject):
    total_documents: int | None = None
    total_transcriptions: int | None = None
    total_presentations: int | None = None
    total_slides: int | None = None
    storage_used: str | None = None
    last_update: str | None = None
