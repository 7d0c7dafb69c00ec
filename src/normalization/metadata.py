"""Metadata aggregation for transcription-detail payloads.

Projects the loosely shaped ``metadata`` (audio) and ``transcription``
(presentation) objects into MeetingMetadata / PresentationMetadata. Tag fields
go through normalize_tags; free-text lists pass through when they are lists;
segments are range-checked, with confidence clamped rather than rejected.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any

from src.contracts.dashboard_v1 import (
    MeetingMetadata,
    MeetingMinutesResponse,
    PresentationMetadata,
    PresentationTranscriptionResponse,
    SlideData,
    SlideElement,
    TranscriptionResponse,
    TranscriptionSegment,
    TranscriptionStatus,
)
from src.normalization.tags import normalize_tags, stringify

logger = logging.getLogger(__name__)

# Enumerable tag fields; each is normalized independently.
TAG_FIELDS: tuple[str, ...] = ("bpml_l1", "bpml_l2")

MEETING_LIST_FIELDS: tuple[str, ...] = (
    "participants",
    "topics",
    "action_items",
    "decisions",
    "key_points",
)

MEETING_TEXT_FIELDS: tuple[str, ...] = (
    "meeting_id",
    "meeting_date",
    "meeting_type",
    "sentiment",
    "urgency_level",
    "project",
    "workstream",
)


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _integer(value: Any) -> int | None:
    number = _number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def _text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return str(value)


def _text_list(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [stringify(item) for item in value]


def _confidence(value: Any) -> float:
    """Confidence clamped into [0, 1]; infinities clamp, NaN and junk give 0.0."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return 0.0
    try:
        number = float(value)
    except ValueError:
        return 0.0
    except OverflowError:
        return 1.0 if value > 0 else 0.0
    if math.isnan(number):
        return 0.0
    return min(1.0, max(0.0, number))


def normalize_segment(raw: Any) -> TranscriptionSegment | None:
    """One transcript segment, or None when its time range is unusable."""
    if not isinstance(raw, Mapping):
        return None
    start = _number(raw.get("start_time"))
    end = _number(raw.get("end_time"))
    if start is None or end is None or start > end:
        logger.debug(
            "Dropping segment with invalid time range: start=%r end=%r",
            raw.get("start_time"),
            raw.get("end_time"),
        )
        return None
    return TranscriptionSegment(
        start_time=start,
        end_time=end,
        text=_text(raw.get("text")) or "",
        confidence=_confidence(raw.get("confidence")),
        speaker_tag=_text(raw.get("speaker_tag")),
    )


def normalize_segments(raw: Any) -> list[TranscriptionSegment] | None:
    """Segment list in arrival order; None when the field is absent or not a list."""
    if not isinstance(raw, (list, tuple)):
        return None
    segments = [normalize_segment(item) for item in raw]
    kept = [s for s in segments if s is not None]
    if len(kept) < len(segments):
        logger.warning(
            "Dropped %d of %d transcript segments with invalid time ranges",
            len(segments) - len(kept),
            len(segments),
        )
    return kept


def aggregate_meeting_metadata(raw: Any) -> MeetingMetadata:
    data = _mapping(raw)
    values: dict[str, Any] = {}
    for name in MEETING_LIST_FIELDS:
        values[name] = _text_list(data.get(name))
    for name in MEETING_TEXT_FIELDS:
        values[name] = _text(data.get(name))
    for name in TAG_FIELDS:
        values[name] = normalize_tags(data.get(name))
    follow_up = data.get("follow_up_required")
    values["follow_up_required"] = follow_up if isinstance(follow_up, bool) else None
    values["segments"] = normalize_segments(data.get("segments"))
    values["raw"] = dict(data)
    return MeetingMetadata(**values)


def _normalize_position(raw: Any) -> dict[str, float] | None:
    if not isinstance(raw, Mapping):
        return None
    position = {str(k): _number(v) for k, v in raw.items()}
    return {k: v for k, v in position.items() if v is not None}


def _normalize_element(raw: Any) -> SlideElement:
    data = _mapping(raw)
    relationships = data.get("relationships_to_other_elements")
    return SlideElement(
        element_id=_text(data.get("element_id")) or "",
        element_type=_text(data.get("element_type")) or "",
        raw_content=_text(data.get("raw_content")),
        semantic_analysis=dict(_mapping(data.get("semantic_analysis"))),
        position=_normalize_position(data.get("position")),
        relationships_to_other_elements=[
            dict(item) for item in relationships if isinstance(item, Mapping)
        ]
        if isinstance(relationships, (list, tuple))
        else [],
    )


def normalize_slide(raw: Any, position: int = 1) -> SlideData:
    data = _mapping(raw)
    elements = data.get("elements")
    slide_number = _integer(data.get("slide_number"))
    return SlideData(
        slide_number=slide_number if slide_number is not None else position,
        slide_title=_text(data.get("slide_title")),
        slide_summary=_text(data.get("slide_summary")) or "",
        elements=[_normalize_element(e) for e in elements]
        if isinstance(elements, (list, tuple))
        else [],
    )


def aggregate_presentation_metadata(raw: Any) -> PresentationMetadata:
    """Flatten a presentation ``transcription`` payload into PresentationMetadata.

    Descriptive fields live under ``presentation_metadata``; identifiers and
    tags are read from the transcription first, then from that nested object.
    """
    data = _mapping(raw)
    header = _mapping(data.get("presentation_metadata"))
    slides = data.get("slides")
    slide_list = (
        [normalize_slide(s, i + 1) for i, s in enumerate(slides)]
        if isinstance(slides, (list, tuple))
        else []
    )
    total_slides = _integer(header.get("total_slides"))

    def _either(name: str) -> Any:
        value = data.get(name)
        return value if value is not None else header.get(name)

    return PresentationMetadata(
        title=_text(header.get("title")),
        author=_text(header.get("author")),
        date=_text(header.get("date")),
        source_filename=_text(header.get("source_filename")) or "",
        total_slides=total_slides if total_slides is not None and total_slides >= 0 else len(slide_list),
        presentation_type=_text(header.get("presentation_type")),
        language=_text(header.get("language")),
        overall_summary=_text(data.get("overall_summary")) or "",
        key_concepts=_text_list(data.get("key_concepts")),
        narrative_flow_analysis=_text(data.get("narrative_flow_analysis")) or "",
        slides=slide_list,
        meeting_id=_text(_either("meeting_id")),
        workstream=_text(_either("workstream")),
        bpml_l1=normalize_tags(_either("bpml_l1")),
        bpml_l2=normalize_tags(_either("bpml_l2")),
        raw=dict(data),
    )


def _identifier(data: Mapping[str, Any]) -> str:
    return _text(data.get("id")) or _text(data.get("transcription_id")) or ""


def _status(data: Mapping[str, Any]) -> str:
    return _text(data.get("status")) or TranscriptionStatus.PENDING.value


def normalize_transcription(raw: Any) -> TranscriptionResponse:
    data = _mapping(raw)
    metadata = data.get("metadata")
    return TranscriptionResponse(
        id=_identifier(data),
        status=_status(data),
        file_name=_text(data.get("file_name")) or "",
        duration_seconds=_number(data.get("duration_seconds")),
        segments=normalize_segments(data.get("segments")),
        full_text=_text(data.get("full_text")),
        created_at=_text(data.get("created_at")),
        completed_at=_text(data.get("completed_at")),
        error_message=_text(data.get("error_message")),
        metadata=aggregate_meeting_metadata(metadata) if isinstance(metadata, Mapping) else None,
        summary=_text(data.get("summary")),
        meeting_minutes=_text(data.get("meeting_minutes")),
    )


def normalize_presentation_transcription(raw: Any) -> PresentationTranscriptionResponse:
    data = _mapping(raw)
    transcription = data.get("transcription")
    return PresentationTranscriptionResponse(
        id=_identifier(data),
        status=_status(data),
        file_name=_text(data.get("file_name")) or "",
        slides_count=_integer(data.get("slides_count")),
        transcription=aggregate_presentation_metadata(transcription)
        if isinstance(transcription, Mapping)
        else None,
        created_at=_text(data.get("created_at")),
        completed_at=_text(data.get("completed_at")),
        error_message=_text(data.get("error_message")),
        processing_time_seconds=_number(data.get("processing_time_seconds")),
    )


def with_meeting_minutes(
    transcription: TranscriptionResponse,
    minutes: MeetingMinutesResponse,
) -> TranscriptionResponse:
    """Return a new transcription carrying freshly generated minutes.

    The input is left untouched; an unsuccessful or empty response returns it as is.
    """
    if not minutes.success or not minutes.meeting_minutes:
        return transcription
    if minutes.transcription_id and transcription.id and minutes.transcription_id != transcription.id:
        logger.warning(
            "Meeting minutes for %s not applied to transcription %s",
            minutes.transcription_id,
            transcription.id,
        )
        return transcription
    return transcription.model_copy(update={"meeting_minutes": minutes.meeting_minutes})
