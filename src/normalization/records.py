"""Record-shape resolution and per-record normalization for search payloads.

The knowledge-base provider behind both backends returns hits under different
envelopes depending on deployment, and nests each hit's fields either under a
``segment`` (with an optional ``document``) or flat on the record. Both steps
here are table driven: an ordered list of candidate locations, first usable
value wins, and a default when nothing matches. Neither step raises.
"""

import logging
import math
import uuid
from collections.abc import Callable, Mapping
from typing import Any

from src.contracts.dashboard_v1 import Domain, PresentationSearchResult, SearchResult

logger = logging.getLogger(__name__)

_SEQUENCE_TYPES = (list, tuple)


# ---------------------------------------------------------------------------
# Record shapes
# ---------------------------------------------------------------------------


def _get(value: Any, key: str) -> Any:
    return value.get(key) if isinstance(value, Mapping) else None


def _records_key(payload: Any) -> Any:
    return _get(payload, "records")


def _data_key(payload: Any) -> Any:
    return _get(payload, "data")


def _bare_array(payload: Any) -> Any:
    return payload


def _query_records(payload: Any) -> Any:
    return _get(_get(payload, "query"), "records")


# Ordered by how often each envelope shows up in practice.
RECORD_SHAPES: tuple[tuple[str, Callable[[Any], Any]], ...] = (
    ("records", _records_key),
    ("data", _data_key),
    ("bare_array", _bare_array),
    ("query.records", _query_records),
)


def match_records(payload: Any) -> tuple[str | None, list[Any]]:
    """Matched envelope name and its hit list; (None, []) when no shape matches."""
    for name, extract in RECORD_SHAPES:
        candidate = extract(payload)
        if isinstance(candidate, _SEQUENCE_TYPES):
            return name, list(candidate)
    logger.debug(
        "No record container in payload of type %s", type(payload).__name__
    )
    return None, []


def match_record_shape(payload: Any) -> str | None:
    """Name of the envelope the payload matched, or None."""
    return match_records(payload)[0]


def resolve_records(payload: Any) -> list[Any]:
    """Extract the hit list from a search payload; [] when no shape matches."""
    return match_records(payload)[1]


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------


def _as_identifier(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value or None
    if isinstance(value, int):
        return str(value)
    return None


def _as_text(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _as_score(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        score = float(value)
    except (ValueError, OverflowError):
        return None
    return score if math.isfinite(score) else None


def _as_metadata(value: Any) -> dict[str, Any] | None:
    if isinstance(value, Mapping):
        return {str(k): v for k, v in value.items()}
    return None


def _as_slide_number(value: Any) -> int | str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value:
        return value
    return None


# ---------------------------------------------------------------------------
# Field resolution table
# ---------------------------------------------------------------------------

# output field -> (coercer, ordered (root, key) candidates)
FIELD_SOURCES: dict[str, tuple[Callable[[Any], Any], tuple[tuple[str, str], ...]]] = {
    "id": (
        _as_identifier,
        (("segment", "id"), ("record", "id"), ("segment", "document_id")),
    ),
    "text": (
        _as_text,
        (
            ("segment", "content"),
            ("record", "content"),
            ("segment", "text"),
            ("record", "text"),
        ),
    ),
    "score": (
        _as_score,
        (("record", "score"), ("segment", "score"), ("record", "similarity")),
    ),
    "metadata": (
        _as_metadata,
        (
            ("document", "doc_metadata"),
            ("segment", "metadata"),
            ("record", "metadata"),
        ),
    ),
    "transcription_id": (
        _as_identifier,
        (
            ("segment", "document_id"),
            ("document", "id"),
            ("record", "document_id"),
            ("segment", "id"),
        ),
    ),
}

PRESENTATION_FIELD_SOURCES: dict[str, tuple[Callable[[Any], Any], tuple[tuple[str, str], ...]]] = {
    "slide_number": (
        _as_slide_number,
        (("segment", "slide_number"), ("record", "slide_number")),
    ),
    "element_id": (
        _as_identifier,
        (("segment", "element_id"), ("record", "element_id")),
    ),
}


def _roots(raw: Any) -> dict[str, Mapping[str, Any]]:
    record = raw if isinstance(raw, Mapping) else {}
    segment = record.get("segment")
    if not isinstance(segment, Mapping):
        segment = record
    document = segment.get("document")
    if not isinstance(document, Mapping):
        document = record.get("document")
    if not isinstance(document, Mapping):
        document = {}
    return {"record": record, "segment": segment, "document": document}


def _resolve_field(
    roots: dict[str, Mapping[str, Any]],
    coerce: Callable[[Any], Any],
    candidates: tuple[tuple[str, str], ...],
) -> Any:
    for root, key in candidates:
        value = coerce(roots[root].get(key))
        if value is not None:
            return value
    return None


def resolve_fields(
    raw: Any,
    sources: Mapping[str, tuple[Callable[[Any], Any], tuple[tuple[str, str], ...]]] = FIELD_SOURCES,
) -> dict[str, Any]:
    """Resolve every field in ``sources``; unresolved fields come back as None."""
    roots = _roots(raw)
    return {
        name: _resolve_field(roots, coerce, candidates)
        for name, (coerce, candidates) in sources.items()
    }


def normalize_record(raw: Any, domain: Domain = Domain.AUDIO) -> SearchResult:
    """Map one raw hit-record to a SearchResult. Total for any input."""
    fields = resolve_fields(raw)
    values: dict[str, Any] = {
        "id": fields["id"] or uuid.uuid4().hex,
        "text": fields["text"] or "",
        "score": fields["score"] if fields["score"] is not None else 0.0,
        "metadata": fields["metadata"] if fields["metadata"] is not None else {},
        "transcription_id": fields["transcription_id"] or "",
    }
    if domain == Domain.PRESENTATION:
        values.update(resolve_fields(raw, PRESENTATION_FIELD_SOURCES))
        return PresentationSearchResult(**values)
    return SearchResult(**values)
