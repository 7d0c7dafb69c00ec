from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from src.contracts.dashboard_v1 import Domain, PresentationSearchResult, SearchResult
from src.normalization.records import FIELD_SOURCES, normalize_record


def test_empty_record_gets_defaults_and_generated_id():
    result = normalize_record({})
    assert isinstance(result, SearchResult)
    assert result.text == ""
    assert result.score == 0
    assert result.metadata == {}
    assert result.transcription_id == ""
    assert result.id


def test_generated_ids_differ_between_records():
    assert normalize_record({}).id != normalize_record({}).id


@pytest.mark.parametrize("raw", [None, 0, "text", 3.5, ["a"], True])
def test_primitives_normalize_to_defaults(raw):
    result = normalize_record(raw)
    assert result.id
    assert result.text == ""
    assert result.score == 0.0
    assert result.metadata == {}


def test_segment_document_round_trip():
    raw = {
        "segment": {"content": "hello", "document": {"doc_metadata": {"speaker": "A"}}},
        "score": 0.82,
    }
    result = normalize_record(raw)
    assert result.text == "hello"
    assert result.score == 0.82
    assert result.metadata == {"speaker": "A"}


def test_flattened_record_is_read_directly():
    raw = {
        "id": "r1",
        "content": "flat text",
        "score": 0.4,
        "metadata": {"k": "v"},
        "document_id": "doc-9",
    }
    result = normalize_record(raw)
    assert result.id == "r1"
    assert result.text == "flat text"
    assert result.score == 0.4
    assert result.metadata == {"k": "v"}
    assert result.transcription_id == "doc-9"


class TestIdResolution:
    def test_segment_id_first(self):
        raw = {"id": "rec", "segment": {"id": "seg", "document_id": "doc"}}
        assert normalize_record(raw).id == "seg"

    def test_record_id_second(self):
        raw = {"id": "rec", "segment": {"document_id": "doc"}}
        assert normalize_record(raw).id == "rec"

    def test_segment_document_id_third(self):
        raw = {"segment": {"document_id": "doc"}}
        assert normalize_record(raw).id == "doc"

    def test_integer_id_is_stringified(self):
        assert normalize_record({"id": 7}).id == "7"


class TestTextResolution:
    def test_priority_order(self):
        raw = {
            "content": "record content",
            "text": "record text",
            "segment": {"content": "segment content", "text": "segment text"},
        }
        assert normalize_record(raw).text == "segment content"
        raw["segment"].pop("content")
        assert normalize_record(raw).text == "record content"
        raw.pop("content")
        assert normalize_record(raw).text == "segment text"
        raw["segment"].pop("text")
        assert normalize_record(raw).text == "record text"

    def test_empty_string_falls_through(self):
        raw = {"content": "fallback", "segment": {"content": ""}}
        assert normalize_record(raw).text == "fallback"


class TestScoreResolution:
    def test_record_score_beats_segment_score(self):
        raw = {"score": 0.9, "segment": {"score": 0.1}}
        assert normalize_record(raw).score == 0.9

    def test_segment_score_then_similarity(self):
        assert normalize_record({"segment": {"score": 0.3}, "similarity": 0.2}).score == 0.3
        assert normalize_record({"similarity": 0.2}).score == 0.2

    def test_zero_score_is_a_present_value(self):
        raw = {"score": 0, "segment": {"score": 0.5}}
        assert normalize_record(raw).score == 0.0

    def test_numeric_string_is_accepted(self):
        assert normalize_record({"score": "0.75"}).score == 0.75

    def test_unusable_score_falls_through(self):
        raw = {"score": "high", "segment": {"score": True}, "similarity": 0.6}
        assert normalize_record(raw).score == 0.6


class TestMetadataResolution:
    def test_document_metadata_first(self):
        raw = {
            "metadata": {"from": "record"},
            "segment": {
                "metadata": {"from": "segment"},
                "document": {"doc_metadata": {"from": "document"}},
            },
        }
        assert normalize_record(raw).metadata == {"from": "document"}

    def test_segment_then_record_metadata(self):
        raw = {"metadata": {"from": "record"}, "segment": {"metadata": {"from": "segment"}}}
        assert normalize_record(raw).metadata == {"from": "segment"}
        raw["segment"].pop("metadata")
        assert normalize_record(raw).metadata == {"from": "record"}

    def test_record_level_document_used_when_segment_has_none(self):
        raw = {"segment": {"id": "s"}, "document": {"doc_metadata": {"speaker": "B"}, "id": "d1"}}
        result = normalize_record(raw)
        assert result.metadata == {"speaker": "B"}
        assert result.transcription_id == "d1"

    def test_non_mapping_metadata_is_skipped(self):
        raw = {"metadata": ["not", "a", "mapping"]}
        assert normalize_record(raw).metadata == {}


class TestTranscriptionIdResolution:
    def test_priority_order(self):
        raw = {
            "document_id": "record-doc",
            "segment": {"id": "seg", "document_id": "seg-doc", "document": {"id": "doc"}},
        }
        assert normalize_record(raw).transcription_id == "seg-doc"
        raw["segment"].pop("document_id")
        assert normalize_record(raw).transcription_id == "doc"
        raw["segment"].pop("document")
        assert normalize_record(raw).transcription_id == "record-doc"
        raw.pop("document_id")
        assert normalize_record(raw).transcription_id == "seg"


def test_presentation_records_carry_slide_fields():
    raw = {"segment": {"id": "s1", "content": "Roadmap", "slide_number": 4, "element_id": "e-2"}}
    result = normalize_record(raw, Domain.PRESENTATION)
    assert isinstance(result, PresentationSearchResult)
    assert result.slide_number == 4
    assert result.element_id == "e-2"


def test_presentation_slide_fields_default_to_none():
    result = normalize_record({"content": "x"}, Domain.PRESENTATION)
    assert result.slide_number is None
    assert result.element_id is None


def test_audio_records_ignore_slide_fields():
    result = normalize_record({"slide_number": 2}, Domain.AUDIO)
    assert type(result) is SearchResult


def test_field_table_covers_every_result_field():
    assert set(FIELD_SOURCES) == {"id", "text", "score", "metadata", "transcription_id"}


json_values = st.recursive(
    st.none() | st.booleans() | st.integers() | st.floats() | st.text(max_size=8),
    lambda children: st.lists(children, max_size=3)
    | st.dictionaries(
        st.sampled_from(
            ["segment", "document", "id", "content", "text", "score", "similarity",
             "metadata", "doc_metadata", "document_id", "slide_number", "element_id"]
        ),
        children,
        max_size=5,
    ),
    max_leaves=15,
)


@pytest.mark.property
@given(json_values, st.sampled_from(list(Domain)))
def test_normalization_is_total(raw, domain):
    result = normalize_record(raw, domain)
    assert result.id
    assert isinstance(result.text, str)
    assert isinstance(result.score, float)
    assert isinstance(result.metadata, dict)
    assert isinstance(result.transcription_id, str)
