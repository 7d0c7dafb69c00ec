import pytest
from pydantic import ValidationError

from src.backends.client import BackendClientConfig
from src.contracts.dashboard_v1 import (
    Domain,
    SearchQuery,
    SearchResponse,
    SearchResult,
    TranscriptionSegment,
)
from src.core.config import Config


def test_total_found_always_matches_results():
    response = SearchResponse(
        results=[SearchResult(id="a"), SearchResult(id="b")],
        query="q",
    )
    assert response.total_found == 2
    assert response.model_dump()["total_found"] == 2


def test_search_result_rejects_empty_id():
    with pytest.raises(ValidationError):
        SearchResult(id="")


def test_search_response_is_frozen():
    response = SearchResponse(query="q")
    with pytest.raises(ValidationError):
        response.query = "other"


def test_search_query_bounds():
    assert SearchQuery(query="q").model_dump(exclude_none=True) == {
        "query": "q",
        "limit": 10,
        "similarity_threshold": 0.7,
    }
    with pytest.raises(ValidationError):
        SearchQuery(query="q", similarity_threshold=1.5)
    with pytest.raises(ValidationError):
        SearchQuery(query="q", limit=0)


def test_segment_confidence_must_be_in_unit_range():
    with pytest.raises(ValidationError):
        TranscriptionSegment(start_time=0, end_time=1, confidence=1.2)


def _config(**overrides) -> Config:
    base = Config.load()
    values = {**base.__dict__, **overrides}
    return Config(**values)


def test_config_validate_accepts_defaults():
    assert _config().validate() == []


def test_config_validate_reports_bad_values():
    errors = _config(
        audio_api_url="localhost:8000",
        api_timeout_seconds=0,
        search_similarity_threshold=2.0,
    ).validate()
    assert len(errors) == 3
    assert any("AUDIO_API_URL" in e for e in errors)


def test_client_config_is_resolved_per_domain():
    settings = _config(audio_api_url="http://audio.test/api/", ppt_api_url="http://ppt.test/ppt-api")
    audio = BackendClientConfig.for_domain(Domain.AUDIO, settings)
    presentation = BackendClientConfig.for_domain(Domain.PRESENTATION, settings)
    assert audio.base_url == "http://audio.test/api"
    assert presentation.base_url == "http://ppt.test/ppt-api"
    assert audio.timeout == settings.api_timeout_seconds
