"""Knowledge-base search against either backend, normalized to SearchResponse."""

import time

from src.backends.client import BackendClient
from src.contracts.dashboard_v1 import (
    Domain,
    PresentationSearchResponse,
    SearchQuery,
    SearchResponse,
)
from src.core.logger import logger
from src.normalization.records import match_records, normalize_record


async def search(
    backend: BackendClient,
    query: str,
    dataset_id: str | None = None,
    limit: int = 10,
    threshold: float = 0.7,
) -> SearchResponse:
    """Run one search and return the canonical response.

    execution_time_ms is measured here, around the network call, so it covers
    transit and is comparable across the two backends. Transport errors
    propagate; a payload with no recognizable record container yields an
    empty response.
    """
    request = SearchQuery(
        query=query,
        dataset_id=dataset_id,
        limit=limit,
        similarity_threshold=threshold,
    )
    domain = backend.domain
    logger.search_request(domain.value, query, request.model_dump(exclude_none=True))

    t0 = time.monotonic()
    payload = await backend.search(request)
    shape, records = match_records(payload)
    results = [normalize_record(record, domain) for record in records]
    elapsed_ms = round((time.monotonic() - t0) * 1000, 1)

    if shape is None:
        logger.warning(f"{domain} search: no record container in response, returning 0 results")
    logger.search_response(domain.value, query, shape, len(results), elapsed_ms)

    response_type = PresentationSearchResponse if domain == Domain.PRESENTATION else SearchResponse
    return response_type(results=results, query=query, execution_time_ms=elapsed_ms)
