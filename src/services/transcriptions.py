"""Transcription detail, listing, and the smaller backend endpoints.

Detail and list payloads go through the metadata aggregator. The small
envelopes (datasets, stats, health) are validated item by item; an item that
does not fit is skipped and logged, never raised to the caller.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from src.backends.client import BackendClient
from src.contracts.dashboard_v1 import (
    AnalysisRequest,
    AnalysisResponse,
    Dataset,
    Domain,
    HealthCheck,
    PresentationTranscriptionResponse,
    SlideData,
    Statistics,
    TranscriptionList,
    TranscriptionResponse,
)
from src.normalization.metadata import (
    normalize_presentation_transcription,
    normalize_slide,
    normalize_transcription,
)

logger = logging.getLogger(__name__)


def normalize_detail(
    domain: Domain, payload: Any
) -> TranscriptionResponse | PresentationTranscriptionResponse:
    if domain == Domain.PRESENTATION:
        return normalize_presentation_transcription(payload)
    return normalize_transcription(payload)


async def get_transcription(
    backend: BackendClient, transcription_id: str
) -> TranscriptionResponse | PresentationTranscriptionResponse:
    payload = await backend.get_transcription(transcription_id)
    return normalize_detail(backend.domain, payload)


async def list_transcriptions(
    backend: BackendClient, limit: int = 10, status: str | None = None
) -> TranscriptionList:
    payload = await backend.list_transcriptions(limit=limit, status=status)
    if isinstance(payload, Mapping):
        items = payload.get("transcriptions")
        total = payload.get("total")
    else:
        items, total = payload, None
    if not isinstance(items, (list, tuple)):
        items = []
    transcriptions = [normalize_detail(backend.domain, item) for item in items]
    if isinstance(total, bool) or not isinstance(total, int) or total < 0:
        total = len(transcriptions)
    return TranscriptionList(transcriptions=transcriptions, total=total)


async def delete_transcription(backend: BackendClient, transcription_id: str) -> None:
    await backend.delete_transcription(transcription_id)


async def get_slide(
    backend: BackendClient, transcription_id: str, slide_number: int
) -> SlideData:
    payload = await backend.get_slide(transcription_id, slide_number)
    return normalize_slide(payload, slide_number)


async def generate_analysis(
    backend: BackendClient, transcription_id: str, request: AnalysisRequest
) -> AnalysisResponse:
    payload = await backend.generate_analysis(transcription_id, request)
    analysis = payload.get("analysis") if isinstance(payload, Mapping) else None
    return AnalysisResponse(analysis=analysis if isinstance(analysis, str) else "")


def _validate_or_none(model: type, payload: Any, label: str):
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        logger.debug("Skipping %s that does not fit %s: %s", label, model.__name__, e)
        return None


async def list_datasets(backend: BackendClient, page: int = 1, limit: int = 20) -> list[Dataset]:
    payload = await backend.list_datasets(page=page, limit=limit)
    items = payload.get("data") if isinstance(payload, Mapping) else payload
    if not isinstance(items, (list, tuple)):
        return []
    datasets = [_validate_or_none(Dataset, item, "dataset") for item in items]
    return [d for d in datasets if d is not None]


async def create_dataset(
    backend: BackendClient, name: str, description: str | None = None
) -> Dataset | None:
    payload = await backend.create_dataset(name, description)
    return _validate_or_none(Dataset, payload, "dataset")


async def get_statistics(backend: BackendClient) -> Statistics:
    payload = await backend.get_statistics()
    return _validate_or_none(Statistics, payload, "statistics") or Statistics()


async def health_check(backend: BackendClient) -> HealthCheck:
    payload = await backend.health_check()
    return _validate_or_none(HealthCheck, payload, "health check") or HealthCheck()
