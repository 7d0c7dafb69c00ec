"""One-shot interface: run a single search or detail fetch, print JSON, exit."""

from __future__ import annotations

import asyncio

import httpx

from src.backends.client import create_client
from src.contracts.dashboard_v1 import Domain
from src.core.config import config
from src.services.search import search
from src.services.transcriptions import get_transcription

RETRY_MESSAGE = "Error: the backend could not be reached. Please try again."


def parse_domain(value: str) -> Domain | None:
    aliases = {"audio": Domain.AUDIO, "ppt": Domain.PRESENTATION, "presentation": Domain.PRESENTATION}
    return aliases.get((value or "").strip().lower())


async def run_search(
    domain: Domain,
    query: str,
    dataset_id: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    text = (query or "").strip()
    if not text:
        print("Error: query must not be empty")
        return 2

    async with create_client(domain, transport=transport) as backend:
        try:
            response = await search(
                backend,
                text,
                dataset_id=dataset_id,
                limit=config.search_default_limit,
                threshold=config.search_similarity_threshold,
            )
        except httpx.HTTPError:
            print(RETRY_MESSAGE)
            return 1
    print(response.model_dump_json(indent=2))
    return 0


async def run_transcription(
    domain: Domain,
    transcription_id: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    if not (transcription_id or "").strip():
        print("Error: transcription id must not be empty")
        return 2

    async with create_client(domain, transport=transport) as backend:
        try:
            detail = await get_transcription(backend, transcription_id.strip())
        except httpx.HTTPError:
            print(RETRY_MESSAGE)
            return 1
    print(detail.model_dump_json(indent=2))
    return 0


def main_search(domain: Domain, query: str, dataset_id: str | None = None) -> int:
    return asyncio.run(run_search(domain, query, dataset_id=dataset_id))


def main_transcription(domain: Domain, transcription_id: str) -> int:
    return asyncio.run(run_transcription(domain, transcription_id))
