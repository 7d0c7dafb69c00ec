"""HTTP client for the audio and presentation backends.

One BackendClient per domain, built from an explicit BackendClientConfig.
Methods return the decoded JSON body untouched; shaping it is the
normalization layer's job. Transport failures are logged and re-raised.
"""

import json
from dataclasses import dataclass
from typing import Any

import httpx

from src.contracts.dashboard_v1 import AnalysisRequest, Domain, SearchQuery
from src.core.config import Config, config
from src.core.logger import logger


@dataclass(frozen=True)
class BackendClientConfig:
    domain: Domain
    base_url: str
    timeout: float = 30.0
    transport: httpx.AsyncBaseTransport | None = None

    @classmethod
    def for_domain(
        cls,
        domain: Domain,
        settings: Config | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "BackendClientConfig":
        settings = settings or config
        base_url = settings.audio_api_url if domain == Domain.AUDIO else settings.ppt_api_url
        return cls(
            domain=domain,
            base_url=base_url.rstrip("/"),
            timeout=settings.api_timeout_seconds,
            transport=transport,
        )


class BackendClient:
    """Thin async JSON client for one backend domain."""

    def __init__(self, client_config: BackendClientConfig):
        self.config = client_config
        self.client = httpx.AsyncClient(
            base_url=client_config.base_url,
            timeout=client_config.timeout,
            transport=client_config.transport,
        )

    @property
    def domain(self) -> Domain:
        return self.config.domain

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self):
        await self.client.aclose()

    def _require(self, domain: Domain, operation: str) -> None:
        if self.domain != domain:
            raise ValueError(f"{operation} is only available on the {domain} backend, not {self.domain}")

    async def _request(self, method: str, path: str, operation: str, **kwargs) -> Any:
        try:
            response = await self.client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.transport_failure(self.domain.value, operation, e)
            raise
        if not response.content:
            return None
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning(
                f"{self.domain} {operation}: response body is not JSON "
                f"({response.headers.get('content-type', 'no content-type')})"
            )
            return None

    async def search(self, query: SearchQuery) -> Any:
        return await self._request(
            "POST",
            "/search/dify",
            "search",
            json=query.model_dump(exclude_none=True),
        )

    async def get_transcription(self, transcription_id: str) -> Any:
        return await self._request("GET", f"/transcriptions/{transcription_id}", "get_transcription")

    async def list_transcriptions(self, limit: int = 10, status: str | None = None) -> Any:
        params: dict[str, Any] = {"limit": limit}
        if status:
            params["status"] = status
        return await self._request("GET", "/transcriptions", "list_transcriptions", params=params)

    async def delete_transcription(self, transcription_id: str) -> None:
        await self._request("DELETE", f"/transcriptions/{transcription_id}", "delete_transcription")

    async def generate_analysis(self, transcription_id: str, request: AnalysisRequest) -> Any:
        self._require(Domain.AUDIO, "generate_analysis")
        return await self._request(
            "POST",
            f"/transcriptions/{transcription_id}/analyze",
            "generate_analysis",
            json=request.model_dump(exclude_none=True),
        )

    async def list_datasets(self, page: int = 1, limit: int = 20) -> Any:
        self._require(Domain.AUDIO, "list_datasets")
        return await self._request(
            "GET", "/datasets", "list_datasets", params={"page": page, "limit": limit}
        )

    async def create_dataset(self, name: str, description: str | None = None) -> Any:
        self._require(Domain.AUDIO, "create_dataset")
        body: dict[str, Any] = {"name": name}
        if description is not None:
            body["description"] = description
        return await self._request("POST", "/datasets", "create_dataset", json=body)

    async def get_slide(self, transcription_id: str, slide_number: int) -> Any:
        self._require(Domain.PRESENTATION, "get_slide")
        return await self._request(
            "GET", f"/slides/{transcription_id}/{slide_number}", "get_slide"
        )

    async def health_check(self) -> Any:
        return await self._request("GET", "/health", "health_check")

    async def get_statistics(self) -> Any:
        return await self._request("GET", "/stats", "get_statistics")


def create_client(domain: Domain, transport: httpx.AsyncBaseTransport | None = None) -> BackendClient:
    return BackendClient(BackendClientConfig.for_domain(domain, transport=transport))
