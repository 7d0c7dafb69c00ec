"""Configuration from environment variables (.env)."""

import os
from pathlib import Path
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass
class Config:
    project_root: Path
    logs_dir: Path
    audio_api_url: str
    ppt_api_url: str
    api_timeout_seconds: float
    search_default_limit: int
    search_similarity_threshold: float

    @classmethod
    def load(cls) -> "Config":
        project_root = Path(__file__).parent.parent.parent
        logs_dir = os.getenv("DASHBOARD_LOGS_DIR", "")
        return cls(
            project_root=project_root,
            logs_dir=Path(logs_dir) if logs_dir else project_root / "logs",
            audio_api_url=os.getenv("AUDIO_API_URL", "http://localhost:8000/api"),
            ppt_api_url=os.getenv("PPT_API_URL", "http://localhost:8001/ppt-api"),
            api_timeout_seconds=float(os.getenv("API_TIMEOUT_SECONDS", "30")),
            search_default_limit=int(os.getenv("SEARCH_DEFAULT_LIMIT", "10")),
            search_similarity_threshold=float(os.getenv("SEARCH_SIMILARITY_THRESHOLD", "0.7")),
        )

    def validate(self) -> list[str]:
        errors = []
        for name, url in (("AUDIO_API_URL", self.audio_api_url), ("PPT_API_URL", self.ppt_api_url)):
            if not url.startswith(("http://", "https://")):
                errors.append(f"{name} must be an http(s) URL: {url!r}")
        if self.api_timeout_seconds <= 0:
            errors.append(f"API_TIMEOUT_SECONDS must be positive: {self.api_timeout_seconds}")
        if self.search_default_limit < 1:
            errors.append(f"SEARCH_DEFAULT_LIMIT must be at least 1: {self.search_default_limit}")
        if not 0.0 <= self.search_similarity_threshold <= 1.0:
            errors.append(
                f"SEARCH_SIMILARITY_THRESHOLD must be within [0, 1]: {self.search_similarity_threshold}"
            )
        return errors


config = Config.load()
