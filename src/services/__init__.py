"""Dashboard services: search and transcription detail over both backends."""

from src.services.search import search
from src.services.transcriptions import get_transcription, list_transcriptions

__all__ = [
    "get_transcription",
    "list_transcriptions",
    "search",
]
