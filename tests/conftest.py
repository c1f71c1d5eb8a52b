from __future__ import annotations

from typing import Dict, List, Tuple

import pytest
from fastapi.testclient import TestClient

from transcript_server.main import app
from transcript_server.services.transcript_service import TranscriptService

LANGUAGES = ("en", "fr", "es", "de")


class FakeCaptionSource:
    """Scripted stand-in for the caption extractor, keyed by language."""

    def __init__(self, tracks: Dict[str, object]):
        self.tracks = tracks
        self.calls: List[Tuple[str, str]] = []

    async def __call__(self, video_id: str, lang: str):
        self.calls.append((video_id, lang))
        result = self.tracks.get(lang, [])
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def languages_tried(self) -> List[str]:
        return [lang for _video_id, lang in self.calls]


@pytest.fixture()
def make_client():
    original = app.state.transcript_service

    def _make(tracks: Dict[str, object]):
        source = FakeCaptionSource(tracks)
        app.state.transcript_service = TranscriptService(source, LANGUAGES)
        return TestClient(app), source

    yield _make
    app.state.transcript_service = original
