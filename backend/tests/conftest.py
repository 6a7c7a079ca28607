"""Shared fixtures for meeting_notes tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from meeting_notes.config import Settings
from meeting_notes.main import create_app

from .helpers import StubSummarizer


@pytest.fixture
def settings() -> Settings:
    return Settings(
        gemini_api_key="test-key",
        gemini_model="gemini-test",
        gemini_api_base="https://gemini.test/v1",
        gemini_timeout_seconds=5,
        gemini_max_retries=2,
        gemini_retry_backoff_seconds=0,
        max_upload_size_mb=1,
    )


@pytest.fixture
def stub_summarizer() -> StubSummarizer:
    return StubSummarizer()


@pytest.fixture
def client(settings: Settings, stub_summarizer: StubSummarizer):
    with TestClient(create_app(settings, summarizer=stub_summarizer)) as test_client:
        yield test_client
