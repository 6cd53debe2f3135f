from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, Mock

import pytest

from src.domain.entities import CaptureResult
from tests.factories import make_scored


@pytest.fixture
def scoring_provider():
    """기본(Gemini 역할) 프로바이더 목."""
    provider = Mock()
    provider.model_name = "gemini-test-flash"
    provider.default_model = "gemini-test-flash"
    provider.build_prompt = Mock(return_value="PROMPT")
    provider.analyze_text = AsyncMock(return_value=make_scored(7))
    provider.analyze_images = AsyncMock(return_value=make_scored(5))
    provider.analyze_video = AsyncMock(return_value=make_scored(6))
    return provider


@pytest.fixture
def short_post_provider():
    """Grok 역할 프로바이더 목."""
    provider = Mock()
    provider.model_name = "grok-test"
    provider.analyze_short_post = AsyncMock(return_value=make_scored(8))
    provider.analyze_with_content = AsyncMock(return_value=make_scored(4))
    provider.analyze_with_vision = AsyncMock(return_value=make_scored(3))
    return provider


@pytest.fixture
def content_fetcher():
    fetcher = Mock()
    fetcher.fetch_content = AsyncMock(return_value=None)
    fetcher.fetch_content_with_captures = AsyncMock(return_value=CaptureResult())
    return fetcher


@pytest.fixture
def session_factory(content_fetcher):
    """브라우저 세션 대신 content_fetcher 목을 내주는 팩토리. 열림/닫힘 횟수를 기록한다."""
    calls = {"opened": 0, "closed": 0}

    @asynccontextmanager
    async def factory():
        calls["opened"] += 1
        try:
            yield content_fetcher
        finally:
            calls["closed"] += 1

    factory.calls = calls
    return factory


@pytest.fixture
def no_sleep():
    return AsyncMock(return_value=None)
