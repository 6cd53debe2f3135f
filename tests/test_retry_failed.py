"""RetryFailedTrendsUseCase 테스트."""

from unittest.mock import Mock, call

import pytest

from src.application.use_cases.retry_failed import RetryFailedTrendsUseCase
from src.domain.exceptions import ProviderRetryExhaustedError
from tests.factories import make_trend, webpage_capture

LONG_TEXT = "Deno 3 adds first class npm workspace support. " * 3


def make_use_case(provider, session_factory, sleep, short_post=None, memory=None):
    return RetryFailedTrendsUseCase(
        provider=provider,
        session_factory=session_factory,
        min_length=50,
        delay_between_requests=1.5,
        short_post_provider=short_post,
        memory_reporter=memory,
        sleep=sleep,
    )


class TestRetryFailed:
    @pytest.mark.asyncio
    async def test_empty_input(self, scoring_provider, session_factory, no_sleep):
        uc = make_use_case(scoring_provider, session_factory, no_sleep)

        assert await uc.execute([]) == []
        assert session_factory.calls["opened"] == 0

    @pytest.mark.asyncio
    async def test_text_mode_attaches_content(self, scoring_provider, session_factory, content_fetcher, no_sleep):
        content_fetcher.fetch_content_with_captures.return_value = webpage_capture(LONG_TEXT, [b"s1"])
        uc = make_use_case(scoring_provider, session_factory, no_sleep)

        [result] = await uc.execute([make_trend(id=5)])

        assert result.success
        assert result.analysis.id == 5
        assert result.analysis.content == LONG_TEXT
        scoring_provider.analyze_images.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_vision_mode(self, scoring_provider, session_factory, content_fetcher, no_sleep):
        content_fetcher.fetch_content_with_captures.return_value = webpage_capture("", [b"s1", b"s2"])
        uc = make_use_case(scoring_provider, session_factory, no_sleep)

        [result] = await uc.execute([make_trend(id=5)])

        assert result.success
        assert result.analysis.content is None
        scoring_provider.analyze_images.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_insufficient_content(self, scoring_provider, session_factory, content_fetcher, no_sleep):
        content_fetcher.fetch_content_with_captures.return_value = webpage_capture("")
        uc = make_use_case(scoring_provider, session_factory, no_sleep)

        [result] = await uc.execute([make_trend(id=5)])

        assert not result.success
        assert result.error == "콘텐츠 부족: 0자, 스크린샷 없음"

    @pytest.mark.asyncio
    async def test_short_post_requires_grok(self, scoring_provider, session_factory, content_fetcher, no_sleep):
        uc = make_use_case(scoring_provider, session_factory, no_sleep, short_post=None)

        [result] = await uc.execute([make_trend(id=7, category="X")])

        assert not result.success
        assert "Grok" in result.error
        content_fetcher.fetch_content_with_captures.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_short_post_with_grok(
        self, scoring_provider, short_post_provider, session_factory, content_fetcher, no_sleep
    ):
        uc = make_use_case(scoring_provider, session_factory, no_sleep, short_post=short_post_provider)

        [result] = await uc.execute([make_trend(id=7, category="X")])

        assert result.success
        assert result.analysis.ai_model == "grok-test"
        content_fetcher.fetch_content_with_captures.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_error_on_one_item_continues(self, scoring_provider, session_factory, content_fetcher, no_sleep):
        content_fetcher.fetch_content_with_captures.return_value = webpage_capture(LONG_TEXT)
        scoring_provider.analyze_text.side_effect = [
            ProviderRetryExhaustedError("최대 재시도 횟수(3) 도달", "gemini", 3),
            scoring_provider.analyze_text.return_value,
        ]
        memory = Mock()
        uc = make_use_case(scoring_provider, session_factory, no_sleep, memory=memory)

        results = await uc.execute([make_trend(id=1), make_trend(id=2)])

        assert [r.success for r in results] == [False, True]
        assert "gemini" in results[0].error
        assert memory.call_count == 2
        assert no_sleep.await_args_list == [call(1.5)]
        assert session_factory.calls == {"opened": 1, "closed": 1}
