"""AnalyzeTrendUseCase / AnalyzeVideoUseCase 테스트."""

import pytest

from src.application.use_cases.analyze_trend import AnalyzeTrendUseCase
from src.application.use_cases.analyze_video import AnalyzeVideoUseCase
from src.domain.entities import (
    ContentFetchResult,
    ContentProvenance,
    ContentType,
    TrendStatus,
)
from src.domain.exceptions import ProviderFatalError
from src.domain.services.ai_provider import ProviderName
from tests.factories import make_scored, make_trend, webpage_capture

MIN_LENGTH = 50
LONG_TEXT = "Bun 2.0 ships a new bundler with native CSS support. " * 3
STORED = "Stored body from the scraper with enough detail to analyze it. " * 2


def make_use_case(provider, fetcher, short_post=None, force=None):
    video = AnalyzeVideoUseCase(
        provider=provider,
        content_fetcher=fetcher,
        min_length=MIN_LENGTH,
        fallback_model="gemini-test-flash",
    )
    return AnalyzeTrendUseCase(
        provider=provider,
        content_fetcher=fetcher,
        video_analyzer=video,
        min_length=MIN_LENGTH,
        short_post_provider=short_post,
        force_provider=force,
    )


class TestRouting:
    @pytest.mark.asyncio
    async def test_missing_id_is_skipped(self, scoring_provider, content_fetcher):
        uc = make_use_case(scoring_provider, content_fetcher)

        outcome = await uc.analyze(make_trend(id=None))

        assert outcome.status is TrendStatus.RAW
        content_fetcher.fetch_content_with_captures.assert_not_awaited()
        scoring_provider.analyze_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_aggregator_uses_stored_content_without_fetch(self, scoring_provider, content_fetcher):
        uc = make_use_case(scoring_provider, content_fetcher)

        outcome = await uc.analyze(make_trend(category="Reddit", content=STORED))

        content_fetcher.fetch_content_with_captures.assert_not_awaited()
        content_fetcher.fetch_content.assert_not_awaited()
        assert scoring_provider.build_prompt.call_args.args[3] == STORED
        assert outcome.status is TrendStatus.ANALYZED
        # 저장본만 사용한 경우 content는 다시 기록하지 않는다
        assert outcome.analysis.content is None

    @pytest.mark.asyncio
    async def test_short_post_goes_to_grok_without_fetch(
        self, scoring_provider, short_post_provider, content_fetcher
    ):
        uc = make_use_case(scoring_provider, content_fetcher, short_post=short_post_provider)
        trend = make_trend(category="X", link="https://x.com/dev/status/1")

        outcome = await uc.analyze(trend)

        content_fetcher.fetch_content_with_captures.assert_not_awaited()
        short_post_provider.analyze_short_post.assert_awaited_once_with(trend)
        scoring_provider.analyze_text.assert_not_awaited()
        assert outcome.analysis.score == 8
        assert outcome.analysis.ai_model == "grok-test"

    @pytest.mark.asyncio
    async def test_short_post_without_grok_is_skipped(self, scoring_provider, content_fetcher):
        uc = make_use_case(scoring_provider, content_fetcher, short_post=None)

        outcome = await uc.analyze(make_trend(category="X"))

        assert outcome.status is TrendStatus.RAW
        assert outcome.analysis is None
        scoring_provider.analyze_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_forced_grok_uses_fetched_content(
        self, scoring_provider, short_post_provider, content_fetcher
    ):
        content_fetcher.fetch_content_with_captures.return_value = webpage_capture(LONG_TEXT)
        uc = make_use_case(
            scoring_provider, content_fetcher, short_post=short_post_provider, force=ProviderName.GROK
        )
        trend = make_trend()

        outcome = await uc.analyze(trend)

        short_post_provider.analyze_with_content.assert_awaited_once_with(trend, LONG_TEXT)
        assert outcome.analysis.ai_model == "grok-test"
        assert outcome.analysis.content == LONG_TEXT

    @pytest.mark.asyncio
    async def test_forced_grok_vision_when_only_screenshots(
        self, scoring_provider, short_post_provider, content_fetcher
    ):
        content_fetcher.fetch_content_with_captures.return_value = webpage_capture("", [b"s1"])
        uc = make_use_case(
            scoring_provider, content_fetcher, short_post=short_post_provider, force=ProviderName.GROK
        )
        trend = make_trend()

        await uc.analyze(trend)

        short_post_provider.analyze_with_vision.assert_awaited_once_with(trend, "", [b"s1"])

    @pytest.mark.asyncio
    async def test_forced_gemini_for_short_post(self, scoring_provider, short_post_provider, content_fetcher):
        uc = make_use_case(
            scoring_provider, content_fetcher, short_post=short_post_provider, force=ProviderName.GEMINI
        )

        outcome = await uc.analyze(make_trend(category="X", content=STORED))

        short_post_provider.analyze_short_post.assert_not_awaited()
        scoring_provider.analyze_text.assert_awaited_once()
        assert outcome.analysis.ai_model == "gemini-test-flash"


class TestContentAcquisition:
    @pytest.mark.asyncio
    async def test_live_content_overrides_short_stored(self, scoring_provider, content_fetcher):
        content_fetcher.fetch_content_with_captures.return_value = webpage_capture(LONG_TEXT)
        uc = make_use_case(scoring_provider, content_fetcher)

        outcome = await uc.analyze(make_trend(content="짧은 저장본"))

        assert scoring_provider.build_prompt.call_args.args[3] == LONG_TEXT
        assert outcome.analysis.content == LONG_TEXT

    @pytest.mark.asyncio
    async def test_falls_back_to_longer_stored_content(self, scoring_provider, content_fetcher):
        content_fetcher.fetch_content_with_captures.return_value = webpage_capture("", [b"s1"])
        uc = make_use_case(scoring_provider, content_fetcher)

        outcome = await uc.analyze(make_trend(content=STORED))

        assert scoring_provider.build_prompt.call_args.args[3] == STORED
        scoring_provider.analyze_images.assert_not_awaited()
        assert outcome.analysis.content is None

    @pytest.mark.asyncio
    async def test_fetch_exception_falls_back_to_stored(self, scoring_provider, content_fetcher):
        content_fetcher.fetch_content_with_captures.side_effect = RuntimeError("browser gone")
        uc = make_use_case(scoring_provider, content_fetcher)

        outcome = await uc.analyze(make_trend(content=STORED))

        assert outcome.status is TrendStatus.ANALYZED
        assert scoring_provider.build_prompt.call_args.args[3] == STORED

    @pytest.mark.asyncio
    async def test_vision_mode_when_text_insufficient(self, scoring_provider, content_fetcher):
        content_fetcher.fetch_content_with_captures.return_value = webpage_capture("", [b"s1", b"s2"])
        uc = make_use_case(scoring_provider, content_fetcher)
        trend = make_trend()

        outcome = await uc.analyze(trend)

        scoring_provider.analyze_images.assert_awaited_once_with([b"s1", b"s2"], trend.title, trend.category)
        scoring_provider.analyze_text.assert_not_awaited()
        assert outcome.analysis.score == 5
        assert outcome.analysis.content is None

    @pytest.mark.asyncio
    async def test_nothing_to_analyze_is_skipped(self, scoring_provider, content_fetcher):
        uc = make_use_case(scoring_provider, content_fetcher)

        outcome = await uc.analyze(make_trend())

        assert outcome.status is TrendStatus.RAW
        scoring_provider.analyze_text.assert_not_awaited()
        scoring_provider.analyze_images.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("length,text_mode", [(MIN_LENGTH, True), (MIN_LENGTH - 1, False)])
    async def test_threshold_boundary(self, scoring_provider, content_fetcher, length, text_mode):
        content_fetcher.fetch_content_with_captures.return_value = webpage_capture("a" * length, [b"s1"])
        uc = make_use_case(scoring_provider, content_fetcher)

        await uc.analyze(make_trend())

        assert scoring_provider.analyze_text.await_count == (1 if text_mode else 0)
        assert scoring_provider.analyze_images.await_count == (0 if text_mode else 1)


class TestFailures:
    @pytest.mark.asyncio
    async def test_provider_error_is_recorded_as_failure(self, scoring_provider, content_fetcher):
        content_fetcher.fetch_content_with_captures.return_value = webpage_capture(LONG_TEXT)
        scoring_provider.analyze_text.side_effect = ProviderFatalError("재시도 불가 오류", "gemini", 1)
        uc = make_use_case(scoring_provider, content_fetcher)

        outcome = await uc.analyze(make_trend())

        assert outcome.status is TrendStatus.FAIL
        assert outcome.analysis is None
        assert await uc.execute(make_trend()) is None

    @pytest.mark.asyncio
    async def test_rejected_when_score_zero(self, scoring_provider, content_fetcher):
        content_fetcher.fetch_content_with_captures.return_value = webpage_capture(LONG_TEXT)
        scoring_provider.analyze_text.return_value = make_scored(0)
        uc = make_use_case(scoring_provider, content_fetcher)

        outcome = await uc.analyze(make_trend())

        assert outcome.status is TrendStatus.REJECTED
        assert outcome.analysis.score == 0


class TestVideo:
    @pytest.mark.asyncio
    async def test_video_without_transcript_uses_url_analysis(self, scoring_provider, content_fetcher):
        uc = make_use_case(scoring_provider, content_fetcher)
        trend = make_trend(category="YouTube", link="https://www.youtube.com/watch?v=abc123xyz")

        outcome = await uc.analyze(trend)

        content_fetcher.fetch_content.assert_awaited_once_with(trend.link, trend.title)
        content_fetcher.fetch_content_with_captures.assert_not_awaited()
        scoring_provider.analyze_video.assert_awaited_once_with(
            trend.link, trend.title, trend.category, model_override="gemini-test-flash"
        )
        assert outcome.analysis.score == 6
        assert outcome.analysis.content is None

    @pytest.mark.asyncio
    async def test_video_with_transcript_uses_text_mode(self, scoring_provider, content_fetcher):
        content_fetcher.fetch_content.return_value = ContentFetchResult(
            content=LONG_TEXT, type=ContentType.YOUTUBE, source=ContentProvenance.TRANSCRIPT
        )
        uc = make_use_case(scoring_provider, content_fetcher)

        outcome = await uc.analyze(make_trend(category="YouTube", link="https://youtu.be/abc123xyz"))

        assert scoring_provider.build_prompt.call_args.args[1] == "YouTube Transcript"
        scoring_provider.analyze_video.assert_not_awaited()
        assert outcome.analysis.content == LONG_TEXT

    @pytest.mark.asyncio
    async def test_video_failure_is_recorded(self, scoring_provider, content_fetcher):
        scoring_provider.analyze_video.side_effect = ProviderFatalError("재시도 불가 오류", "gemini", 1)
        uc = make_use_case(scoring_provider, content_fetcher)

        outcome = await uc.analyze(make_trend(category="YouTube"))

        assert outcome.status is TrendStatus.FAIL

    def test_pro_model_is_downgraded(self, scoring_provider, content_fetcher):
        scoring_provider.model_name = "gemini-2.5-pro"
        video = AnalyzeVideoUseCase(scoring_provider, content_fetcher, MIN_LENGTH, "gemini-test-flash")
        allowed = AnalyzeVideoUseCase(
            scoring_provider, content_fetcher, MIN_LENGTH, "gemini-test-flash", allow_pro_models=True
        )

        assert video.resolve_model() == "gemini-test-flash"
        assert allowed.resolve_model() == "gemini-2.5-pro"

    @pytest.mark.asyncio
    async def test_youtube_source_routes_to_video(self, scoring_provider, content_fetcher):
        uc = make_use_case(scoring_provider, content_fetcher)

        await uc.analyze(make_trend(source="YouTube Channel", category="Frontend"))

        scoring_provider.analyze_video.assert_awaited_once()
