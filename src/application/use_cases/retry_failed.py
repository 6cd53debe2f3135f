"""유즈케이스: 실패(FAIL) 항목 재처리.

호출마다 전용 브라우저 세션(stealth 설정)을 새로 띄워 본문 + 스크린샷을 다시 수집하고
같은 분석 규칙(텍스트 모드 / 비전 모드)을 적용한다.
한 항목의 예외는 실패 결과로 기록하고 다음 항목으로 넘어간다.
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncContextManager, Awaitable, Callable, Optional

from src.domain.entities import AnalysisResult, RetryResult, SourceKind, TrendItem
from src.domain.services.ai_provider import ScoringProvider, ShortPostProvider
from src.domain.services.content_fetcher import ContentFetcher
from src.domain.value_objects.content_text import is_sufficient

logger = logging.getLogger(__name__)


class RetryFailedTrendsUseCase:
    """FAIL 항목 재시도 유즈케이스."""

    def __init__(
        self,
        provider: ScoringProvider,
        session_factory: Callable[[], AsyncContextManager[ContentFetcher]],
        min_length: int,
        delay_between_requests: float,
        short_post_provider: Optional[ShortPostProvider] = None,
        memory_reporter: Optional[Callable[[], object]] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._provider = provider
        self._session_factory = session_factory
        self._min_length = min_length
        self._delay = delay_between_requests
        self._short_post = short_post_provider
        self._memory_reporter = memory_reporter
        self._sleep = sleep

    async def execute(self, trends: list[TrendItem]) -> list[RetryResult]:
        if not trends:
            logger.info("[retry] 재시도할 항목 없음")
            return []

        logger.info(f"[retry] 실패 항목 {len(trends)}건 재시도 시작")
        results: list[RetryResult] = []

        async with self._session_factory() as content_fetcher:
            for index, trend in enumerate(trends, start=1):
                logger.info(f"[retry] {trend.safe_title}")
                try:
                    result = await self._retry_one(content_fetcher, trend)
                except Exception as e:
                    logger.error(f"[retry] 재시도 실패 #{trend.id}: {e}")
                    result = RetryResult(id=trend.id, success=False, error=str(e))
                results.append(result)

                if self._memory_reporter:
                    self._memory_reporter()
                if index < len(trends):
                    await self._sleep(self._delay)

        recovered = sum(1 for r in results if r.success)
        logger.info(f"[retry] 완료: {recovered}/{len(trends)}건 복구")
        return results

    async def _retry_one(self, content_fetcher: ContentFetcher, trend: TrendItem) -> RetryResult:
        if trend.kind is SourceKind.SHORT_POST:
            if self._short_post is None:
                return RetryResult(
                    id=trend.id, success=False, error="X 콘텐츠는 Grok API 필요 (미설정)"
                )
            scored = await self._short_post.analyze_short_post(trend)
            analysis = AnalysisResult.stamp(scored, trend.id, self._short_post.model_name)
            return RetryResult(id=trend.id, success=True, analysis=analysis)

        capture = await content_fetcher.fetch_content_with_captures(trend.link, trend.title)
        text = capture.text

        if is_sufficient(text, self._min_length):
            logger.info(f"[retry] 텍스트 모드 ({len(text)}자)")
            prompt = self._provider.build_prompt(trend.title, trend.source, trend.category, text)
            scored = await self._provider.analyze_text(prompt)
            analysis = AnalysisResult.stamp(scored, trend.id, self._provider.model_name, content=text)
        elif capture.screenshots:
            logger.info(f"[retry] 비전 모드 (스크린샷 {len(capture.screenshots)}장)")
            scored = await self._provider.analyze_images(
                capture.screenshots, trend.title, trend.category
            )
            analysis = AnalysisResult.stamp(scored, trend.id, self._provider.model_name)
        else:
            logger.info("[retry] 본문 부족, 스크린샷 없음")
            return RetryResult(
                id=trend.id,
                success=False,
                error=f"콘텐츠 부족: {len(text)}자, 스크린샷 없음",
            )

        logger.info(f"[retry] 성공 (score: {analysis.score}/10)")
        return RetryResult(id=trend.id, success=True, analysis=analysis)
