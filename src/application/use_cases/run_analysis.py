"""유즈케이스: 트렌드 배치 분석.

브라우저 세션 1개를 열어 항목을 순서대로 하나씩 분석한다 (동시 처리 없음).
항목 사이에는 고정 대기를 두고, 매 항목 후 메모리 사용량을 기록한다.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import AsyncContextManager, Awaitable, Callable, Optional

from src.application.use_cases.analyze_trend import AnalyzeTrendUseCase
from src.domain.entities import AnalysisResult, TrendItem, TrendOutcome, TrendStatus
from src.domain.services.content_fetcher import ContentFetcher

logger = logging.getLogger(__name__)


@dataclass
class AnalysisBatch:
    outcomes: list[TrendOutcome] = field(default_factory=list)

    def count(self, status: TrendStatus) -> int:
        return sum(1 for o in self.outcomes if o.status is status)

    @property
    def results(self) -> list[AnalysisResult]:
        return [o.analysis for o in self.outcomes if o.analysis is not None]

    def summary(self) -> dict[str, int]:
        return {
            "total": len(self.outcomes),
            "analyzed": self.count(TrendStatus.ANALYZED),
            "rejected": self.count(TrendStatus.REJECTED),
            "failed": self.count(TrendStatus.FAIL),
            "skipped": self.count(TrendStatus.RAW),
        }


class RunAnalysisUseCase:
    """트렌드 목록 전체를 순차 분석하는 유즈케이스."""

    def __init__(
        self,
        session_factory: Callable[[], AsyncContextManager[ContentFetcher]],
        analyzer_factory: Callable[[ContentFetcher], AnalyzeTrendUseCase],
        delay_between_requests: float,
        memory_reporter: Optional[Callable[[], object]] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._session_factory = session_factory
        self._analyzer_factory = analyzer_factory
        self._delay = delay_between_requests
        self._memory_reporter = memory_reporter
        self._sleep = sleep

    async def execute(self, trends: list[TrendItem]) -> AnalysisBatch:
        batch = AnalysisBatch()
        if not trends:
            logger.info("분석할 트렌드 없음")
            return batch

        logger.info(f"[analysis] {len(trends)}건 분석 시작")

        async with self._session_factory() as content_fetcher:
            analyzer = self._analyzer_factory(content_fetcher)

            for index, trend in enumerate(trends, start=1):
                logger.info(f"[analysis] -> [{trend.category or 'Uncategorized'}] {trend.safe_title}")
                try:
                    outcome = await analyzer.analyze(trend)
                except Exception as e:
                    logger.error(f"[analysis] 트렌드 #{trend.id} 분석 실패: {e}")
                    outcome = TrendOutcome.failed(trend.id, str(e))

                batch.outcomes.append(outcome)
                if outcome.analysis:
                    logger.info(f"[analysis] 완료 (score: {outcome.analysis.score}/10)")
                else:
                    logger.info(f"[analysis] {outcome.status.value}: {outcome.reason}")

                if self._memory_reporter:
                    self._memory_reporter()
                if index < len(trends):
                    await self._sleep(self._delay)

        logger.info(f"[analysis] 분석 완료: {batch.summary()}")
        return batch
