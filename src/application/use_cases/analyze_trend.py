"""유즈케이스: 트렌드 항목 1건 분석.

항목마다 아래 순서로 결정한다.
1. ID 없음 → 건너뜀
2. 영상 → 영상 분석 유즈케이스에 위임
3. 콘텐츠 확보: 저장된 본문 / 실시간 수집 / 실시간이 부족하면 저장본으로 대체
4. 프로바이더 선택: 강제 지정 > X 카테고리는 Grok > 기본(Gemini)
5. 텍스트 모드 / 비전 모드 / 입력 없음(건너뜀)
프로바이더 실패는 항목 단위 실패로 기록할 뿐 배치를 멈추지 않는다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from src.application.use_cases.analyze_video import AnalyzeVideoUseCase
from src.domain.entities import (
    AnalysisResult,
    ScoredResult,
    SourceKind,
    TrendItem,
    TrendOutcome,
)
from src.domain.services.ai_provider import ProviderName, ScoringProvider, ShortPostProvider
from src.domain.services.content_fetcher import ContentFetcher
from src.domain.value_objects.content_text import is_sufficient

logger = logging.getLogger(__name__)


@dataclass
class AcquiredContent:
    text: str = ""
    screenshots: list[bytes] = field(default_factory=list)
    fresh: bool = False


class AnalyzeTrendUseCase:
    """트렌드 항목 분석 오케스트레이터."""

    def __init__(
        self,
        provider: ScoringProvider,
        content_fetcher: ContentFetcher,
        video_analyzer: AnalyzeVideoUseCase,
        min_length: int,
        short_post_provider: Optional[ShortPostProvider] = None,
        force_provider: Optional[ProviderName] = None,
    ):
        self._provider = provider
        self._content = content_fetcher
        self._video = video_analyzer
        self._min_length = min_length
        self._short_post = short_post_provider
        self._force_provider = force_provider

    async def execute(self, trend: TrendItem) -> Optional[AnalysisResult]:
        outcome = await self.analyze(trend)
        return outcome.analysis

    async def analyze(self, trend: TrendItem) -> TrendOutcome:
        if trend.id is None:
            logger.error("[analyzer] 트렌드 ID 없음, 분석 건너뜀")
            return TrendOutcome.skipped(None, "트렌드 ID 없음")

        logger.info(f"[analyzer] category={trend.category!r} link={trend.link[:60]}")

        # ─── 1. 영상 ───
        if trend.kind is SourceKind.VIDEO:
            try:
                return TrendOutcome.analyzed(await self._video.execute(trend))
            except Exception as e:
                logger.error(f"[analyzer] 영상 분석 실패 #{trend.id}: {e}")
                return TrendOutcome.failed(trend.id, f"영상 분석 실패: {e}")

        # ─── 2. 콘텐츠 확보 ───
        acquired = await self._acquire(trend)

        # ─── 3. 프로바이더 선택 및 호출 ───
        provider_name = self.select_provider(trend)
        try:
            if provider_name is ProviderName.GROK:
                if self._short_post is None:
                    logger.warning("[analyzer] Grok 미설정, X 콘텐츠 건너뜀")
                    return TrendOutcome.skipped(trend.id, "Grok API Key 미설정")
                scored = await self._invoke_short_post_provider(trend, acquired)
                model = self._short_post.model_name
            else:
                scored = await self._invoke_default_provider(trend, acquired)
                if scored is None:
                    logger.info(f"[analyzer] 분석 가능한 입력 없음: {trend.safe_title}")
                    return TrendOutcome.skipped(trend.id, "본문 부족, 스크린샷 없음")
                model = self._provider.model_name
        except Exception as e:
            logger.error(f"[analyzer] {provider_name.value} 분석 실패 #{trend.id}: {e}")
            return TrendOutcome.failed(trend.id, f"{provider_name.value} 분석 실패: {e}")

        content = acquired.text if acquired.fresh and acquired.text else None
        result = AnalysisResult.stamp(scored, trend.id, model, content=content)
        return TrendOutcome.analyzed(result)

    def select_provider(self, trend: TrendItem) -> ProviderName:
        if self._force_provider is not None:
            return self._force_provider
        if trend.kind is SourceKind.SHORT_POST:
            return ProviderName.GROK
        return ProviderName.GEMINI

    async def _acquire(self, trend: TrendItem) -> AcquiredContent:
        stored = trend.stored_content

        if trend.kind is SourceKind.AGGREGATOR and stored:
            logger.info(f"[analyzer] 저장된 본문 사용 ({len(stored)}자)")
            return AcquiredContent(text=stored)

        if trend.kind is SourceKind.SHORT_POST:
            return AcquiredContent(text=stored)

        live, screenshots = "", []
        try:
            capture = await self._content.fetch_content_with_captures(trend.link, trend.title)
            live, screenshots = capture.text, capture.screenshots
        except Exception as e:
            logger.warning(f"[analyzer] 실시간 수집 실패 → 저장본 확인: {e}")

        if not is_sufficient(live, self._min_length) and len(stored) > len(live):
            logger.info(f"[analyzer] 실시간 본문 부족 ({len(live)}자) → 저장본 사용 ({len(stored)}자)")
            return AcquiredContent(text=stored, screenshots=screenshots)

        return AcquiredContent(text=live, screenshots=screenshots, fresh=True)

    async def _invoke_short_post_provider(
        self, trend: TrendItem, acquired: AcquiredContent
    ) -> ScoredResult:
        if trend.kind is SourceKind.SHORT_POST:
            logger.info(f"[analyzer] Grok 제목/링크 분석: {trend.safe_title}")
            return await self._short_post.analyze_short_post(trend)
        if acquired.text:
            return await self._short_post.analyze_with_content(trend, acquired.text)
        if acquired.screenshots:
            return await self._short_post.analyze_with_vision(trend, "", acquired.screenshots)
        return await self._short_post.analyze_short_post(trend)

    async def _invoke_default_provider(
        self, trend: TrendItem, acquired: AcquiredContent
    ) -> Optional[ScoredResult]:
        if is_sufficient(acquired.text, self._min_length):
            logger.info(f"[analyzer] 텍스트 모드 ({len(acquired.text)}자)")
            prompt = self._provider.build_prompt(
                trend.title, trend.source, trend.category, acquired.text
            )
            return await self._provider.analyze_text(prompt)

        if acquired.screenshots:
            logger.info(f"[analyzer] 비전 모드 (스크린샷 {len(acquired.screenshots)}장)")
            return await self._provider.analyze_images(
                acquired.screenshots, trend.title, trend.category
            )
        return None
