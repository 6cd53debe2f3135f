"""유즈케이스: YouTube 영상 분석.

자막(또는 영상 설명)이 충분하면 텍스트 모드로, 아니면 영상 URL을 직접 분석한다.
"""

from __future__ import annotations

import logging

from src.domain.entities import AnalysisResult, TrendItem
from src.domain.services.ai_provider import ScoringProvider
from src.domain.services.content_fetcher import ContentFetcher
from src.domain.value_objects.content_text import is_sufficient

logger = logging.getLogger(__name__)


class AnalyzeVideoUseCase:
    """영상 항목 1건 분석. 프로바이더 오류는 호출 측으로 전파한다."""

    def __init__(
        self,
        provider: ScoringProvider,
        content_fetcher: ContentFetcher,
        min_length: int,
        fallback_model: str,
        allow_pro_models: bool = False,
    ):
        self._provider = provider
        self._content = content_fetcher
        self._min_length = min_length
        self._fallback_model = fallback_model
        self._allow_pro_models = allow_pro_models

    def resolve_model(self) -> str:
        """영상 분석은 pro 계열 모델 사용을 제한한다 (비용)."""
        model = self._provider.model_name
        if not self._allow_pro_models and "pro" in model:
            return self._fallback_model
        return model

    async def execute(self, trend: TrendItem) -> AnalysisResult:
        model = self.resolve_model()
        logger.info(f"[video] 분석 시작: {trend.safe_title} (model={model})")

        fetched = await self._content.fetch_content(trend.link, trend.title)
        if fetched and is_sufficient(fetched.content, self._min_length):
            logger.info(
                f"[video] {fetched.source.value} {len(fetched.content)}자 확보 → 텍스트 모드"
            )
            prompt = self._provider.build_prompt(
                trend.title,
                f"YouTube {fetched.source.value.capitalize()}",
                trend.category,
                fetched.content,
            )
            scored = await self._provider.analyze_text(prompt, model_override=model)
            return AnalysisResult.stamp(scored, trend.id, model, content=fetched.content)

        logger.info("[video] 자막/설명 없음 → 영상 URL 직접 분석")
        scored = await self._provider.analyze_video(
            trend.link, trend.title, trend.category, model_override=model
        )
        return AnalysisResult.stamp(scored, trend.id, model)
