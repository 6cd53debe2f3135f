"""의존성 주입 컨테이너.

클린 아키텍처에서 모든 의존성 조립은 최외곽(Composition Root)에서 이루어진다.
이 컨테이너가 설정에 따라 구체 구현을 생성하고 유즈케이스에 주입한다.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from src.application.use_cases.analyze_trend import AnalyzeTrendUseCase
from src.application.use_cases.analyze_video import AnalyzeVideoUseCase
from src.application.use_cases.retry_failed import RetryFailedTrendsUseCase
from src.application.use_cases.run_analysis import RunAnalysisUseCase
from src.domain.exceptions import ConfigurationError
from src.domain.services.ai_provider import ProviderName
from src.domain.services.content_fetcher import ContentFetcher
from src.infrastructure.ai.gemini_provider import GeminiProvider
from src.infrastructure.ai.grok_provider import GrokProvider
from src.infrastructure.browser.browser_manager import BrowserManager
from src.infrastructure.browser.page_fetcher import PageFetcher
from src.infrastructure.config.settings import AppConfig, Settings
from src.infrastructure.content.acquisition import ContentAcquisitionService
from src.infrastructure.content.extractor import ContentExtractor
from src.infrastructure.content.transcript import TranscriptFetcher
from src.infrastructure.system.memory import log_memory_usage


class Container:
    """애플리케이션 의존성 컨테이너."""

    def __init__(self, settings: Settings, app_config: AppConfig):
        self.settings = settings
        self.config = app_config

        if app_config.analysis.concurrency != 1:
            raise ConfigurationError(
                f"analysis.concurrency={app_config.analysis.concurrency}: 순차 처리(1)만 지원"
            )
        if not settings.gemini_api_key:
            raise ConfigurationError("GEMINI_API_KEY 미설정")

        # ─── AI 프로바이더 ───
        self.gemini = self.build_gemini()
        self.grok = self.build_grok()

    def build_gemini(self, model_name: Optional[str] = None) -> GeminiProvider:
        return GeminiProvider(
            api_key=self.settings.gemini_api_key,
            config=self.config.gemini,
            model_name=model_name or self.settings.gemini_model or None,
        )

    def build_grok(self, model_name: Optional[str] = None) -> Optional[GrokProvider]:
        """GROK_API_KEY가 없으면 None (X 항목은 건너뛴다)."""
        if not self.settings.grok_api_key:
            return None
        return GrokProvider(
            api_key=self.settings.grok_api_key,
            config=self.config.grok,
            model_name=model_name or self.settings.grok_model or None,
        )

    # ─── 브라우저 세션 ───

    @asynccontextmanager
    async def browser_session(self) -> AsyncIterator[ContentFetcher]:
        """배치 1회 동안 공유되는 브라우저 + 콘텐츠 수집 서비스."""
        async with BrowserManager(self.config.browser) as manager:
            content = self.config.content
            yield ContentAcquisitionService(
                page_fetcher=PageFetcher(manager.context, self.config.browser),
                extractor=ContentExtractor(max_length=content.max_length),
                transcripts=TranscriptFetcher(
                    config=self.config.youtube,
                    max_length=content.max_length,
                    min_length=content.min_length,
                ),
                config=content,
            )

    # ─── Use Case 팩토리 ───

    def analyze_trend_use_case(
        self,
        content_fetcher: ContentFetcher,
        force_provider: Optional[ProviderName] = None,
        gemini: Optional[GeminiProvider] = None,
        grok: Optional[GrokProvider] = None,
    ) -> AnalyzeTrendUseCase:
        gemini = gemini or self.gemini
        min_length = self.config.content.min_length
        return AnalyzeTrendUseCase(
            provider=gemini,
            content_fetcher=content_fetcher,
            video_analyzer=AnalyzeVideoUseCase(
                provider=gemini,
                content_fetcher=content_fetcher,
                min_length=min_length,
                fallback_model=gemini.default_model,
                allow_pro_models=self.config.youtube.allow_pro_models,
            ),
            min_length=min_length,
            short_post_provider=grok or self.grok,
            force_provider=force_provider,
        )

    def run_analysis_use_case(
        self,
        provider: Optional[ProviderName] = None,
        model_name: Optional[str] = None,
    ) -> RunAnalysisUseCase:
        """model_name은 선택된 프로바이더(기본 Gemini)에만 적용된다."""
        gemini, grok = self.gemini, self.grok
        if model_name:
            if provider is ProviderName.GROK:
                grok = self.build_grok(model_name)
            else:
                gemini = self.build_gemini(model_name)

        return RunAnalysisUseCase(
            session_factory=self.browser_session,
            analyzer_factory=lambda fetcher: self.analyze_trend_use_case(
                fetcher, force_provider=provider, gemini=gemini, grok=grok
            ),
            delay_between_requests=self.config.content.delay_between_requests,
            memory_reporter=log_memory_usage,
        )

    def retry_use_case(self) -> RetryFailedTrendsUseCase:
        return RetryFailedTrendsUseCase(
            provider=self.gemini,
            session_factory=self.browser_session,
            min_length=self.config.content.min_length,
            delay_between_requests=self.config.content.delay_between_requests,
            short_post_provider=self.grok,
            memory_reporter=log_memory_usage,
        )
