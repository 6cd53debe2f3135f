from __future__ import annotations

from enum import Enum
from typing import Optional, Protocol

from src.domain.entities import ScoredResult, TrendItem


class ProviderName(str, Enum):
    GEMINI = "gemini"
    GROK = "grok"


class ScoringProvider(Protocol):
    """기본 AI 프로바이더 인터페이스 (텍스트/비전/영상)."""

    @property
    def model_name(self) -> str: ...

    def build_prompt(self, title: str, source: str, category: str, content: str) -> str:
        """루브릭이 포함된 분석 프롬프트 생성."""
        ...

    async def analyze_text(self, prompt: str, model_override: Optional[str] = None) -> ScoredResult:
        """텍스트 모드 분석."""
        ...

    async def analyze_images(
        self,
        images: list[bytes],
        title: str,
        category: str,
        model_override: Optional[str] = None,
    ) -> ScoredResult:
        """스크린샷(JPEG) 기반 비전 모드 분석."""
        ...

    async def analyze_video(
        self,
        video_url: str,
        title: str,
        category: str,
        model_override: Optional[str] = None,
    ) -> ScoredResult:
        """영상 URL 직접 분석."""
        ...


class ShortPostProvider(Protocol):
    """짧은 SNS 포스트 전용 프로바이더 인터페이스."""

    @property
    def model_name(self) -> str: ...

    async def analyze_short_post(self, trend: TrendItem) -> ScoredResult:
        """제목 + 링크만으로 분석."""
        ...

    async def analyze_with_content(self, trend: TrendItem, content: str) -> ScoredResult: ...

    async def analyze_with_vision(
        self, trend: TrendItem, content: str, images: list[bytes]
    ) -> ScoredResult: ...
