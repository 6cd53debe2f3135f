"""콘텐츠 수집 오케스트레이터.

URL 유형에 따라 수집 전략을 고른다.
- 영상: 자막 우선 → 실패 시 페이지 렌더링 후 설명문
- 일반 웹페이지: 렌더링 → 본문 추출
최소 길이에 못 미치는 결과는 사용하지 않는다.
"""

from __future__ import annotations

import logging
from typing import Optional

from src.domain.entities import (
    CaptureResult,
    ContentFetchResult,
    ContentProvenance,
    ContentType,
)
from src.domain.entities.trend import is_video_url
from src.domain.exceptions import ContentFetchError
from src.domain.value_objects.content_text import is_sufficient
from src.infrastructure.browser.page_fetcher import PageFetcher
from src.infrastructure.config.settings import ContentConfig
from src.infrastructure.content.extractor import ContentExtractor
from src.infrastructure.content.transcript import TranscriptFetcher

logger = logging.getLogger(__name__)


class ContentAcquisitionService:
    """도메인 ContentFetcher 구현."""

    def __init__(
        self,
        page_fetcher: PageFetcher,
        extractor: ContentExtractor,
        transcripts: TranscriptFetcher,
        config: ContentConfig,
    ):
        self._pages = page_fetcher
        self._extractor = extractor
        self._transcripts = transcripts
        self._config = config

    async def fetch_content(self, url: str, title: str) -> Optional[ContentFetchResult]:
        try:
            if is_video_url(url):
                return await self._fetch_video_content(url, title)
            return await self._fetch_webpage_content(url, title)
        except ContentFetchError as e:
            logger.warning(f"[content] {e}")
            return None
        except Exception as e:
            logger.error(f"[content] fetch_content 실패 {url}: {e}")
            return None

    async def fetch_content_with_captures(self, url: str, title: str) -> CaptureResult:
        """한 번 방문으로 본문 + 스크린샷. 영상은 자막 전략만 사용한다."""
        try:
            if is_video_url(url):
                return CaptureResult(content=await self._fetch_video_content(url, title))

            capture = await self._pages.fetch_rendered_html_with_captures(url, title)
            text = self._extractor.extract_main_text(capture.html or "", url)
            return CaptureResult(
                content=self._usable(text, ContentType.WEBPAGE, ContentProvenance.WEBPAGE),
                screenshots=capture.screenshots,
            )
        except Exception as e:
            logger.error(f"[content] fetch_content_with_captures 실패 {url}: {e}")
            return CaptureResult()

    # ─── 전략 ───

    async def _fetch_video_content(self, url: str, title: str) -> Optional[ContentFetchResult]:
        safe_title = (title or "Unknown")[:30]

        transcript = await self._transcripts.fetch(url)
        result = self._usable(transcript, ContentType.YOUTUBE, ContentProvenance.TRANSCRIPT)
        if result:
            logger.info(f"[content] 자막 수집 성공: {safe_title} ({len(result.content)}자)")
            return result

        html = await self._pages.fetch_rendered_html(url)
        description = self._extractor.extract_description(html or "")
        result = self._usable(description, ContentType.YOUTUBE, ContentProvenance.DESCRIPTION)
        if result:
            logger.info(f"[content] 자막 없음 → 영상 설명 사용: {safe_title}")
        return result

    async def _fetch_webpage_content(self, url: str, title: str) -> Optional[ContentFetchResult]:
        html = await self._pages.fetch_rendered_html(url)
        if html is None:
            raise ContentFetchError("페이지 렌더링 실패", url)
        text = self._extractor.extract_main_text(html, url)
        result = self._usable(text, ContentType.WEBPAGE, ContentProvenance.WEBPAGE)
        if result:
            logger.info(f"[content] 웹페이지 본문 수집: {(title or 'Unknown')[:30]} ({len(result.content)}자)")
        return result

    def _usable(
        self, text: Optional[str], content_type: ContentType, provenance: ContentProvenance
    ) -> Optional[ContentFetchResult]:
        if not is_sufficient(text, self._config.min_length):
            return None
        return ContentFetchResult(content=text, type=content_type, source=provenance)
