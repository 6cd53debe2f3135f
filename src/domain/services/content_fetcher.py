from __future__ import annotations

from typing import Optional, Protocol

from src.domain.entities import CaptureResult, ContentFetchResult


class ContentFetcher(Protocol):
    """트렌드 링크의 본문 수집기 인터페이스.

    수집 실패는 예외가 아니라 None / 빈 CaptureResult로 표현한다.
    """

    async def fetch_content(self, url: str, title: str) -> Optional[ContentFetchResult]:
        """URL 유형에 맞는 전략으로 본문을 수집."""
        ...

    async def fetch_content_with_captures(self, url: str, title: str) -> CaptureResult:
        """한 번의 방문으로 본문 + 스크린샷 수집."""
        ...
