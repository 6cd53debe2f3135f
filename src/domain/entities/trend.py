from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional
from urllib.parse import urlparse

if TYPE_CHECKING:
    from src.domain.entities.analysis import AnalysisResult


SHORT_POST_CATEGORY = "X"
DEFAULT_NO_FETCH_CATEGORIES = frozenset({"Reddit", "StackOverflow"})


class SourceKind(str, Enum):
    """라우팅에 쓰이는 콘텐츠 소스 종류."""

    VIDEO = "video"
    SHORT_POST = "short_post"
    AGGREGATOR = "aggregator"
    WEBPAGE = "webpage"


class TrendStatus(str, Enum):
    """트렌드 항목의 처리 상태. 상태 저장은 호출 측 책임."""

    RAW = "RAW"
    ANALYZED = "ANALYZED"
    REJECTED = "REJECTED"
    FAIL = "FAIL"


def is_video_url(url: str) -> bool:
    """YouTube 호스트 URL 여부."""
    try:
        host = (urlparse(url).hostname or "").lower()
    except ValueError:
        return False
    return "youtube.com" in host or "youtu.be" in host


def classify_source(
    category: str,
    source: str = "",
    link: str = "",
    no_fetch_categories: frozenset[str] = DEFAULT_NO_FETCH_CATEGORIES,
) -> SourceKind:
    """카테고리/출처/링크로 소스 종류를 판별한다.

    정확 일치("X", "Reddit" 등)는 대소문자를 구분하고,
    youtube 판별은 대소문자 무시 부분 일치로 한다.
    """
    category = category or ""
    if (
        category.lower() == "youtube"
        or "youtube" in (source or "").lower()
        or is_video_url(link or "")
    ):
        return SourceKind.VIDEO
    if category == SHORT_POST_CATEGORY:
        return SourceKind.SHORT_POST
    if category in no_fetch_categories:
        return SourceKind.AGGREGATOR
    return SourceKind.WEBPAGE


@dataclass
class TrendItem:
    """스크래퍼가 만든 분석 전 트렌드 항목."""

    title: str
    link: str
    date: str
    source: str
    category: str

    id: Optional[int] = None
    content: Optional[str] = None
    analysis_results: list[AnalysisResult] = field(default_factory=list)

    kind: SourceKind = field(init=False)

    def __post_init__(self) -> None:
        self.kind = classify_source(self.category, self.source, self.link)

    @property
    def stored_content(self) -> str:
        return self.content or ""

    @property
    def safe_title(self) -> str:
        return (self.title or "No Title")[:50]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TrendItem:
        from src.domain.entities.analysis import AnalysisResult

        history = [
            AnalysisResult.from_dict(r)
            for r in data.get("analysis_results") or []
            if isinstance(r, dict)
        ]
        return cls(
            id=data.get("id"),
            title=data.get("title", ""),
            link=data.get("link", ""),
            date=data.get("date", ""),
            source=data.get("source", ""),
            category=data.get("category", ""),
            content=data.get("content"),
            analysis_results=history,
        )
