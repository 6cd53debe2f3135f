"""테스트용 엔티티 생성 헬퍼."""

from typing import Optional

from src.domain.entities import (
    CaptureResult,
    ContentFetchResult,
    ContentProvenance,
    ContentType,
    ScoredResult,
    TrendItem,
)


def make_trend(**overrides) -> TrendItem:
    data = {
        "id": 1,
        "title": "New CSS anchor positioning API lands in Chrome",
        "link": "https://example.com/articles/anchor-positioning",
        "date": "2026-10-01",
        "source": "Example Blog",
        "category": "Frontend",
        "content": None,
    }
    data.update(overrides)
    return TrendItem(**data)


def make_scored(score: int = 7, **overrides) -> ScoredResult:
    data = {
        "score": score,
        "reason": "실무 적용 가능한 신규 API",
        "title_ko": "크롬에 CSS 앵커 포지셔닝 도입",
        "one_line_summary": "앵커 포지셔닝으로 툴팁 배치를 CSS만으로 처리",
        "key_points": ["CSS만으로 팝오버 배치", "Chrome 125+ 지원"],
        "tags": ["CSS", "Chrome"],
    }
    data.update(overrides)
    return ScoredResult(**data)


def webpage_capture(text: str = "", screenshots: Optional[list[bytes]] = None) -> CaptureResult:
    content = (
        ContentFetchResult(content=text, type=ContentType.WEBPAGE, source=ContentProvenance.WEBPAGE)
        if text
        else None
    )
    return CaptureResult(content=content, screenshots=screenshots or [])
