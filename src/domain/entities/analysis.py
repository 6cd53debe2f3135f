from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from src.domain.entities.trend import TrendStatus


class ContentType(str, Enum):
    YOUTUBE = "youtube"
    WEBPAGE = "webpage"


class ContentProvenance(str, Enum):
    """콘텐츠를 만든 수집 전략. 로깅 용도로만 쓰인다."""

    TRANSCRIPT = "transcript"
    DESCRIPTION = "description"
    WEBPAGE = "webpage"


@dataclass
class ContentFetchResult:
    content: str
    type: ContentType
    source: ContentProvenance


@dataclass
class CaptureResult:
    """한 번의 방문으로 얻은 본문 + 스크린샷(JPEG bytes)."""

    content: Optional[ContentFetchResult] = None
    screenshots: list[bytes] = field(default_factory=list)

    @property
    def text(self) -> str:
        return self.content.content if self.content else ""


def _to_score(value: Any) -> int:
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError):
        return 0
    return max(0, min(10, score))


def _to_str_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value] if value else []
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None]


@dataclass
class ScoredResult:
    """AI 모델이 루브릭에 따라 반환한 채점 결과."""

    score: int
    reason: str = ""
    title_ko: str = ""
    one_line_summary: str = ""
    key_points: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScoredResult:
        return cls(
            score=_to_score(data.get("score")),
            reason=str(data.get("reason") or ""),
            title_ko=str(data.get("title_ko") or ""),
            one_line_summary=str(data.get("oneLineSummary") or ""),
            key_points=_to_str_list(data.get("keyPoints")),
            tags=_to_str_list(data.get("tags")),
        )


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class AnalysisResult:
    """트렌드 항목 1건에 대한 분석 기록. score > 0 이면 뉴스레터 대상."""

    id: Optional[int]
    ai_model: str
    score: int
    reason: str
    title_ko: str
    one_line_summary: str
    key_points: list[str]
    tags: list[str]
    analyzed_at: str
    content: Optional[str] = None

    @classmethod
    def stamp(
        cls,
        scored: ScoredResult,
        trend_id: Optional[int],
        ai_model: str,
        content: Optional[str] = None,
    ) -> AnalysisResult:
        """채점 결과에 항목 ID, 모델명, 분석 시각을 붙인다."""
        return cls(
            id=trend_id,
            ai_model=ai_model,
            score=scored.score,
            reason=scored.reason,
            title_ko=scored.title_ko,
            one_line_summary=scored.one_line_summary,
            key_points=list(scored.key_points),
            tags=list(scored.tags),
            analyzed_at=utc_now_iso(),
            content=content,
        )

    @property
    def status(self) -> TrendStatus:
        return TrendStatus.ANALYZED if self.score > 0 else TrendStatus.REJECTED

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "aiModel": self.ai_model,
            "score": self.score,
            "reason": self.reason,
            "title_ko": self.title_ko,
            "oneLineSummary": self.one_line_summary,
            "keyPoints": self.key_points,
            "tags": self.tags,
            "analyzedAt": self.analyzed_at,
        }
        if self.content is not None:
            data["content"] = self.content
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalysisResult:
        scored = ScoredResult.from_dict(data)
        return cls(
            id=data.get("id"),
            ai_model=str(data.get("aiModel") or ""),
            score=scored.score,
            reason=scored.reason,
            title_ko=scored.title_ko,
            one_line_summary=scored.one_line_summary,
            key_points=scored.key_points,
            tags=scored.tags,
            analyzed_at=str(data.get("analyzedAt") or ""),
            content=data.get("content"),
        )


@dataclass
class TrendOutcome:
    """오케스트레이터가 항목 1건을 처리한 결과와 다음 상태."""

    trend_id: Optional[int]
    status: TrendStatus
    analysis: Optional[AnalysisResult] = None
    reason: Optional[str] = None

    @classmethod
    def analyzed(cls, analysis: AnalysisResult) -> TrendOutcome:
        return cls(trend_id=analysis.id, status=analysis.status, analysis=analysis)

    @classmethod
    def failed(cls, trend_id: Optional[int], reason: str) -> TrendOutcome:
        return cls(trend_id=trend_id, status=TrendStatus.FAIL, reason=reason)

    @classmethod
    def skipped(cls, trend_id: Optional[int], reason: str) -> TrendOutcome:
        return cls(trend_id=trend_id, status=TrendStatus.RAW, reason=reason)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.trend_id,
            "status": self.status.value,
            "reason": self.reason,
            "analysis": self.analysis.to_dict() if self.analysis else None,
        }


@dataclass
class RetryResult:
    id: Optional[int]
    success: bool
    analysis: Optional[AnalysisResult] = None
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "success": self.success,
            "analysis": self.analysis.to_dict() if self.analysis else None,
            "error": self.error,
        }
