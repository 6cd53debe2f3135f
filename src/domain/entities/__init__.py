from src.domain.entities.analysis import (
    AnalysisResult,
    CaptureResult,
    ContentFetchResult,
    ContentProvenance,
    ContentType,
    RetryResult,
    ScoredResult,
    TrendOutcome,
)
from src.domain.entities.trend import SourceKind, TrendItem, TrendStatus, classify_source

__all__ = [
    "AnalysisResult",
    "CaptureResult",
    "ContentFetchResult",
    "ContentProvenance",
    "ContentType",
    "RetryResult",
    "ScoredResult",
    "SourceKind",
    "TrendItem",
    "TrendOutcome",
    "TrendStatus",
    "classify_source",
]
