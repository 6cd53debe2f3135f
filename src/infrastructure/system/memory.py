from __future__ import annotations

import logging

import psutil

logger = logging.getLogger(__name__)


def log_memory_usage() -> int:
    """현재 프로세스 RSS(MB)를 로깅하고 반환."""
    rss_mb = round(psutil.Process().memory_info().rss / 1024 / 1024)
    logger.info(f"메모리 사용량: RSS {rss_mb}MB")
    return rss_mb
