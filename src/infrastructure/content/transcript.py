"""YouTube 자막 수집기 (youtube-transcript-api)."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Awaitable, Callable, Optional
from urllib.parse import parse_qs, urlparse

from youtube_transcript_api import YouTubeTranscriptApi

from src.domain.value_objects.content_text import is_sufficient, sanitize_text
from src.infrastructure.config.settings import YouTubeConfig

logger = logging.getLogger(__name__)

_PATH_ID = re.compile(r"^/(?:shorts|embed|live|v)/([\w-]{6,})")


def extract_video_id(url: str) -> Optional[str]:
    """youtu.be/ID, watch?v=ID, /shorts/ID, /embed/ID 형태에서 영상 ID 추출."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return None
    host = (parsed.hostname or "").lower()

    if "youtu.be" in host:
        video_id = parsed.path.strip("/").split("/")[0]
        return video_id or None

    if "youtube.com" in host:
        query_id = parse_qs(parsed.query).get("v")
        if query_id:
            return query_id[0]
        match = _PATH_ID.match(parsed.path)
        if match:
            return match.group(1)
    return None


class TranscriptFetcher:
    """자막 텍스트를 가져온다. 자체 재시도(선형 대기) 포함."""

    def __init__(
        self,
        config: YouTubeConfig,
        max_length: int,
        min_length: int,
        api: Any = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._config = config
        self._max_length = max_length
        self._min_length = min_length
        self._api = api or YouTubeTranscriptApi()
        self._sleep = sleep

    async def fetch(self, url: str) -> Optional[str]:
        video_id = extract_video_id(url)
        if not video_id:
            logger.debug(f"[content] 영상 ID 추출 실패: {url}")
            return None

        max_retries = self._config.transcript_max_retries
        for attempt in range(1, max_retries + 1):
            try:
                snippets = await asyncio.to_thread(
                    self._api.fetch, video_id, languages=self._config.transcript_languages
                )
                full_text = " ".join(s.text for s in snippets)
                if not is_sufficient(full_text, self._min_length):
                    logger.info(f"[content] 자막이 너무 짧음 ({len(full_text)}자)")
                    return None
                return sanitize_text(full_text, self._max_length)
            except Exception as e:
                if attempt == max_retries:
                    logger.warning(f"[content] 자막 수집 실패 ({attempt}/{max_retries}) {url}: {e}")
                    return None
                await self._sleep(self._config.transcript_retry_delay * attempt)
        return None
