"""HTML 본문 추출기.

불필요한 요소를 제거한 뒤 readability 알고리즘으로 본문 영역을 고르고,
후보가 없으면 body 전체 텍스트로 대체한다.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup
from readability import Document

from src.domain.value_objects.content_text import sanitize_text

logger = logging.getLogger(__name__)

# 본문이 iframe 안에 렌더링되는 플랫폼: 호스트 → frame name
_EMBEDDED_FRAMES = {
    "blog.naver.com": "mainFrame",
}

_NOISE_TAGS = ["script", "style", "noscript", "nav", "footer", "header", "aside", "iframe", "form", "svg"]
_NOISE_SELECTORS = [".ads", ".ad", ".advertisement", ".comments", "#comments", ".share", ".related"]


def embedded_frame_name(url: str) -> Optional[str]:
    """본문이 이름 있는 하위 frame에 있으면 그 이름을 반환."""
    try:
        host = (urlparse(url).hostname or "").lower()
    except ValueError:
        return None
    return _EMBEDDED_FRAMES.get(host)


class ContentExtractor:
    """readability + BeautifulSoup 기반 본문 추출."""

    def __init__(self, max_length: int = 20000):
        self._max_length = max_length

    def extract_main_text(self, html: str, url: str = "") -> Optional[str]:
        if not html:
            return None

        soup = BeautifulSoup(html, "lxml")
        self._strip_noise(soup)

        text = self._readability_text(str(soup), url)
        if not text:
            body = soup.body or soup
            text = body.get_text(separator=" ", strip=True)
            logger.debug(f"[content] readability 후보 없음 → body 텍스트 사용: {url}")

        text = sanitize_text(text, self._max_length)
        return text or None

    def extract_description(self, html: str) -> Optional[str]:
        """meta description (og:description 포함) 추출. 영상 페이지 설명용."""
        if not html:
            return None
        soup = BeautifulSoup(html, "lxml")
        for attrs in ({"name": "description"}, {"property": "og:description"}):
            tag = soup.find("meta", attrs=attrs)
            if tag and tag.get("content"):
                return sanitize_text(tag["content"], self._max_length) or None
        return None

    def _strip_noise(self, soup: BeautifulSoup) -> None:
        for tag in soup(_NOISE_TAGS):
            tag.decompose()
        for selector in _NOISE_SELECTORS:
            for el in soup.select(selector):
                el.decompose()

    def _readability_text(self, html: str, url: str) -> str:
        try:
            summary = Document(html, url=url or None).summary(html_partial=True)
        except Exception as e:
            logger.debug(f"[content] readability 실패 {url}: {e}")
            return ""
        return BeautifulSoup(summary, "lxml").get_text(separator=" ", strip=True)
