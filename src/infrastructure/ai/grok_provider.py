"""xAI Grok 기반 짧은 포스트 전용 프로바이더.

Grok API는 OpenAI 호환이므로 openai SDK에 base_url만 바꿔서 사용한다.
X(트위터) 포스트는 본문 수집 없이 제목 + 링크만으로 분석한다.
"""

from __future__ import annotations

import base64
import logging
from typing import Any, Optional

from openai import AsyncOpenAI

from src.domain.entities import ScoredResult, TrendItem
from src.infrastructure.ai import prompts
from src.infrastructure.ai.response_parser import parse_scored_response
from src.infrastructure.ai.retry import RetryPolicy
from src.infrastructure.config.settings import GrokConfig

logger = logging.getLogger(__name__)


def _is_profile_url(link: str) -> bool:
    return "x.com/" in link and "/status/" not in link


def _to_data_url(image: bytes | str) -> str:
    if isinstance(image, str):
        return image if image.startswith("data:") else f"data:image/jpeg;base64,{image}"
    return "data:image/jpeg;base64," + base64.b64encode(image).decode("ascii")


class GrokProvider:
    """Grok Chat Completions API 프로바이더."""

    name = "grok"

    def __init__(
        self,
        api_key: str,
        config: GrokConfig,
        model_name: Optional[str] = None,
        client: Any = None,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        self._config = config
        self._model_name = model_name or config.default_model
        # 재시도는 RetryPolicy가 담당하므로 SDK 자체 재시도는 끈다
        self._client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            max_retries=0,
        )
        self._retry = retry_policy or RetryPolicy(
            provider=self.name,
            max_attempts=config.max_retries,
            initial_delay=config.initial_retry_delay,
        )

    @property
    def model_name(self) -> str:
        return self._model_name

    def _truncate(self, content: str) -> str:
        return (content or "")[: self._config.max_content_length]

    async def analyze_short_post(self, trend: TrendItem) -> ScoredResult:
        """X 포스트 분석. title + link만 사용한다."""
        system_prompt = prompts.SHORT_POST_SYSTEM.format(
            role=prompts.ROLE,
            rules=prompts.SHORT_POST_RULES,
            scoring=prompts.SCORING_CRITERIA,
            json_format=prompts.JSON_FORMAT,
            tag_guide=prompts.TAG_GUIDE,
        ).strip()

        user_content = prompts.TREND_TARGET.format(
            title=trend.title,
            link=trend.link,
            source=trend.source,
            category=trend.category,
        )
        if _is_profile_url(trend.link):
            user_content += "\n" + prompts.PROFILE_URL_WARNING

        return await self._complete(system_prompt, user_content.strip())

    async def analyze_with_content(self, trend: TrendItem, content: str) -> ScoredResult:
        """수집된 본문을 포함한 분석 (X 외 카테고리)."""
        system_prompt = self._content_system_prompt(note="")
        user_content = prompts.TREND_TARGET_WITH_CONTENT.format(
            title=trend.title,
            link=trend.link,
            source=trend.source,
            category=trend.category,
            content=self._truncate(content),
        ).strip()
        return await self._complete(system_prompt, user_content)

    async def analyze_with_vision(
        self, trend: TrendItem, content: str, images: list[bytes]
    ) -> ScoredResult:
        """스크린샷 이미지를 함께 보내는 분석."""
        system_prompt = self._content_system_prompt(note=prompts.VISION_NOTE)
        text = prompts.TREND_TARGET_WITH_CONTENT.format(
            title=trend.title,
            link=trend.link,
            source=trend.source,
            category=trend.category,
            content=self._truncate(content),
        ).strip()

        user_content: list[dict[str, Any]] = [{"type": "text", "text": text}]
        for image in images:
            user_content.append({
                "type": "image_url",
                "image_url": {"url": _to_data_url(image), "detail": "high"},
            })
        return await self._complete(system_prompt, user_content)

    def _content_system_prompt(self, note: str) -> str:
        return prompts.CONTENT_SYSTEM.format(
            role=prompts.ROLE,
            note=note,
            scoring=prompts.SCORING_CRITERIA,
            json_format=prompts.JSON_FORMAT,
            tag_guide=prompts.TAG_GUIDE,
        ).strip()

    async def _complete(self, system_prompt: str, user_content: str | list[dict[str, Any]]) -> ScoredResult:
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_content},
        ]

        async def call() -> str:
            response = await self._client.chat.completions.create(
                model=self._model_name,
                messages=messages,
                temperature=self._config.temperature,
                stream=False,
            )
            if not response.choices:
                return ""
            return response.choices[0].message.content or ""

        text = await self._retry.run(call)
        return parse_scored_response(text)
