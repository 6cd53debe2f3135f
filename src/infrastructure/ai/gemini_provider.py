"""Google Gemini 기반 기본 AI 프로바이더.

도메인 ScoringProvider 인터페이스를 구현한다.
텍스트 / 스크린샷(비전) / YouTube 영상 URL 분석을 지원한다.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from google import genai
from google.genai import types

from src.domain.entities import ScoredResult
from src.infrastructure.ai import prompts
from src.infrastructure.ai.response_parser import parse_scored_response
from src.infrastructure.ai.retry import RetryPolicy
from src.infrastructure.config.settings import GeminiConfig

logger = logging.getLogger(__name__)

_SAFETY_CATEGORIES = (
    types.HarmCategory.HARM_CATEGORY_HARASSMENT,
    types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
)


class GeminiProvider:
    """Gemini API 프로바이더."""

    name = "gemini"

    def __init__(
        self,
        api_key: str,
        config: GeminiConfig,
        model_name: Optional[str] = None,
        client: Any = None,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        self._config = config
        self._model_name = model_name or config.default_model
        self._client = client or genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(config.timeout * 1000)),
        )
        self._retry = retry_policy or RetryPolicy(
            provider=self.name,
            max_attempts=config.max_retries,
            initial_delay=config.initial_retry_delay,
        )
        self._generate_config = types.GenerateContentConfig(
            response_mime_type="application/json",
            safety_settings=[
                types.SafetySetting(category=c, threshold=types.HarmBlockThreshold.BLOCK_NONE)
                for c in _SAFETY_CATEGORIES
            ],
        )

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def default_model(self) -> str:
        return self._config.default_model

    # ─── 프롬프트 ───

    def build_prompt(self, title: str, source: str, category: str, content: str) -> str:
        return prompts.ANALYSIS_PROMPT.format(
            role=prompts.ROLE,
            title=title,
            source=source,
            category=category,
            content=(content or "")[: self._config.max_content_length],
            scoring=prompts.SCORING_CRITERIA,
            json_format=prompts.JSON_FORMAT,
            tag_guide=prompts.TAG_GUIDE,
        ).strip()

    # ─── 분석 ───

    async def analyze_text(self, prompt: str, model_override: Optional[str] = None) -> ScoredResult:
        parts = [types.Part.from_text(text=prompt)]
        return await self._generate(parts, model_override)

    async def analyze_images(
        self,
        images: list[bytes],
        title: str,
        category: str,
        model_override: Optional[str] = None,
    ) -> ScoredResult:
        prompt = self.build_prompt(title, "Screenshot Analysis", category, prompts.SCREENSHOT_BODY)
        parts = [types.Part.from_text(text=prompt)]
        parts.extend(types.Part.from_bytes(data=img, mime_type="image/jpeg") for img in images)
        return await self._generate(parts, model_override)

    async def analyze_video(
        self,
        video_url: str,
        title: str,
        category: str,
        model_override: Optional[str] = None,
    ) -> ScoredResult:
        prompt = self.build_prompt(title, "YouTube Video", category, prompts.VIDEO_BODY)
        parts = [
            types.Part.from_uri(file_uri=video_url, mime_type="video/mp4"),
            types.Part.from_text(text=prompt),
        ]
        return await self._generate(parts, model_override)

    async def _generate(self, parts: list[types.Part], model_override: Optional[str]) -> ScoredResult:
        model = model_override or self._model_name
        contents = [types.Content(role="user", parts=parts)]

        async def call() -> str:
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=self._generate_config,
            )
            return response.text or ""

        text = await self._retry.run(call)
        return parse_scored_response(text)
