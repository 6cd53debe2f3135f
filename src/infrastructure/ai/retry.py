"""AI 프로바이더 공통 재시도 정책.

시도 → 성공 / (재시도 가능 오류 → 대기 후 재시도) / (치명 오류 → 즉시 실패).
대기 시간은 initial_delay부터 시도마다 두 배로 늘어난다.
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, TypeVar

import httpx
import openai

from src.domain.exceptions import (
    ProviderFatalError,
    ProviderRetryExhaustedError,
    ResponseParseError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_RETRYABLE_STATUS = {408, 429}
_RETRYABLE_PATTERNS = (
    "rate limit",
    "rate_limit",
    "resource_exhausted",
    "timeout",
    "timed out",
    "unavailable",
    "overloaded",
)
_STATUS_IN_MESSAGE = re.compile(r"\b(?:429|5\d\d)\b")
_TRANSIENT_TYPES = (
    TimeoutError,
    asyncio.TimeoutError,
    ConnectionError,
    httpx.TransportError,
    openai.APIConnectionError,
)


class ErrorKind(str, Enum):
    RETRYABLE = "retryable"
    FATAL = "fatal"


def extract_status(error: BaseException) -> Optional[int]:
    """SDK 예외에서 HTTP 상태 코드를 꺼낸다 (openai: status_code, google-genai: code)."""
    for attr in ("status_code", "code"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    response = getattr(error, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def classify_error(error: BaseException) -> ErrorKind:
    """재시도 가능(429/5xx/타임아웃/네트워크) vs 치명(401/403/400 등) 분류."""
    status = extract_status(error)
    if status is not None:
        if status in _RETRYABLE_STATUS or status >= 500:
            return ErrorKind.RETRYABLE
        return ErrorKind.FATAL

    if isinstance(error, _TRANSIENT_TYPES):
        return ErrorKind.RETRYABLE

    message = str(error).lower()
    if _STATUS_IN_MESSAGE.search(message) or any(p in message for p in _RETRYABLE_PATTERNS):
        return ErrorKind.RETRYABLE
    return ErrorKind.FATAL


@dataclass
class RetryPolicy:
    provider: str
    max_attempts: int = 3
    initial_delay: float = 2.0
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    def delay_for(self, attempt: int) -> float:
        """attempt번째 시도 실패 후 대기 시간(초)."""
        return self.initial_delay * (2 ** (attempt - 1))

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        attempt = 1
        while True:
            try:
                return await operation()
            except ResponseParseError:
                raise
            except Exception as e:
                kind = classify_error(e)
                status = extract_status(e)
                logger.warning(
                    f"[{self.provider}] API 오류 [시도 {attempt}/{self.max_attempts}] "
                    f"status={status} kind={kind.value}: {e}"
                )

                if kind is ErrorKind.FATAL:
                    raise ProviderFatalError("재시도 불가 오류", self.provider, attempt, e) from e

                if attempt >= self.max_attempts:
                    raise ProviderRetryExhaustedError(
                        f"최대 재시도 횟수({self.max_attempts}) 도달", self.provider, attempt, e
                    ) from e

                wait = self.delay_for(attempt)
                logger.info(f"[{self.provider}] {wait:.1f}초 대기 후 재시도")
                await self.sleep(wait)
                attempt += 1
