"""도메인 레이어 예외 정의."""

from __future__ import annotations


class DomainError(Exception):
    """도메인 레이어 최상위 예외."""


class ConfigurationError(DomainError):
    """필수 설정 누락 또는 잘못된 설정. 배치 전체를 중단시킨다."""


class ContentFetchError(DomainError):
    """콘텐츠 수집(네비게이션/추출) 실패."""

    def __init__(self, message: str, url: str):
        self.url = url
        super().__init__(f"{message}: {url}")


class ResponseParseError(DomainError):
    """모델 응답에서 JSON을 추출/파싱하지 못했을 때."""

    def __init__(self, message: str, raw_text: str = ""):
        self.raw_text = raw_text
        super().__init__(message)


class ProviderError(DomainError):
    """AI 프로바이더 호출 실패."""

    def __init__(self, message: str, provider: str, attempts: int, cause: BaseException | None = None):
        self.provider = provider
        self.attempts = attempts
        self.cause = cause
        super().__init__(f"[{provider}] {message} (attempts={attempts}): {cause}")


class ProviderFatalError(ProviderError):
    """재시도해도 소용없는 오류 (인증 401/403, 잘못된 요청 400 등)."""


class ProviderRetryExhaustedError(ProviderError):
    """재시도 가능한 오류가 최대 시도 횟수까지 반복됨."""
