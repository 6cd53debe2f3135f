import re

_WHITESPACE = re.compile(r"\s+")


def sanitize_text(text: str, max_length: int) -> str:
    """연속 공백을 하나로 줄이고 앞뒤 공백 제거 후 max_length로 자른다."""
    return _WHITESPACE.sub(" ", text or "").strip()[:max_length]


def is_sufficient(text: str | None, min_length: int) -> bool:
    """분석에 쓸 만한 길이인지. 경계값(min_length)은 충분한 것으로 본다."""
    return len(text or "") >= min_length
