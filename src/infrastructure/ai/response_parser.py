"""모델 응답 텍스트에서 채점 JSON을 추출하는 파서.

전송 오류와 구분되는 독립된 파싱 단계로, 실패 시 ResponseParseError를 던진다.
"""

from __future__ import annotations

import json
import math
import re

from src.domain.entities import ScoredResult
from src.domain.exceptions import ResponseParseError

_CODE_FENCE = re.compile(r"```(?:json|JSON)?")


def _is_numeric_score(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str):
        try:
            return math.isfinite(float(value))
        except ValueError:
            return False
    return False


def extract_json(text: str) -> str:
    """마크다운 코드 펜스를 제거하고 첫 번째 균형 잡힌 {...} 구간을 반환."""
    cleaned = _CODE_FENCE.sub("", text or "").strip()

    start = cleaned.find("{")
    if start == -1:
        return cleaned

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(cleaned)):
        ch = cleaned[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return cleaned[start : i + 1]

    # 닫히지 않은 객체는 그대로 넘겨 json 단계에서 실패시킨다
    return cleaned[start:]


def parse_scored_response(text: str) -> ScoredResult:
    """응답 텍스트를 ScoredResult로 변환. 같은 입력에는 항상 같은 결과."""
    if not text or not text.strip():
        raise ResponseParseError("빈 응답", raw_text=text or "")

    payload = extract_json(text)
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"JSON 파싱 실패: {e}", raw_text=text) from e

    if not isinstance(data, dict):
        raise ResponseParseError("JSON 객체가 아님", raw_text=text)
    if "score" not in data:
        raise ResponseParseError("score 필드 누락", raw_text=text)
    if not _is_numeric_score(data["score"]):
        raise ResponseParseError(f"score가 숫자가 아님: {data['score']!r}", raw_text=text)

    return ScoredResult.from_dict(data)
