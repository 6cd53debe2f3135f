"""Trend Analyzer 엔트리포인트.

1. 설정 로드 (.env + config/settings.yaml)
2. 의존성 컨테이너 조립
3. 트렌드 JSON 로드
4. 분석 / 재시도 실행
5. 결과 JSON 출력

트렌드 파일은 TrendItem 객체의 JSON 배열이다.
상태(ANALYZED / REJECTED / FAIL) 저장은 호출 측 책임이다.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from src.domain.entities import TrendItem
from src.domain.exceptions import ConfigurationError
from src.domain.services.ai_provider import ProviderName
from src.infrastructure.config.container import Container
from src.infrastructure.config.settings import AppConfig, Settings, load_app_config

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    Path("logs").mkdir(exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler("logs/app.log", encoding="utf-8"),
        ],
    )


def load_trends(path: str) -> list[TrendItem]:
    """JSON 배열 파일을 TrendItem 목록으로 로드."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path}: 트렌드 JSON 배열이 아님")
    return [TrendItem.from_dict(item) for item in data if isinstance(item, dict)]


def write_output(payload: dict[str, Any], output: Optional[str]) -> None:
    text = json.dumps(payload, ensure_ascii=False, indent=2)
    if output:
        Path(output).write_text(text, encoding="utf-8")
        logger.info(f"결과 저장: {output}")
    else:
        print(text)


async def run_analyze(
    settings: Settings,
    config: AppConfig,
    trends_path: str,
    provider: Optional[str],
    model: Optional[str],
    output: Optional[str],
) -> None:
    """트렌드 배치 분석."""
    container = Container(settings=settings, app_config=config)
    trends = load_trends(trends_path)

    uc = container.run_analysis_use_case(
        provider=ProviderName(provider) if provider else None,
        model_name=model,
    )
    batch = await uc.execute(trends)

    write_output(
        {
            "summary": batch.summary(),
            "outcomes": [o.to_dict() for o in batch.outcomes],
        },
        output,
    )


async def run_retry(
    settings: Settings,
    config: AppConfig,
    trends_path: str,
    output: Optional[str],
) -> None:
    """FAIL 항목 재시도."""
    container = Container(settings=settings, app_config=config)
    trends = load_trends(trends_path)

    results = await container.retry_use_case().execute(trends)

    recovered = sum(1 for r in results if r.success)
    write_output(
        {
            "summary": {"total": len(results), "recovered": recovered, "failed": len(results) - recovered},
            "results": [r.to_dict() for r in results],
        },
        output,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Trend Analyzer")
    subparsers = parser.add_subparsers(dest="command", help="실행 명령")

    # analyze 명령
    analyze_parser = subparsers.add_parser("analyze", help="트렌드 배치 분석")
    analyze_parser.add_argument("trends", help="트렌드 JSON 파일 경로")
    analyze_parser.add_argument(
        "--provider", choices=[p.value for p in ProviderName], default=None,
        help="모든 항목에 강제 적용할 프로바이더",
    )
    analyze_parser.add_argument("--model", default=None, help="선택된 프로바이더의 모델명")
    analyze_parser.add_argument("--output", default=None, help="결과 JSON 파일 (기본: stdout)")

    # retry 명령
    retry_parser = subparsers.add_parser("retry", help="FAIL 항목 재시도")
    retry_parser.add_argument("trends", help="FAIL 트렌드 JSON 파일 경로")
    retry_parser.add_argument("--output", default=None, help="결과 JSON 파일 (기본: stdout)")

    args = parser.parse_args()

    settings = Settings()
    config = load_app_config()
    setup_logging(settings.log_level)

    try:
        if args.command == "analyze":
            asyncio.run(run_analyze(settings, config, args.trends, args.provider, args.model, args.output))
        elif args.command == "retry":
            asyncio.run(run_retry(settings, config, args.trends, args.output))
        else:
            parser.print_help()
            print("\n사용 방법:")
            print("  python main.py analyze trends.json                   # 기본 라우팅으로 분석")
            print("  python main.py analyze trends.json --provider grok   # Grok 강제")
            print("  python main.py retry failed.json --output out.json   # 실패 항목 재시도")
    except ConfigurationError as e:
        logger.error(f"설정 오류: {e}")
        sys.exit(2)


if __name__ == "__main__":
    main()
