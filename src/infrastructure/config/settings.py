from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic_settings import BaseSettings


# ──────────────────────────────────────────
# 환경변수 기반 시크릿 설정 (.env)
# ──────────────────────────────────────────
class Settings(BaseSettings):
    gemini_api_key: str = ""
    grok_api_key: str = ""

    # 프로바이더별 모델명 오버라이드
    gemini_model: str = ""
    grok_model: str = ""

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


# ──────────────────────────────────────────
# YAML 기반 앱 설정 (config/settings.yaml)
# ──────────────────────────────────────────
class GeminiConfig:
    def __init__(self, data: dict[str, Any]):
        self.default_model: str = data.get("default_model", "gemini-3-flash-preview")
        self.max_retries: int = data.get("max_retries", 3)
        self.initial_retry_delay: float = data.get("initial_retry_delay", 2.0)
        self.max_content_length: int = data.get("max_content_length", 25000)
        self.timeout: float = data.get("timeout", 60.0)


class GrokConfig:
    def __init__(self, data: dict[str, Any]):
        self.default_model: str = data.get("default_model", "grok-4-fast")
        self.base_url: str = data.get("base_url", "https://api.x.ai/v1")
        self.max_retries: int = data.get("max_retries", 3)
        self.initial_retry_delay: float = data.get("initial_retry_delay", 2.0)
        self.max_content_length: int = data.get("max_content_length", 20000)
        self.timeout: float = data.get("timeout", 60.0)
        self.temperature: float = data.get("temperature", 0.2)


class BrowserConfig:
    def __init__(self, data: dict[str, Any]):
        self.headless: bool = data.get("headless", True)
        self.navigation_timeout: float = data.get("navigation_timeout", 15.0)
        self.user_agents: list[str] = data.get("user_agents", [
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/130.0.0.0 Safari/537.36",
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
            "(KHTML, like Gecko) Version/17.6 Safari/605.1.15",
            "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
        ])
        self.viewports: list[dict[str, int]] = data.get("viewports", [
            {"width": 1920, "height": 1080},
            {"width": 1536, "height": 864},
            {"width": 1440, "height": 900},
            {"width": 1366, "height": 768},
        ])
        self.locale: str = data.get("locale", "ko-KR")
        self.timezone_id: str = data.get("timezone_id", "Asia/Seoul")
        self.blocked_resource_types: list[str] = data.get(
            "blocked_resource_types", ["media", "font", "other"]
        )
        self.blocked_domain_keywords: list[str] = data.get("blocked_domain_keywords", [
            "doubleclick",
            "googlesyndication",
            "google-analytics",
            "googletagmanager",
            "adservice",
            "adsystem",
            "amazon-adsystem",
            "facebook.net",
            "criteo",
            "taboola",
            "outbrain",
            "scorecardresearch",
            "hotjar",
        ])
        self.screenshot_count: int = data.get("screenshot_count", 2)
        self.screenshot_quality: int = data.get("screenshot_quality", 70)
        self.screenshot_settle_delay: float = data.get("screenshot_settle_delay", 0.5)
        self.launch_args: list[str] = data.get("launch_args", [
            "--no-sandbox",
            "--disable-setuid-sandbox",
            "--disable-dev-shm-usage",
            "--disable-gpu",
            "--no-zygote",
            "--disable-extensions",
            "--disable-blink-features=AutomationControlled",
        ])


class ContentConfig:
    def __init__(self, data: dict[str, Any]):
        self.max_length: int = data.get("max_length", 20000)
        self.min_length: int = data.get("min_length", 50)
        self.delay_between_requests: float = data.get("delay_between_requests", 2.0)


class YouTubeConfig:
    def __init__(self, data: dict[str, Any]):
        self.transcript_max_retries: int = data.get("transcript_max_retries", 2)
        self.transcript_retry_delay: float = data.get("transcript_retry_delay", 1.0)
        self.transcript_languages: list[str] = data.get("transcript_languages", ["ko", "en"])
        self.allow_pro_models: bool = data.get("allow_pro_models", False)


class AnalysisConfig:
    def __init__(self, data: dict[str, Any]):
        # 순차 처리만 지원 (rate limit / 메모리 제어)
        self.concurrency: int = data.get("concurrency", 1)


class AppConfig:
    """YAML에서 로드된 전체 앱 설정."""

    def __init__(self, data: dict[str, Any]):
        self.name: str = data.get("app", {}).get("name", "Trend Analyzer")

        self.gemini = GeminiConfig(data.get("gemini", {}))
        self.grok = GrokConfig(data.get("grok", {}))
        self.browser = BrowserConfig(data.get("browser", {}))
        self.content = ContentConfig(data.get("content", {}))
        self.youtube = YouTubeConfig(data.get("youtube", {}))
        self.analysis = AnalysisConfig(data.get("analysis", {}))


def load_app_config(path: str = "config/settings.yaml") -> AppConfig:
    """YAML 설정 파일을 로드하여 AppConfig를 반환."""
    config_path = Path(path)
    if not config_path.exists():
        return AppConfig({})
    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return AppConfig(data)
