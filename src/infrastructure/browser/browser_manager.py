"""Playwright 브라우저 세션 관리자.

배치 1회 동안 공유되는 브라우저 프로세스와 browser context를 소유한다.
`async with BrowserManager(config) as manager:` 범위를 벗어나면 반드시 종료된다.
"""

from __future__ import annotations

import logging
import os
import random
from typing import Any, Optional

from playwright.async_api import Browser, BrowserContext, Playwright, async_playwright

from src.infrastructure.config.settings import BrowserConfig

logger = logging.getLogger(__name__)

# 자동화 탐지 신호 무력화 (webdriver 플래그, 미디어 장치 탐색, WebGL 벤더)
STEALTH_INIT_SCRIPT = """
Object.defineProperty(navigator, 'webdriver', { get: () => undefined });
if (navigator.mediaDevices && navigator.mediaDevices.getUserMedia) {
  navigator.mediaDevices.getUserMedia = () => Promise.reject(new Error('Permission denied'));
}
if (window.WebGLRenderingContext) {
  const getParameter = WebGLRenderingContext.prototype.getParameter;
  WebGLRenderingContext.prototype.getParameter = function (parameter) {
    if (parameter === 37445) return 'Intel Inc.';
    if (parameter === 37446) return 'Intel Iris OpenGL Engine';
    return getParameter.apply(this, [parameter]);
  };
}
"""


def random_context_options(config: BrowserConfig) -> dict[str, Any]:
    """viewport / user-agent 풀에서 무작위로 고른 context 옵션."""
    return {
        "viewport": random.choice(config.viewports),
        "user_agent": random.choice(config.user_agents),
        "locale": config.locale,
        "timezone_id": config.timezone_id,
    }


class BrowserManager:
    """Playwright 브라우저 생명주기 관리."""

    def __init__(self, config: BrowserConfig):
        self._config = config
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None

    @property
    def context(self) -> BrowserContext:
        if self._context is None:
            raise RuntimeError("브라우저가 초기화되지 않았습니다. initialize()를 먼저 호출하세요.")
        return self._context

    async def initialize(self) -> None:
        """브라우저를 띄우고 stealth 설정된 공유 context를 만든다."""
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(
                headless=self._config.headless,
                args=self._config.launch_args,
                env={**os.environ, "DBUS_SESSION_BUS_ADDRESS": "/dev/null"},
            )
            self._context = await self._browser.new_context(**random_context_options(self._config))
            await self._context.add_init_script(STEALTH_INIT_SCRIPT)
        except Exception:
            await self.close()
            raise
        logger.info("Playwright 브라우저 초기화 완료")

    async def close(self) -> None:
        """context → 브라우저 → playwright 순으로 종료."""
        if self._context:
            try:
                await self._context.close()
            except Exception as e:
                logger.warning(f"[browser] context 종료 중 오류: {e}")
            self._context = None

        if self._browser:
            try:
                await self._browser.close()
            except Exception as e:
                logger.warning(f"[browser] 브라우저 종료 중 오류: {e}")
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.info("Playwright 브라우저 종료 완료")

    async def __aenter__(self) -> BrowserManager:
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
