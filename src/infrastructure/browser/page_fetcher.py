"""렌더링된 페이지 HTML / 스크린샷 수집기.

공유 browser context에서 항목마다 새 페이지를 열고, 끝나면 반드시 닫는다.
네비게이션 실패는 예외 대신 None / 빈 PageCapture로 돌려준다.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

from playwright.async_api import BrowserContext, Page, Route

from src.infrastructure.config.settings import BrowserConfig
from src.infrastructure.content.extractor import embedded_frame_name

logger = logging.getLogger(__name__)


@dataclass
class PageCapture:
    html: Optional[str] = None
    screenshots: list[bytes] = field(default_factory=list)


class PageFetcher:
    """Playwright 페이지 기반 HTML 수집기."""

    def __init__(
        self,
        context: BrowserContext,
        config: BrowserConfig,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._context = context
        self._config = config
        self._sleep = sleep

    async def fetch_rendered_html(self, url: str) -> Optional[str]:
        capture = await self._visit(url, with_screenshots=False)
        return capture.html

    async def fetch_rendered_html_with_captures(self, url: str, title: str = "") -> PageCapture:
        capture = await self._visit(url, with_screenshots=True)
        logger.debug(
            f"[browser] {title[:30]}: html {len(capture.html or '')}자, "
            f"스크린샷 {len(capture.screenshots)}장"
        )
        return capture

    # ─── 내부 ───

    async def _visit(self, url: str, with_screenshots: bool) -> PageCapture:
        page: Optional[Page] = None
        capture = PageCapture()
        try:
            page = await self._open_page()
            await page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self._config.navigation_timeout * 1000,
            )
            await self._simulate_human(page)
            capture.html = await self._read_html(page, url)

            if with_screenshots:
                capture.screenshots = await self._capture_screenshots(page)
        except Exception as e:
            logger.warning(f"[browser] 페이지 로드 실패 {url}: {e}")
        finally:
            if page is not None:
                try:
                    await page.close()
                except Exception as e:
                    logger.debug(f"[browser] 페이지 종료 실패: {e}")
        return capture

    async def _open_page(self) -> Page:
        page = await self._context.new_page()
        await page.set_viewport_size(random.choice(self._config.viewports))
        await page.route("**/*", self._handle_route)
        return page

    async def _handle_route(self, route: Route) -> None:
        request = route.request
        if self.should_block(request.resource_type, request.url):
            await route.abort()
        else:
            await route.continue_()

    def should_block(self, resource_type: str, url: str) -> bool:
        if resource_type in self._config.blocked_resource_types:
            return True
        lowered = url.lower()
        return any(kw in lowered for kw in self._config.blocked_domain_keywords)

    async def _simulate_human(self, page: Page) -> None:
        """마우스 이동 / 대기 / 부드러운 스크롤. 실패해도 무시한다."""
        try:
            viewport = page.viewport_size or {"width": 1280, "height": 800}
            width, height = viewport["width"], viewport["height"]

            for _ in range(random.randint(2, 4)):
                await page.mouse.move(
                    random.randint(0, width - 1),
                    random.randint(0, height - 1),
                    steps=random.randint(5, 15),
                )
            await self._sleep(random.uniform(0.5, 1.0))

            await page.evaluate(
                "(distance) => window.scrollBy({ top: distance, behavior: 'smooth' })",
                random.randint(height // 3, height),
            )
            await self._sleep(random.uniform(0.5, 1.0))
        except Exception as e:
            logger.debug(f"[browser] 사람 행동 시뮬레이션 실패 (무시): {e}")

    async def _read_html(self, page: Page, url: str) -> str:
        frame_name = embedded_frame_name(url)
        if frame_name:
            frame = page.frame(name=frame_name)
            if frame is not None:
                await frame.wait_for_load_state("domcontentloaded")
                return await frame.content()
            logger.debug(f"[browser] frame '{frame_name}' 없음 → 문서 루트 사용")
        return await page.content()

    async def _capture_screenshots(self, page: Page) -> list[bytes]:
        """뷰포트 높이만큼 스크롤하며 최대 screenshot_count장 JPEG 캡처."""
        screenshots: list[bytes] = []
        try:
            await page.evaluate("() => window.scrollTo(0, 0)")
            await self._sleep(self._config.screenshot_settle_delay)
            for i in range(self._config.screenshot_count):
                if i > 0:
                    await page.evaluate("() => window.scrollBy(0, window.innerHeight)")
                    await self._sleep(self._config.screenshot_settle_delay)
                screenshots.append(
                    await page.screenshot(type="jpeg", quality=self._config.screenshot_quality)
                )
        except Exception as e:
            logger.debug(f"[browser] 스크린샷 실패: {e}")
        return screenshots
