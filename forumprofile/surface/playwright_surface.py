"""Playwright-backed display surface."""

import json
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from playwright.async_api import async_playwright, Page, Route, Error as PlaywrightError

from forumprofile.surface.base import DisplaySurface

# Name of the page binding that bridge.js posts messages through
BRIDGE_BINDING = "__forumprofileBridge"

VIEWPORT = {"width": 540, "height": 720}


def at_document_end(source: str) -> str:
    """Wrap a script so it runs in global scope once the DOM is parsed."""
    return (
        "document.addEventListener('DOMContentLoaded', function () {"
        f" (0, eval)({json.dumps(source)}); "
        "});"
    )


class PlaywrightSurface(DisplaySurface):
    """
    Display surface backed by a Playwright page.

    Documents are served by intercepting the base address, so relative links
    in the markup resolve against it without any network request for the
    document itself.
    """

    def __init__(self, page: Page):
        super().__init__()
        self.page = page
        self._document = ""
        self._base_url: str | None = None
        self._installed_scripts = 0
        self._attached = False

    async def _attach(self) -> None:
        if self._attached:
            return
        await self.page.expose_binding(BRIDGE_BINDING, self._on_binding)
        self._attached = True

    def _on_binding(self, source: dict, name: str, body: Any = None) -> None:
        self.post_message(name, body)

    async def _install_scripts(self) -> None:
        for source in self.user_scripts[self._installed_scripts:]:
            await self.page.add_init_script(script=at_document_end(source))
            self._installed_scripts += 1

    async def _serve_document(self, route: Route) -> None:
        await route.fulfill(
            status=200,
            content_type="text/html; charset=utf-8",
            body=self._document,
        )

    async def load_document(self, html: str, base_url: str) -> None:
        await self._attach()
        await self._install_scripts()

        if base_url != self._base_url:
            if self._base_url is not None:
                await self.page.unroute(self._base_url, self._serve_document)
            await self.page.route(base_url, self._serve_document)
            self._base_url = base_url

        self._document = html
        self._set_loading(True)
        try:
            await self.page.goto(base_url, wait_until="load")
        except PlaywrightError as e:
            self._log.error("document_load_failed", base_url=base_url, error=str(e))
        finally:
            self._set_loading(False)

    async def evaluate_script(self, code: str) -> Any:
        return await self.page.evaluate(code)

    async def close(self) -> None:
        await super().close()
        if not self.page.is_closed():
            await self.page.close()


@asynccontextmanager
async def launch_surface(headless: bool = False) -> AsyncIterator[PlaywrightSurface]:
    """
    Open a browser window and yield a surface for its single page.

    Args:
        headless: Run browser in headless mode
    """
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=headless)
        try:
            context = await browser.new_context(viewport=VIEWPORT)
            page = await context.new_page()
            surface = PlaywrightSurface(page)
            try:
                yield surface
            finally:
                await surface.close()
        finally:
            await browser.close()
