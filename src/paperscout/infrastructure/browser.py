"""Playwright implementation of the page automation protocol.

One browser context and one page are opened per run and navigated serially.
Playwright errors are translated at this boundary so that the extraction core
only ever sees ElementLookupError, PageProcessingError and ExtractionError.
"""

import asyncio
import logging

from playwright.async_api import Browser, BrowserContext, Locator, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page as PlaywrightNativePage
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from paperscout.config.settings import BrowserConfig
from paperscout.core.exceptions import (
    BrowserSessionError,
    ConfigurationError,
    ElementLookupError,
    ExtractionError,
    PageProcessingError,
)
from paperscout.core.protocols import SchemaT

from .llm_extractor import LLMFieldExtractor

logger = logging.getLogger(__name__)

SUPPORTED_BROWSERS = ("firefox", "chromium", "webkit")


class PlaywrightElement:
    """Element scope backed by a Playwright locator."""

    def __init__(self, locator: Locator, timeout: int):
        self._locator = locator
        self._timeout = timeout

    async def query_all(self, selector: str) -> list["PlaywrightElement"]:
        try:
            locators = await self._locator.locator(selector).all()
        except PlaywrightError as e:
            raise ElementLookupError(selector, str(e)) from e
        return [PlaywrightElement(loc, self._timeout) for loc in locators]

    async def text(self) -> str | None:
        try:
            return await self._locator.text_content(timeout=self._timeout)
        except PlaywrightError as e:
            raise ElementLookupError("text()", str(e)) from e

    async def get_attribute(self, name: str) -> str | None:
        try:
            return await self._locator.get_attribute(name, timeout=self._timeout)
        except PlaywrightError as e:
            raise ElementLookupError(f"@{name}", str(e)) from e


class PlaywrightPage:
    """Page automation over a single Playwright page."""

    def __init__(
        self,
        page: PlaywrightNativePage,
        config: BrowserConfig,
        extractor: LLMFieldExtractor | None = None,
    ):
        self._page = page
        self._config = config
        self._extractor = extractor

    @property
    def url(self) -> str:
        return self._page.url

    async def goto(self, url: str) -> None:
        """Navigate and wait for DOMContentLoaded."""
        try:
            response = await self._page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self._config.navigation_timeout,
            )
        except PlaywrightError as e:
            raise PageProcessingError(url, f"Navigation to {url} failed: {e}") from e

        if response is not None and response.status >= 400:
            raise PageProcessingError(url, f"Navigation to {url} returned HTTP {response.status}")

    async def wait_until_ready(self) -> None:
        """Wait for the DOM to settle, bounded by ``dom_settle_timeout``.

        A page that keeps the network busy past the deadline is read as-is.
        """
        try:
            await self._page.wait_for_load_state("domcontentloaded", timeout=self._config.navigation_timeout)
        except PlaywrightError as e:
            raise PageProcessingError(self.url, f"Page never became ready: {e}") from e
        try:
            await self._page.wait_for_load_state("networkidle", timeout=self._config.dom_settle_timeout)
        except PlaywrightTimeoutError:
            logger.debug("Network did not go idle within %dms on %s", self._config.dom_settle_timeout, self.url)

    async def query_all(self, selector: str) -> list[PlaywrightElement]:
        try:
            locators = await self._page.locator(selector).all()
        except PlaywrightError as e:
            raise ElementLookupError(selector, str(e)) from e
        return [PlaywrightElement(loc, self._config.lookup_timeout) for loc in locators]

    async def text(self) -> str | None:
        try:
            return await self._page.locator("body").text_content(timeout=self._config.lookup_timeout)
        except PlaywrightError as e:
            raise ElementLookupError("body", str(e)) from e

    async def get_attribute(self, name: str) -> str | None:
        return None

    async def content(self) -> str:
        try:
            return await self._page.content()
        except PlaywrightError as e:
            raise PageProcessingError(self.url, f"Could not read page content: {e}") from e

    async def extract(self, instruction: str, schema: type[SchemaT]) -> SchemaT:
        """Run instruction-driven extraction against the current page.

        The LLM call is blocking, so it runs in a worker thread; the run still
        waits for it before doing anything else.
        """
        if self._extractor is None:
            raise ExtractionError("Instruction-driven extraction is not configured (no LLM provider)")
        try:
            html = await self.content()
        except PageProcessingError as e:
            raise ExtractionError(str(e)) from e
        return await asyncio.to_thread(self._extractor.extract, html, instruction, schema, self.url)

    async def capture_screenshot(self, path: str) -> str | None:
        try:
            await self._page.screenshot(path=path, full_page=True)
        except PlaywrightError as e:
            logger.warning("Screenshot to %s failed: %s", path, e)
            return None
        logger.info("Saved page screenshot to %s", path)
        return path


class BrowserSession:
    """Owns the Playwright browser for one run.

    Usage::

        async with BrowserSession(config, extractor) as page:
            ...
    """

    def __init__(self, config: BrowserConfig, extractor: LLMFieldExtractor | None = None):
        """Initialize the session.

        Args:
            config: Browser settings.
            extractor: Instruction-driven extractor handed to the page.
        """
        self.config = config
        self.extractor = extractor
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None

    async def _launch(self, playwright: Playwright) -> Browser:
        if self.config.cdp_url:
            logger.info("Connecting to remote browser over CDP")
            return await playwright.chromium.connect_over_cdp(self.config.cdp_url)

        browser_type = getattr(playwright, self.config.browser)
        browser = await browser_type.launch(headless=self.config.headless)
        logger.info("%s browser initialized (headless=%s)", self.config.browser.capitalize(), self.config.headless)
        return browser

    async def open(self) -> PlaywrightPage:
        """Start the browser and return the run's single page.

        Raises:
            ConfigurationError: Unknown browser name.
            BrowserSessionError: The browser could not be started.
        """
        if not self.config.cdp_url and self.config.browser not in SUPPORTED_BROWSERS:
            raise ConfigurationError(f"Unsupported browser {self.config.browser!r}")

        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._launch(self._playwright)
            self._context = await self._browser.new_context(
                viewport={"width": self.config.viewport_width, "height": self.config.viewport_height},
                locale="en-US",
            )
            page = await self._context.new_page()
        except PlaywrightError as e:
            await self.close()
            raise BrowserSessionError(f"Failed to start {self.config.browser} browser: {e}") from e
        page.set_default_timeout(self.config.lookup_timeout)
        return PlaywrightPage(page, self.config, self.extractor)

    async def close(self) -> None:
        """Clean up browser resources."""
        if self._context is not None:
            try:
                await self._context.close()
            except PlaywrightError as e:
                logger.debug("Error closing browser context: %s", e)
            self._context = None
        if self._browser is not None:
            try:
                await self._browser.close()
            except PlaywrightError as e:
                logger.debug("Error closing browser: %s", e)
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
            logger.info("Browser session closed")

    async def __aenter__(self) -> PlaywrightPage:
        return await self.open()

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


__all__ = ["BrowserSession", "PlaywrightPage", "PlaywrightElement"]
