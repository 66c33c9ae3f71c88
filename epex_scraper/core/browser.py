"""
Browser management using Playwright
"""
import logging
from typing import Optional
from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Response
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ..config.schema import MarketResultsConfig
from .exceptions import BrowserError, ForbiddenError, TableNotFoundError

logger = logging.getLogger(__name__)

# Header cell every results table has; used to tell it apart from layout tables
RESULTS_TABLE_MARKER = "Low"

class BrowserManager:
    """Manage the Playwright browser used to render the market results page"""

    def __init__(self, config: Optional[MarketResultsConfig] = None, headless: Optional[bool] = None):
        self.config = config or MarketResultsConfig()
        self.headless = self.config.headless if headless is None else headless
        self.playwright = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None

    async def start(self):
        """Start the browser"""
        try:
            self.playwright = await async_playwright().start()

            self.browser = await self.playwright.chromium.launch(
                headless=self.headless,
                args=[
                    '--no-sandbox',
                    '--disable-dev-shm-usage',
                    '--disable-blink-features=AutomationControlled',
                    '--disable-extensions',
                ]
            )

            # Create context with realistic settings
            self.context = await self.browser.new_context(
                viewport=self.config.viewport,
                user_agent=self.config.user_agent
            )

            self.context.set_default_timeout(self.config.action_timeout)
            self.context.set_default_navigation_timeout(self.config.navigation_timeout)

            logger.info(f"Browser started successfully (headless={self.headless})")

        except PlaywrightError as e:
            logger.error(f"Failed to start browser: {e}")
            await self.close()
            raise BrowserError(f"Failed to start browser: {e}") from e

    async def new_page(self) -> Page:
        """Create a new page"""
        if not self.context:
            await self.start()

        page = await self.context.new_page()

        # Set up page with anti-detection measures
        await page.add_init_script("""
            // Remove webdriver property
            Object.defineProperty(navigator, 'webdriver', {
                get: () => undefined,
            });

            // Mock chrome property
            window.chrome = {
                runtime: {},
            };
        """)

        return page

    async def load_page(self, url: str, page: Page) -> Optional[Response]:
        """Navigate to the URL and return the main response"""
        logger.info(f"Navigating to: {url}")

        response = await page.goto(
            url,
            wait_until='domcontentloaded',
            timeout=self.config.navigation_timeout
        )

        if response and response.status >= 400:
            logger.warning(f"Page loaded with status {response.status}: {url}")

        return response

    async def check_forbidden(self, page: Page, response: Optional[Response] = None):
        """
        Raise ForbiddenError if the page is an access-denial response

        The site sometimes serves its 403 page with a 200 status, so the
        title and body text are checked as well as the status code.
        """
        if response is not None and response.status == 403:
            raise ForbiddenError()

        title = await page.title()
        if '403' in title:
            raise ForbiddenError()

        body_text = await page.locator('body').text_content()
        if body_text and '403 Forbidden' in body_text:
            raise ForbiddenError()

    async def wait_for_results_table(self, page: Page):
        """
        Wait until the results table is rendered

        The page shows "Loading..." (and sometimes a reCAPTCHA check)
        before the table appears, so network idle and the first header
        cell are waited for without failing on timeout. Only the final
        visibility check of the results table is fatal.
        """
        try:
            await page.wait_for_load_state('networkidle', timeout=self.config.network_idle_timeout)
        except PlaywrightTimeoutError:
            logger.debug("Network did not go idle, continuing")

        try:
            await page.wait_for_selector('table thead th', timeout=self.config.header_wait_timeout)
        except PlaywrightTimeoutError:
            logger.debug("No table header rendered yet, continuing")

        table = page.locator(f'table:has(th:has-text("{RESULTS_TABLE_MARKER}"))').first
        try:
            await table.wait_for(state='visible', timeout=self.config.table_timeout)
        except PlaywrightTimeoutError as e:
            raise TableNotFoundError(
                f'Expected a results table with a {RESULTS_TABLE_MARKER} column'
            ) from e

    async def fetch_results_html(self, url: str) -> str:
        """
        Load the market results page and return its rendered HTML

        Raises:
            BrowserError: navigation or rendering failed in Playwright
            ForbiddenError: the site denied access
            TableNotFoundError: the results table never became visible
        """
        page = await self.new_page()

        try:
            response = await self.load_page(url, page)
            await self.check_forbidden(page, response)
            await self.wait_for_results_table(page)

            html = await page.content()
            logger.info(f"Page rendered successfully: {url}")
            return html

        except PlaywrightError as e:
            logger.error(f"Failed to load page {url}: {e}")
            raise BrowserError(f"Failed to load page {url}: {e}") from e

        finally:
            await page.close()

    async def close(self):
        """Close the browser"""
        try:
            if self.context:
                await self.context.close()
            if self.browser:
                await self.browser.close()
            if self.playwright:
                await self.playwright.stop()

            self.context = None
            self.browser = None
            self.playwright = None

            logger.info("Browser closed successfully")

        except Exception as e:
            logger.error(f"Error closing browser: {e}")

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
