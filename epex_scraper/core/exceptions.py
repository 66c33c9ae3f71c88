"""
Error types raised while scraping market results

Every error is fatal to the run: nothing is retried and no partial CSV is
written.
"""
from typing import List, Sequence

class ScraperError(Exception):
    """Base class for all scraper errors"""

class ConfigError(ScraperError):
    """Settings file is missing or malformed"""

class BrowserError(ScraperError):
    """Playwright failed to launch the browser or load the page"""

class ForbiddenError(ScraperError):
    """The market results page denied access"""

    def __init__(self, message: str = None):
        super().__init__(
            message or "Page returned 403 Forbidden. Try running with: python run_scraper.py --headed"
        )

class TableNotFoundError(ScraperError):
    """No results table with the expected header was found"""

class ColumnNotFoundError(ScraperError):
    """The header row has no column for a required role"""

    def __init__(self, role: str, headers: Sequence[str]):
        self.role = role
        self.headers: List[str] = list(headers)
        super().__init__(
            f'Could not find "{role}" column in headers: [{" | ".join(self.headers)}]'
        )

class EmptyTableError(ScraperError):
    """The results table has no body rows"""

    def __init__(self, message: str = "Results table has no data rows (tbody tr)."):
        super().__init__(message)

class NoValidRowsError(ScraperError):
    """Every body row was too short for the resolved columns"""

    def __init__(self, message: str = "No valid data rows could be scraped from the table."):
        super().__init__(message)
