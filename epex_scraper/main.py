"""
Main execution script for the EPEX SPOT Market Results Scraper
"""
import argparse
import asyncio
import logging
import sys
import yaml
from pathlib import Path
from typing import List, Optional
from playwright.async_api import Error as PlaywrightError

from .core.logger import setup_logger
from .core.browser import BrowserManager, RESULTS_TABLE_MARKER
from .core.exceptions import ConfigError, ScraperError
from .core.utils import get_yesterday_iso_date, build_market_results_url
from .config.schema import LOG_LEVELS, MarketResultsConfig, ExtractedRecord
from .extractors.table_extractor import TableExtractor, parse_results_table
from .exporters.csv_exporter import CSVExporter

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config" / "settings.yaml"

class EpexMarketScraper:
    """Main scraper orchestrator"""

    def __init__(self, config_path: Optional[str] = None, headless: Optional[bool] = None):
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self.headless = headless
        self.config: Optional[MarketResultsConfig] = None
        self.browser_manager = None
        self.results: List[ExtractedRecord] = []

    def load_config(self) -> MarketResultsConfig:
        """Load market and run settings from YAML file"""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load configuration: {e}")
            raise ConfigError(f"Could not load settings from {self.config_path}: {e}") from e

        if config is not None and not isinstance(config, dict):
            raise ConfigError(f"Settings file {self.config_path} must contain a mapping")

        self.config = MarketResultsConfig.from_dict(config)
        if self.headless is not None:
            self.config.headless = self.headless

        logger.debug(f"Loaded configuration for market area {self.config.market_area}")
        return self.config

    async def scrape(self, url: str) -> List[ExtractedRecord]:
        """Fetch the results page and extract the four scraped columns"""
        self.browser_manager = BrowserManager(self.config)

        async with self.browser_manager:
            html = await self.browser_manager.fetch_results_html(url)

        header_texts, data_rows = parse_results_table(html, marker=RESULTS_TABLE_MARKER)

        extractor = TableExtractor()
        return extractor.extract(header_texts, data_rows)

    async def run(self) -> str:
        """
        Main execution method

        Returns:
            Path to the written CSV file
        """
        try:
            logger.info("=== EPEX MARKET RESULTS SCRAPER STARTED ===")

            if self.config is None:
                self.load_config()

            delivery_date = get_yesterday_iso_date()
            url = build_market_results_url(self.config, delivery_date)
            logger.info(f"Delivery date: {delivery_date}")

            self.results = await self.scrape(url)

            exporter = CSVExporter(self.config.output_dir)
            csv_file = exporter.export_market_results(self.results, delivery_date)

            logger.info("=== SCRAPING COMPLETED SUCCESSFULLY ===")
            return csv_file

        except Exception as e:
            logger.error(f"Scraper failed: {e}")
            raise

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Scrape EPEX SPOT Low / High / Last / Weight Avg market results into CSV"
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window (use when the site returns 403 Forbidden)"
    )
    parser.add_argument("--config", default=None, help="Path to settings YAML file")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Console log level (default from settings)"
    )
    return parser.parse_args(argv)

async def main(argv: Optional[List[str]] = None) -> str:
    """Entry point"""
    args = parse_args(argv)

    scraper = EpexMarketScraper(
        config_path=args.config,
        headless=False if args.headed else None
    )
    config = scraper.load_config()
    setup_logger(log_level=args.log_level or config.log_level, log_dir=config.log_dir)
    logger.info(f"Loaded configuration for market area {config.market_area} from {scraper.config_path}")

    return await scraper.run()

def cli(argv: Optional[List[str]] = None) -> int:
    """Console script entry point; returns the process exit status"""
    try:
        asyncio.run(main(argv))
    except (ScraperError, PlaywrightError):
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(cli())
