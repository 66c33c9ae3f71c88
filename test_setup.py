"""
Tests to verify the setup is working correctly
"""
import logging

from epex_scraper.core.logger import setup_logger


def test_imports():
    """All modules can be imported"""
    from epex_scraper.config.enums import ColumnRole
    from epex_scraper.config.schema import ColumnIndexSet, ExtractedRecord, MarketResultsConfig
    from epex_scraper.core.browser import BrowserManager
    from epex_scraper.extractors.table_extractor import TableExtractor
    from epex_scraper.exporters.csv_exporter import CSVExporter
    from epex_scraper.main import EpexMarketScraper

    assert [role.label for role in ColumnRole] == ["Low", "High", "Last", "Weight Avg"]


def test_setup_logger_adds_file_and_console_handlers(tmp_path):
    logger = setup_logger("epex_scraper_test_setup", log_level="WARNING", log_dir=str(tmp_path / "logs"))

    try:
        handler_types = {type(handler) for handler in logger.handlers}
        assert handler_types == {logging.FileHandler, logging.StreamHandler}
        assert len(list((tmp_path / "logs").glob("scraper_*.log"))) == 1

        # Calling again reuses the handlers
        again = setup_logger("epex_scraper_test_setup", log_level="DEBUG", log_dir=str(tmp_path / "logs"))
        assert again is logger
        assert len(logger.handlers) == 2
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
