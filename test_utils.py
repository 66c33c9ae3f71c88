"""
Tests for delivery date, URL and settings helpers
"""
from datetime import date
from urllib.parse import parse_qsl, urlparse

import pytest
import yaml

from epex_scraper.config.schema import MarketResultsConfig
from epex_scraper.core.exceptions import ConfigError
from epex_scraper.core.utils import build_market_results_url, get_yesterday_iso_date
from epex_scraper.main import DEFAULT_CONFIG_PATH, EpexMarketScraper


@pytest.mark.parametrize("today, expected", [
    (date(2025, 12, 3), "2025-12-02"),
    (date(2025, 3, 1), "2025-02-28"),
    (date(2024, 3, 1), "2024-02-29"),
    (date(2026, 1, 1), "2025-12-31"),
    (date(2025, 10, 10), "2025-10-09"),
])
def test_get_yesterday_iso_date(today, expected):
    assert get_yesterday_iso_date(today) == expected


def test_get_yesterday_iso_date_defaults_to_today():
    result = get_yesterday_iso_date()

    assert len(result) == 10
    assert result < date.today().isoformat()


def test_build_market_results_url():
    url = build_market_results_url(MarketResultsConfig(), "2025-12-02")

    assert url == (
        "https://www.epexspot.com/en/market-results"
        "?modality=Continuous&sub_modality=Continuous&data_mode=table"
        "&delivery_date=2025-12-02&market_area=GB&product=30"
    )


def test_build_market_results_url_from_custom_config():
    config = MarketResultsConfig(base_url="https://example.test/results", market_area="DE", product="15")

    parsed = urlparse(build_market_results_url(config, "2025-06-30"))

    assert parsed.netloc == "example.test"
    assert dict(parse_qsl(parsed.query)) == {
        "modality": "Continuous",
        "sub_modality": "Continuous",
        "data_mode": "table",
        "delivery_date": "2025-06-30",
        "market_area": "DE",
        "product": "15",
    }


def test_config_from_dict_merges_sections_and_ignores_unknown_keys():
    config = MarketResultsConfig.from_dict({
        "market": {"market_area": "FR", "product": 60, "unused": "x"},
        "settings": {"headless": False, "output_dir": "results", "table_timeout": 5000},
    })

    assert config.market_area == "FR"
    assert config.product == "60"
    assert config.headless is False
    assert config.output_dir == "results"
    assert config.table_timeout == 5000
    assert config.modality == "Continuous"


def test_config_from_empty_dict_uses_defaults():
    assert MarketResultsConfig.from_dict(None) == MarketResultsConfig()


def test_packaged_settings_match_defaults():
    with open(DEFAULT_CONFIG_PATH, encoding="utf-8") as f:
        config = MarketResultsConfig.from_dict(yaml.safe_load(f))

    assert config == MarketResultsConfig()


def test_load_config_applies_headed_override(tmp_path):
    settings = tmp_path / "settings.yaml"
    settings.write_text("settings:\n  headless: true\n", encoding="utf-8")

    config = EpexMarketScraper(config_path=str(settings), headless=False).load_config()

    assert config.headless is False


def test_load_config_missing_file_raises(tmp_path):
    scraper = EpexMarketScraper(config_path=str(tmp_path / "missing.yaml"))

    with pytest.raises(ConfigError):
        scraper.load_config()


def test_load_config_rejects_non_mapping(tmp_path):
    settings = tmp_path / "settings.yaml"
    settings.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        EpexMarketScraper(config_path=str(settings)).load_config()


def test_load_config_rejects_non_mapping_section(tmp_path):
    settings = tmp_path / "settings.yaml"
    settings.write_text("market: GB\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="'market' must be a mapping"):
        EpexMarketScraper(config_path=str(settings)).load_config()


def test_config_rejects_unknown_log_level():
    with pytest.raises(ConfigError, match="log_level"):
        MarketResultsConfig.from_dict({"settings": {"log_level": "verbose"}})


def test_config_normalizes_log_level_case():
    config = MarketResultsConfig.from_dict({"settings": {"log_level": "warning"}})

    assert config.log_level == "WARNING"
