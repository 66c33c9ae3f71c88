"""
Data schema definitions for market results extraction
"""
from dataclasses import dataclass, field, fields
from typing import Optional, List, Dict, Any, NamedTuple

from ..core.exceptions import ConfigError

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

@dataclass(frozen=True)
class ColumnIndexSet:
    """Zero-based positions of the four scraped columns within the header row"""
    low: int
    high: int
    last: int
    weight_avg: int

    @property
    def max_index(self) -> int:
        return max(self.low, self.high, self.last, self.weight_avg)

    @property
    def min_required_cells(self) -> int:
        """Smallest cell count a data row needs to cover every resolved column"""
        return self.max_index + 1

class ExtractedRecord(NamedTuple):
    """One scraped table row, always in Low / High / Last / Weight Avg order"""
    low: str
    high: str
    last: str
    weight_avg: str

@dataclass
class MarketResultsConfig:
    """Configuration for the market results page and the scraping run"""

    # Market results page
    base_url: str = "https://www.epexspot.com/en/market-results"
    market_area: str = "GB"
    modality: str = "Continuous"
    sub_modality: str = "Continuous"
    data_mode: str = "table"
    product: str = "30"

    # Run settings
    headless: bool = True
    output_dir: str = "output"
    log_level: str = "INFO"
    log_dir: str = "logs"

    # Browser timeouts (milliseconds)
    navigation_timeout: int = 60000
    action_timeout: int = 15000
    network_idle_timeout: int = 30000
    header_wait_timeout: int = 45000
    table_timeout: int = 30000

    viewport: Dict[str, int] = field(default_factory=lambda: {'width': 1280, 'height': 720})
    user_agent: str = (
        'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 '
        '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
    )

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]]) -> "MarketResultsConfig":
        """
        Build a config from the parsed settings file

        The file has a ``market`` section (page/query values) and a
        ``settings`` section (run options). Unknown keys are ignored and
        missing keys keep their defaults.

        Raises:
            ConfigError: a section is not a mapping or log_level is unknown
        """
        config = config or {}
        known = {f.name for f in fields(cls)}

        values: Dict[str, Any] = {}
        for section in ('market', 'settings'):
            section_values = config.get(section) or {}
            if not isinstance(section_values, dict):
                raise ConfigError(f"Settings section '{section}' must be a mapping, got: {section_values!r}")

            for key, value in section_values.items():
                if key in known:
                    values[key] = value

        # Query values are always sent as text
        for key in ('market_area', 'modality', 'sub_modality', 'data_mode', 'product'):
            if key in values:
                values[key] = str(values[key])

        if 'log_level' in values:
            log_level = str(values['log_level']).upper()
            if log_level not in LOG_LEVELS:
                raise ConfigError(
                    f"Unknown log_level {values['log_level']!r}, expected one of: {', '.join(LOG_LEVELS)}"
                )
            values['log_level'] = log_level

        return cls(**values)

    def query_params(self, delivery_date: str) -> List[tuple]:
        """Query parameters for the results page, in the order the site uses them"""
        return [
            ('modality', self.modality),
            ('sub_modality', self.sub_modality),
            ('data_mode', self.data_mode),
            ('delivery_date', delivery_date),
            ('market_area', self.market_area),
            ('product', self.product),
        ]
