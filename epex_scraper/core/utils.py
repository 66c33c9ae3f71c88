"""
Date and URL helpers for the market results page
"""
import logging
from datetime import date, timedelta
from typing import Optional
from urllib.parse import urlencode

from ..config.schema import MarketResultsConfig

logger = logging.getLogger(__name__)

def get_yesterday_iso_date(today: Optional[date] = None) -> str:
    """
    Return yesterday's date in the local calendar as YYYY-MM-DD
    
    Examples:
    - 2025-12-03 -> "2025-12-02"
    - 2025-03-01 -> "2025-02-28"
    - 2026-01-01 -> "2025-12-31"
    """
    if today is None:
        today = date.today()
    
    yesterday = today - timedelta(days=1)
    return yesterday.isoformat()

def build_market_results_url(config: MarketResultsConfig, delivery_date: str) -> str:
    """
    Build the market results URL for the continuous intraday table
    
    Only the delivery date varies between runs; every other query value
    comes from the config (for GB: sub_modality=Continuous, product=30).
    """
    query = urlencode(config.query_params(delivery_date))
    return f"{config.base_url}?{query}"
