"""
Enum definitions for market results extraction
"""
from enum import Enum

class ColumnRole(Enum):
    """Semantic columns scraped from the results table; value is the CSV label"""
    LOW = "Low"
    HIGH = "High"
    LAST = "Last"
    WEIGHT_AVG = "Weight Avg"

    @property
    def label(self) -> str:
        return self.value
