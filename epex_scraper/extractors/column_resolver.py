"""
Resolve the positions of the scraped columns from the results table header
"""
import re
import logging
from typing import Dict, Pattern, Sequence

from ..config.enums import ColumnRole
from ..config.schema import ColumnIndexSet
from ..core.exceptions import ColumnNotFoundError

logger = logging.getLogger(__name__)

# Case-insensitive search patterns, one per role
ROLE_PATTERNS: Dict[ColumnRole, Pattern] = {
    ColumnRole.LOW: re.compile(r'low', re.IGNORECASE),
    ColumnRole.HIGH: re.compile(r'high', re.IGNORECASE),
    ColumnRole.LAST: re.compile(r'last', re.IGNORECASE),
    ColumnRole.WEIGHT_AVG: re.compile(r'weight\s*(ed)?\s*avg', re.IGNORECASE),
}

class ColumnResolver:
    """Find the Low / High / Last / Weight Avg columns regardless of their order"""

    def __init__(self, patterns: Dict[ColumnRole, Pattern] = None):
        self.patterns = patterns or ROLE_PATTERNS

    def find_index(self, header_texts: Sequence[str], role: ColumnRole) -> int:
        """
        Return the index of the first header matching the role's pattern

        Raises:
            ColumnNotFoundError: no header matches
        """
        pattern = self.patterns[role]
        for index, text in enumerate(header_texts):
            if pattern.search(text):
                return index

        raise ColumnNotFoundError(role.label, header_texts)

    def resolve(self, header_texts: Sequence[str]) -> ColumnIndexSet:
        """
        Resolve all four column positions

        Roles are matched independently, so one header may satisfy more
        than one role.
        """
        indices = ColumnIndexSet(
            low=self.find_index(header_texts, ColumnRole.LOW),
            high=self.find_index(header_texts, ColumnRole.HIGH),
            last=self.find_index(header_texts, ColumnRole.LAST),
            weight_avg=self.find_index(header_texts, ColumnRole.WEIGHT_AVG),
        )

        logger.debug(f"Resolved column indices {indices} from headers {list(header_texts)}")
        return indices
