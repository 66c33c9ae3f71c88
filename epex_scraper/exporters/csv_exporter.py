"""
CSV export for market results
"""
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from ..config.enums import ColumnRole
from ..config.schema import ExtractedRecord

logger = logging.getLogger(__name__)

# Characters that force a field to be quoted
SPECIAL_CHARS = (',', '"', '\n', '\r')

def escape_field(value: Optional[str]) -> str:
    """
    Escape a single CSV field

    Examples:
    - None -> ""
    - "17.5" -> "17.5"
    - 'He said "hi", ok' -> '"He said ""hi"", ok"'
    """
    if value is None:
        return ""

    value = str(value)
    if any(char in value for char in SPECIAL_CHARS):
        return '"' + value.replace('"', '""') + '"'

    return value

def encode(rows: Sequence[Sequence[Optional[str]]]) -> str:
    """Encode rows as CSV text: comma-separated fields, LF after every row"""
    lines = [','.join(escape_field(field) for field in row) for row in rows]
    return '\n'.join(lines) + '\n'

class CSVExporter:
    """Export market results records to a CSV file"""

    def __init__(self, output_dir: str = "output"):
        self.output_dir = Path(output_dir)

    def _get_headers(self) -> List[str]:
        """Get column headers for the CSV"""
        return [role.label for role in ColumnRole]

    def build_output_path(self, delivery_date: str) -> Path:
        """Path of the CSV file for a delivery date"""
        return (self.output_dir / f"epex_market_results_{delivery_date}.csv").resolve()

    def export_market_results(self, records: Sequence[ExtractedRecord], delivery_date: str) -> str:
        """
        Export market results to CSV file

        Args:
            records: Extracted Low / High / Last / Weight Avg records
            delivery_date: Delivery date (YYYY-MM-DD) used in the filename

        Returns:
            Path to the created CSV file
        """
        try:
            filepath = self.build_output_path(delivery_date)
            filepath.parent.mkdir(parents=True, exist_ok=True)

            rows = [self._get_headers()] + [list(record) for record in records]
            content = encode(rows)

            # newline='' keeps LF line endings on every platform
            with open(filepath, 'w', newline='', encoding='utf-8') as csvfile:
                csvfile.write(content)

            logger.info(f"Wrote {len(records)} data rows to CSV: {filepath}")
            return str(filepath)

        except OSError as e:
            logger.error(f"Failed to export to CSV: {e}")
            raise
