"""
Market results table extraction

Turns the rendered results table into Low / High / Last / Weight Avg
records. Cell text is kept exactly as rendered (trimmed only), so any
locale-specific number formatting survives into the CSV.
"""
import logging
from typing import List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup, Tag

from ..config.schema import ExtractedRecord
from ..core.exceptions import EmptyTableError, NoValidRowsError, TableNotFoundError
from .column_resolver import ColumnResolver

logger = logging.getLogger(__name__)

def find_results_table(soup: BeautifulSoup, marker: str = "Low") -> Optional[Tag]:
    """Return the first table with a header cell containing the marker text"""
    marker_lower = marker.lower()

    for table in soup.find_all('table'):
        headers = table.find_all('th')
        if any(marker_lower in th.get_text().lower() for th in headers):
            return table

    return None

def get_header_texts(table: Tag) -> List[str]:
    """Trimmed header labels, from thead if present or else the first row"""
    header_cells = table.select('thead tr th')

    if not header_cells:
        first_row = table.find('tr')
        header_cells = first_row.find_all('th') if first_row else []

    return [th.get_text().strip() for th in header_cells]

def get_body_rows(table: Tag) -> List[List[str]]:
    """Raw cell texts of every body row, in document order"""
    rows = table.select('tbody tr')

    if not rows:
        # No tbody in the markup: take rows with data cells outside thead
        rows = [
            tr for tr in table.find_all('tr')
            if tr.find_parent('thead') is None and tr.find('td')
        ]

    return [
        [td.get_text() for td in row.find_all('td', recursive=False)]
        for row in rows
    ]

def parse_results_table(html: str, marker: str = "Low") -> Tuple[List[str], List[List[str]]]:
    """
    Locate the results table in page HTML

    Args:
        html: Rendered page HTML
        marker: Text one of the table's header cells must contain

    Returns:
        Tuple of (header texts, body rows as lists of cell texts)

    Raises:
        TableNotFoundError: no table has a matching header cell
    """
    # Use html.parser (built-in) instead of lxml to avoid compilation issues
    soup = BeautifulSoup(html, 'html.parser')

    table = find_results_table(soup, marker)
    if table is None:
        raise TableNotFoundError(f'Expected a results table with a {marker} column')

    header_texts = get_header_texts(table)
    body_rows = get_body_rows(table)

    logger.info(f"Found results table with {len(header_texts)} columns and {len(body_rows)} body rows")
    return header_texts, body_rows

class TableExtractor:
    """Extract the four scraped columns from every well-formed table row"""

    def __init__(self, resolver: ColumnResolver = None):
        self.resolver = resolver or ColumnResolver()

    def extract(self, header_texts: Sequence[str], data_rows: Sequence[Sequence[str]]) -> List[ExtractedRecord]:
        """
        Extract Low / High / Last / Weight Avg from each data row

        Rows with fewer cells than the right-most resolved column are
        skipped. Source row order is preserved.

        Raises:
            EmptyTableError: data_rows is empty
            ColumnNotFoundError: a required column is missing from the header
            NoValidRowsError: every row was skipped
        """
        if not data_rows:
            raise EmptyTableError()

        indices = self.resolver.resolve(header_texts)
        min_required_cells = indices.min_required_cells

        records: List[ExtractedRecord] = []
        skipped = 0

        for row in data_rows:
            if len(row) < min_required_cells:
                skipped += 1
                continue

            records.append(ExtractedRecord(
                low=row[indices.low].strip(),
                high=row[indices.high].strip(),
                last=row[indices.last].strip(),
                weight_avg=row[indices.weight_avg].strip(),
            ))

        if skipped:
            logger.debug(f"Skipped {skipped} rows with fewer than {min_required_cells} cells")

        if not records:
            raise NoValidRowsError()

        logger.info(f"Extracted {len(records)} records from {len(data_rows)} rows")
        return records
