"""
EPEX SPOT Market Results Scraper

A Playwright-based scraper that collects the Low / High / Last / Weight Avg
columns from the EPEX SPOT continuous market results table and exports them
to CSV.
"""

__version__ = "1.0.0"
__author__ = "EPEX Scraper Team"
