"""
Run the EPEX SPOT market results scraper

Usage:
    python run_scraper.py            # headless
    python run_scraper.py --headed   # visible browser, for 403 Forbidden responses
"""
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from epex_scraper.main import cli

if __name__ == "__main__":
    sys.exit(cli())
