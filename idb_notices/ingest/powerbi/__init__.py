"""Scraping the IDB procurement notices Power BI embed through its ARIA grid."""

from idb_notices.ingest.powerbi.extractor import PowerBIExtractor
from idb_notices.ingest.powerbi.grid import GridState, wait_for_grid
from idb_notices.ingest.powerbi.table import parse_accessible_table

__all__ = ["PowerBIExtractor", "GridState", "wait_for_grid", "parse_accessible_table"]
