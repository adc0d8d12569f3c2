"""Report pages, one PDF page each."""

from .breakeven import BreakevenReport
from .sales import SALES_DATA, generate_sales_report, sales_bars, sales_html

__all__ = [
    "BreakevenReport",
    "SALES_DATA",
    "generate_sales_report",
    "sales_bars",
    "sales_html",
]
