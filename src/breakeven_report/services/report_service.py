# src/breakeven_report/services/report_service.py
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Mapping, Tuple

from ..assembler import merge_pdfs
from ..browser import BrowserPool
from ..demo import DEMO_FINANCIALS, DEMO_TITLE
from ..errors import ReportError
from ..finance import FinancialInput
from ..reports import BreakevenReport, generate_sales_report

LOGGER = logging.getLogger(__name__)

PageJob = Tuple[str, Callable[[BrowserPool, float | None], bytes]]


def report_pages(data: FinancialInput, title: str) -> List[PageJob]:
    """Pages of the combined report, in output order."""
    breakeven = BreakevenReport(data, title=title)
    return [
        ("sales", generate_sales_report),
        ("breakeven", breakeven.generate),
    ]


def generate_combined_report(
    pool: BrowserPool,
    data: FinancialInput | Mapping[str, Any] | None = None,
    *,
    title: str | None = None,
    timeout: float | None = None,
) -> bytes:
    """Render every page in parallel on ``pool`` and merge them into one PDF.

    The pool is borrowed, never closed here.
    """
    if data is None:
        data = DEMO_FINANCIALS
    if not isinstance(data, FinancialInput):
        data = FinancialInput.from_mapping(data)

    jobs = report_pages(data, title or pool.settings.REPORT_TITLE or DEMO_TITLE)

    # completion order does not matter: results are collected in job order
    with ThreadPoolExecutor(max_workers=len(jobs), thread_name_prefix="render") as ex:
        futures = [ex.submit(render, pool, timeout) for _, render in jobs]
        try:
            pages = [fut.result() for fut in futures]
        except ReportError:
            LOGGER.exception("Error during report generation")
            raise

    return merge_pdfs(pages)
