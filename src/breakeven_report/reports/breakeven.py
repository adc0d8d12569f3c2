# src/breakeven_report/reports/breakeven.py
from __future__ import annotations

import html
import logging
from typing import Any, Mapping

from ..browser import BrowserPool
from ..charts import draw_breakeven_chart
from ..demo import DEMO_TITLE
from ..finance import FinancialInput, build_series, derive_metrics
from ..geometry import BREAKEVEN_CANVAS, Canvas, compute_geometry
from ..renderer import render_pdf_page

LOGGER = logging.getLogger(__name__)

READY_SELECTOR = "#chart svg"
PAGE_MARGIN_PX = 20


class BreakevenReport:
    """One breakeven chart page for a single set of figures.

    Metrics, series and geometry are computed once in the constructor and not
    touched afterwards.
    """

    def __init__(
        self,
        data: FinancialInput | Mapping[str, Any],
        title: str = DEMO_TITLE,
        canvas: Canvas = BREAKEVEN_CANVAS,
    ):
        if not isinstance(data, FinancialInput):
            data = FinancialInput.from_mapping(data)
        self.data = data
        self.title = title
        self.metrics = derive_metrics(data)
        self.series = build_series(self.metrics)
        self.geometry = compute_geometry(self.series, self.metrics, canvas)

    def html(self) -> str:
        svg = draw_breakeven_chart(self.geometry)
        return f"""<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <style>
      body {{ font-family: 'Helvetica', sans-serif; padding: 40px; }}
      h1 {{ text-align: center; color: #333; }}
      .chart-container {{
        display: flex;
        justify-content: center;
        margin-top: 50px;
        height: 400px;
      }}
    </style>
  </head>
  <body>
    <h1>{html.escape(self.title)}</h1>
    <div id="chart" class="chart-container">{svg}</div>
  </body>
</html>
"""

    def generate(self, pool: BrowserPool, timeout: float | None = None) -> bytes:
        try:
            return render_pdf_page(
                pool,
                self.html(),
                report="Breakeven Report",
                ready_selector=READY_SELECTOR,
                timeout=timeout,
                margin_top_px=PAGE_MARGIN_PX,
                margin_bottom_px=PAGE_MARGIN_PX,
            )
        except Exception:
            LOGGER.exception("Error generating Breakeven Report")
            raise
