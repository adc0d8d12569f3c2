# src/breakeven_report/reports/sales.py
from __future__ import annotations

from typing import List, Sequence

from ..browser import BrowserPool
from ..charts import Bar, draw_bar_chart
from ..renderer import render_pdf_page

SALES_DATA = [10, 20, 30, 40, 50, 60]

CHART_WIDTH = 500
CHART_HEIGHT = 300
BAR_SPACING = 70
BAR_WIDTH = 50
VALUE_SCALE = 4
BAR_COLOR = "#4CAF50"

READY_SELECTOR = "#sales-chart svg"


def sales_bars(values: Sequence[float], height: float = CHART_HEIGHT) -> List[Bar]:
    return [
        Bar(x=i * BAR_SPACING, y=height - v * VALUE_SCALE, width=BAR_WIDTH, height=v * VALUE_SCALE)
        for i, v in enumerate(values)
    ]


def sales_html(values: Sequence[float] = SALES_DATA) -> str:
    svg = draw_bar_chart(sales_bars(values), CHART_WIDTH, CHART_HEIGHT, BAR_COLOR)
    return f"""<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <style>
      body {{ font-family: Arial; padding: 40px; }}
      .chart-container {{ width: {CHART_WIDTH}px; height: {CHART_HEIGHT}px; border: 1px solid #eee; }}
      .chart-container svg {{ width: {CHART_WIDTH}px; height: {CHART_HEIGHT}px; }}
    </style>
  </head>
  <body class="chart-render-complete">
    <h1>Sales Report</h1>
    <div id="sales-chart" class="chart-container">{svg}</div>
  </body>
</html>
"""


def generate_sales_report(pool: BrowserPool, timeout: float | None = None) -> bytes:
    return render_pdf_page(
        pool,
        sales_html(),
        report="Sales Report",
        ready_selector=READY_SELECTOR,
        timeout=timeout,
    )
