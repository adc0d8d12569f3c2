# src/breakeven_report/geometry.py
"""
Pixel geometry for the breakeven chart.

Values live in ``[0, zoom]`` on both axes, where ``zoom`` is 1.75x the
largest plotted value. ``x`` maps onto ``[0, width]`` and ``y`` onto
``[height, 0]`` because SVG pixel rows grow downwards.
"""
from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .finance import DerivedMetrics, SeriesPoint, js_round

ZOOM_FACTOR = 1.75
DEFAULT_ZOOM = 100.0
TICK_COUNT = 8

PROFIT_FILL = "green"
LOSS_FILL = "red"
AREA_OPACITY = 0.2

FIXED_COST_COLOR = "#777777"
REVENUE_COLOR = "#9ebd66"
TOTAL_COST_COLOR = "#dd392c"

LABEL_X_OFFSET = 10
LABEL_Y_OFFSET = 3

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)
_SI_PREFIXES = ["y", "z", "a", "f", "p", "n", "µ", "m", "", "k", "M", "G", "T", "P", "E", "Z", "Y"]


# ------------------------------------------------------------
# Canvas
# ------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class Margin:
    top: int = 15
    right: int = 30
    bottom: int = 15
    left: int = 60


@dataclass(frozen=True, slots=True)
class Canvas:
    """Inner plotting area; ``margin`` is the gutter for axes around it."""

    width: float
    height: float
    margin: Margin = field(default_factory=Margin)

    @classmethod
    def from_outer(cls, outer_width: float, outer_height: float, margin: Margin | None = None) -> "Canvas":
        m = margin or Margin()
        return cls(outer_width - m.left - m.right, outer_height - m.top - m.bottom, m)

    @property
    def outer_width(self) -> float:
        return self.width + self.margin.left + self.margin.right

    @property
    def outer_height(self) -> float:
        return self.height + self.margin.top + self.margin.bottom


BREAKEVEN_CANVAS = Canvas.from_outer(500, 300)


# ------------------------------------------------------------
# Scales and ticks
# ------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class LinearScale:
    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        span = d1 - d0
        t = (value - d0) / span if span else 0.5
        out = r0 + t * (r1 - r0)
        if math.isnan(out):
            return (r0 + r1) / 2
        # values far outside the domain overflow; pin them to the largest float
        if math.isinf(out):
            return math.copysign(sys.float_info.max, out)
        return out

    def ticks(self, count: int = TICK_COUNT) -> List[float]:
        return nice_ticks(self.domain[0], self.domain[1], count)


def _tick_step(start: float, stop: float, count: float) -> Tuple[int, int, float]:
    step = (stop - start) / max(0, count)
    if not math.isfinite(step) or step <= 0:
        return 0, -1, 0.0
    power = math.floor(math.log10(step))
    # subnormal steps have no representable reciprocal
    if -power > sys.float_info.max_10_exp:
        return 0, -1, 0.0
    error = step / math.pow(10, power)
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power < 0:
        inc = math.pow(10, -power) / factor
        i1 = int(js_round(start * inc))
        i2 = int(js_round(stop * inc))
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = math.pow(10, power) * factor
        i1 = int(js_round(start / inc))
        i2 = int(js_round(stop / inc))
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1
    if i2 < i1 and 0.5 <= count < 2:
        return _tick_step(start, stop, count * 2)
    return i1, i2, inc


def nice_ticks(start: float, stop: float, count: int = TICK_COUNT) -> List[float]:
    """Evenly spaced ticks with a step of 1, 2 or 5 times a power of ten.

    ``count`` is a hint; the actual number of ticks is whatever the chosen
    step yields inside ``[start, stop]``.
    """
    if not count > 0 or not (math.isfinite(start) and math.isfinite(stop)):
        return []
    if start == stop:
        return [float(start)]
    reverse = stop < start
    lo, hi = (stop, start) if reverse else (start, stop)
    i1, i2, inc = _tick_step(lo, hi, count)
    if not i2 >= i1:
        return []
    n = i2 - i1 + 1
    if inc < 0:
        out = [(i1 + i) / -inc for i in range(n)]
    else:
        out = [float((i1 + i) * inc) for i in range(n)]
    return out[::-1] if reverse else out


def format_currency_si(value: float, precision: int = 2) -> str:
    """Abbreviated currency with an SI suffix: 0 -> ``$0.0``, 5000 -> ``$5.0k``, 40000 -> ``$40k``."""
    if math.isnan(value):
        return "NaN"
    sign = "−" if value < 0 else ""
    if math.isinf(value):
        return f"{sign}$Infinity"
    mantissa, exponent = f"{abs(value):.{precision - 1}e}".split("e")
    coefficient = mantissa.replace(".", "")
    exponent = int(exponent)
    prefix_exp = max(-8, min(8, math.floor(exponent / 3))) * 3
    n = len(coefficient)
    i = exponent - prefix_exp + 1
    if i == n:
        body = coefficient
    elif i > n:
        body = coefficient + "0" * (i - n)
    elif i > 0:
        body = coefficient[:i] + "." + coefficient[i:]
    else:
        body = "0." + "0" * (1 - i) + coefficient
    return f"{sign}${body}{_SI_PREFIXES[8 + prefix_exp // 3]}"


# ------------------------------------------------------------
# Primitives
# ------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str

    def points(self) -> List[float]:
        return [self.x1, self.y1, self.x2, self.y2]


@dataclass(frozen=True, slots=True)
class Area:
    """Closed path ``M start L corner V top Z`` between breakeven and revenue."""

    start: Tuple[float, float]
    corner: Tuple[float, float]
    top: Tuple[float, float]
    fill: str
    opacity: float = AREA_OPACITY

    @property
    def vertices(self) -> List[Tuple[float, float]]:
        return [self.start, self.corner, self.top]

    @property
    def path(self) -> str:
        return (
            f"M{self.start[0]},{self.start[1]} "
            f"L{self.corner[0]},{self.corner[1]} "
            f"V{self.top[1]} Z"
        )


@dataclass(frozen=True, slots=True)
class Tick:
    value: float
    position: float
    label: str


@dataclass(frozen=True, slots=True)
class Label:
    text: str
    x: float
    y: float
    color: str
    anchor: str = "end"


@dataclass(frozen=True, slots=True)
class PlotGeometry:
    canvas: Canvas
    zoom: float
    x: LinearScale
    y: LinearScale
    area: Area
    fixed_cost_line: Line
    revenue_line: Line
    total_cost_line: Line
    x_ticks: List[Tick]
    y_ticks: List[Tick]
    labels: List[Label]

    @property
    def width(self) -> float:
        return self.canvas.width

    @property
    def height(self) -> float:
        return self.canvas.height

    @property
    def lines(self) -> List[Line]:
        return [self.fixed_cost_line, self.revenue_line, self.total_cost_line]


# ------------------------------------------------------------
# Geometry
# ------------------------------------------------------------
def compute_zoom(series: Sequence[SeriesPoint]) -> float:
    values = [p.value for p in series if p.value is not None and not math.isnan(p.value)]
    top = max(values) if values else 0.0
    # zero or missing max would collapse the domain
    if not top:
        return DEFAULT_ZOOM
    zoom = top * ZOOM_FACTOR
    if not math.isfinite(zoom):
        return DEFAULT_ZOOM
    return zoom


def compute_geometry(
    series: Sequence[SeriesPoint],
    metrics: DerivedMetrics,
    canvas: Canvas = BREAKEVEN_CANVAS,
) -> PlotGeometry:
    width, height = canvas.width, canvas.height
    zoom = compute_zoom(series)

    x = LinearScale((0.0, zoom), (0.0, width))
    y = LinearScale((0.0, zoom), (height, 0.0))

    bp = metrics.breakeven_point
    start_x = x(bp)
    rev_x = x(metrics.revenue)
    area = Area(
        start=(start_x, y(bp)),
        corner=(rev_x, y(metrics.expenses)),
        top=(rev_x, y(metrics.revenue)),
        fill=PROFIT_FILL if rev_x > start_x else LOSS_FILL,
    )

    fixed_y = y(metrics.fixed_costs)
    total_cost_end = metrics.fixed_costs + zoom * metrics.variable_expense_share

    fixed_cost_line = Line(0.0, fixed_y, width, fixed_y, FIXED_COST_COLOR)
    revenue_line = Line(0.0, height, x(zoom), y(zoom), REVENUE_COLOR)
    total_cost_line = Line(0.0, fixed_y, width, y(total_cost_end), TOTAL_COST_COLOR)

    x_ticks = [Tick(v, x(v), "") for v in x.ticks(TICK_COUNT)]
    y_ticks = [Tick(v, y(v), format_currency_si(v)) for v in y.ticks(TICK_COUNT)]

    label_x = width - LABEL_X_OFFSET
    labels = [
        Label("FIXED COST", label_x, fixed_y - LABEL_Y_OFFSET, FIXED_COST_COLOR),
        Label("TOTAL COST", label_x, y(total_cost_end) - LABEL_Y_OFFSET, TOTAL_COST_COLOR),
        Label("REVENUE", label_x, y(zoom) - LABEL_Y_OFFSET, REVENUE_COLOR),
    ]

    return PlotGeometry(
        canvas=canvas,
        zoom=zoom,
        x=x,
        y=y,
        area=area,
        fixed_cost_line=fixed_cost_line,
        revenue_line=revenue_line,
        total_cost_line=total_cost_line,
        x_ticks=x_ticks,
        y_ticks=y_ticks,
        labels=labels,
    )


def geometry_summary(geometry: PlotGeometry) -> dict:
    """JSON-friendly view of the primitives, for the metrics endpoint."""
    def _line(l: Line) -> dict:
        return {"x1": l.x1, "y1": l.y1, "x2": l.x2, "y2": l.y2, "color": l.color}

    return {
        "width": geometry.width,
        "height": geometry.height,
        "zoom": geometry.zoom,
        "area": {"path": geometry.area.path, "fill": geometry.area.fill},
        "fixed_cost_line": _line(geometry.fixed_cost_line),
        "revenue_line": _line(geometry.revenue_line),
        "total_cost_line": _line(geometry.total_cost_line),
        "y_ticks": [{"value": t.value, "y": t.position, "label": t.label} for t in geometry.y_ticks],
        "labels": [{"text": lb.text, "x": lb.x, "y": lb.y} for lb in geometry.labels],
    }
