# src/breakeven_report/charts.py
"""Chart drawing: primitives in pixel space -> inline SVG markup (matplotlib)."""
from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Sequence

import matplotlib
from matplotlib.figure import Figure
from matplotlib.patches import Polygon, Rectangle
from matplotlib.ticker import FixedLocator, FuncFormatter, NullLocator

from .geometry import PlotGeometry, Tick

# 1 px == 1 pt in the SVG output
PX_PER_INCH = 72

GRID_COLOR = "#e0e0e0"
AXIS_COLOR = "#cccccc"
LINE_WIDTH = 2
LABEL_FONT_SIZE = 8


@dataclass(frozen=True, slots=True)
class Bar:
    x: float
    y: float
    width: float
    height: float


def _figure(width: float, height: float) -> Figure:
    # Figure without pyplot: no global state, safe to draw from worker threads
    fig = Figure(figsize=(width / PX_PER_INCH, height / PX_PER_INCH), dpi=PX_PER_INCH)
    fig.patch.set_alpha(0)
    return fig


def _to_svg(fig: Figure) -> str:
    buf = io.BytesIO()
    with matplotlib.rc_context({"svg.fonttype": "none"}):
        fig.savefig(buf, format="svg", transparent=True)
    svg = buf.getvalue().decode("utf-8")
    # drop the XML prolog/doctype so the markup can be inlined into HTML
    return svg[svg.find("<svg"):]


def _tick_labels(ticks: Sequence[Tick]):
    # FixedLocator hands the formatter each tick's index as ``pos``
    labels = [t.label for t in ticks]

    def fmt(value, pos):
        return labels[pos] if pos is not None and pos < len(labels) else ""

    return fmt


def draw_breakeven_chart(geometry: PlotGeometry) -> str:
    canvas = geometry.canvas
    m = canvas.margin
    ow, oh = canvas.outer_width, canvas.outer_height

    fig = _figure(ow, oh)
    ax = fig.add_axes([m.left / ow, m.bottom / oh, canvas.width / ow, canvas.height / oh])
    ax.set_xlim(0, canvas.width)
    ax.set_ylim(canvas.height, 0)
    ax.patch.set_alpha(0)

    # grid first so data sits on top
    for tick in geometry.x_ticks:
        ax.axvline(tick.position, color=GRID_COLOR, linewidth=1, zorder=0)
    for tick in geometry.y_ticks:
        ax.axhline(tick.position, color=GRID_COLOR, linewidth=1, linestyle=(0, (4, 4)), zorder=0)

    area = geometry.area
    ax.add_patch(
        Polygon(area.vertices, closed=True, facecolor=area.fill, alpha=area.opacity, edgecolor="none", zorder=1)
    )

    for line in geometry.lines:
        ax.plot([line.x1, line.x2], [line.y1, line.y2], color=line.color, linewidth=LINE_WIDTH, zorder=2)

    ax.xaxis.set_major_locator(NullLocator())
    ax.yaxis.set_major_locator(FixedLocator([t.position for t in geometry.y_ticks]))
    ax.yaxis.set_major_formatter(FuncFormatter(_tick_labels(geometry.y_ticks)))
    ax.tick_params(axis="y", colors="#000000", labelsize=10, length=6)
    for side in ("top", "right", "bottom"):
        ax.spines[side].set_visible(False)
    ax.spines["left"].set_color(AXIS_COLOR)

    for label in geometry.labels:
        ax.text(
            label.x,
            label.y,
            label.text,
            ha="right" if label.anchor == "end" else "left",
            va="baseline",
            fontsize=LABEL_FONT_SIZE,
            fontweight="semibold",
            color=label.color,
            zorder=3,
        )

    return _to_svg(fig)


def draw_bar_chart(bars: Sequence[Bar], width: float, height: float, color: str) -> str:
    fig = _figure(width, height)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_axis_off()
    for bar in bars:
        # y axis is inverted, so the rectangle grows downwards from its top edge
        ax.add_patch(Rectangle((bar.x, bar.y), bar.width, bar.height, facecolor=color, edgecolor="none"))
    return _to_svg(fig)
