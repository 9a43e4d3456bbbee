"""Line chart geometry and SVG rendering for the dataset explorer.

Geometry is kept separate from markup: ``build_line_chart`` maps rows to
screen coordinates and ``render_svg`` turns the result into an SVG document.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from html import escape
from typing import Sequence

from energy_portal.domain.models import BUILDING_TYPES, METRIC_LABELS, DatasetRow


BUILDING_TYPE_COLORS: dict[str, str] = {
    "Residential": "#3B82F6",
    "Commercial": "#10B981",
    "Industrial": "#F59E0B",
}
DEFAULT_POINT_COLOR = "#6366F1"
LINE_COLOR = "#6366F1"
GRID_COLOR = "#E5E7EB"
AXIS_COLOR = "#374151"
GRIDLINE_COUNT = 5


@dataclass(frozen=True)
class Padding:
    top: float = 40
    right: float = 60
    bottom: float = 60
    left: float = 80


@dataclass(frozen=True)
class ChartDimensions:
    width: float = 1000
    height: float = 500
    padding: Padding = Padding()

    @property
    def chart_width(self) -> float:
        return self.width - self.padding.left - self.padding.right

    @property
    def chart_height(self) -> float:
        return self.height - self.padding.top - self.padding.bottom


@dataclass(frozen=True)
class ChartPoint:
    x: float
    y: float
    value: float
    building_type: str
    color: str


@dataclass(frozen=True)
class GridLine:
    y: float
    value: float

    @property
    def label(self) -> str:
        # halves round away from zero, so 7.5 reads "8"
        return str(Decimal(str(self.value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class LineChart:
    metric: str
    dimensions: ChartDimensions
    points: list[ChartPoint]
    gridlines: list[GridLine]
    min_value: float
    max_value: float

    @property
    def value_range(self) -> float:
        return (self.max_value - self.min_value) or 1

    @property
    def label(self) -> str:
        return METRIC_LABELS[self.metric]

    def path_data(self) -> str:
        return " ".join(
            f"{'M' if index == 0 else 'L'} {_fmt(point.x)} {_fmt(point.y)}"
            for index, point in enumerate(self.points)
        )


def color_for(building_type: str) -> str:
    return BUILDING_TYPE_COLORS.get(building_type, DEFAULT_POINT_COLOR)


def build_line_chart(
    rows: Sequence[DatasetRow],
    metric: str,
    dimensions: ChartDimensions = ChartDimensions(),
) -> LineChart | None:
    """Map rows to screen points using index placement on the x axis.

    Returns ``None`` for an empty row set. A constant series uses a range of 1
    so every point lands on the same baseline.
    """
    if metric not in METRIC_LABELS:
        raise ValueError(f"Unknown metric: {metric}")
    if not rows:
        return None

    values = [row.metric(metric) for row in rows]
    max_value = max(values)
    min_value = min(values)
    value_range = (max_value - min_value) or 1

    padding = dimensions.padding
    chart_width = dimensions.chart_width
    chart_height = dimensions.chart_height
    x_steps = max(len(rows) - 1, 1)

    points = [
        ChartPoint(
            x=padding.left + (index / x_steps) * chart_width,
            y=padding.top + chart_height - ((value - min_value) / value_range) * chart_height,
            value=value,
            building_type=row.building_type,
            color=color_for(row.building_type),
        )
        for index, (row, value) in enumerate(zip(rows, values))
    ]

    gridlines = [
        GridLine(
            y=padding.top + (chart_height / 4) * index,
            value=max_value - (value_range / 4) * index,
        )
        for index in range(GRIDLINE_COUNT)
    ]

    return LineChart(
        metric=metric,
        dimensions=dimensions,
        points=points,
        gridlines=gridlines,
        min_value=min_value,
        max_value=max_value,
    )


def _fmt(number: float) -> str:
    return f"{number:.2f}".rstrip("0").rstrip(".")


def render_svg(chart: LineChart) -> str:
    dims = chart.dimensions
    pad = dims.padding
    left = pad.left
    right = pad.left + dims.chart_width
    top = pad.top
    bottom = pad.top + dims.chart_height
    mid_y = pad.top + dims.chart_height / 2
    label = escape(chart.label)

    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{_fmt(dims.width)}" '
        f'height="{_fmt(dims.height)}" viewBox="0 0 {_fmt(dims.width)} {_fmt(dims.height)}" '
        'font-family="sans-serif">'
    ]
    for line in chart.gridlines:
        parts.append(
            f'<g><line x1="{_fmt(left)}" y1="{_fmt(line.y)}" x2="{_fmt(right)}" y2="{_fmt(line.y)}" '
            f'stroke="{GRID_COLOR}" stroke-width="1"/>'
            f'<text x="{_fmt(left - 10)}" y="{_fmt(line.y + 4)}" text-anchor="end" '
            f'font-size="12" fill="#4B5563">{line.label}</text></g>'
        )

    parts.append(
        f'<line x1="{_fmt(left)}" y1="{_fmt(bottom)}" x2="{_fmt(right)}" y2="{_fmt(bottom)}" '
        f'stroke="{AXIS_COLOR}" stroke-width="2"/>'
    )
    parts.append(
        f'<line x1="{_fmt(left)}" y1="{_fmt(top)}" x2="{_fmt(left)}" y2="{_fmt(bottom)}" '
        f'stroke="{AXIS_COLOR}" stroke-width="2"/>'
    )
    parts.append(f'<path d="{chart.path_data()}" fill="none" stroke="{LINE_COLOR}" stroke-width="2"/>')

    for point in chart.points:
        tooltip = escape(f"{point.building_type}: {point.value:.2f}")
        parts.append(
            f'<circle cx="{_fmt(point.x)}" cy="{_fmt(point.y)}" r="4" fill="{point.color}">'
            f"<title>{tooltip}</title></circle>"
        )

    parts.append(
        f'<text x="20" y="{_fmt(mid_y)}" transform="rotate(-90 20 {_fmt(mid_y)})" '
        f'text-anchor="middle" font-size="14" font-weight="600" fill="#374151">{label}</text>'
    )
    parts.append(
        f'<text x="{_fmt(left + dims.chart_width / 2)}" y="{_fmt(dims.height - 20)}" '
        'text-anchor="middle" font-size="14" font-weight="600" fill="#374151">Data Point Index</text>'
    )
    parts.append("</svg>")
    return "".join(parts)


def legend_entries() -> list[tuple[str, str]]:
    return [(building_type, BUILDING_TYPE_COLORS[building_type]) for building_type in BUILDING_TYPES]
