"""Vector document – chart primitives drawn through a :class:`Painter`."""
from __future__ import annotations

import math
from collections.abc import Callable, Sequence

from fx_export.application.export.pdf.geometry import (
    Box,
    ChartSeriesPoint,
    Point,
    bar_layout,
    clamp_percent,
    donut_slices,
    polar,
    progress_width,
    ring_triangles,
    trend_vertices,
    validate_series,
)
from fx_export.application.export.pdf.paint import (
    DARK,
    LIGHT_GRAY,
    MUTED,
    SERIES_PALETTE,
    WHITE,
    Paint,
    Painter,
)

EMPTY_MESSAGE = "No data available"
DONUT_INNER_RATIO = 0.6
DONUT_HOLE_RATIO = 0.4
DONUT_LABEL_OFFSET = 6.0

_LABEL = Paint(fill=DARK, font_size=7)
_MUTED_LABEL = Paint(fill=MUTED, font_size=8)
_EMPTY_BOX = Paint(fill=LIGHT_GRAY)


def _plain(value: float) -> str:
    return f"{value:,.0f}"


class ChartPrimitives:
    """Stateless chart drawing helpers.

    Every method takes the painter and the paint explicitly; nothing is
    remembered between calls.  Malformed series raise
    :class:`~fx_export.kernel.errors.ChartDataError` before anything is
    drawn.
    """

    @staticmethod
    def empty_state(painter: Painter, box: Box, message: str = EMPTY_MESSAGE) -> None:
        painter.rect(box.x, box.y, box.width, box.height, _EMPTY_BOX)
        center = box.center
        painter.text(center.x, center.y, message, _MUTED_LABEL, align="center")

    def bar(
        self,
        painter: Painter,
        series: Sequence[ChartSeriesPoint],
        box: Box,
        paint: Paint,
        value_format: Callable[[float], str] = _plain,
    ) -> None:
        validate_series(series)
        if not series or max(p.value for p in series) == 0:
            self.empty_state(painter, box)
            return
        # leave room for the category labels under the baseline
        plot = Box(box.x, box.y + 4, box.width, box.height - 10)
        painter.line(plot.x, plot.bottom, plot.x + plot.width, plot.bottom, Paint(stroke=MUTED, line_width=0.2))
        for bar in bar_layout(series, plot):
            painter.rect(bar.x, bar.y, bar.width, bar.height, paint)
            mid = bar.x + bar.width / 2
            painter.text(mid, bar.y - 1.5, value_format(bar.value), _LABEL, align="center")
            painter.text(mid, plot.bottom + 4, bar.label, _LABEL, align="center")

    def donut(
        self,
        painter: Painter,
        series: Sequence[ChartSeriesPoint],
        center: Point,
        radius: float,
        palette: Sequence[Paint] = tuple(Paint(fill=c) for c in SERIES_PALETTE),
        total_label: Callable[[float], str] = _plain,
    ) -> None:
        slices = donut_slices(series)
        if not slices:
            self.empty_state(painter, Box(center.x - radius, center.y - radius, radius * 2, radius * 2))
            return
        for index, piece in enumerate(slices):
            if piece.sweep <= 0:
                continue
            paint = palette[index % len(palette)]
            for triangle in ring_triangles(
                center, radius * DONUT_INNER_RATIO, radius, piece.start_angle, piece.sweep
            ):
                painter.polygon(triangle, paint)
            anchor = polar(center, radius + DONUT_LABEL_OFFSET, piece.mid_angle)
            align = "left" if math.sin(math.radians(piece.mid_angle)) >= 0 else "right"
            painter.text(anchor.x, anchor.y, f"{piece.label} {piece.share * 100:.0f}%", _LABEL, align=align)
        painter.circle(center.x, center.y, radius * DONUT_HOLE_RATIO, Paint(fill=WHITE))
        total = math.fsum(p.value for p in series)
        painter.text(center.x, center.y + 1.5, total_label(total), _LABEL.with_(bold=True), align="center")

    @staticmethod
    def progress(painter: Painter, label: str, percent: float, box: Box, paint: Paint) -> None:
        """Horizontal bar filled to *percent*, clamped to 0..100."""
        value = clamp_percent(percent)
        painter.rect(box.x, box.y, box.width, box.height, Paint(fill=LIGHT_GRAY))
        filled = progress_width(value, box.width)
        if filled > 0:
            painter.rect(box.x, box.y, filled, box.height, paint)
            highlight = paint.with_(fill=paint.fill.lighter()) if paint.fill else paint
            painter.rect(box.x, box.y, filled, box.height / 2, highlight)
        painter.text(box.x, box.y - 1.5, label, _LABEL)
        painter.text(box.x + box.width + 3, box.y + box.height - 0.5, f"{value:.1f}%", _LABEL)

    def trend_line(
        self,
        painter: Painter,
        series: Sequence[ChartSeriesPoint],
        box: Box,
        paint: Paint,
    ) -> None:
        validate_series(series)
        if not series:
            self.empty_state(painter, box)
            return
        plot = Box(box.x + 4, box.y + 3, box.width - 8, box.height - 10)
        vertices = trend_vertices(series, plot)
        line_paint = Paint(stroke=paint.fill or paint.stroke, line_width=0.8)
        for start, end in zip(vertices, vertices[1:]):
            painter.line(start.x, start.y, end.x, end.y, line_paint)
        for vertex, point in zip(vertices, series):
            painter.circle(vertex.x, vertex.y, 1.0, paint)
            painter.text(vertex.x, plot.bottom + 5, point.label, _LABEL, align="center")
        last = vertices[-1]
        painter.circle(last.x, last.y, 2.0, paint.with_(stroke=WHITE, line_width=0.6))


__all__ = [
    "ChartPrimitives",
    "DONUT_HOLE_RATIO",
    "DONUT_INNER_RATIO",
    "EMPTY_MESSAGE",
]
