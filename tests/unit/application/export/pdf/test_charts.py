"""Unit tests for ChartPrimitives."""
from __future__ import annotations

import pytest

from fx_export.application.export.pdf.charts import EMPTY_MESSAGE, ChartPrimitives
from fx_export.application.export.pdf.geometry import Box, ChartSeriesPoint, Point, arc_steps
from fx_export.application.export.pdf.paint import (
    CircleOp,
    DisplayList,
    LineOp,
    Paint,
    PolygonOp,
    RectOp,
    Rgb,
    WHITE,
)
from fx_export.kernel.errors import ChartDataError

PAINT = Paint(fill=Rgb(34, 197, 94))
BOX = Box(20, 20, 170, 50)


def _series(*values: float) -> list[ChartSeriesPoint]:
    return [ChartSeriesPoint(f"m{i}", v) for i, v in enumerate(values)]


def _ops(dl: DisplayList, kind: type) -> list:
    return [op for op in dl if isinstance(op, kind)]


class TestRgbAndPaint:
    def test_lighter_moves_towards_white(self) -> None:
        lighter = Rgb(0, 100, 200).lighter(0.5)
        assert lighter == Rgb(128, 178, 228)

    def test_paint_is_immutable(self) -> None:
        with pytest.raises(AttributeError):
            PAINT.font_size = 3  # type: ignore[misc]
        assert PAINT.with_(bold=True).font_name == "Helvetica-Bold"


class TestBar:
    def test_one_rect_per_value(self) -> None:
        dl = DisplayList()
        ChartPrimitives().bar(dl, _series(1, 2, 3), BOX, PAINT)
        assert len([op for op in _ops(dl, RectOp) if op.paint == PAINT]) == 3

    @pytest.mark.parametrize("values", [(), (0, 0)])
    def test_empty_state(self, values) -> None:
        dl = DisplayList()
        ChartPrimitives().bar(dl, _series(*values), BOX, PAINT)
        assert dl.texts() == [EMPTY_MESSAGE]

    def test_negative_raises_before_drawing(self) -> None:
        dl = DisplayList()
        with pytest.raises(ChartDataError):
            ChartPrimitives().bar(dl, _series(1, -2), BOX, PAINT)
        assert len(dl) == 0


class TestDonut:
    def test_triangle_fan_and_hole(self) -> None:
        dl = DisplayList()
        ChartPrimitives().donut(dl, _series(1, 1), Point(100, 100), 20, (PAINT,), total_label=str)
        assert len(_ops(dl, PolygonOp)) == 2 * 2 * arc_steps(180)
        hole = _ops(dl, CircleOp)[-1]
        assert hole.radius == pytest.approx(8)
        assert hole.paint.fill == WHITE
        assert "2.0" in dl.texts()

    def test_labels_show_share(self) -> None:
        dl = DisplayList()
        ChartPrimitives().donut(dl, _series(1, 3), Point(100, 100), 20)
        assert "m0 25%" in dl.texts()
        assert "m1 75%" in dl.texts()

    def test_zero_total_does_not_raise(self) -> None:
        dl = DisplayList()
        ChartPrimitives().donut(dl, _series(0, 0), Point(100, 100), 20)
        assert dl.texts() == [EMPTY_MESSAGE]
        assert not _ops(dl, PolygonOp)


class TestProgress:
    def test_track_fill_highlight(self) -> None:
        dl = DisplayList()
        ChartPrimitives.progress(dl, "Patty", 50, Box(20, 20, 100, 4), PAINT)
        rects = _ops(dl, RectOp)
        assert [r.width for r in rects] == pytest.approx([100, 50, 50])
        assert rects[2].height == pytest.approx(2)
        assert rects[2].paint.fill == PAINT.fill.lighter()
        assert dl.texts() == ["Patty", "50.0%"]

    @pytest.mark.parametrize(("value", "label"), [(-10, "0.0%"), (140, "100.0%")])
    def test_clamped(self, value: float, label: str) -> None:
        dl = DisplayList()
        ChartPrimitives.progress(dl, "x", value, Box(0, 0, 100, 4), PAINT)
        assert dl.texts()[-1] == label
        assert all(r.width <= 100 for r in _ops(dl, RectOp))


class TestTrendLine:
    def test_segments_and_markers(self) -> None:
        dl = DisplayList()
        ChartPrimitives().trend_line(dl, _series(1, 4, 2, 8), BOX, PAINT)
        assert len(_ops(dl, LineOp)) == 3
        markers = _ops(dl, CircleOp)
        assert len(markers) == 5
        assert markers[-1].radius > markers[0].radius
        assert (markers[-1].cx, markers[-1].cy) == (markers[-2].cx, markers[-2].cy)

    def test_flat_series_draws_horizontal_line(self) -> None:
        dl = DisplayList()
        ChartPrimitives().trend_line(dl, _series(5, 5, 5), BOX, PAINT)
        assert all(line.y1 == line.y2 for line in _ops(dl, LineOp))

    def test_empty_series(self) -> None:
        dl = DisplayList()
        ChartPrimitives().trend_line(dl, [], BOX, PAINT)
        assert dl.texts() == [EMPTY_MESSAGE]
