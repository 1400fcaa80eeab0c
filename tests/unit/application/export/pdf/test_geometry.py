"""Unit tests for vector document chart geometry."""
from __future__ import annotations

import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fx_export.application.export.pdf.geometry import (
    MIN_ARC_STEPS,
    Box,
    ChartSeriesPoint,
    Point,
    arc_steps,
    bar_layout,
    clamp_percent,
    donut_slices,
    polar,
    progress_width,
    ring_triangles,
    trend_vertices,
)
from fx_export.kernel.errors import ChartDataError


def _series(*values: float) -> list[ChartSeriesPoint]:
    return [ChartSeriesPoint(f"p{i}", v) for i, v in enumerate(values)]


# ---------------------------------------------------------------------------
# polar / arcs
# ---------------------------------------------------------------------------
class TestPolar:
    CENTER = Point(100.0, 100.0)

    def test_zero_is_twelve_o_clock(self) -> None:
        assert polar(self.CENTER, 10, 0) == pytest.approx((100.0, 90.0))

    def test_clockwise_in_y_down_space(self) -> None:
        assert polar(self.CENTER, 10, 90) == pytest.approx((110.0, 100.0))
        assert polar(self.CENTER, 10, 180) == pytest.approx((100.0, 110.0))
        assert polar(self.CENTER, 10, 270) == pytest.approx((90.0, 100.0))


class TestArcSteps:
    def test_minimum(self) -> None:
        assert arc_steps(0.5) == MIN_ARC_STEPS

    def test_proportional_to_sweep(self) -> None:
        assert arc_steps(360) == 90
        assert arc_steps(180) == 45

    def test_ring_triangles_count(self) -> None:
        triangles = ring_triangles(Point(0, 0), 6, 10, 0, 90)
        assert len(triangles) == 2 * arc_steps(90)

    def test_ring_points_lie_on_radii(self) -> None:
        for triangle in ring_triangles(Point(0, 0), 6, 10, 30, 40):
            for point in triangle:
                assert math.hypot(*point) == pytest.approx(6) or math.hypot(*point) == pytest.approx(10)


# ---------------------------------------------------------------------------
# donut
# ---------------------------------------------------------------------------
class TestDonutSlices:
    @given(
        st.lists(
            st.floats(min_value=0, max_value=1e9, allow_nan=False, allow_infinity=False),
            min_size=1,
            max_size=12,
        ).filter(lambda values: sum(values) > 0)
    )
    def test_sweeps_sum_to_360(self, values: list[float]) -> None:
        slices = donut_slices(_series(*values))
        assert math.fsum(s.sweep for s in slices) == pytest.approx(360.0)
        assert slices[-1].end_angle == pytest.approx(360.0)

    def test_proportional(self) -> None:
        slices = donut_slices(_series(1, 3))
        assert slices[0].sweep == pytest.approx(90)
        assert slices[1].start_angle == pytest.approx(90)
        assert slices[0].mid_angle == pytest.approx(45)
        assert slices[1].share == pytest.approx(0.75)

    def test_zero_total_gives_no_slices(self) -> None:
        assert donut_slices(_series(0, 0)) == []
        assert donut_slices([]) == []

    @pytest.mark.parametrize("bad", [-1.0, float("nan"), float("inf")])
    def test_malformed_values(self, bad: float) -> None:
        with pytest.raises(ChartDataError) as exc_info:
            donut_slices(_series(1, bad))
        assert exc_info.value.series is not None

    def test_non_numeric(self) -> None:
        with pytest.raises(ChartDataError):
            donut_slices([ChartSeriesPoint("x", "12")])  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# bars / trend / progress
# ---------------------------------------------------------------------------
class TestBarLayout:
    BOX = Box(0, 0, 100, 50)

    def test_heights_scale_to_max(self) -> None:
        bars = bar_layout(_series(25, 50), self.BOX)
        assert [b.height for b in bars] == pytest.approx([25, 50])
        assert all(b.y + b.height == pytest.approx(50) for b in bars)

    def test_all_zero(self) -> None:
        assert [b.height for b in bar_layout(_series(0, 0), self.BOX)] == [0, 0]

    def test_bars_inside_box(self) -> None:
        for bar in bar_layout(_series(1, 2, 3, 4), self.BOX):
            assert 0 <= bar.x and bar.x + bar.width <= 100

    def test_width_is_box_width_over_count(self) -> None:
        bars = bar_layout(_series(1, 2, 3, 4), self.BOX)
        assert [b.width for b in bars] == pytest.approx([25, 25, 25, 25])
        assert [b.x for b in bars] == pytest.approx([0, 25, 50, 75])

    def test_gap_ratio_insets_inside_slot(self) -> None:
        bars = bar_layout(_series(1, 2), self.BOX, gap_ratio=0.2)
        assert [b.width for b in bars] == pytest.approx([40, 40])
        assert [b.x for b in bars] == pytest.approx([5, 55])


class TestTrendVertices:
    BOX = Box(10, 10, 100, 40)

    def test_evenly_spaced(self) -> None:
        xs = [v.x for v in trend_vertices(_series(1, 5, 3), self.BOX)]
        assert xs == pytest.approx([10, 60, 110])

    def test_flat_series_is_mid_height(self) -> None:
        assert {v.y for v in trend_vertices(_series(7, 7, 7), self.BOX)} == {30}

    def test_extremes_touch_box(self) -> None:
        vertices = trend_vertices(_series(0, 10), self.BOX)
        assert vertices[0].y == pytest.approx(50)
        assert vertices[1].y == pytest.approx(10)

    def test_single_point_centered(self) -> None:
        assert trend_vertices(_series(3), self.BOX) == [Point(60, 30)]


class TestProgress:
    @pytest.mark.parametrize(("value", "expected"), [(-5, 0), (0, 0), (42.5, 42.5), (150, 100), (float("nan"), 0)])
    def test_clamp(self, value: float, expected: float) -> None:
        assert clamp_percent(value) == expected

    def test_width(self) -> None:
        assert progress_width(50, 80) == 40
        assert progress_width(120, 80) == 80
