"""Vector document – pure chart geometry.

All angles are degrees with 0 at twelve o'clock, growing clockwise, in a
y-down coordinate system: ``x = cx + r·sin θ`` and ``y = cy − r·cos θ``.
"""
from __future__ import annotations

import dataclasses
import math
from collections.abc import Sequence
from typing import NamedTuple

from fx_export.kernel.errors import ChartDataError

MIN_ARC_STEPS = 3
ARC_STEP_DEGREES = 4.0


class Point(NamedTuple):
    x: float
    y: float


class Box(NamedTuple):
    """Axis-aligned area: top-left corner plus size, in millimetres."""

    x: float
    y: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)


class ChartSeriesPoint(NamedTuple):
    label: str
    value: float


def validate_series(series: Sequence[ChartSeriesPoint]) -> None:
    """Raise :class:`ChartDataError` unless every value is a finite, non-negative number."""
    for point in series:
        value = point.value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ChartDataError(f"Value for {point.label!r} is not numeric", series=list(series))
        if not math.isfinite(value):
            raise ChartDataError(f"Value for {point.label!r} is not finite", series=list(series))
        if value < 0:
            raise ChartDataError(f"Value for {point.label!r} is negative", series=list(series))


def polar(center: Point, radius: float, angle: float) -> Point:
    theta = math.radians(angle)
    return Point(center.x + radius * math.sin(theta), center.y - radius * math.cos(theta))


def arc_steps(sweep: float) -> int:
    """Number of fan steps used to approximate an arc of *sweep* degrees."""
    return max(MIN_ARC_STEPS, math.ceil(abs(sweep) / ARC_STEP_DEGREES))


@dataclasses.dataclass(frozen=True)
class DonutSlice:
    label: str
    value: float
    share: float        # 0..1
    start_angle: float
    sweep: float

    @property
    def end_angle(self) -> float:
        return self.start_angle + self.sweep

    @property
    def mid_angle(self) -> float:
        return self.start_angle + self.sweep / 2


def donut_slices(series: Sequence[ChartSeriesPoint]) -> list[DonutSlice]:
    """Split 360° proportionally to the series; empty when the total is 0.

    The last slice closes the circle exactly, so sweeps always sum to 360.
    """
    validate_series(series)
    total = math.fsum(p.value for p in series)
    if total == 0:
        return []
    slices: list[DonutSlice] = []
    angle = 0.0
    for index, point in enumerate(series):
        share = point.value / total
        sweep = 360.0 - angle if index == len(series) - 1 else share * 360.0
        slices.append(DonutSlice(point.label, point.value, share, angle, sweep))
        angle += sweep
    return slices


def ring_triangles(
    center: Point,
    inner_radius: float,
    outer_radius: float,
    start_angle: float,
    sweep: float,
) -> list[tuple[Point, Point, Point]]:
    """Triangle fan filling the ring segment between the two radii."""
    steps = arc_steps(sweep)
    triangles: list[tuple[Point, Point, Point]] = []
    for i in range(steps):
        a0 = start_angle + sweep * i / steps
        a1 = start_angle + sweep * (i + 1) / steps
        outer0, outer1 = polar(center, outer_radius, a0), polar(center, outer_radius, a1)
        inner0, inner1 = polar(center, inner_radius, a0), polar(center, inner_radius, a1)
        triangles.append((outer0, outer1, inner1))
        triangles.append((outer0, inner1, inner0))
    return triangles


@dataclasses.dataclass(frozen=True)
class BarRect:
    label: str
    value: float
    x: float
    y: float
    width: float
    height: float


def bar_layout(series: Sequence[ChartSeriesPoint], box: Box, gap_ratio: float = 0.0) -> list[BarRect]:
    """Bars growing up from ``box.bottom``; heights scale to the series maximum.

    Each bar is ``box.width / len(series)`` wide.  A non-zero *gap_ratio*
    insets the visible bar inside that slot by the given fraction.
    """
    validate_series(series)
    if not series:
        return []
    peak = max(p.value for p in series)
    slot = box.width / len(series)
    width = slot * (1 - gap_ratio)
    bars = []
    for index, point in enumerate(series):
        height = point.value / peak * box.height if peak else 0.0
        x = box.x + slot * index + (slot - width) / 2
        bars.append(BarRect(point.label, point.value, x, box.bottom - height, width, height))
    return bars


def trend_vertices(series: Sequence[ChartSeriesPoint], box: Box) -> list[Point]:
    """Evenly spaced vertices; a constant series sits at mid-height."""
    validate_series(series)
    if not series:
        return []
    values = [p.value for p in series]
    low, high = min(values), max(values)
    count = len(values)
    vertices = []
    for index, value in enumerate(values):
        x = box.x + (box.width * index / (count - 1) if count > 1 else box.width / 2)
        if high == low:
            y = box.y + box.height / 2
        else:
            y = box.bottom - (value - low) / (high - low) * box.height
        vertices.append(Point(x, y))
    return vertices


def clamp_percent(value: float) -> float:
    if not math.isfinite(value):
        return 0.0
    return min(100.0, max(0.0, value))


def progress_width(percent: float, width: float) -> float:
    return clamp_percent(percent) / 100 * width


__all__ = [
    "ARC_STEP_DEGREES",
    "BarRect",
    "Box",
    "ChartSeriesPoint",
    "DonutSlice",
    "MIN_ARC_STEPS",
    "Point",
    "arc_steps",
    "bar_layout",
    "clamp_percent",
    "donut_slices",
    "polar",
    "progress_width",
    "ring_triangles",
    "trend_vertices",
    "validate_series",
]
