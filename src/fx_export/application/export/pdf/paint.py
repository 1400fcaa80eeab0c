"""Vector document – paint, draw operations and the recording painter.

Coordinates are millimetres with the origin at the top-left corner of the
page and y growing downwards.  Nothing here knows about reportlab; a
:class:`DisplayList` records operations and
:class:`~fx_export.application.export.pdf.renderer.ReportLabPainter` replays
them later.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Sequence
from typing import Literal, Protocol, Union

from fx_export.kernel.errors import InvariantViolationError

Align = Literal["left", "center", "right"]


@dataclasses.dataclass(frozen=True)
class Rgb:
    r: int
    g: int
    b: int

    def lighter(self, amount: float = 0.35) -> "Rgb":
        """Blend towards white by *amount* (0 = unchanged, 1 = white)."""
        def mix(channel: int) -> int:
            return round(channel + (255 - channel) * amount)

        return Rgb(mix(self.r), mix(self.g), mix(self.b))

    def fractions(self) -> tuple[float, float, float]:
        return self.r / 255, self.g / 255, self.b / 255

    @property
    def hex(self) -> str:
        return f"{self.r:02X}{self.g:02X}{self.b:02X}"


WHITE = Rgb(255, 255, 255)
PRIMARY = Rgb(34, 197, 94)
DARK = Rgb(31, 41, 55)
MUTED = Rgb(107, 114, 128)
LIGHT_GRAY = Rgb(243, 244, 246)
BORDER_GRAY = Rgb(229, 231, 235)
SECONDARY = Rgb(59, 130, 246)
ACCENT = Rgb(168, 85, 247)
SUCCESS = Rgb(22, 163, 74)
WARNING = Rgb(245, 158, 11)
DANGER = Rgb(239, 68, 68)

STATUS_RGB = {
    "completed": SUCCESS,
    "processing": SECONDARY,
    "pending": WARNING,
    "error": DANGER,
    "failed": DANGER,
}

# Slice colours for multi-series charts, cycled in order.
SERIES_PALETTE: tuple[Rgb, ...] = (
    PRIMARY,
    SECONDARY,
    ACCENT,
    WARNING,
    DANGER,
    Rgb(20, 184, 166),
)


@dataclasses.dataclass(frozen=True)
class Paint:
    """Immutable drawing style handed explicitly to every draw call."""

    fill: Rgb | None = None
    stroke: Rgb | None = None
    line_width: float = 0.3
    font_size: float = 10.0
    bold: bool = False

    @property
    def font_name(self) -> str:
        return "Helvetica-Bold" if self.bold else "Helvetica"

    def with_(self, **changes: object) -> "Paint":
        return dataclasses.replace(self, **changes)


# ---------------------------------------------------------------------------
# Draw operations
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class RectOp:
    x: float
    y: float
    width: float
    height: float
    paint: Paint


@dataclasses.dataclass(frozen=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float
    paint: Paint


@dataclasses.dataclass(frozen=True)
class PolygonOp:
    points: tuple[tuple[float, float], ...]
    paint: Paint


@dataclasses.dataclass(frozen=True)
class CircleOp:
    cx: float
    cy: float
    radius: float
    paint: Paint


@dataclasses.dataclass(frozen=True)
class TextOp:
    x: float
    y: float
    text: str
    paint: Paint
    align: Align = "left"


DrawOp = Union[RectOp, LineOp, PolygonOp, CircleOp, TextOp]


class Painter(Protocol):
    """Port: anything that accepts draw calls in page millimetres."""

    def rect(self, x: float, y: float, width: float, height: float, paint: Paint) -> None: ...
    def line(self, x1: float, y1: float, x2: float, y2: float, paint: Paint) -> None: ...
    def polygon(self, points: Sequence[tuple[float, float]], paint: Paint) -> None: ...
    def circle(self, cx: float, cy: float, radius: float, paint: Paint) -> None: ...
    def text(self, x: float, y: float, text: str, paint: Paint, align: Align = "left") -> None: ...


class DisplayList:
    """Recording :class:`Painter`: keeps draw operations in call order.

    Once :meth:`seal` has been called every further draw raises
    :class:`~fx_export.kernel.errors.InvariantViolationError`.
    """

    def __init__(self) -> None:
        self._ops: list[DrawOp] = []
        self._sealed = False

    def _record(self, op: DrawOp) -> None:
        if self._sealed:
            raise InvariantViolationError("Cannot draw on a finalized page")
        self._ops.append(op)

    def rect(self, x: float, y: float, width: float, height: float, paint: Paint) -> None:
        self._record(RectOp(x, y, width, height, paint))

    def line(self, x1: float, y1: float, x2: float, y2: float, paint: Paint) -> None:
        self._record(LineOp(x1, y1, x2, y2, paint))

    def polygon(self, points: Sequence[tuple[float, float]], paint: Paint) -> None:
        self._record(PolygonOp(tuple((float(x), float(y)) for x, y in points), paint))

    def circle(self, cx: float, cy: float, radius: float, paint: Paint) -> None:
        self._record(CircleOp(cx, cy, radius, paint))

    def text(self, x: float, y: float, text: str, paint: Paint, align: Align = "left") -> None:
        self._record(TextOp(x, y, text, paint, align))

    def extend(self, other: "DisplayList") -> None:
        for op in other.ops:
            self._record(op)

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def ops(self) -> tuple[DrawOp, ...]:
        return tuple(self._ops)

    def texts(self) -> list[str]:
        return [op.text for op in self._ops if isinstance(op, TextOp)]

    def __iter__(self) -> Iterator[DrawOp]:
        return iter(self._ops)

    def __len__(self) -> int:
        return len(self._ops)


__all__ = [
    "ACCENT",
    "BORDER_GRAY",
    "CircleOp",
    "DANGER",
    "DARK",
    "DisplayList",
    "DrawOp",
    "LIGHT_GRAY",
    "LineOp",
    "MUTED",
    "PRIMARY",
    "Paint",
    "Painter",
    "PolygonOp",
    "RectOp",
    "Rgb",
    "SECONDARY",
    "SERIES_PALETTE",
    "STATUS_RGB",
    "SUCCESS",
    "TextOp",
    "WARNING",
    "WHITE",
]
