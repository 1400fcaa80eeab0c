"""Vector document – ReportLabPainter.

Replays page display lists onto a reportlab canvas.  The canvas is created
with ``invariant=1`` so identical display lists produce identical bytes.
"""
from __future__ import annotations

import io
from collections.abc import Sequence

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from fx_export.application.export.pdf.paint import (
    DARK,
    CircleOp,
    DisplayList,
    DrawOp,
    LineOp,
    Paint,
    PolygonOp,
    RectOp,
    TextOp,
)

__all__ = ["ReportLabPainter"]


class ReportLabPainter:
    """Turns laid-out pages into PDF bytes."""

    def __init__(self, *, title: str = "", author: str = "", creator: str = "fx-export") -> None:
        self._title = title
        self._author = author
        self._creator = creator

    def render(self, pages: Sequence[DisplayList]) -> bytes:
        buf = io.BytesIO()
        pdf = canvas.Canvas(buf, pagesize=A4, invariant=1)
        pdf.setTitle(self._title)
        pdf.setAuthor(self._author)
        pdf.setCreator(self._creator)
        page_height = A4[1] / mm
        for page in pages:
            for op in page:
                pdf.saveState()
                self._draw(pdf, op, page_height)
                pdf.restoreState()
            pdf.showPage()
        pdf.save()
        return buf.getvalue()

    @staticmethod
    def _apply(pdf: canvas.Canvas, paint: Paint) -> tuple[int, int]:
        if paint.fill is not None:
            pdf.setFillColorRGB(*paint.fill.fractions())
        if paint.stroke is not None:
            pdf.setStrokeColorRGB(*paint.stroke.fractions())
            pdf.setLineWidth(paint.line_width * mm)
        return int(paint.stroke is not None), int(paint.fill is not None)

    def _draw(self, pdf: canvas.Canvas, op: DrawOp, page_height: float) -> None:
        # page millimetres (y down) -> PDF points (y up)
        def px(x: float) -> float:
            return x * mm

        def py(y: float) -> float:
            return (page_height - y) * mm

        if isinstance(op, RectOp):
            stroke, fill = self._apply(pdf, op.paint)
            pdf.rect(px(op.x), py(op.y + op.height), op.width * mm, op.height * mm, stroke=stroke, fill=fill)
        elif isinstance(op, LineOp):
            self._apply(pdf, op.paint)
            pdf.line(px(op.x1), py(op.y1), px(op.x2), py(op.y2))
        elif isinstance(op, PolygonOp):
            stroke, fill = self._apply(pdf, op.paint)
            path = pdf.beginPath()
            (x0, y0), *rest = op.points
            path.moveTo(px(x0), py(y0))
            for x, y in rest:
                path.lineTo(px(x), py(y))
            path.close()
            pdf.drawPath(path, stroke=stroke, fill=fill)
        elif isinstance(op, CircleOp):
            stroke, fill = self._apply(pdf, op.paint)
            pdf.circle(px(op.cx), py(op.cy), op.radius * mm, stroke=stroke, fill=fill)
        elif isinstance(op, TextOp):
            pdf.setFont(op.paint.font_name, op.paint.font_size)
            pdf.setFillColorRGB(*(op.paint.fill or DARK).fractions())
            if op.align == "right":
                pdf.drawRightString(px(op.x), py(op.y), op.text)
            elif op.align == "center":
                pdf.drawCentredString(px(op.x), py(op.y), op.text)
            else:
                pdf.drawString(px(op.x), py(op.y), op.text)
