"""Application export – paginated vector document (PDF)."""
from fx_export.application.export.pdf.charts import ChartPrimitives
from fx_export.application.export.pdf.geometry import Box, ChartSeriesPoint, Point
from fx_export.application.export.pdf.layout import DocumentState, PageCursor, PageFlowController
from fx_export.application.export.pdf.metrics import ReportSummary, growth_percentage, summarize
from fx_export.application.export.pdf.paint import DisplayList, Paint, Rgb
from fx_export.application.export.pdf.pdf_export import VectorDocumentEncoder
from fx_export.application.export.pdf.renderer import ReportLabPainter

__all__ = [
    "Box",
    "ChartPrimitives",
    "ChartSeriesPoint",
    "DisplayList",
    "DocumentState",
    "PageCursor",
    "PageFlowController",
    "Paint",
    "Point",
    "ReportLabPainter",
    "ReportSummary",
    "Rgb",
    "VectorDocumentEncoder",
    "growth_percentage",
    "summarize",
]
