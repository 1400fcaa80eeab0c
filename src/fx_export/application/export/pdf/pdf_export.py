"""Application export – VectorDocumentEncoder (paginated PDF report)."""
from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from fx_export.application.export.pdf.charts import ChartPrimitives
from fx_export.application.export.pdf.geometry import Box, ChartSeriesPoint, Point
from fx_export.application.export.pdf.layout import PageFlowController, page_label
from fx_export.application.export.pdf.metrics import OPERATIONAL_EFFICIENCY, ReportSummary, summarize
from fx_export.application.export.pdf.paint import (
    ACCENT,
    BORDER_GRAY,
    DARK,
    LIGHT_GRAY,
    MUTED,
    PRIMARY,
    SECONDARY,
    SERIES_PALETTE,
    STATUS_RGB,
    WHITE,
    DisplayList,
    Paint,
    Painter,
)
from fx_export.application.export.pdf.renderer import ReportLabPainter
from fx_export.application.export.projector import (
    FieldProjector,
    FormatOptions,
    Presentation,
    display_currency,
)
from fx_export.application.export.request import ExportConfig, FieldCatalog
from fx_export.kernel.time import Clock, SystemClock
from fx_export.observability.logging import get_logger

__all__ = ["CHART_UNAVAILABLE", "SUMMARY_DATA_TYPES", "VectorDocumentEncoder", "report_title", "table_title"]

logger = get_logger(__name__)

HEADER_BAND_HEIGHT = 35.0
TABLE_HEADER_HEIGHT = 12.0
TABLE_ROW_HEIGHT = 10.0
HEADER_TEXT_LIMIT = 12
CELL_TEXT_LIMIT = 15
CHART_UNAVAILABLE = "Chart unavailable"
#: Data types whose rows carry the amounts the executive summary aggregates.
SUMMARY_DATA_TYPES = frozenset({"transactions"})

_TEXT = Paint(fill=DARK, font_size=9)
_SMALL = Paint(fill=MUTED, font_size=8)
_CARD = Paint(fill=LIGHT_GRAY, stroke=BORDER_GRAY, line_width=0.3)
_CARD_TITLE = Paint(fill=DARK, font_size=10, bold=True)


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[: limit - 3] + "..."


def report_title(data_type: str) -> str:
    return f"{data_type.capitalize()} Report"


def table_title(data_type: str) -> str:
    """``"transactions"`` becomes ``"Transaction data"``."""
    singular = data_type[:-1] if data_type.endswith("s") else data_type
    return f"{singular.capitalize()} data"


class VectorDocumentEncoder:
    """Lays out and renders the paginated report.

    Without an explicit *title* the report is named after ``config.data_type``.

    Layout happens in two passes: content is flowed into per-page display
    lists first, then :meth:`PageFlowController.finalize` draws the
    ``Page i of N`` footers once the page count is known.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        *,
        title: str | None = None,
        company_name: str = "Currency Exchange",
        options: FormatOptions | None = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self._title = title
        self._company = company_name
        self._options = options or FormatOptions()
        self._charts = ChartPrimitives()

    def encode(
        self,
        config: ExportConfig,
        rows: Sequence[Mapping[str, Any]],
        catalog: FieldCatalog,
    ) -> bytes:
        pages = self.layout(config, rows, catalog)
        return ReportLabPainter(title=self.title_for(config), author=self._company).render(pages)

    def title_for(self, config: ExportConfig) -> str:
        return self._title or report_title(config.data_type)

    def layout(
        self,
        config: ExportConfig,
        rows: Sequence[Mapping[str, Any]],
        catalog: FieldCatalog,
    ) -> tuple[DisplayList, ...]:
        """Flow the whole document and return the finalized pages."""
        generated = self._clock.now().strftime("%d/%m/%Y %H:%M")
        flow = PageFlowController()

        self._header_band(flow, self.title_for(config), generated)
        if config.include_metadata:
            self._metadata_cards(flow, config, len(rows))
        self._table(flow, config, rows, catalog)
        if config.data_type in SUMMARY_DATA_TYPES:
            self._executive_summary(flow, config, rows, catalog)

        def footer(page: Painter, number: int, total: int) -> None:
            y = flow.cursor.page_height - 20
            width = flow.cursor.page_width
            page.line(flow.margin, y, width - flow.margin, y, Paint(stroke=BORDER_GRAY, line_width=0.3))
            page.text(flow.margin, y + 6, self._company, _SMALL)
            page.text(width / 2, y + 6, generated, _SMALL, align="center")
            page.text(width - flow.margin, y + 6, page_label(number, total), _SMALL, align="right")

        return flow.finalize(footer)

    # -- sections ------------------------------------------------------------

    def _header_band(self, flow: PageFlowController, title: str, generated: str) -> None:
        band = DisplayList()
        width = flow.cursor.page_width
        band.rect(0, 0, width, HEADER_BAND_HEIGHT, Paint(fill=PRIMARY))
        band.text(flow.margin, 16, title, Paint(fill=WHITE, font_size=20, bold=True))
        band.text(flow.margin, 26, f"Generated {generated}", Paint(fill=WHITE, font_size=10))
        band.text(width - flow.margin, 16, self._company, Paint(fill=WHITE, font_size=11, bold=True), align="right")
        flow.header(band, HEADER_BAND_HEIGHT, gap=10)

    def _card(self, block: DisplayList, box: Box, title: str, lines: Sequence[str]) -> None:
        block.rect(box.x, box.y, box.width, box.height, _CARD)
        block.text(box.x + 4, box.y + 7, title, _CARD_TITLE)
        for index, line in enumerate(lines):
            block.text(box.x + 4, box.y + 13 + index * 5, line, _TEXT)

    def _metadata_cards(self, flow: PageFlowController, config: ExportConfig, count: int) -> None:
        height = 30.0
        flow.ensure_space(height)
        half = (flow.content_width - 5) / 2
        y = flow.cursor.y
        block = DisplayList()
        self._card(
            block,
            Box(flow.margin, y, half, height - 5),
            "Report information",
            [f"Records: {count}", f"Period: {config.date_range.describe()}", f"Data: {config.data_type}"],
        )
        applied = config.filters.applied()
        filter_lines = [f"{key.replace('_', ' ').capitalize()}: {value}" for key, value in applied.items()]
        self._card(
            block,
            Box(flow.margin + half + 5, y, half, height - 5),
            "Applied filters",
            filter_lines[:3] or ["No filters applied"],
        )
        flow.commit(block, height)

    def _table(
        self,
        flow: PageFlowController,
        config: ExportConfig,
        rows: Sequence[Mapping[str, Any]],
        catalog: FieldCatalog,
    ) -> None:
        projector = FieldProjector(
            config.fields, catalog, Presentation.DISPLAY, self._options, skip_summary_only=True
        )
        plan = projector.plan
        flow.section_title(table_title(config.data_type))
        if not plan or not rows:
            block = DisplayList()
            block.text(flow.margin, flow.cursor.y + 6, "No records to display", _SMALL)
            flow.commit(block, 12)
            return

        column = flow.content_width / len(plan)

        def header(page: Painter, y: float) -> float:
            page.rect(flow.margin, y, flow.content_width, TABLE_HEADER_HEIGHT, Paint(fill=PRIMARY))
            for index, planned in enumerate(plan):
                page.text(
                    flow.margin + index * column + 2,
                    y + 7.5,
                    _truncate(planned.label, HEADER_TEXT_LIMIT),
                    Paint(fill=WHITE, font_size=8, bold=True),
                )
            return TABLE_HEADER_HEIGHT

        if config.include_headers:
            flow.ensure_space(TABLE_HEADER_HEIGHT + TABLE_ROW_HEIGHT)
            flow.begin_table(header)
        for offset, record in enumerate(rows):
            flow.ensure_space(TABLE_ROW_HEIGHT)
            y = flow.cursor.y
            block = DisplayList()
            if offset % 2:
                block.rect(flow.margin, y, flow.content_width, TABLE_ROW_HEIGHT, Paint(fill=LIGHT_GRAY))
            for index, planned in enumerate(plan):
                value = projector.value(planned, record)
                paint = Paint(fill=DARK, font_size=8)
                if planned.descriptor.format == "status":
                    color = STATUS_RGB.get(str(value).strip().lower())
                    if color is not None:
                        paint = Paint(fill=color, font_size=8, bold=True)
                block.text(flow.margin + index * column + 2, y + 6.5, _truncate(str(value), CELL_TEXT_LIMIT), paint)
            flow.commit(block, TABLE_ROW_HEIGHT)
        flow.end_table()
        flow.advance(8)

    def _executive_summary(
        self,
        flow: PageFlowController,
        config: ExportConfig,
        rows: Sequence[Mapping[str, Any]],
        catalog: FieldCatalog,
    ) -> None:
        summary = summarize(rows)
        money = self._money
        flow.section_title("Executive summary")

        kpis = [
            ("Transactions", f"{summary.total_transactions:,}"),
            ("USD volume", money(summary.usd_total)),
            ("Commissions", money(summary.commissions)),
            ("Average", money(summary.average_transaction)),
        ]
        self._kpi_row(flow, kpis)

        totals = summary.totals()
        summary_fields = [catalog.resolve(key) for key in config.fields if catalog.resolve(key).summary_only]
        if summary_fields:
            self._kpi_row(flow, [(d.label, money(totals.get(d.key, 0.0))) for d in summary_fields])

        self._chart_block(
            flow,
            "Monthly volume (USD)",
            60,
            summary.monthly_volume,
            lambda painter, box: self._charts.bar(
                painter, summary.monthly_volume, box, Paint(fill=SECONDARY), money
            ),
        )

        radius = 20.0

        def donut(painter: Painter, box: Box) -> None:
            center = Point(box.x + box.width / 2, box.y + radius + 6)
            self._charts.donut(
                painter,
                summary.collaborator_commissions,
                center,
                radius,
                tuple(Paint(fill=color) for color in SERIES_PALETTE),
                money,
            )

        self._chart_block(flow, "Commission by collaborator", 65, summary.collaborator_commissions, donut)

        share = summary.collaborator_share

        def progress_bars(painter: Painter, box: Box) -> None:
            if not share:
                self._charts.empty_state(painter, box)
                return
            for index, point in enumerate(share):
                bar = Box(box.x, box.y + 5 + index * 10, box.width - 25, 4)
                self._charts.progress(painter, point.label, point.value, bar, Paint(fill=ACCENT))

        self._chart_block(flow, "Collaborator share", 16 + 10 * max(len(share), 1), share, progress_bars)

        def trend(painter: Painter, box: Box) -> None:
            plot = Box(box.x, box.y, box.width, box.height - 6)
            self._charts.trend_line(painter, summary.monthly_volume, plot, Paint(fill=PRIMARY))
            painter.text(
                box.x, box.bottom, f"Month-over-month growth: {summary.monthly_growth_label}", _TEXT
            )

        self._chart_block(flow, "Monthly trend", 60, summary.monthly_volume, trend)
        self._closing_cards(flow, summary)

    def _closing_cards(self, flow: PageFlowController, summary: ReportSummary) -> None:
        height = 36.0
        flow.ensure_space(height)
        half = (flow.content_width - 5) / 2
        y = flow.cursor.y
        block = DisplayList()
        self._card(
            block,
            Box(flow.margin, y, half, height - 5),
            "Operational efficiency",
            [f"{label}: {value}" for label, value in OPERATIONAL_EFFICIENCY.items()],
        )
        names = ", ".join(summary.collaborators) or "None"
        top_client = summary.top_clients[0].label if summary.top_clients else "None"
        self._card(
            block,
            Box(flow.margin + half + 5, y, half, height - 5),
            "Participants",
            [
                f"Collaborators: {_truncate(names, 40)}",
                f"Unique clients: {summary.unique_clients}",
                f"Top client: {_truncate(top_client, 30)}",
            ],
        )
        flow.commit(block, height)

    # -- building blocks -----------------------------------------------------

    def _money(self, value: float) -> str:
        return display_currency(value, self._options)

    def _kpi_row(self, flow: PageFlowController, items: Sequence[tuple[str, str]]) -> None:
        height = 22.0
        flow.ensure_space(height)
        gap = 4.0
        width = (flow.content_width - gap * (len(items) - 1)) / len(items)
        y = flow.cursor.y
        block = DisplayList()
        for index, (label, value) in enumerate(items):
            x = flow.margin + index * (width + gap)
            block.rect(x, y, width, height - 4, _CARD)
            block.text(x + 3, y + 6, label, _SMALL)
            block.text(x + 3, y + 13, value, Paint(fill=DARK, font_size=11, bold=True))
        flow.commit(block, height)

    def _chart_block(
        self,
        flow: PageFlowController,
        title: str,
        height: float,
        series: Sequence[ChartSeriesPoint],
        draw: Callable[[Painter, Box], None],
    ) -> None:
        """Draw one chart into a scratch list; commit a placeholder if drawing fails."""
        flow.ensure_space(height)
        y = flow.cursor.y
        box = Box(flow.margin, y + 8, flow.content_width, height - 12)
        scratch = DisplayList()
        scratch.text(flow.margin, y + 5, title, _CARD_TITLE)
        try:
            draw(scratch, box)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "chart_block_failed",
                chart=title,
                series=[tuple(point) for point in series],
                error=repr(exc),
            )
            scratch = DisplayList()
            scratch.text(flow.margin, y + 5, title, _CARD_TITLE)
            self._charts.empty_state(scratch, box, CHART_UNAVAILABLE)
        flow.commit(scratch, height)
