"""Application export – WorkbookEncoder (openpyxl)."""
from __future__ import annotations

import io
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from fx_export.application.export.catalog import COLUMN_WIDTHS, DEFAULT_COLUMN_WIDTH
from fx_export.application.export.projector import FieldProjector, FormatOptions, Presentation
from fx_export.application.export.request import ExportConfig, FieldCatalog
from fx_export.kernel.time import Clock, SystemClock

__all__ = ["NUMBER_FORMATS", "STATUS_COLORS", "WorkbookEncoder", "status_color"]

STATUS_COLORS: Mapping[str, str] = {
    "completed": "4CAF50",
    "processing": "FF9800",
    "pending": "FFC107",
    "error": "F44336",
    "failed": "F44336",
}

NUMBER_FORMATS: Mapping[str, str] = {
    "currency": '"$"#,##0.00',
    "percentage": "0.00%",
    "integer": "#,##0",
    "decimal": "#,##0.00",
    "date": "DD/MM/YYYY",
    "datetime": "DD/MM/YYYY HH:MM",
}

HEADER_FILL = PatternFill("solid", fgColor="4CAF50")
BANNER_FILL = PatternFill("solid", fgColor="2E7D32")
ALT_ROW_FILL = PatternFill("solid", fgColor="FAFAFA")
WHITE_FILL = PatternFill("solid", fgColor="FFFFFF")
HEADER_FONT = Font(bold=True, color="FFFFFF", size=12)
BANNER_FONT = Font(bold=True, color="FFFFFF", size=16)
LABEL_FONT = Font(bold=True, color="424242")
_THIN = Side(style="thin", color="E0E0E0")
THIN_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)


def status_color(status: Any) -> str | None:
    """Font colour (hex RGB) for a status value, ``None`` when unknown."""
    return STATUS_COLORS.get(str(status or "").strip().lower())


class WorkbookEncoder:
    """Exports rows to a single-sheet .xlsx workbook.

    Column widths come from *column_widths* (field key → character units);
    fields missing from it get *default_width*.
    """

    def __init__(
        self,
        column_widths: Mapping[str, int] = COLUMN_WIDTHS,
        *,
        default_width: int = DEFAULT_COLUMN_WIDTH,
        clock: Clock | None = None,
        creator: str = "fx-export",
        options: FormatOptions | None = None,
    ) -> None:
        self._widths = column_widths
        self._default_width = default_width
        self._clock = clock or SystemClock()
        self._creator = creator
        self._options = options

    def encode(
        self,
        config: ExportConfig,
        rows: Sequence[Mapping[str, Any]],
        catalog: FieldCatalog,
    ) -> bytes:
        projector = FieldProjector(config.fields, catalog, Presentation.STRUCTURED, self._options)
        plan = projector.plan
        last_col = get_column_letter(max(len(plan), 1))
        generated_at = self._clock.now()

        wb = openpyxl.Workbook()
        wb.properties.creator = self._creator
        wb.properties.created = generated_at.replace(tzinfo=None)
        ws = wb.active
        ws.title = config.data_type.capitalize()[:31]  # sheet name limit

        row_idx = 1
        if config.include_metadata:
            banner = ws.cell(row=1, column=1, value=f"{config.data_type.capitalize()} Report")
            banner.font = BANNER_FONT
            banner.fill = BANNER_FILL
            banner.alignment = Alignment(horizontal="center", vertical="center")
            ws.row_dimensions[1].height = 28
            if len(plan) > 1:
                ws.merge_cells(f"A1:{last_col}1")
            metadata = (
                ("Generated at", generated_at.strftime("%d/%m/%Y %H:%M")),
                ("Total records", len(rows)),
                ("Period", config.date_range.describe()),
            )
            for offset, (label, value) in enumerate(metadata, start=2):
                ws.cell(row=offset, column=1, value=label).font = LABEL_FONT
                ws.cell(row=offset, column=2, value=value)
            row_idx = len(metadata) + 3  # one blank row after the block

        header_row = row_idx
        if config.include_headers:
            for col_idx, planned in enumerate(plan, start=1):
                cell = ws.cell(row=header_row, column=col_idx, value=planned.label)
                cell.font = HEADER_FONT
                cell.fill = HEADER_FILL
                cell.border = THIN_BORDER
                cell.alignment = Alignment(horizontal="center", vertical="center")
            row_idx += 1

        for offset, record in enumerate(rows):
            fill = ALT_ROW_FILL if offset % 2 else WHITE_FILL
            for col_idx, planned in enumerate(plan, start=1):
                value = projector.value(planned, record)
                number_format = NUMBER_FORMATS.get(planned.kind)
                if planned.kind == "date":
                    value = date.fromisoformat(value) if value else None
                elif planned.kind == "datetime":
                    # cells hold wall-clock time; openpyxl rejects tz-aware values
                    value = datetime.fromisoformat(value).replace(tzinfo=None) if value else None
                elif planned.kind == "percentage":
                    value = value / 100
                cell = ws.cell(row=row_idx, column=col_idx, value=value)
                cell.fill = fill
                cell.border = THIN_BORDER
                if number_format:
                    cell.number_format = number_format
                if planned.descriptor.format == "status":
                    color = status_color(value)
                    if color:
                        cell.font = Font(bold=True, color=color)
            row_idx += 1

        for col_idx, planned in enumerate(plan, start=1):
            width = self._widths.get(planned.key, self._default_width)
            ws.column_dimensions[get_column_letter(col_idx)].width = width

        if config.include_headers and plan:
            ws.auto_filter.ref = f"A{header_row}:{last_col}{max(row_idx - 1, header_row)}"
            ws.freeze_panes = f"A{header_row + 1}"

        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()
