"""Application export – DelimitedTextEncoder."""
from __future__ import annotations

import csv
import io
from collections.abc import Mapping, Sequence
from typing import Any

from fx_export.application.export.projector import FieldProjector, FormatOptions, Presentation
from fx_export.application.export.request import ExportConfig, FieldCatalog

__all__ = ["DelimitedTextEncoder"]


class DelimitedTextEncoder:
    """Writes rows as delimited text (in-memory).

    Quoting is RFC-4180 minimal: a value is quoted only when it contains the
    delimiter, a quote character or a line break, and embedded quotes are
    doubled.
    """

    def __init__(
        self,
        delimiter: str = ",",
        line_terminator: str = "\n",
        *,
        bom: bool = False,
        options: FormatOptions | None = None,
    ) -> None:
        self._delimiter = delimiter
        self._line_terminator = line_terminator
        self._bom = bom
        self._options = options

    def encode(
        self,
        config: ExportConfig,
        rows: Sequence[Mapping[str, Any]],
        catalog: FieldCatalog,
    ) -> bytes:
        """Return the complete document as UTF-8 bytes (optional BOM)."""
        projector = FieldProjector(config.fields, catalog, Presentation.PLAIN, self._options)
        if not rows and not config.include_headers:
            return b""

        buf = io.StringIO()
        if self._bom:
            buf.write("\ufeff")  # BOM for Excel compatibility

        writer = csv.writer(
            buf,
            delimiter=self._delimiter,
            quoting=csv.QUOTE_MINIMAL,
            lineterminator=self._line_terminator,
        )
        if config.include_headers:
            writer.writerow(projector.labels)
        for row in rows:
            writer.writerow(projector.values(row))

        return buf.getvalue().encode("utf-8")
